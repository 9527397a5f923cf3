"""Single entry point for capturing a food from any source."""

import logging
from dataclasses import dataclass

from calorie_tracker.domain.capture import CaptureRequest, ImageSource, ManualFood
from calorie_tracker.domain.logs import DEFAULT_SERVING_SIZE, FoodEntry
from calorie_tracker.services.clock import Clock
from calorie_tracker.services.daily_logs import DailyLogService
from calorie_tracker.services.food_analysis import FoodAnalysisService

_logger = logging.getLogger(__name__)


@dataclass
class CaptureService:
    """Routes camera, library and manual captures to a food entry."""

    food_analysis: FoodAnalysisService
    daily_logs: DailyLogService
    clock: Clock

    async def capture(self, request: CaptureRequest, log: bool = True) -> FoodEntry:
        """Build a food entry from the capture and optionally log it today."""
        if request.source is ImageSource.MANUAL:
            if request.manual is None:
                raise ValueError("Manual capture requires food details")
            entry = self._manual_entry(request.manual)
        else:
            entry = await self.food_analysis.analyze_food(request.image_bytes)
        if log:
            self.daily_logs.add_entry(entry)
        _logger.info(
            "Captured food: source=%s calories=%s logged=%s",
            request.source.value,
            entry.calories,
            log,
        )
        return entry

    def _manual_entry(self, manual: ManualFood) -> FoodEntry:
        name = manual.name.strip()
        if not name:
            raise ValueError("Food name is required")
        serving_size = manual.serving_size.strip() or DEFAULT_SERVING_SIZE
        return FoodEntry(
            name=name,
            calories=manual.calories,
            protein=manual.protein,
            carbs=manual.carbs,
            fat=manual.fat,
            serving_size=serving_size,
            date=self.clock.now(),
        )
