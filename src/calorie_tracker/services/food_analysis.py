"""Food photo analysis through a multimodal chat model."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from calorie_tracker.domain.analysis import FoodEstimate
from calorie_tracker.domain.errors import (
    InvalidResponseError,
    NoImageDataError,
    ParsingError,
)
from calorie_tracker.domain.logs import FoodEntry
from calorie_tracker.services.clock import Clock
from calorie_tracker.services.completions import (
    ChatCompletionsClient,
    first_choice_content,
    strip_code_fences,
    to_data_url,
)

FOOD_PROMPT = """\
Analyze this food image. Return ONLY a JSON object with these exact fields:
{"name": "English name", "nameThai": "Thai name", "nameJapanese": "Japanese name", \
"calories": number, "protein": number, "carbs": number, "fat": number, \
"servingSize": "portion description"}
Estimate the nutritional values per visible serving. Be accurate for Thai, \
Japanese, and international foods."""

_logger = logging.getLogger(__name__)


@dataclass
class FoodAnalysisService:
    """Turns a food photo into a loggable entry."""

    client: ChatCompletionsClient
    clock: Clock
    model: str
    max_tokens: int = 300
    image_detail: str = "low"

    async def analyze_food(self, image_bytes: bytes | None) -> FoodEntry:
        """Estimate nutrition for the photographed serving."""
        if not image_bytes:
            raise NoImageDataError()

        body = await self.client.complete(self._build_request(image_bytes))
        content = first_choice_content(body)
        if content is None:
            raise InvalidResponseError()

        try:
            estimate = FoodEstimate.model_validate_json(strip_code_fences(content))
        except ValidationError as exc:
            _logger.warning(
                "Food estimate could not be parsed: errors=%s", exc.error_count()
            )
            raise ParsingError() from exc

        _logger.info(
            "Food analyzed: name=%s calories=%s", estimate.name, estimate.calories
        )
        return FoodEntry(
            name=estimate.name,
            name_thai=estimate.name_thai,
            name_japanese=estimate.name_japanese,
            calories=estimate.calories,
            protein=estimate.protein,
            carbs=estimate.carbs,
            fat=estimate.fat,
            serving_size=estimate.serving_size,
            image_data=image_bytes,
            date=self.clock.now(),
        )

    def _build_request(self, image_bytes: bytes) -> dict[str, object]:
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": FOOD_PROMPT},
                        {
                            "type": "image_url",
                            "image_url": {
                                "url": to_data_url(image_bytes),
                                "detail": self.image_detail,
                            },
                        },
                    ],
                }
            ],
            "max_tokens": self.max_tokens,
        }
