"""Domain models for progress statistics."""

from dataclasses import dataclass

from calorie_tracker.domain.logs import DailyLog


@dataclass(frozen=True)
class PeriodSummary:
    """Logs for a rolling window with per-day averages."""

    days: int
    logs: list[DailyLog]
    avg_calories: int
    avg_protein: float
    avg_carbs: float
    avg_fat: float
    calorie_target_diff: int


@dataclass(frozen=True)
class WeightProgress:
    """Weight movement from the first entry toward the desired weight."""

    start_kg: float
    current_kg: float
    desired_kg: float
    progress: float


@dataclass(frozen=True)
class DailyProgress:
    """Today's intake measured against the profile targets."""

    consumed_calories: int
    calories_left: int
    calorie_progress: float
    protein: float
    carbs: float
    fat: float
    streak: int
