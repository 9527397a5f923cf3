"""Request models and response shaping for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field

from calorie_tracker.domain.logs import DailyLog, FoodEntry, WeightEntry
from calorie_tracker.domain.profile import ActivityLevel, Gender, GoalType, UserProfile
from calorie_tracker.domain.stats import PeriodSummary

MAX_AGE = 130
MAX_HEIGHT_CM = 300
MAX_WEIGHT_KG = 700
MAX_WEEKLY_RATE_KG = 2


class ProfileUpdate(BaseModel):
    """Partial profile edit from onboarding or the profile editor."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str | None = None
    age: int | None = Field(default=None, ge=0, le=MAX_AGE)
    gender: Gender | None = None
    height_cm: float | None = Field(default=None, gt=0, le=MAX_HEIGHT_CM)
    weight_kg: float | None = Field(default=None, gt=0, le=MAX_WEIGHT_KG)
    desired_weight_kg: float | None = Field(default=None, gt=0, le=MAX_WEIGHT_KG)
    weekly_loss_kg: float | None = Field(default=None, ge=0, le=MAX_WEEKLY_RATE_KG)
    activity_level: ActivityLevel | None = None
    goal: GoalType | None = None
    difficulties: list[str] | None = None
    diet_goal: str | None = None
    creator_referral: str | None = None


class ManualEntryRequest(BaseModel):
    """Food typed in by the user."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str = Field(min_length=1)
    calories: int = Field(ge=0)
    protein: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    fat: float = Field(default=0.0, ge=0)
    serving_size: str = ""


class WeightRequest(BaseModel):
    """A body weight reading in kilograms."""

    model_config = ConfigDict(allow_inf_nan=False)

    weight_kg: float = Field(gt=0, le=MAX_WEIGHT_KG)


def profile_payload(profile: UserProfile) -> dict[str, object]:
    return profile.model_dump(mode="json")


def entry_payload(entry: FoodEntry) -> dict[str, object]:
    payload = entry.model_dump(mode="json", exclude={"image_data"})
    payload["has_image"] = entry.image_data is not None
    return payload


def log_payload(log: DailyLog) -> dict[str, object]:
    return {
        "id": str(log.id),
        "date": log.date.isoformat(),
        "entries": [entry_payload(entry) for entry in log.entries],
        "total_calories": log.total_calories,
        "total_protein": log.total_protein,
        "total_carbs": log.total_carbs,
        "total_fat": log.total_fat,
    }


def weight_payload(entry: WeightEntry) -> dict[str, object]:
    return entry.model_dump(mode="json")


def period_payload(summary: PeriodSummary) -> dict[str, object]:
    return {
        "days": summary.days,
        "logs": [log_payload(log) for log in summary.logs],
        "avg_calories": summary.avg_calories,
        "avg_protein": summary.avg_protein,
        "avg_carbs": summary.avg_carbs,
        "avg_fat": summary.avg_fat,
        "calorie_target_diff": summary.calorie_target_diff,
    }
