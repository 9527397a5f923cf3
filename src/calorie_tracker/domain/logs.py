"""Domain models for food and weight logging."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

DEFAULT_SERVING_SIZE = "1 serving"


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class FoodEntry(BaseModel):
    """A single logged food with localized names and macros."""

    model_config = ConfigDict(
        frozen=True,
        allow_inf_nan=False,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    id: UUID = Field(default_factory=uuid4)
    name: str
    name_thai: str = ""
    name_japanese: str = ""
    calories: int
    protein: float
    carbs: float
    fat: float
    serving_size: str = DEFAULT_SERVING_SIZE
    image_data: bytes | None = None
    date: AwareDatetime = Field(default_factory=_utcnow)


class DailyLog(BaseModel):
    """All food entries logged on one calendar day."""

    model_config = ConfigDict(ser_json_bytes="base64", val_json_bytes="base64")

    id: UUID = Field(default_factory=uuid4)
    date: AwareDatetime = Field(default_factory=_utcnow)
    entries: list[FoodEntry] = Field(default_factory=list)

    @property
    def total_calories(self) -> int:
        return sum(entry.calories for entry in self.entries)

    @property
    def total_protein(self) -> float:
        return sum((entry.protein for entry in self.entries), 0.0)

    @property
    def total_carbs(self) -> float:
        return sum((entry.carbs for entry in self.entries), 0.0)

    @property
    def total_fat(self) -> float:
        return sum((entry.fat for entry in self.entries), 0.0)


class WeightEntry(BaseModel):
    """Body weight recorded on one calendar day."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: UUID = Field(default_factory=uuid4)
    date: AwareDatetime = Field(default_factory=_utcnow)
    weight_kg: float
