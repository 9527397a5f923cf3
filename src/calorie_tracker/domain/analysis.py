"""Models for LLM food and menu analysis results."""

from enum import StrEnum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False
    )


class FoodEstimate(_CamelModel):
    """Nutrition estimate for the visible serving in a food photo."""

    name: str
    name_thai: str
    name_japanese: str
    calories: int
    protein: float
    carbs: float
    fat: float
    serving_size: str


class NutrientInfo(_CamelModel):
    """Free-text nutrient estimates for a menu item."""

    protein: str | None = None
    carbs: str | None = None
    fat: str | None = None
    fiber: str | None = None


class MenuItem(_CamelModel):
    """A recommended dish read from a menu."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    description: str
    estimated_calories: str
    health_score: int
    taste_score: int
    reasoning: str
    nutrients: NutrientInfo | None = None


class MenuRecommendations(_CamelModel):
    """Ranked menu picks with an overview and ordering tips."""

    healthiest: list[MenuItem]
    tastiest: list[MenuItem]
    balanced_choice: MenuItem | None = None
    analysis: str
    tips: list[str]


class RecommendationType(StrEnum):
    HEALTHIEST = "healthiest"
    TASTIEST = "tastiest"
    PROTEIN = "protein"
    FIBER = "fiber"
