"""User profile and energy target calculations."""

import math
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

KCAL_PER_KG = 7700
MIN_DAILY_CALORIES = 1200
MAX_DAILY_CALORIES = 20000
GAIN_SURPLUS_KCAL = 300

PROTEIN_RATIO = 0.30
FAT_RATIO = 0.25
CARBS_RATIO = 0.45
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(StrEnum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "veryActive"


class GoalType(StrEnum):
    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


_BMR_GENDER_OFFSET = {
    Gender.MALE: 5.0,
    Gender.FEMALE: -161.0,
    Gender.OTHER: -78.0,
}

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams."""

    protein: int
    carbs: int
    fat: int


class UserProfile(BaseModel):
    """Biometrics, goal parameters and derived daily targets.

    Targets are stored values; they only reflect the biometrics after
    ``calculate_tdee``/``calculate_macros`` have been applied again.
    """

    model_config = ConfigDict(validate_assignment=True, allow_inf_nan=False)

    name: str = ""
    age: int = 25
    gender: Gender = Gender.MALE
    height_cm: float = 170
    weight_kg: float = 70
    desired_weight_kg: float = 65
    weekly_loss_kg: float = 0.5
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    goal: GoalType = GoalType.LOSE
    target_calories: int = 2000
    target_protein: int = 150
    target_carbs: int = 200
    target_fat: int = 65
    difficulties: list[str] = Field(default_factory=list)
    diet_goal: str = "lose"
    creator_referral: str = ""

    def calculate_bmr(self) -> float:
        """Return the Mifflin-St Jeor basal metabolic rate."""
        return (
            10 * self.weight_kg
            + 6.25 * self.height_cm
            - 5 * self.age
            + _BMR_GENDER_OFFSET[self.gender]
        )

    def calculate_tdee(self) -> int:
        """Return the daily calorie target adjusted for the weight goal."""
        tdee = self.calculate_bmr() * ACTIVITY_MULTIPLIERS[self.activity_level]
        if self.goal == GoalType.LOSE:
            tdee -= self.weekly_loss_kg * KCAL_PER_KG / 7
        elif self.goal == GoalType.GAIN:
            tdee += GAIN_SURPLUS_KCAL
        if math.isnan(tdee):
            return MIN_DAILY_CALORIES
        # extreme biometrics can overflow the float to inf
        return int(min(max(tdee, MIN_DAILY_CALORIES), MAX_DAILY_CALORIES))

    def calculate_macros(self) -> MacroTargets:
        """Split the calorie target 30/45/25 into protein, carbs and fat grams."""
        calories = self.calculate_tdee()
        return MacroTargets(
            protein=int(calories * PROTEIN_RATIO / KCAL_PER_G_PROTEIN),
            carbs=int(calories * CARBS_RATIO / KCAL_PER_G_CARBS),
            fat=int(calories * FAT_RATIO / KCAL_PER_G_FAT),
        )
