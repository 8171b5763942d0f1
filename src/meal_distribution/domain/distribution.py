"""Domain models for per-meal macro distributions."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

MACRO_FIELDS = ("calories", "protein_g", "carbs_g", "fat_g")


class MealType(StrEnum):
    """Meals a day's targets are split across."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class GoalStyle(StrEnum):
    """Named ratio profile used by the planner."""

    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"
    CONSERVATIVE = "conservative"


class MealStyle(StrEnum):
    """Meal layout preference. Recorded only."""

    FIXED = "fixed"


class MacroType(StrEnum):
    """Macros that can be moved between meals."""

    PROTEIN = "protein"
    CARBS = "carbs"
    FAT = "fat"

    @property
    def field(self) -> str:
        """Name of the gram field on MealMacros."""
        return f"{self.value}_g"

    @property
    def kcal_per_gram(self) -> int:
        """Approximate energy density of the macro."""
        return 9 if self is MacroType.FAT else 4


@dataclass(frozen=True)
class DailyTargets:
    """Daily calorie and macro targets from the active goal."""

    calorie_target: int
    protein_target_g: int
    carb_target_g: int
    fat_target_g: int

    def for_field(self, field: str) -> int:
        """Return the target matching a MealMacros field name."""
        return {
            "calories": self.calorie_target,
            "protein_g": self.protein_target_g,
            "carbs_g": self.carb_target_g,
            "fat_g": self.fat_target_g,
        }[field]


@dataclass(frozen=True)
class MealMacros:
    """Calories and macro grams for a single meal."""

    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int

    def get(self, field: str) -> int:
        return int(getattr(self, field))

    def minus(self, other: "MealMacros") -> "MealMacros":
        return MealMacros(
            calories=self.calories - other.calories,
            protein_g=self.protein_g - other.protein_g,
            carbs_g=self.carbs_g - other.carbs_g,
            fat_g=self.fat_g - other.fat_g,
        )


@dataclass(frozen=True)
class DistributionMeta:
    """Provenance of a distribution."""

    date: date
    goal_style: GoalStyle
    meal_style: MealStyle


@dataclass(frozen=True)
class MealDistribution:
    """Per-meal split of a day's targets."""

    meta: DistributionMeta
    breakfast: MealMacros
    lunch: MealMacros
    dinner: MealMacros

    def meal(self, meal_type: MealType) -> MealMacros:
        """Return the macros for one meal."""
        return getattr(self, meal_type.value)

    def total(self, field: str) -> int:
        """Sum a field across all meals."""
        return sum(self.meal(meal).get(field) for meal in MealType)


@dataclass(frozen=True)
class MacroTransfer:
    """A same-macro gram transfer between two meals."""

    from_meal: MealType
    to_meal: MealType
    macro_type: MacroType
    amount_g: int
    from_before: int
    to_before: int

    @property
    def from_after(self) -> int:
        return self.from_before - self.amount_g

    @property
    def to_after(self) -> int:
        return self.to_before + self.amount_g
