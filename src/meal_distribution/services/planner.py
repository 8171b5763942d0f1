"""Pure calculation of per-meal targets from daily targets."""

from collections.abc import Mapping
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from meal_distribution.domain.distribution import (
    MACRO_FIELDS,
    DailyTargets,
    DistributionMeta,
    GoalStyle,
    MealDistribution,
    MealMacros,
    MealStyle,
    MealType,
)

RatioTable = Mapping[MealType, Mapping[str, float]]

BASE_RATIOS: RatioTable = {
    MealType.BREAKFAST: {
        "calories": 0.30,
        "protein_g": 0.35,
        "carbs_g": 0.30,
        "fat_g": 0.30,
    },
    MealType.LUNCH: {
        "calories": 0.40,
        "protein_g": 0.35,
        "carbs_g": 0.40,
        "fat_g": 0.40,
    },
    MealType.DINNER: {
        "calories": 0.30,
        "protein_g": 0.30,
        "carbs_g": 0.30,
        "fat_g": 0.30,
    },
}

# Overrides applied on top of BASE_RATIOS, keyed by meal then field.
GOAL_STYLE_OVERRIDES: Mapping[GoalStyle, RatioTable] = {
    GoalStyle.BALANCED: {},
    GoalStyle.AGGRESSIVE: {
        MealType.BREAKFAST: {"calories": 0.35, "carbs_g": 0.30, "protein_g": 0.40},
        MealType.LUNCH: {"calories": 0.40, "carbs_g": 0.45, "protein_g": 0.35},
        MealType.DINNER: {"calories": 0.25, "carbs_g": 0.25, "protein_g": 0.25},
    },
    GoalStyle.CONSERVATIVE: {
        meal: dict.fromkeys(MACRO_FIELDS, 0.333) for meal in MealType
    },
}

# Meal that absorbs the rounding remainder for every field.
REMAINDER_MEAL = MealType.LUNCH


def ratios_for(goal_style: GoalStyle) -> dict[MealType, dict[str, float]]:
    """Return the full ratio table for a goal style."""
    overrides = GOAL_STYLE_OVERRIDES[goal_style]
    return {
        meal: {**BASE_RATIOS[meal], **overrides.get(meal, {})} for meal in MealType
    }


def round_half_away(value: Decimal | float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_distribution(
    targets: DailyTargets,
    goal_style: GoalStyle = GoalStyle.BALANCED,
    meal_style: MealStyle = MealStyle.FIXED,
    day: date | None = None,
) -> MealDistribution:
    """Split daily targets across meals so every field sums exactly.

    Each meal gets ``round(target * ratio)``; whatever the rounding leaves over
    (or overshoots) is added to lunch. ``day`` only stamps the metadata.
    """
    ratios = ratios_for(goal_style)
    values: dict[MealType, dict[str, int]] = {meal: {} for meal in MealType}
    for field in MACRO_FIELDS:
        target = targets.for_field(field)
        for meal in MealType:
            share = Decimal(target) * Decimal(str(ratios[meal][field]))
            values[meal][field] = round_half_away(share)
        diff = target - sum(values[meal][field] for meal in MealType)
        values[REMAINDER_MEAL][field] += diff

    return MealDistribution(
        meta=DistributionMeta(
            date=day or date.today(),
            goal_style=goal_style,
            meal_style=meal_style,
        ),
        breakfast=MealMacros(**values[MealType.BREAKFAST]),
        lunch=MealMacros(**values[MealType.LUNCH]),
        dinner=MealMacros(**values[MealType.DINNER]),
    )
