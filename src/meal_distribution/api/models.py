"""Pydantic models for meal distribution request bodies."""

from datetime import date as Date  # noqa: N812
from uuid import UUID

from pydantic import BaseModel, Field

from meal_distribution.domain.distribution import GoalStyle, MealStyle


class PreviewRequest(BaseModel):
    """Daily targets and preferences to split without persisting."""

    calorie_target: int
    protein_target_g: int
    carb_target_g: int
    fat_target_g: int
    goal_style: GoalStyle = GoalStyle.BALANCED
    meal_style: MealStyle = MealStyle.FIXED
    date: Date | None = None


class RecalculateRequest(BaseModel):
    """Recompute a day's distribution with new preferences."""

    user_id: UUID
    date: Date | None = None
    goal_style: GoalStyle = GoalStyle.BALANCED
    meal_style: MealStyle = MealStyle.FIXED


class SwapRequestBody(BaseModel):
    """Move grams of one macro between two meals.

    Meal and macro names stay plain strings so the swap service reports
    unknown values as a structured validation failure.
    """

    user_id: UUID
    date: Date | None = None
    from_meal: str
    to_meal: str
    macro_type: str
    amount_g: int = Field(description="Grams to move; must be positive.")
