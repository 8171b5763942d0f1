"""Remaining macros per meal after logged food."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from meal_distribution.domain.distribution import MealMacros, MealType
from meal_distribution.domain.errors import NotFoundError
from meal_distribution.domain.swaps import RemainingMacros
from meal_distribution.services.distributions import DistributionRepository
from meal_distribution.services.planner import round_half_away


@dataclass(frozen=True)
class ConsumedTotals:
    """Summed food log macros for a meal."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


class FoodLogRepository(Protocol):
    """Read access to logged food."""

    def sum_meal(self, user_id: UUID, day: date, meal_type: MealType) -> ConsumedTotals:
        """Return summed macros of food logged for a meal."""


@dataclass
class RemainingMacrosService:
    """Service computing what is left of each meal's targets."""

    distribution_repository: DistributionRepository
    food_log_repository: FoodLogRepository

    def get_remaining_macros(
        self, user_id: UUID, day: date, meal_type: MealType
    ) -> RemainingMacros:
        """Return target, consumed and remaining macros for a meal."""
        distribution = self.distribution_repository.get_distribution(user_id, day)
        if distribution is None:
            raise NotFoundError("No meal distribution found")
        return _remaining(
            meal_type,
            distribution.meal(meal_type),
            self.food_log_repository.sum_meal(user_id, day, meal_type),
        )

    def get_remaining_for_day(
        self, user_id: UUID, day: date
    ) -> dict[MealType, RemainingMacros]:
        """Return remaining macros for every meal of the day."""
        distribution = self.distribution_repository.get_distribution(user_id, day)
        if distribution is None:
            raise NotFoundError("No meal distribution found")
        return {
            meal: _remaining(
                meal,
                distribution.meal(meal),
                self.food_log_repository.sum_meal(user_id, day, meal),
            )
            for meal in MealType
        }


def _remaining(
    meal_type: MealType, target: MealMacros, totals: ConsumedTotals
) -> RemainingMacros:
    consumed = MealMacros(
        calories=round_half_away(totals.calories),
        protein_g=round_half_away(totals.protein_g),
        carbs_g=round_half_away(totals.carbs_g),
        fat_g=round_half_away(totals.fat_g),
    )
    return RemainingMacros(
        meal=meal_type,
        target=target,
        consumed=consumed,
        remaining=target.minus(consumed),
    )
