"""Supabase repository for logged food totals."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from meal_distribution.domain.distribution import MealType
from meal_distribution.services.remaining import ConsumedTotals, FoodLogRepository


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Sums food log rows per meal."""

    client: Client

    def sum_meal(self, user_id: UUID, day: date, meal_type: MealType) -> ConsumedTotals:
        """Return summed macros of a meal's food logs."""
        response = (
            self.client.table("food_logs")
            .select("calories, protein, carbs, fat")
            .eq("user_id", str(user_id))
            .eq("meal_date", day.isoformat())
            .eq("meal_type", meal_type.value)
            .execute()
        )
        rows = response.data or []
        return ConsumedTotals(
            calories=sum(float(row.get("calories") or 0) for row in rows),
            protein_g=sum(float(row.get("protein") or 0) for row in rows),
            carbs_g=sum(float(row.get("carbs") or 0) for row in rows),
            fat_g=sum(float(row.get("fat") or 0) for row in rows),
        )
