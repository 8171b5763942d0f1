"""Supabase repository for active goal targets."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_distribution.domain.distribution import DailyTargets
from meal_distribution.services.distributions import GoalRepository


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Reads the targets of a user's active goal."""

    client: Client

    def get_active_targets(self, user_id: UUID) -> DailyTargets | None:
        """Return the active goal's daily targets."""
        response = (
            self.client.table("goals")
            .select("calorie_target, protein_target_g, carb_target_g, fat_target_g")
            .eq("user_id", str(user_id))
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return DailyTargets(
            calorie_target=_to_int(row.get("calorie_target")),
            protein_target_g=_to_int(row.get("protein_target_g")),
            carb_target_g=_to_int(row.get("carb_target_g")),
            fat_target_g=_to_int(row.get("fat_target_g")),
        )


def _to_int(value: object) -> int:
    if isinstance(value, int | float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(float(value))
        except ValueError:
            return 0
    return 0
