"""Supabase repository for meal distributions."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from meal_distribution.domain.distribution import (
    MACRO_FIELDS,
    DistributionMeta,
    GoalStyle,
    MacroTransfer,
    MealDistribution,
    MealMacros,
    MealStyle,
    MealType,
)
from meal_distribution.services.distributions import DistributionRepository

TABLE = "meal_distribution_profiles"


@dataclass
class SupabaseDistributionRepository(DistributionRepository):
    """Supabase implementation for meal distributions."""

    client: Client

    def get_distribution(self, user_id: UUID, day: date) -> MealDistribution | None:
        """Return the distribution row for a user and day."""
        response = (
            self.client.table(TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def insert_if_absent(
        self, user_id: UUID, distribution: MealDistribution
    ) -> MealDistribution:
        """Insert a distribution, keeping any row that already exists."""
        self.client.table(TABLE).upsert(
            _to_row(user_id, distribution),
            on_conflict="user_id,date",
            ignore_duplicates=True,
        ).execute()
        stored = self.get_distribution(user_id, distribution.meta.date)
        if stored is None:
            raise RuntimeError("Failed to create meal distribution")
        return stored

    def upsert_distribution(
        self, user_id: UUID, distribution: MealDistribution
    ) -> MealDistribution:
        """Create or overwrite the distribution for its day."""
        response = (
            self.client.table(TABLE)
            .upsert(_to_row(user_id, distribution), on_conflict="user_id,date")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save meal distribution")
        return _parse_row(response.data[0])

    def apply_transfer(
        self, user_id: UUID, day: date, transfer: MacroTransfer
    ) -> MealDistribution | None:
        """Move grams between meals, guarded on the previously read values."""
        return self._compare_and_set(
            user_id,
            day,
            transfer,
            expected=(transfer.from_before, transfer.to_before),
            values=(transfer.from_after, transfer.to_after),
        )

    def revert_transfer(
        self, user_id: UUID, day: date, transfer: MacroTransfer
    ) -> MealDistribution | None:
        """Restore the values a transfer replaced, guarded on its results."""
        return self._compare_and_set(
            user_id,
            day,
            transfer,
            expected=(transfer.from_after, transfer.to_after),
            values=(transfer.from_before, transfer.to_before),
        )

    def _compare_and_set(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        transfer: MacroTransfer,
        expected: tuple[int, int],
        values: tuple[int, int],
    ) -> MealDistribution | None:
        from_column = column_name(transfer.from_meal, transfer.macro_type.field)
        to_column = column_name(transfer.to_meal, transfer.macro_type.field)
        response = (
            self.client.table(TABLE)
            .update(
                {
                    from_column: values[0],
                    to_column: values[1],
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .eq(from_column, expected[0])
            .eq(to_column, expected[1])
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def column_name(meal: MealType, field: str) -> str:
    """Return the column storing a meal's field."""
    return f"{meal.value}_{field}"


def _to_row(user_id: UUID, distribution: MealDistribution) -> dict[str, object]:
    row: dict[str, object] = {
        "user_id": str(user_id),
        "date": distribution.meta.date.isoformat(),
        "goal_style": distribution.meta.goal_style.value,
        "meal_style": distribution.meta.meal_style.value,
        "updated_at": datetime.now(tz=UTC).isoformat(),
    }
    for meal in MealType:
        macros = distribution.meal(meal)
        for field in MACRO_FIELDS:
            row[column_name(meal, field)] = macros.get(field)
    return row


def _parse_meal(row: dict[str, object], meal: MealType) -> MealMacros:
    return MealMacros(
        **{field: int(row.get(column_name(meal, field)) or 0) for field in MACRO_FIELDS}
    )


def _parse_row(row: dict[str, object]) -> MealDistribution:
    return MealDistribution(
        meta=DistributionMeta(
            date=date.fromisoformat(str(row["date"])[:10]),
            goal_style=GoalStyle(row.get("goal_style") or GoalStyle.BALANCED),
            meal_style=MealStyle(row.get("meal_style") or MealStyle.FIXED),
        ),
        breakfast=_parse_meal(row, MealType.BREAKFAST),
        lunch=_parse_meal(row, MealType.LUNCH),
        dinner=_parse_meal(row, MealType.DINNER),
    )
