"""Supabase repository for the macro swap audit log."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from meal_distribution.domain.distribution import MacroType, MealType
from meal_distribution.domain.swaps import SwapLogEntry
from meal_distribution.services.swaps import SwapLogRepository

TABLE = "meal_swap_logs"


@dataclass
class SupabaseSwapLogRepository(SwapLogRepository):
    """Supabase-backed swap log."""

    client: Client

    def create_entry(self, entry: SwapLogEntry) -> SwapLogEntry:
        """Insert a swap log row."""
        response = (
            self.client.table(TABLE)
            .insert(
                {
                    "user_id": str(entry.user_id),
                    "date": entry.date.isoformat(),
                    "from_meal": entry.from_meal.value,
                    "to_meal": entry.to_meal.value,
                    "macro_type": entry.macro_type.value,
                    "amount_g": entry.amount_g,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create swap log entry")
        return _parse_row(response.data[0])

    def list_entries(self, user_id: UUID, day: date) -> list[SwapLogEntry]:
        """Return swap log rows for a day, newest first."""
        response = (
            self.client.table(TABLE)
            .select(
                "id, user_id, date, from_meal, to_meal, macro_type, amount_g, "
                "created_at"
            )
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def delete_entry(self, entry_id: int) -> bool:
        """Delete a swap log row by id."""
        response = self.client.table(TABLE).delete().eq("id", entry_id).execute()
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> SwapLogEntry:
    created_at_raw = row.get("created_at")
    return SwapLogEntry(
        id=int(row["id"]) if row.get("id") is not None else None,
        user_id=UUID(str(row["user_id"])),
        date=date.fromisoformat(str(row["date"])[:10]),
        from_meal=MealType(row["from_meal"]),
        to_meal=MealType(row["to_meal"]),
        macro_type=MacroType(row["macro_type"]),
        amount_g=int(row.get("amount_g") or 0),
        created_at=(
            datetime.fromisoformat(created_at_raw)
            if isinstance(created_at_raw, str) and created_at_raw
            else None
        ),
    )
