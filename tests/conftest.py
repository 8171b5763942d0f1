"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from meal_distribution.config import Settings
from meal_distribution.containers import AppContainer
from meal_distribution.domain.distribution import (
    DailyTargets,
    DistributionMeta,
    GoalStyle,
    MacroTransfer,
    MealDistribution,
    MealMacros,
    MealStyle,
    MealType,
)
from meal_distribution.domain.swaps import SwapLogEntry
from meal_distribution.services.distributions import (
    DistributionRepository,
    DistributionService,
    GoalRepository,
)
from meal_distribution.services.remaining import (
    ConsumedTotals,
    FoodLogRepository,
    RemainingMacrosService,
)
from meal_distribution.services.swaps import SwapLogRepository, SwapService

TODAY = date(2026, 10, 19)


@dataclass
class InMemoryDistributionRepository(DistributionRepository):
    """In-memory distribution repository for tests."""

    rows: dict[tuple[UUID, date], MealDistribution] = field(default_factory=dict)
    writes: int = 0

    def get_distribution(self, user_id: UUID, day: date) -> MealDistribution | None:
        return self.rows.get((user_id, day))

    def insert_if_absent(
        self, user_id: UUID, distribution: MealDistribution
    ) -> MealDistribution:
        key = (user_id, distribution.meta.date)
        if key not in self.rows:
            self.rows[key] = distribution
            self.writes += 1
        return self.rows[key]

    def upsert_distribution(
        self, user_id: UUID, distribution: MealDistribution
    ) -> MealDistribution:
        self.rows[(user_id, distribution.meta.date)] = distribution
        self.writes += 1
        return distribution

    def apply_transfer(
        self, user_id: UUID, day: date, transfer: MacroTransfer
    ) -> MealDistribution | None:
        return self._compare_and_set(
            user_id,
            day,
            transfer,
            (transfer.from_before, transfer.to_before),
            (transfer.from_after, transfer.to_after),
        )

    def revert_transfer(
        self, user_id: UUID, day: date, transfer: MacroTransfer
    ) -> MealDistribution | None:
        return self._compare_and_set(
            user_id,
            day,
            transfer,
            (transfer.from_after, transfer.to_after),
            (transfer.from_before, transfer.to_before),
        )

    def _compare_and_set(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        transfer: MacroTransfer,
        expected: tuple[int, int],
        values: tuple[int, int],
    ) -> MealDistribution | None:
        current = self.rows.get((user_id, day))
        if current is None:
            return None
        macro_field = transfer.macro_type.field
        from_macros = current.meal(transfer.from_meal)
        to_macros = current.meal(transfer.to_meal)
        if (from_macros.get(macro_field), to_macros.get(macro_field)) != expected:
            return None
        updated = replace(
            current,
            **{
                transfer.from_meal.value: replace(
                    from_macros, **{macro_field: values[0]}
                ),
                transfer.to_meal.value: replace(to_macros, **{macro_field: values[1]}),
            },
        )
        self.rows[(user_id, day)] = updated
        self.writes += 1
        return updated


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory active goal lookup for tests."""

    targets: dict[UUID, DailyTargets] = field(default_factory=dict)

    def get_active_targets(self, user_id: UUID) -> DailyTargets | None:
        return self.targets.get(user_id)


@dataclass
class InMemorySwapLogRepository(SwapLogRepository):
    """In-memory swap log for tests."""

    entries: list[SwapLogEntry] = field(default_factory=list)
    next_id: int = 1

    def create_entry(self, entry: SwapLogEntry) -> SwapLogEntry:
        stored = replace(entry, id=self.next_id, created_at=datetime.now(tz=UTC))
        self.next_id += 1
        self.entries.append(stored)
        return stored

    def list_entries(self, user_id: UUID, day: date) -> list[SwapLogEntry]:
        matching = [
            entry
            for entry in self.entries
            if entry.user_id == user_id and entry.date == day
        ]
        return sorted(matching, key=lambda entry: entry.id or 0, reverse=True)

    def delete_entry(self, entry_id: int) -> bool:
        kept = [entry for entry in self.entries if entry.id != entry_id]
        deleted = len(kept) < len(self.entries)
        self.entries = kept
        return deleted


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food log totals for tests."""

    totals: dict[tuple[UUID, date, MealType], ConsumedTotals] = field(
        default_factory=dict
    )

    def sum_meal(self, user_id: UUID, day: date, meal_type: MealType) -> ConsumedTotals:
        return self.totals.get(
            (user_id, day, meal_type), ConsumedTotals(0.0, 0.0, 0.0, 0.0)
        )


def make_distribution(
    breakfast: MealMacros,
    lunch: MealMacros,
    dinner: MealMacros,
    day: date = TODAY,
) -> MealDistribution:
    return MealDistribution(
        meta=DistributionMeta(
            date=day, goal_style=GoalStyle.BALANCED, meal_style=MealStyle.FIXED
        ),
        breakfast=breakfast,
        lunch=lunch,
        dinner=dinner,
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def targets() -> DailyTargets:
    return DailyTargets(
        calorie_target=2000, protein_target_g=150, carb_target_g=200, fat_target_g=67
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test-header.test-payload.test-signature",
        api_token="api-token",
    )


@pytest.fixture
def distribution_repository() -> InMemoryDistributionRepository:
    return InMemoryDistributionRepository()


@pytest.fixture
def goal_repository(
    user_id: UUID, targets: DailyTargets
) -> InMemoryGoalRepository:
    return InMemoryGoalRepository(targets={user_id: targets})


@pytest.fixture
def swap_log_repository() -> InMemorySwapLogRepository:
    return InMemorySwapLogRepository()


@pytest.fixture
def food_log_repository() -> InMemoryFoodLogRepository:
    return InMemoryFoodLogRepository()


@pytest.fixture
def distribution_service(
    distribution_repository: InMemoryDistributionRepository,
    goal_repository: InMemoryGoalRepository,
) -> DistributionService:
    return DistributionService(distribution_repository, goal_repository)


@pytest.fixture
def swap_service(
    distribution_repository: InMemoryDistributionRepository,
    goal_repository: InMemoryGoalRepository,
    swap_log_repository: InMemorySwapLogRepository,
) -> SwapService:
    return SwapService(
        distribution_repository=distribution_repository,
        goal_repository=goal_repository,
        swap_log_repository=swap_log_repository,
    )


@pytest.fixture
def remaining_service(
    distribution_repository: InMemoryDistributionRepository,
    food_log_repository: InMemoryFoodLogRepository,
) -> RemainingMacrosService:
    return RemainingMacrosService(distribution_repository, food_log_repository)


@pytest.fixture
def container(
    settings: Settings,
    distribution_service: DistributionService,
    swap_service: SwapService,
    remaining_service: RemainingMacrosService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        distribution_service=distribution_service,
        swap_service=swap_service,
        remaining_service=remaining_service,
    )
