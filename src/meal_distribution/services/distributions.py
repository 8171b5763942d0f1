"""Service for creating and recalculating daily meal distributions."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from meal_distribution.domain.distribution import (
    DailyTargets,
    GoalStyle,
    MacroTransfer,
    MealDistribution,
    MealStyle,
)
from meal_distribution.domain.errors import NotFoundError
from meal_distribution.services.planner import compute_distribution

_logger = logging.getLogger(__name__)


class DistributionRepository(Protocol):
    """Persistence interface for meal distributions."""

    def get_distribution(self, user_id: UUID, day: date) -> MealDistribution | None:
        """Return the distribution for a user and day, if present."""

    def insert_if_absent(
        self, user_id: UUID, distribution: MealDistribution
    ) -> MealDistribution:
        """Store a distribution unless one exists and return the stored row."""

    def upsert_distribution(
        self, user_id: UUID, distribution: MealDistribution
    ) -> MealDistribution:
        """Create or overwrite the distribution for its day."""

    def apply_transfer(
        self, user_id: UUID, day: date, transfer: MacroTransfer
    ) -> MealDistribution | None:
        """Write the transfer if both columns still hold their before values."""

    def revert_transfer(
        self, user_id: UUID, day: date, transfer: MacroTransfer
    ) -> MealDistribution | None:
        """Undo an applied transfer if both columns still hold their after values."""


class GoalRepository(Protocol):
    """Read access to the user's active goal."""

    def get_active_targets(self, user_id: UUID) -> DailyTargets | None:
        """Return daily targets from the active goal, if any."""


def today(timezone_name: str) -> date:
    """Return the current date in the given timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()


@dataclass
class DistributionService:
    """Service owning the per-day meal distribution lifecycle."""

    repository: DistributionRepository
    goal_repository: GoalRepository
    timezone: str = "UTC"

    def resolve_day(self, day: date | None) -> date:
        """Default a missing day to today in the service timezone."""
        return day or today(self.timezone)

    def get_distribution(self, user_id: UUID, day: date) -> MealDistribution | None:
        """Return the stored distribution without creating one."""
        return self.repository.get_distribution(user_id, day)

    def get_or_create(self, user_id: UUID, day: date) -> MealDistribution:
        """Return the day's distribution, planning it on first access."""
        existing = self.repository.get_distribution(user_id, day)
        if existing:
            return existing

        targets = self._require_targets(user_id)
        distribution = compute_distribution(
            targets, GoalStyle.BALANCED, MealStyle.FIXED, day
        )
        stored = self.repository.insert_if_absent(user_id, distribution)
        _logger.info("Created meal distribution: user_id=%s date=%s", user_id, day)
        return stored

    def recalculate(
        self,
        user_id: UUID,
        day: date,
        goal_style: GoalStyle,
        meal_style: MealStyle = MealStyle.FIXED,
    ) -> MealDistribution:
        """Recompute the day's distribution and overwrite any stored one."""
        targets = self._require_targets(user_id)
        distribution = compute_distribution(targets, goal_style, meal_style, day)
        stored = self.repository.upsert_distribution(user_id, distribution)
        _logger.info(
            "Recalculated meal distribution: user_id=%s date=%s goal_style=%s",
            user_id,
            day,
            goal_style,
        )
        return stored

    def _require_targets(self, user_id: UUID) -> DailyTargets:
        targets = self.goal_repository.get_active_targets(user_id)
        if targets is None or not targets.calorie_target:
            raise NotFoundError("No fitness targets defined. Set targets first.")
        return targets
