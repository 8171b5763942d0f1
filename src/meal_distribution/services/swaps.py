"""Same-macro swaps between meals with daily total validation.

A swap moves grams of one macro (protein, carbs or fat) from one meal to
another. Calorie columns are never touched, so a protein or fat swap leaves
each meal's calorie target out of step with its macros; the swap summary
reports that shift as ``unreconciled_calories`` instead of correcting it.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from meal_distribution.domain.distribution import (
    MACRO_FIELDS,
    DailyTargets,
    MacroTransfer,
    MacroType,
    MealDistribution,
    MealMacros,
    MealType,
)
from meal_distribution.domain.errors import (
    ConcurrentSwapError,
    DistributionError,
    InsufficientMacroError,
    InvariantViolation,
    NotFoundError,
    ValidationError,
)
from meal_distribution.domain.swaps import (
    SwapLogEntry,
    SwapRequest,
    SwapResult,
    SwapStatus,
    SwapSummary,
    ValidationReport,
    Violation,
)
from meal_distribution.services.distributions import (
    DistributionRepository,
    GoalRepository,
)

_logger = logging.getLogger(__name__)

VIOLATION_NAMES = {
    "calories": "calories",
    "protein_g": "protein",
    "carbs_g": "carbs",
    "fat_g": "fat",
}


class SwapLogRepository(Protocol):
    """Persistence interface for the swap audit log."""

    def create_entry(self, entry: SwapLogEntry) -> SwapLogEntry:
        """Append an entry and return it with id and timestamp."""

    def list_entries(self, user_id: UUID, day: date) -> list[SwapLogEntry]:
        """Return entries for a day, newest first."""

    def delete_entry(self, entry_id: int) -> bool:
        """Delete one entry by id; return whether a row was removed."""


@dataclass
class SwapService:
    """Service executing and validating macro swaps."""

    distribution_repository: DistributionRepository
    goal_repository: GoalRepository
    swap_log_repository: SwapLogRepository

    def execute_macro_swap(
        self, user_id: UUID, day: date, request: SwapRequest
    ) -> SwapResult:
        """Apply a swap, log it and keep daily totals matching the goal."""
        try:
            updated, summary = self._execute(user_id, day, request)
        except InvariantViolation as exc:
            return SwapResult(
                success=False,
                error=str(exc),
                error_type=type(exc).__name__,
                violations=exc.violations,
            )
        except DistributionError as exc:
            _logger.warning(
                "Macro swap rejected: user_id=%s date=%s reason=%s", user_id, day, exc
            )
            return SwapResult(
                success=False, error=str(exc), error_type=type(exc).__name__
            )
        return SwapResult(success=True, updated=updated, swap=summary)

    def validate_daily_totals(self, user_id: UUID, day: date) -> ValidationReport:
        """Compare distributed daily totals with the active goal targets."""
        distribution = self.distribution_repository.get_distribution(user_id, day)
        if distribution is None:
            return ValidationReport(valid=False, reason="No distribution found")
        targets = self.goal_repository.get_active_targets(user_id)
        if targets is None:
            return ValidationReport(valid=False, reason="No active goal found")

        violations = find_violations(distribution, targets)
        return ValidationReport(
            valid=not violations,
            violations=violations,
            distributed=daily_totals(distribution),
            targets=targets,
        )

    def get_swap_history(self, user_id: UUID, day: date) -> list[SwapLogEntry]:
        """Return the day's swaps, newest first."""
        return self.swap_log_repository.list_entries(user_id, day)

    def get_swap_status(self, user_id: UUID, day: date) -> SwapStatus:
        """Return swap history, current distribution and its validation."""
        return SwapStatus(
            history=self.get_swap_history(user_id, day),
            distribution=self.distribution_repository.get_distribution(user_id, day),
            report=self.validate_daily_totals(user_id, day),
        )

    def _execute(
        self, user_id: UUID, day: date, request: SwapRequest
    ) -> tuple[MealDistribution, SwapSummary]:
        from_meal, to_meal, macro_type, amount_g = parse_swap_request(request)
        current = self.distribution_repository.get_distribution(user_id, day)
        if current is None:
            raise NotFoundError("No meal distribution found for this date")

        transfer = MacroTransfer(
            from_meal=from_meal,
            to_meal=to_meal,
            macro_type=macro_type,
            amount_g=amount_g,
            from_before=current.meal(from_meal).get(macro_type.field),
            to_before=current.meal(to_meal).get(macro_type.field),
        )
        if transfer.from_after < 0:
            raise InsufficientMacroError(
                f"{from_meal} only has {transfer.from_before}g {macro_type}, "
                f"cannot swap {amount_g}g"
            )

        updated = self.distribution_repository.apply_transfer(user_id, day, transfer)
        if updated is None:
            raise ConcurrentSwapError(
                "Meal distribution changed during the swap, please retry"
            )
        entry = self.swap_log_repository.create_entry(
            SwapLogEntry(
                user_id=user_id,
                date=day,
                from_meal=from_meal,
                to_meal=to_meal,
                macro_type=macro_type,
                amount_g=amount_g,
            )
        )
        _logger.info(
            "Macro swap applied: user_id=%s date=%s %s %s->%s %sg",
            user_id,
            day,
            macro_type,
            from_meal,
            to_meal,
            amount_g,
        )

        report = self.validate_daily_totals(user_id, day)
        if not report.valid:
            self._rollback(user_id, day, transfer, entry)
            raise InvariantViolation(
                "Swap caused daily total violation - rolled back",
                report.violations,
            )

        summary = SwapSummary(
            from_meal=from_meal,
            to_meal=to_meal,
            macro_type=macro_type,
            amount_g=amount_g,
            from_new=transfer.from_after,
            to_new=transfer.to_after,
            unreconciled_calories=amount_g * macro_type.kcal_per_gram,
        )
        return updated, summary

    def _rollback(
        self,
        user_id: UUID,
        day: date,
        transfer: MacroTransfer,
        entry: SwapLogEntry,
    ) -> None:
        deleted = (
            entry.id is not None and self.swap_log_repository.delete_entry(entry.id)
        )
        reverted = self.distribution_repository.revert_transfer(user_id, day, transfer)
        _logger.warning(
            "Macro swap rolled back: user_id=%s date=%s log_deleted=%s reverted=%s",
            user_id,
            day,
            deleted,
            reverted is not None,
        )


def parse_swap_request(
    request: SwapRequest,
) -> tuple[MealType, MealType, MacroType, int]:
    """Validate a swap request and return its typed parts."""
    if not (request.from_meal and request.to_meal and request.macro_type):
        raise ValidationError("from_meal, to_meal, and macro_type are required")
    try:
        macro_type = MacroType(request.macro_type)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid macro type: {request.macro_type}. "
            "macro_type must be protein, carbs, or fat"
        ) from exc
    try:
        from_meal = MealType(request.from_meal)
        to_meal = MealType(request.to_meal)
    except ValueError as exc:
        raise ValidationError(
            "from_meal and to_meal must be breakfast, lunch, or dinner"
        ) from exc
    if from_meal == to_meal:
        raise ValidationError("Cannot swap within the same meal")
    if request.amount_g <= 0:
        raise ValidationError("amount_g must be a positive number of grams")
    return from_meal, to_meal, macro_type, int(request.amount_g)


def daily_totals(distribution: MealDistribution) -> MealMacros:
    """Sum every field across the day's meals."""
    return MealMacros(**{field: distribution.total(field) for field in MACRO_FIELDS})


def find_violations(
    distribution: MealDistribution, targets: DailyTargets
) -> list[Violation]:
    """Return one violation per field whose daily total misses its target."""
    violations = []
    for field in MACRO_FIELDS:
        actual = distribution.total(field)
        expected = targets.for_field(field)
        if actual != expected:
            violations.append(
                Violation(macro=VIOLATION_NAMES[field], expected=expected, actual=actual)
            )
    return violations
