"""Domain models for macro swaps and validation."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from meal_distribution.domain.distribution import (
    DailyTargets,
    MacroType,
    MealDistribution,
    MealMacros,
    MealType,
)


@dataclass(frozen=True)
class SwapRequest:
    """Caller's request to move grams of one macro between meals."""

    from_meal: str
    to_meal: str
    macro_type: str
    amount_g: int


@dataclass(frozen=True)
class SwapLogEntry:
    """Audit record of an executed swap."""

    user_id: UUID
    date: date
    from_meal: MealType
    to_meal: MealType
    macro_type: MacroType
    amount_g: int
    id: int | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class SwapSummary:
    """Outcome of an applied swap."""

    from_meal: MealType
    to_meal: MealType
    macro_type: MacroType
    amount_g: int
    from_new: int
    to_new: int
    unreconciled_calories: int


@dataclass(frozen=True)
class Violation:
    """Mismatch between a distributed total and its goal target."""

    macro: str
    expected: int
    actual: int

    @property
    def diff(self) -> int:
        return self.actual - self.expected


@dataclass(frozen=True)
class ValidationReport:
    """Result of checking distributed totals against the active goal."""

    valid: bool
    violations: list[Violation] = field(default_factory=list)
    distributed: MealMacros | None = None
    targets: DailyTargets | None = None
    reason: str | None = None


@dataclass(frozen=True)
class SwapResult:
    """Structured result of a swap attempt."""

    success: bool
    updated: MealDistribution | None = None
    swap: SwapSummary | None = None
    error: str | None = None
    error_type: str | None = None
    violations: list[Violation] = field(default_factory=list)


@dataclass(frozen=True)
class SwapStatus:
    """Swap history with the current distribution and its validation."""

    history: list[SwapLogEntry]
    distribution: MealDistribution | None
    report: ValidationReport


@dataclass(frozen=True)
class RemainingMacros:
    """Target, consumed and remaining macros for one meal."""

    meal: MealType
    target: MealMacros
    consumed: MealMacros
    remaining: MealMacros
