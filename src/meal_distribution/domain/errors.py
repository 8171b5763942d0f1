"""Errors raised by distribution and swap operations."""

from meal_distribution.domain.swaps import Violation


class DistributionError(Exception):
    """Base class for expected, caller-facing failures."""


class ValidationError(DistributionError):
    """Request input is malformed."""


class InsufficientMacroError(DistributionError):
    """A swap would drive a meal's macro below zero."""


class NotFoundError(DistributionError):
    """A required distribution or active goal does not exist."""


class ConcurrentSwapError(DistributionError):
    """The distribution changed between read and write."""


class InvariantViolation(DistributionError):
    """Daily totals no longer match the active goal."""

    def __init__(self, message: str, violations: list[Violation]) -> None:
        super().__init__(message)
        self.violations = violations
