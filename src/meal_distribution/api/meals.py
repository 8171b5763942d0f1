"""Meal distribution, swap and remaining-macro endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from meal_distribution.api.auth import require_api_token
from meal_distribution.api.models import (
    PreviewRequest,
    RecalculateRequest,
    SwapRequestBody,
)
from meal_distribution.domain.distribution import (
    DailyTargets,
    MealDistribution,
    MealMacros,
    MealType,
)
from meal_distribution.domain.swaps import (
    RemainingMacros,
    SwapLogEntry,
    SwapRequest,
    SwapSummary,
    ValidationReport,
    Violation,
)
from meal_distribution.services.planner import compute_distribution

if TYPE_CHECKING:
    from meal_distribution.containers import AppContainer

router = APIRouter(
    prefix="/meals", tags=["meals"], dependencies=[Depends(require_api_token)]
)

ERROR_STATUS = {
    "ValidationError": 400,
    "InsufficientMacroError": 400,
    "NotFoundError": 404,
    "ConcurrentSwapError": 409,
    "InvariantViolation": 409,
}


@router.post("/distribution/preview")
async def preview_distribution(body: PreviewRequest) -> dict[str, object]:
    """Split targets across meals without reading or writing storage."""
    distribution = compute_distribution(
        DailyTargets(
            calorie_target=body.calorie_target,
            protein_target_g=body.protein_target_g,
            carb_target_g=body.carb_target_g,
            fat_target_g=body.fat_target_g,
        ),
        body.goal_style,
        body.meal_style,
        body.date,
    )
    return serialize_distribution(distribution)


@router.get("/distribution")
async def get_distribution(
    request: Request,
    user_id: UUID,
    day: date | None = Query(default=None, alias="date"),
) -> dict[str, object]:
    """Return the day's distribution, creating it on first access."""
    container: AppContainer = request.app.state.container
    service = container.distribution_service
    distribution = service.get_or_create(user_id, service.resolve_day(day))
    return serialize_distribution(distribution)


@router.post("/distribution/recalculate")
async def recalculate_distribution(
    body: RecalculateRequest, request: Request
) -> dict[str, object]:
    """Recompute and overwrite the day's distribution."""
    container: AppContainer = request.app.state.container
    service = container.distribution_service
    distribution = service.recalculate(
        body.user_id, service.resolve_day(body.date), body.goal_style, body.meal_style
    )
    return serialize_distribution(distribution)


@router.post("/swap", response_model=None)
async def execute_swap(
    body: SwapRequestBody, request: Request
) -> dict[str, object] | JSONResponse:
    """Move grams of one macro between meals."""
    container: AppContainer = request.app.state.container
    day = container.distribution_service.resolve_day(body.date)
    result = container.swap_service.execute_macro_swap(
        body.user_id,
        day,
        SwapRequest(
            from_meal=body.from_meal,
            to_meal=body.to_meal,
            macro_type=body.macro_type,
            amount_g=body.amount_g,
        ),
    )
    if not result.success:
        payload: dict[str, object] = {
            "success": False,
            "error": result.error,
            "error_type": result.error_type,
        }
        if result.violations:
            payload["violations"] = [_serialize_violation(v) for v in result.violations]
        return JSONResponse(
            status_code=ERROR_STATUS.get(result.error_type or "", 400),
            content=payload,
        )
    return {
        "success": True,
        "updated": serialize_distribution(result.updated),
        "swap": _serialize_swap(result.swap),
    }


@router.get("/swap-status")
async def swap_status(
    request: Request,
    user_id: UUID,
    day: date | None = Query(default=None, alias="date"),
) -> dict[str, object]:
    """Return swap history, the current distribution and its validation."""
    container: AppContainer = request.app.state.container
    status = container.swap_service.get_swap_status(
        user_id, container.distribution_service.resolve_day(day)
    )
    return {
        "swap_history": [_serialize_log_entry(entry) for entry in status.history],
        "current_distribution": (
            serialize_distribution(status.distribution)
            if status.distribution
            else None
        ),
        "daily_totals": _serialize_report(status.report),
        "is_valid": status.report.valid,
    }


@router.get("/remaining")
async def remaining_macros(
    request: Request,
    user_id: UUID,
    day: date | None = Query(default=None, alias="date"),
    meal_type: MealType | None = None,
) -> dict[str, object]:
    """Return remaining macros for one meal, or for every meal."""
    container: AppContainer = request.app.state.container
    resolved_day = container.distribution_service.resolve_day(day)
    service = container.remaining_service
    if meal_type is not None:
        remaining = service.get_remaining_macros(user_id, resolved_day, meal_type)
        return _serialize_remaining(remaining)
    by_meal = service.get_remaining_for_day(user_id, resolved_day)
    return {meal.value: _serialize_remaining(item) for meal, item in by_meal.items()}


def serialize_distribution(distribution: MealDistribution) -> dict[str, object]:
    """Return the JSON shape of a distribution."""
    return {
        "meta": {
            "date": distribution.meta.date.isoformat(),
            "goal_style": distribution.meta.goal_style.value,
            "meal_style": distribution.meta.meal_style.value,
        },
        "meals": {
            meal.value: _serialize_macros(distribution.meal(meal)) for meal in MealType
        },
    }


def _serialize_macros(macros: MealMacros) -> dict[str, int]:
    return {
        "calories": macros.calories,
        "protein_g": macros.protein_g,
        "carbs_g": macros.carbs_g,
        "fat_g": macros.fat_g,
    }


def _serialize_swap(swap: SwapSummary) -> dict[str, object]:
    return {
        "from_meal": swap.from_meal.value,
        "to_meal": swap.to_meal.value,
        "macro_type": swap.macro_type.value,
        "amount_g": swap.amount_g,
        "from_new": swap.from_new,
        "to_new": swap.to_new,
        "unreconciled_calories": swap.unreconciled_calories,
    }


def _serialize_violation(violation: Violation) -> dict[str, object]:
    return {
        "macro": violation.macro,
        "expected": violation.expected,
        "actual": violation.actual,
        "diff": violation.diff,
    }


def _serialize_report(report: ValidationReport) -> dict[str, object]:
    targets = report.targets
    return {
        "valid": report.valid,
        "reason": report.reason,
        "violations": [_serialize_violation(v) for v in report.violations],
        "distributed": (
            _serialize_macros(report.distributed) if report.distributed else None
        ),
        "targets": (
            {
                "calorie_target": targets.calorie_target,
                "protein_target_g": targets.protein_target_g,
                "carb_target_g": targets.carb_target_g,
                "fat_target_g": targets.fat_target_g,
            }
            if targets
            else None
        ),
    }


def _serialize_log_entry(entry: SwapLogEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "from_meal": entry.from_meal.value,
        "to_meal": entry.to_meal.value,
        "macro_type": entry.macro_type.value,
        "amount_g": entry.amount_g,
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
    }


def _serialize_remaining(remaining: RemainingMacros) -> dict[str, object]:
    return {
        "meal": remaining.meal.value,
        "target": _serialize_macros(remaining.target),
        "consumed": _serialize_macros(remaining.consumed),
        "remaining": _serialize_macros(remaining.remaining),
    }
