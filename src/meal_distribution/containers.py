"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from meal_distribution.adapters.supabase_distribution_repository import (
    SupabaseDistributionRepository,
)
from meal_distribution.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from meal_distribution.adapters.supabase_goal_repository import SupabaseGoalRepository
from meal_distribution.adapters.supabase_swap_log_repository import (
    SupabaseSwapLogRepository,
)
from meal_distribution.config import Settings
from meal_distribution.services.distributions import DistributionService
from meal_distribution.services.remaining import RemainingMacrosService
from meal_distribution.services.swaps import SwapService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    distribution_service: DistributionService
    swap_service: SwapService
    remaining_service: RemainingMacrosService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    distribution_repository = SupabaseDistributionRepository(supabase_client)
    goal_repository = SupabaseGoalRepository(supabase_client)
    swap_log_repository = SupabaseSwapLogRepository(supabase_client)
    food_log_repository = SupabaseFoodLogRepository(supabase_client)

    distribution_service = DistributionService(
        repository=distribution_repository,
        goal_repository=goal_repository,
        timezone=resolved_settings.timezone,
    )
    swap_service = SwapService(
        distribution_repository=distribution_repository,
        goal_repository=goal_repository,
        swap_log_repository=swap_log_repository,
    )
    remaining_service = RemainingMacrosService(
        distribution_repository=distribution_repository,
        food_log_repository=food_log_repository,
    )

    return AppContainer(
        settings=resolved_settings,
        distribution_service=distribution_service,
        swap_service=swap_service,
        remaining_service=remaining_service,
    )
