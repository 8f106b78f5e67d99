"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from feastfit.adapters.supabase_meal_log_repository import SupabaseMealLogRepository
from feastfit.adapters.yelp_ai_client import HttpxYelpAIClient
from feastfit.config import Settings
from feastfit.services.meal_logs import MealLogRepository, MealLogService
from feastfit.services.rate_limit import RateLimiter
from feastfit.services.recommendations import RecommendationService
from feastfit.services.scoring import FitScorer


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    recommendation_service: RecommendationService
    meal_log_service: MealLogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    yelp_client = HttpxYelpAIClient.create(
        api_key=resolved_settings.yelp_api_key,
        base_url=resolved_settings.yelp_base_url,
        timeout_seconds=resolved_settings.yelp_timeout_seconds,
    )
    rate_limiter = RateLimiter(
        window_seconds=resolved_settings.rate_limit_window_seconds,
        max_requests=resolved_settings.rate_limit_max_requests,
        max_clients=resolved_settings.rate_limit_max_clients,
    )
    recommendation_service = RecommendationService(
        client=yelp_client,
        rate_limiter=rate_limiter,
        scorer=FitScorer(),
    )
    meal_log_repository: MealLogRepository | None = None
    if resolved_settings.supabase_configured:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        meal_log_repository = SupabaseMealLogRepository(supabase_client)
    meal_log_service = MealLogService(meal_log_repository)

    async def close_resources() -> None:
        await yelp_client.close()

    return AppContainer(
        settings=resolved_settings,
        recommendation_service=recommendation_service,
        meal_log_service=meal_log_service,
        close_resources=close_resources,
    )
