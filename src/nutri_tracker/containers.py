"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from nutri_tracker.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from nutri_tracker.adapters.httpx_prediction_client import HttpxPredictionClient
from nutri_tracker.adapters.supabase_database_probe import SupabaseDatabaseProbe
from nutri_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from nutri_tracker.adapters.supabase_stats_repository import SupabaseStatsRepository
from nutri_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from nutri_tracker.config import Settings
from nutri_tracker.services.auth import AuthService
from nutri_tracker.services.database import DatabaseMonitor
from nutri_tracker.services.meals import MealService
from nutri_tracker.services.prediction import PredictionService
from nutri_tracker.services.stats import StatsService
from nutri_tracker.services.tokens import TokenService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_service: TokenService
    auth_service: AuthService
    meal_service: MealService
    stats_service: StatsService
    prediction_service: PredictionService
    database_monitor: DatabaseMonitor
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    token_service = TokenService(
        secret=resolved_settings.jwt_secret,
        ttl_days=resolved_settings.token_ttl_days,
    )
    auth_service = AuthService(
        repository=SupabaseUserRepository(supabase_client),
        hasher=BcryptPasswordHasher(),
        tokens=token_service,
    )
    meal_service = MealService(SupabaseMealRepository(supabase_client))
    stats_service = StatsService(
        repository=SupabaseStatsRepository(supabase_client),
        timezone_name=resolved_settings.summary_timezone,
    )
    prediction_client = HttpxPredictionClient.create(
        url=resolved_settings.ml_api_url,
        timeout_seconds=resolved_settings.prediction_timeout_seconds,
    )
    prediction_service = PredictionService(
        client=prediction_client,
        upload_dir=Path(resolved_settings.upload_dir),
        max_upload_bytes=resolved_settings.max_upload_bytes,
        max_retries=resolved_settings.prediction_max_retries,
        retry_backoff_seconds=resolved_settings.prediction_retry_backoff_seconds,
    )
    database_monitor = DatabaseMonitor(
        probe=SupabaseDatabaseProbe(supabase_client),
        retries=resolved_settings.db_connect_retries,
        retry_delay_seconds=resolved_settings.db_connect_retry_delay_seconds,
    )

    async def close_resources() -> None:
        await prediction_client.close()

    return AppContainer(
        settings=resolved_settings,
        token_service=token_service,
        auth_service=auth_service,
        meal_service=meal_service,
        stats_service=stats_service,
        prediction_service=prediction_service,
        database_monitor=database_monitor,
        close_resources=close_resources,
    )
