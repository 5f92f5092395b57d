"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from user_directory.adapters.openweather_client import HttpxOpenWeatherClient
from user_directory.adapters.supabase_user_repository import SupabaseUserRepository
from user_directory.config import Settings
from user_directory.services.geolocation import GeolocationResolver
from user_directory.services.reconciler import RecordReconciler
from user_directory.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(
        supabase_client, table_name=resolved_settings.users_table
    )
    openweather_client = HttpxOpenWeatherClient.create(
        api_key=resolved_settings.openweather_api_key,
        base_url=resolved_settings.openweather_base_url,
        timeout_seconds=resolved_settings.http_timeout_seconds,
    )
    reconciler = RecordReconciler(
        resolver=GeolocationResolver(openweather_client),
        id_factory=user_repository.generate_id,
        default_country=resolved_settings.default_country,
    )
    user_service = UserService(repository=user_repository, reconciler=reconciler)

    async def close_resources() -> None:
        await openweather_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        close_resources=close_resources,
    )
