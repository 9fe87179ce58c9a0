"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from bakery_ops.adapters.supabase_starter_repository import SupabaseStarterRepository
from bakery_ops.config import Settings
from bakery_ops.services.starters import StarterService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    starter_service: StarterService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    starter_service = StarterService(
        repository=SupabaseStarterRepository(supabase_client),
        default_hydration=resolved_settings.default_hydration,
    )
    return AppContainer(settings=resolved_settings, starter_service=starter_service)
