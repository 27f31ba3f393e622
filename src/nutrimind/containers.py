"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrimind.adapters.openai_extraction_client import OpenAIExtractionClient
from nutrimind.adapters.supabase_log_repository import SupabaseLogRepository
from nutrimind.adapters.supabase_profile_repository import SupabaseProfileRepository
from nutrimind.adapters.supabase_session_repository import SupabaseSessionRepository
from nutrimind.adapters.supabase_user_repository import SupabaseUserRepository
from nutrimind.adapters.supabase_weight_repository import SupabaseWeightRepository
from nutrimind.config import Settings
from nutrimind.services.extraction import ExtractionService
from nutrimind.services.logs import LogService
from nutrimind.services.profiles import ProfileService
from nutrimind.services.sessions import SessionService
from nutrimind.services.stats import StatsService
from nutrimind.services.weights import WeightService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    extraction_service: ExtractionService
    log_service: LogService
    stats_service: StatsService
    weight_service: WeightService
    profile_service: ProfileService
    session_service: SessionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    log_repository = SupabaseLogRepository(supabase_client)
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    extraction_client = OpenAIExtractionClient.create(resolved_settings.openai_api_key)
    extraction_service = ExtractionService(
        client=extraction_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        web_search_enabled=resolved_settings.web_search_enabled,
    )
    session_service = SessionService(
        user_repository=SupabaseUserRepository(supabase_client),
        session_repository=SupabaseSessionRepository(supabase_client),
        profile_service=profile_service,
    )

    async def close_resources() -> None:
        await extraction_client.close()

    return AppContainer(
        settings=resolved_settings,
        extraction_service=extraction_service,
        log_service=LogService(
            extraction_service=extraction_service, repository=log_repository
        ),
        stats_service=StatsService(log_repository),
        weight_service=WeightService(SupabaseWeightRepository(supabase_client)),
        profile_service=profile_service,
        session_service=session_service,
        close_resources=close_resources,
    )
