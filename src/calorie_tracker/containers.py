"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.gemini_analyzer import GeminiAnalyzer
from calorie_tracker.adapters.openai_analyzer import OpenAIAnalyzer
from calorie_tracker.adapters.supabase_entry_repository import (
    SupabaseEntryRepository,
)
from calorie_tracker.adapters.supabase_favorite_repository import (
    SupabaseFavoriteRepository,
)
from calorie_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from calorie_tracker.config import Settings
from calorie_tracker.services.analysis import AnalysisService, AnalyzerRegistry
from calorie_tracker.services.entries import EntryService
from calorie_tracker.services.favorites import FavoriteService
from calorie_tracker.services.users import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    entry_service: EntryService
    favorite_service: FavoriteService
    analysis_service: AnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(SupabaseUserRepository(supabase_client))
    entry_service = EntryService(
        repository=SupabaseEntryRepository(supabase_client),
        profile_service=profile_service,
    )
    favorite_service = FavoriteService(
        repository=SupabaseFavoriteRepository(supabase_client),
        entry_service=entry_service,
    )

    registry = AnalyzerRegistry()
    openai_analyzer: OpenAIAnalyzer | None = None
    if resolved_settings.openai_api_key:
        openai_analyzer = OpenAIAnalyzer.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
            timeout_seconds=resolved_settings.analysis_timeout_seconds,
        )
        registry.register("openai", openai_analyzer)
    if resolved_settings.google_api_key:
        registry.register(
            "gemini",
            GeminiAnalyzer.create(
                api_key=resolved_settings.google_api_key,
                model=resolved_settings.gemini_model,
                timeout_seconds=resolved_settings.analysis_timeout_seconds,
            ),
        )
    analysis_service = AnalysisService(
        registry=registry,
        profile_service=profile_service,
        default_provider=resolved_settings.default_ai_provider,
        timeout_seconds=resolved_settings.analysis_timeout_seconds,
    )

    async def close_resources() -> None:
        if openai_analyzer is not None:
            await openai_analyzer.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        entry_service=entry_service,
        favorite_service=favorite_service,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
