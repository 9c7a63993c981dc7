"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from uuid import UUID, uuid4

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.entries import Entry, NewEntry
from calorie_tracker.domain.favorites import Favorite, NewFavorite
from calorie_tracker.domain.profile import UserProfile
from calorie_tracker.services.analysis import (
    AnalysisService,
    Analyzer,
    AnalyzerRegistry,
)
from calorie_tracker.services.entries import EntryRepository, EntryService
from calorie_tracker.services.favorites import FavoriteRepository, FavoriteService
from calorie_tracker.services.users import ProfileService, UserRepository


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def create_user(self, user_id: UUID) -> UserProfile:
        profile = UserProfile(
            id=user_id,
            gender=None,
            age=None,
            weight=None,
            height=None,
            activity_level=None,
            bmr=None,
            goal_calories=None,
        )
        self.profiles[user_id] = profile
        return profile

    def update_profile(self, user_id: UUID, fields: dict[str, object]) -> UserProfile:
        profile = replace(self.profiles[user_id], **fields)
        self.profiles[user_id] = profile
        return profile


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry repository for tests."""

    entries: list[Entry] = field(default_factory=list)

    def insert_entry(self, user_id: UUID, entry: NewEntry) -> Entry:
        stored = Entry(
            id=uuid4(),
            user_id=user_id,
            type=entry.type,
            name=entry.name,
            calories=float(entry.calories or 0.0),
            protein=entry.protein,
            carbs=entry.carbs,
            fat=entry.fat,
            weight=entry.weight,
            date=entry.date or "",
        )
        self.entries.append(stored)
        return stored

    def get_entry(self, entry_id: UUID, user_id: UUID) -> Entry | None:
        for entry in self.entries:
            if entry.id == entry_id and entry.user_id == user_id:
                return entry
        return None

    def list_entries_for_day(self, user_id: UUID, day: str) -> list[Entry]:
        return [
            entry
            for entry in self.entries
            if entry.user_id == user_id and entry.date.startswith(day)
        ]

    def list_entries_since(self, user_id: UUID, since_day: str) -> list[Entry]:
        return [
            entry
            for entry in self.entries
            if entry.user_id == user_id and entry.date >= since_day
        ]

    def update_entry(
        self, entry_id: UUID, user_id: UUID, changes: dict[str, object]
    ) -> Entry | None:
        for index, entry in enumerate(self.entries):
            if entry.id == entry_id and entry.user_id == user_id:
                updated = replace(entry, **changes)
                self.entries[index] = updated
                return updated
        return None

    def delete_entry(self, entry_id: UUID, user_id: UUID) -> bool:
        for entry in self.entries:
            if entry.id == entry_id and entry.user_id == user_id:
                self.entries.remove(entry)
                return True
        return False


@dataclass
class InMemoryFavoriteRepository(FavoriteRepository):
    """In-memory favorite repository for tests."""

    favorites: list[Favorite] = field(default_factory=list)

    def find_favorite(self, user_id: UUID, type_: str, name: str) -> Favorite | None:
        for favorite in self.favorites:
            if (
                favorite.user_id == user_id
                and favorite.type == type_
                and favorite.name == name
            ):
                return favorite
        return None

    def insert_favorite(self, user_id: UUID, favorite: NewFavorite) -> Favorite:
        stored = Favorite(
            id=uuid4(),
            user_id=user_id,
            type=favorite.type,
            name=favorite.name,
            calories=float(favorite.calories or 0.0),
            protein=favorite.protein,
            carbs=favorite.carbs,
            fat=favorite.fat,
            weight=favorite.weight,
        )
        self.favorites.append(stored)
        return stored

    def get_favorite(self, favorite_id: UUID, user_id: UUID) -> Favorite | None:
        for favorite in self.favorites:
            if favorite.id == favorite_id and favorite.user_id == user_id:
                return favorite
        return None

    def list_favorites(self, user_id: UUID) -> list[Favorite]:
        return [
            favorite
            for favorite in reversed(self.favorites)
            if favorite.user_id == user_id
        ]

    def delete_favorite(self, favorite_id: UUID, user_id: UUID) -> bool:
        for favorite in self.favorites:
            if favorite.id == favorite_id and favorite.user_id == user_id:
                self.favorites.remove(favorite)
                return True
        return False


@dataclass
class FakeAnalyzer(Analyzer):
    """Fake analyzer returning a fixed payload and recording prompts."""

    response: str = (
        '```json\n{"foods": [{"name": "rice", "calories": 260, "weight_g": 200, '
        '"protein_g": 5, "carbs_g": 57, "fat_g": 0.6}]}\n```'
    )
    prompts: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    error: Exception | None = None

    async def analyze_image(
        self, *, prompt: str, image_data_url: str, schema: dict[str, object]
    ) -> str:
        self.prompts.append(prompt)
        self.images.append(image_data_url)
        if self.error:
            raise self.error
        return self.response

    async def analyze_text(self, *, prompt: str, schema: dict[str, object]) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.response


def make_entry(  # noqa: PLR0913
    user_id: UUID,
    type_: str,
    calories: float,
    date: str,
    protein: float = 0.0,
    carbs: float = 0.0,
    fat: float = 0.0,
    name: str = "item",
) -> Entry:
    """Build a stored entry for aggregation tests."""
    return Entry(
        id=uuid4(),
        user_id=user_id,
        type=type_,
        name=name,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        weight=None,
        date=date,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        openai_api_key="openai-key",
        google_api_key="google-key",
        environment="test",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def favorite_repository() -> InMemoryFavoriteRepository:
    return InMemoryFavoriteRepository()


@pytest.fixture
def analyzer() -> FakeAnalyzer:
    return FakeAnalyzer()


@pytest.fixture
def profile_service(user_repository: InMemoryUserRepository) -> ProfileService:
    return ProfileService(user_repository)


@pytest.fixture
def entry_service(
    entry_repository: InMemoryEntryRepository, profile_service: ProfileService
) -> EntryService:
    return EntryService(repository=entry_repository, profile_service=profile_service)


@pytest.fixture
def favorite_service(
    favorite_repository: InMemoryFavoriteRepository, entry_service: EntryService
) -> FavoriteService:
    return FavoriteService(repository=favorite_repository, entry_service=entry_service)


@pytest.fixture
def analysis_service(
    analyzer: FakeAnalyzer, profile_service: ProfileService
) -> AnalysisService:
    registry = AnalyzerRegistry()
    registry.register("gemini", analyzer)
    registry.register("openai", analyzer)
    return AnalysisService(
        registry=registry,
        profile_service=profile_service,
        default_provider="gemini",
        timeout_seconds=1.0,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    profile_service: ProfileService,
    entry_service: EntryService,
    favorite_service: FavoriteService,
    analysis_service: AnalysisService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        entry_service=entry_service,
        favorite_service=favorite_service,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
