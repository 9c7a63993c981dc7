"""Services for saved favorites and their reuse."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.entries import ENTRY_TYPES, Entry, NewEntry
from calorie_tracker.domain.errors import ConflictError, NotFoundError, ValidationError
from calorie_tracker.domain.favorites import (
    DEFAULT_REFERENCE_WEIGHT,
    Favorite,
    NewFavorite,
    ScaledFavorite,
)
from calorie_tracker.services.derivation import scale_favorite_to_weight
from calorie_tracker.services.entries import EntryService

_logger = logging.getLogger(__name__)


class FavoriteRepository(Protocol):
    """Persistence interface for favorites."""

    def find_favorite(self, user_id: UUID, type_: str, name: str) -> Favorite | None:
        """Return the favorite with this identity, if present."""

    def insert_favorite(self, user_id: UUID, favorite: NewFavorite) -> Favorite:
        """Persist a favorite and return it."""

    def get_favorite(self, favorite_id: UUID, user_id: UUID) -> Favorite | None:
        """Return an owned favorite by id, if present."""

    def list_favorites(self, user_id: UUID) -> list[Favorite]:
        """Return the user's favorites, newest first."""

    def delete_favorite(self, favorite_id: UUID, user_id: UUID) -> bool:
        """Delete an owned favorite; False when nothing matched."""


@dataclass
class FavoriteService:
    """Application service for favorite operations."""

    repository: FavoriteRepository
    entry_service: EntryService

    def create_favorite(self, user_id: UUID, favorite: NewFavorite) -> Favorite:
        """Save a favorite unless one with the same type and name exists."""
        if favorite.type not in ENTRY_TYPES:
            raise ValidationError("type must be 'food' or 'sport'")
        if not favorite.name or not favorite.name.strip():
            raise ValidationError("name is required")
        if favorite.calories is None:
            raise ValidationError("calories is required")
        if favorite.calories < 0:
            raise ValidationError("calories must not be negative")
        if min(favorite.protein, favorite.carbs, favorite.fat) < 0:
            raise ValidationError("macros must not be negative")
        if favorite.weight <= 0:
            raise ValidationError("weight must be greater than zero")

        existing = self.repository.find_favorite(user_id, favorite.type, favorite.name)
        if existing is not None:
            _logger.info(
                "Favorite already exists: user_id=%s favorite_id=%s",
                user_id,
                existing.id,
            )
            raise ConflictError("Favorite already exists", existing_id=existing.id)
        return self.repository.insert_favorite(user_id, favorite)

    def create_from_entry(self, user_id: UUID, entry_id: UUID) -> Favorite:
        """Save an existing entry as a favorite."""
        entry = self.entry_service.repository.get_entry(entry_id, user_id)
        if entry is None:
            raise NotFoundError("Entry not found")
        return self.create_favorite(user_id, _favorite_from_entry(entry))

    def list_favorites(self, user_id: UUID) -> list[Favorite]:
        """Return the user's favorites."""
        return self.repository.list_favorites(user_id)

    def delete_favorite(self, favorite_id: UUID, user_id: UUID) -> None:
        """Delete an owned favorite."""
        if not self.repository.delete_favorite(favorite_id, user_id):
            raise NotFoundError("Favorite not found")

    def preview(
        self, favorite_id: UUID, user_id: UUID, weight: object
    ) -> ScaledFavorite:
        """Return the favorite's values scaled to ``weight`` grams."""
        return scale_favorite_to_weight(self._get(favorite_id, user_id), weight)

    def log_favorite(
        self,
        favorite_id: UUID,
        user_id: UUID,
        weight: object,
        date: str | None = None,
    ) -> Entry:
        """Scale a favorite to ``weight`` grams and log it as a new entry."""
        favorite = self._get(favorite_id, user_id)
        scaled = scale_favorite_to_weight(favorite, weight)
        return self.entry_service.add_entry(
            user_id,
            NewEntry(
                type=favorite.type,
                name=favorite.name,
                calories=scaled.calories,
                protein=scaled.protein,
                carbs=scaled.carbs,
                fat=scaled.fat,
                weight=scaled.weight,
                date=date,
            ),
        )

    def _get(self, favorite_id: UUID, user_id: UUID) -> Favorite:
        favorite = self.repository.get_favorite(favorite_id, user_id)
        if favorite is None:
            raise NotFoundError("Favorite not found")
        return favorite


def _favorite_from_entry(entry: Entry) -> NewFavorite:
    return NewFavorite(
        type=entry.type,
        name=entry.name,
        calories=entry.calories,
        protein=entry.protein,
        carbs=entry.carbs,
        fat=entry.fat,
        weight=entry.weight or DEFAULT_REFERENCE_WEIGHT,
    )
