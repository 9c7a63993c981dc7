"""Supabase implementation for saved favorites."""

from dataclasses import dataclass
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from calorie_tracker.domain.errors import ConflictError
from calorie_tracker.domain.favorites import Favorite, NewFavorite
from calorie_tracker.services.favorites import FavoriteRepository

_TABLE = "favorites"
_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseFavoriteRepository(FavoriteRepository):
    """Supabase-backed repository for user favorites."""

    client: Client

    def find_favorite(self, user_id: UUID, type_: str, name: str) -> Favorite | None:
        """Return the favorite matching user, type and name, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("type", type_)
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_favorite(response.data[0])

    def insert_favorite(self, user_id: UUID, favorite: NewFavorite) -> Favorite:
        """Create a favorite and return it.

        A concurrent insert of the same type and name surfaces as a conflict.
        """
        try:
            response = (
                self.client.table(_TABLE)
                .insert(
                    {
                        "user_id": str(user_id),
                        "type": favorite.type,
                        "name": favorite.name,
                        "calories": favorite.calories,
                        "protein": favorite.protein,
                        "carbs": favorite.carbs,
                        "fat": favorite.fat,
                        "weight": favorite.weight,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code != _UNIQUE_VIOLATION:
                raise
            existing = self.find_favorite(user_id, favorite.type, favorite.name)
            raise ConflictError(
                "Favorite already exists",
                existing_id=existing.id if existing else None,
            ) from exc
        if not response.data:
            raise RuntimeError("Failed to create favorite")
        return _parse_favorite(response.data[0])

    def get_favorite(self, favorite_id: UUID, user_id: UUID) -> Favorite | None:
        """Return an owned favorite by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(favorite_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_favorite(response.data[0])

    def list_favorites(self, user_id: UUID) -> list[Favorite]:
        """Return favorites for a user, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_favorite(row) for row in response.data or []]

    def delete_favorite(self, favorite_id: UUID, user_id: UUID) -> bool:
        """Delete an owned favorite; False when no row matched."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .eq("id", str(favorite_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_favorite(row: dict[str, object]) -> Favorite:
    """Parse a favorite row into a domain model."""
    weight = row.get("weight")
    return Favorite(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        type=str(row.get("type", "")),
        name=str(row.get("name", "")),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        weight=float(weight) if weight is not None else None,
    )
