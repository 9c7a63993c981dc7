"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.profile import UserProfile
from calorie_tracker.services.users import UserRepository

_PROFILE_COLUMNS = (
    "id, gender, age, weight, height, activity_level, bmr, goal_calories, ai_provider"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("users")
            .select(_PROFILE_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_profile(response.data[0])
        return None

    def create_user(self, user_id: UUID) -> UserProfile:
        """Create an empty profile row and return it."""
        response = self.client.table("users").insert({"id": str(user_id)}).execute()
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_profile(response.data[0])

    def update_profile(self, user_id: UUID, fields: dict[str, object]) -> UserProfile:
        """Update profile columns and return the stored row."""
        response = (
            self.client.table("users").update(fields).eq("id", str(user_id)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user profile")
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        id=UUID(str(row["id"])),
        gender=row.get("gender"),
        age=_optional_int(row.get("age")),
        weight=_optional_float(row.get("weight")),
        height=_optional_float(row.get("height")),
        activity_level=_optional_float(row.get("activity_level")),
        bmr=_optional_float(row.get("bmr")),
        goal_calories=_optional_float(row.get("goal_calories")),
        ai_provider=str(row.get("ai_provider") or "gemini"),
    )


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None


def _optional_int(value: object) -> int | None:
    return int(value) if value is not None else None
