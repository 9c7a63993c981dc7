"""User profile business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.errors import ValidationError
from calorie_tracker.domain.profile import AI_PROVIDERS, ProfileUpdate, UserProfile
from calorie_tracker.services.derivation import compute_bmr, compute_target_calories

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user, if present."""

    def create_user(self, user_id: UUID) -> UserProfile:
        """Create an empty profile row for an authenticated user."""

    def update_profile(self, user_id: UUID, fields: dict[str, object]) -> UserProfile:
        """Persist profile fields and return the updated profile."""


@dataclass
class ProfileService:
    """Application service for profile reads and saves."""

    repository: UserRepository

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile, or None before registration."""
        return self.repository.get_profile(user_id)

    def save_profile(self, user_id: UUID, update: ProfileUpdate) -> UserProfile:
        """Store biometrics and recompute BMR and the calorie goal."""
        if update.ai_provider not in AI_PROVIDERS:
            raise ValidationError(f"Unsupported AI provider: {update.ai_provider!r}")
        bmr = compute_bmr(update.gender, update.weight, update.height, update.age)
        goal_calories = compute_target_calories(bmr, update.activity_level)

        if self.repository.get_profile(user_id) is None:
            self.repository.create_user(user_id)
        profile = self.repository.update_profile(
            user_id,
            {
                "gender": update.gender,
                "age": update.age,
                "weight": update.weight,
                "height": update.height,
                "activity_level": update.activity_level,
                "bmr": bmr,
                "goal_calories": goal_calories,
                "ai_provider": update.ai_provider,
            },
        )
        _logger.info(
            "Profile saved: user_id=%s bmr=%.2f goal=%s", user_id, bmr, goal_calories
        )
        return profile
