"""Pydantic models for API request payloads.

Fields that the domain layer validates are kept optional here so missing
values surface as domain validation errors rather than schema errors.
"""

import math

from pydantic import BaseModel, Field, field_validator

from calorie_tracker.domain.entries import EntryChanges, NewEntry
from calorie_tracker.domain.errors import ValidationError
from calorie_tracker.domain.favorites import DEFAULT_REFERENCE_WEIGHT, NewFavorite
from calorie_tracker.domain.profile import ACTIVITY_LEVELS, ProfileUpdate
from calorie_tracker.services.derivation import derive_manual_calories


class ProfileRequest(BaseModel):
    """Profile save payload."""

    gender: str
    age: int = Field(gt=0)
    weight: float = Field(gt=0)
    height: float = Field(gt=0)
    activity_level: float = 1.2
    ai_provider: str = "gemini"

    @field_validator("activity_level")
    @classmethod
    def _known_activity_level(cls, value: float) -> float:
        for level in ACTIVITY_LEVELS:
            if math.isclose(value, level):
                return level
        raise ValueError(f"activity_level must be one of {ACTIVITY_LEVELS}")

    def to_update(self) -> ProfileUpdate:
        """Convert to the domain input."""
        return ProfileUpdate(
            gender=self.gender,
            age=self.age,
            weight=self.weight,
            height=self.height,
            activity_level=self.activity_level,
            ai_provider=self.ai_provider,
        )


class EntryCreateRequest(BaseModel):
    """New entry payload.

    Exactly one of ``calories`` (absolute) or ``calories_per_100g`` (with a
    ``weight``) must be given.
    """

    type: str | None = None
    name: str | None = None
    calories: float | None = None
    calories_per_100g: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    weight: float | None = None
    date: str | None = None

    def to_new_entry(self) -> NewEntry:
        """Resolve calories and convert to the domain input."""
        calories = self.calories
        if self.calories_per_100g is not None:
            if calories is not None:
                raise ValidationError(
                    "Provide either calories or calories_per_100g, not both"
                )
            if self.weight is None:
                raise ValidationError("calories_per_100g requires a weight")
            calories = derive_manual_calories(self.calories_per_100g, self.weight)
        return NewEntry(
            type=self.type or "",
            name=self.name or "",
            calories=calories,
            protein=self.protein or 0.0,
            carbs=self.carbs or 0.0,
            fat=self.fat or 0.0,
            weight=self.weight,
            date=self.date,
        )


class EntryUpdateRequest(BaseModel):
    """Entry edit payload."""

    name: str | None = None
    calories: float | None = None
    date: str | None = None

    def to_changes(self) -> EntryChanges:
        """Convert to the domain input."""
        return EntryChanges(name=self.name, calories=self.calories, date=self.date)


class FavoriteCreateRequest(BaseModel):
    """New favorite payload."""

    type: str | None = None
    name: str | None = None
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    weight: float | None = None

    def to_new_favorite(self) -> NewFavorite:
        """Convert to the domain input."""
        return NewFavorite(
            type=self.type or "",
            name=self.name or "",
            calories=self.calories,
            protein=self.protein or 0.0,
            carbs=self.carbs or 0.0,
            fat=self.fat or 0.0,
            weight=DEFAULT_REFERENCE_WEIGHT if self.weight is None else self.weight,
        )


class FavoriteLogRequest(BaseModel):
    """Payload for logging a favorite at a chosen weight."""

    weight: float | None = None
    date: str | None = None


class AnalyzeImageRequest(BaseModel):
    """Image analysis payload (data URL or raw base64)."""

    image: str = ""


class AnalyzeTextRequest(BaseModel):
    """Free-text food analysis payload."""

    text: str = ""


class AnalyzeSportRequest(BaseModel):
    """Activity analysis payload."""

    text: str = ""
    weight: float | None = Field(default=None, gt=0)
