"""Domain models for saved favorites."""

from dataclasses import dataclass
from uuid import UUID

DEFAULT_REFERENCE_WEIGHT = 100.0


@dataclass(frozen=True)
class Favorite:
    """Reusable entry template whose values refer to ``weight`` grams."""

    id: UUID
    user_id: UUID
    type: str
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    weight: float | None


@dataclass(frozen=True)
class NewFavorite:
    """Input for a new favorite."""

    type: str
    name: str
    calories: float | None
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    weight: float = DEFAULT_REFERENCE_WEIGHT


@dataclass(frozen=True)
class ScaledFavorite:
    """Favorite values recalculated for a requested weight."""

    calories: int
    protein: int
    carbs: int
    fat: int
    weight: float
