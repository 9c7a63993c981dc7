"""Domain models for user profiles."""

from dataclasses import dataclass
from uuid import UUID

ACTIVITY_LEVELS = (1.2, 1.375, 1.55, 1.725, 1.9)
AI_PROVIDERS = frozenset({"gemini", "openai"})


@dataclass(frozen=True)
class UserProfile:
    """Biometrics and preferences of a user.

    Biometric fields stay ``None`` until the first profile save; ``bmr`` and
    ``goal_calories`` are derived on every save.
    """

    id: UUID
    gender: str | None
    age: int | None
    weight: float | None
    height: float | None
    activity_level: float | None
    bmr: float | None
    goal_calories: float | None
    ai_provider: str = "gemini"


@dataclass(frozen=True)
class ProfileUpdate:
    """Validated biometric input for a profile save."""

    gender: str
    age: int
    weight: float
    height: float
    activity_level: float = 1.2
    ai_provider: str = "gemini"
