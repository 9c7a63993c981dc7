"""Models for derived daily targets."""

from dataclasses import dataclass

from calorie_tracker.domain.entries import DailyStats


@dataclass(frozen=True)
class MacroTargets:
    """Daily calorie goal and its macro split in grams."""

    calories: int
    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class DailySummary:
    """Daily stats combined with the user's targets."""

    stats: DailyStats
    targets: MacroTargets
    net_calories: float
    remaining_calories: float
    eaten: int
    burned: int
