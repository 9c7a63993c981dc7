"""Pure energy and macro calculations.

Rounding is half away from zero (``7.5 -> 8``), not round-half-to-even.
"""

import math

from calorie_tracker.domain.entries import DailyStats
from calorie_tracker.domain.errors import ValidationError
from calorie_tracker.domain.favorites import (
    DEFAULT_REFERENCE_WEIGHT,
    Favorite,
    ScaledFavorite,
)
from calorie_tracker.domain.profile import UserProfile
from calorie_tracker.domain.targets import DailySummary, MacroTargets

_GENDER_OFFSETS = {"male": 5.0, "female": -161.0}

KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_FAT = 9

CARBS_SHARE = 0.5
PROTEIN_SHARE = 0.3
FAT_SHARE = 0.2

FALLBACK_BMR = 2000.0
FALLBACK_ACTIVITY_LEVEL = 1.2


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def compute_bmr(gender: str, weight_kg: float, height_cm: float, age: int) -> float:
    """Return the Mifflin-St Jeor basal metabolic rate."""
    offset = _GENDER_OFFSETS.get(gender)
    if offset is None:
        raise ValidationError(f"Unsupported gender: {gender!r}")
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + offset


def compute_target_calories(bmr: float, activity_level: float) -> int:
    """Return the daily calorie target for a PAL multiplier."""
    return round_half_up(bmr * activity_level)


def compute_macro_targets(target_calories: float) -> MacroTargets:
    """Split a calorie target 50/30/20 into carbs, protein and fat grams."""
    return MacroTargets(
        calories=round_half_up(target_calories),
        carbs=round_half_up(target_calories * CARBS_SHARE / KCAL_PER_GRAM_CARBS),
        protein=round_half_up(
            target_calories * PROTEIN_SHARE / KCAL_PER_GRAM_PROTEIN
        ),
        fat=round_half_up(target_calories * FAT_SHARE / KCAL_PER_GRAM_FAT),
    )


def scale_favorite_to_weight(
    favorite: Favorite, requested_weight: object
) -> ScaledFavorite:
    """Recalculate a favorite's calories and macros for ``requested_weight`` grams."""
    weight = _positive_number(requested_weight, "weight")
    reference = favorite.weight or DEFAULT_REFERENCE_WEIGHT
    factor = weight / reference
    return ScaledFavorite(
        calories=round_half_up(favorite.calories * factor),
        protein=round_half_up(favorite.protein * factor),
        carbs=round_half_up(favorite.carbs * factor),
        fat=round_half_up(favorite.fat * factor),
        weight=weight,
    )


def derive_manual_calories(
    calories_per_100g: float, weight_grams: float | None
) -> float:
    """Return absolute calories for a per-100g figure.

    Without a weight the figure is taken as the absolute calorie value.
    """
    if weight_grams is None:
        return calories_per_100g
    return calories_per_100g / 100 * weight_grams


def target_calories_for(profile: UserProfile | None) -> int:
    """Return the profile's calorie goal, falling back to defaults."""
    if profile is not None and profile.goal_calories:
        return round_half_up(profile.goal_calories)
    bmr = (profile.bmr if profile else None) or FALLBACK_BMR
    activity_level = (
        profile.activity_level if profile else None
    ) or FALLBACK_ACTIVITY_LEVEL
    return compute_target_calories(bmr, activity_level)


def summarize_day(stats: DailyStats, profile: UserProfile | None) -> DailySummary:
    """Combine a day's stats with targets into net and remaining calories."""
    targets = compute_macro_targets(target_calories_for(profile))
    net_calories = stats.calories_in - stats.calories_out
    return DailySummary(
        stats=stats,
        targets=targets,
        net_calories=net_calories,
        remaining_calories=max(0.0, targets.calories - net_calories),
        eaten=round_half_up(stats.calories_in),
        burned=round_half_up(stats.calories_out),
    )


def _positive_number(value: object, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be a number") from exc
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return number
