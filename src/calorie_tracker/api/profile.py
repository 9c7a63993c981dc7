"""Profile endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from calorie_tracker.api.dependencies import require_user_id
from calorie_tracker.api.request_models import ProfileRequest  # noqa: TC001

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/user", tags=["profile"])


@router.get("")
def get_profile(
    request: Request, user_id: UUID = Depends(require_user_id)
) -> dict[str, object] | None:
    """Return the caller's profile, or null before the first save."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile(user_id)
    return asdict(profile) if profile else None


@router.post("")
def save_profile(
    payload: ProfileRequest,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Store biometrics and return the recomputed BMR and goal."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.save_profile(user_id, payload.to_update())
    return {
        "success": True,
        "bmr": profile.bmr,
        "goal_calories": profile.goal_calories,
    }
