"""Favorite endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from calorie_tracker.api.dependencies import require_user_id
from calorie_tracker.api.request_models import (  # noqa: TC001
    FavoriteCreateRequest,
    FavoriteLogRequest,
)

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("")
def list_favorites(
    request: Request, user_id: UUID = Depends(require_user_id)
) -> list[dict[str, object]]:
    """Return the caller's favorites, newest first."""
    container: AppContainer = request.app.state.container
    return [
        asdict(favorite)
        for favorite in container.favorite_service.list_favorites(user_id)
    ]


@router.post("")
def create_favorite(
    payload: FavoriteCreateRequest,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Save a favorite; duplicates of type and name are rejected."""
    container: AppContainer = request.app.state.container
    favorite = container.favorite_service.create_favorite(
        user_id, payload.to_new_favorite()
    )
    return {"id": favorite.id, "success": True}


@router.delete("/{favorite_id}")
def delete_favorite(
    favorite_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Delete a favorite."""
    container: AppContainer = request.app.state.container
    container.favorite_service.delete_favorite(favorite_id, user_id)
    return {"success": True}


@router.get("/{favorite_id}/scaled")
def scaled_favorite(
    favorite_id: UUID,
    request: Request,
    weight: str | None = None,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Preview a favorite's calories and macros at ``weight`` grams."""
    container: AppContainer = request.app.state.container
    scaled = container.favorite_service.preview(favorite_id, user_id, weight)
    return asdict(scaled)


@router.post("/{favorite_id}/entries")
def log_favorite(
    favorite_id: UUID,
    payload: FavoriteLogRequest,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Log a favorite as a new entry scaled to the requested weight."""
    container: AppContainer = request.app.state.container
    entry = container.favorite_service.log_favorite(
        favorite_id, user_id, payload.weight, date=payload.date
    )
    return {"id": entry.id, "success": True}
