"""Entry, daily stats and history endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from calorie_tracker.api.dependencies import require_user_id
from calorie_tracker.api.request_models import (  # noqa: TC001
    EntryCreateRequest,
    EntryUpdateRequest,
)
from calorie_tracker.services.entries import validate_day
from calorie_tracker.services.stats import HistoryRange

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/entries", tags=["entries"])


@router.post("")
def add_entry(
    payload: EntryCreateRequest,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Log a food or sport entry."""
    container: AppContainer = request.app.state.container
    entry = container.entry_service.add_entry(user_id, payload.to_new_entry())
    return {"id": entry.id, "success": True}


@router.get("/today")
def daily_stats(
    request: Request,
    date: str | None = None,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Return totals for ``date`` (YYYY-MM-DD), defaulting to today."""
    container: AppContainer = request.app.state.container
    stats = container.entry_service.get_day_stats(user_id, date or _today())
    return asdict(stats)


@router.get("/summary")
def daily_summary(
    request: Request,
    date: str | None = None,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Return a day's totals with targets and remaining calories."""
    container: AppContainer = request.app.state.container
    summary = container.entry_service.get_day_summary(user_id, date or _today())
    return asdict(summary)


@router.get("/history")
def history(
    request: Request,
    range: str = "week",  # noqa: A002
    date: str | None = None,
    user_id: UUID = Depends(require_user_id),
) -> list[dict[str, object]]:
    """Return the calories in/out series for the requested window."""
    container: AppContainer = request.app.state.container
    points = container.entry_service.get_history(
        user_id, HistoryRange.parse(range), _reference_date(date)
    )
    return [asdict(point) for point in points]


@router.put("/{entry_id}")
def update_entry(
    entry_id: UUID,
    payload: EntryUpdateRequest,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Edit an entry's name, calories or date."""
    container: AppContainer = request.app.state.container
    container.entry_service.update_entry(entry_id, user_id, payload.to_changes())
    return {"success": True}


@router.delete("/{entry_id}")
def delete_entry(
    entry_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Delete an entry."""
    container: AppContainer = request.app.state.container
    container.entry_service.delete_entry(entry_id, user_id)
    return {"success": True}


@router.post("/{entry_id}/favorite")
def save_entry_as_favorite(
    entry_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Save an existing entry as a favorite."""
    container: AppContainer = request.app.state.container
    favorite = container.favorite_service.create_from_entry(user_id, entry_id)
    return {"id": favorite.id, "success": True}


def _today() -> str:
    return date.today().isoformat()


def _reference_date(value: str | None) -> date:
    if value is None:
        return date.today()
    return validate_day(value)
