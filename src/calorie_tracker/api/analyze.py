"""AI analysis endpoints. Results are returned for review and never stored."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from calorie_tracker.api.dependencies import require_user_id
from calorie_tracker.api.request_models import (  # noqa: TC001
    AnalyzeImageRequest,
    AnalyzeSportRequest,
    AnalyzeTextRequest,
)

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/analyze", tags=["analyze"])


@router.post("/food")
async def analyze_food_image(
    payload: AnalyzeImageRequest,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Estimate foods and macros from a meal photo."""
    container: AppContainer = request.app.state.container
    result = await container.analysis_service.analyze_food_image(
        user_id, payload.image
    )
    return result.model_dump()


@router.post("/food-text")
async def analyze_food_text(
    payload: AnalyzeTextRequest,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Estimate foods and macros from a meal description."""
    container: AppContainer = request.app.state.container
    result = await container.analysis_service.analyze_food_text(user_id, payload.text)
    return result.model_dump()


@router.post("/sport")
async def analyze_sport(
    payload: AnalyzeSportRequest,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> dict[str, object]:
    """Estimate calories burned for a described activity."""
    container: AppContainer = request.app.state.container
    result = await container.analysis_service.analyze_sport(
        user_id, payload.text, weight_kg=payload.weight
    )
    return result.model_dump()
