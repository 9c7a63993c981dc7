"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from calorie_tracker.api.analyze import router as analyze_router
from calorie_tracker.api.entries import router as entries_router
from calorie_tracker.api.favorites import router as favorites_router
from calorie_tracker.api.profile import router as profile_router
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.errors import (
    ConflictError,
    NotFoundError,
    TrackerError,
    UpstreamAnalysisError,
    ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[TrackerError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UpstreamAnalysisError, status.HTTP_502_BAD_GATEWAY),
]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Calorie Tracker", lifespan=lifespan)
    app.state.container = container

    app.include_router(profile_router)
    app.include_router(entries_router)
    app.include_router(favorites_router)
    app.include_router(analyze_router)

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
        state_container: AppContainer = request.app.state.container
        status_code = _status_for(exc)
        body: dict[str, object] = {"error": exc.message}
        if isinstance(exc, ConflictError) and exc.existing_id is not None:
            body["id"] = str(exc.existing_id)
        if isinstance(exc, UpstreamAnalysisError):
            logger.warning("Analysis failed: %s", exc.message)
            debug = _debug_detail(state_container, exc)
            if debug:
                body["debug"] = debug
        return JSONResponse(status_code=status_code, content=body)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: TrackerError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _debug_detail(state_container: AppContainer, exc: Exception) -> str | None:
    """Return the underlying cause in the local environment only."""
    if state_container.settings.environment != "local":
        return None
    cause = exc.__cause__ or exc
    detail = f"{type(cause).__name__}: {cause}".strip()
    return detail or None
