"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from calorie_tracker.api.analysis import router as analysis_router
from calorie_tracker.api.tracking import router as tracking_router
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.errors import (
    AnalysisError,
    AnalysisInProgressError,
    InvalidImageError,
    NoImageDataError,
    TextExtractionFailedError,
)

_CLIENT_ERRORS = (NoImageDataError, InvalidImageError, TextExtractionFailedError)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(tracking_router)
    app.include_router(analysis_router)

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(
        request: Request, exc: AnalysisError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        logger.warning(
            "Analysis failed: path=%s error=%s message=%s",
            request.url.path,
            exc.__class__.__name__,
            exc,
        )
        return JSONResponse(status_code=status_code, content={"error": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: AnalysisError) -> int:
    if isinstance(exc, AnalysisInProgressError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, _CLIENT_ERRORS):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_502_BAD_GATEWAY
