"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from derender.api.derender import router as derender_router
from derender.api.sync_sessions import router as sync_router
from derender.app_logging import configure_logging
from derender.containers import AppContainer
from derender.domain.errors import (
    DerenderError,
    PersistenceError,
    UpstreamError,
)

INTERNAL_ERROR = "Internal Server Error"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(derender_router)
    app.include_router(sync_router)

    @app.exception_handler(DerenderError)
    async def derender_error_handler(
        request: Request, exc: DerenderError
    ) -> JSONResponse:
        """Render domain errors as {error[, details]} payloads."""
        if isinstance(exc, (UpstreamError, PersistenceError)):
            logger.error(
                "Request failed: %s", exc.message, extra={"path": request.url.path}
            )
            content = {"error": INTERNAL_ERROR, "details": exc.message}
        else:
            content = {"error": exc.message}
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Report unexpected failures with a best-effort message."""
        logger.exception("Unhandled API error", extra={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content={"error": INTERNAL_ERROR, "details": f"{exc}"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
