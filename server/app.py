"""Main FastAPI application."""

from __future__ import annotations

import json

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.errors import DispatchError
from .config import get_settings
from .logging_config import configure_logging, logger
from .routes import api_router


# Every error leaves as {"success": false, "error": ...} with the matching status
def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers for domain, 422, HTTP, and 500 errors."""

    @app.exception_handler(DispatchError)
    async def _dispatch_error_handler(request: Request, exc: DispatchError):
        if exc.status_code >= 500:
            logger.error(
                "dispatch error",
                exc_info=exc,
                extra={"reason": exc.reason, "status": exc.status_code, "path": str(request.url)},
            )
        else:
            logger.info(
                "request rejected",
                extra={"reason": exc.reason, "status": exc.status_code, "path": str(request.url)},
            )
        return JSONResponse(
            {"success": False, "error": exc.public_message},
            status_code=exc.status_code,
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.debug("validation error", extra={"errors": exc.errors(), "path": str(request.url)})
        return JSONResponse(
            {"success": False, "error": "Invalid request", "detail": jsonable_errors(exc)},
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException):
        logger.debug(
            "http error",
            extra={"detail": exc.detail, "status": exc.status_code, "path": str(request.url)},
        )
        detail = exc.detail
        if not isinstance(detail, str):
            detail = json.dumps(detail)
        return JSONResponse({"success": False, "error": detail}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"path": str(request.url)})
        return JSONResponse(
            {"success": False, "error": "Internal server error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


# Configure logging early
configure_logging()
_settings = get_settings()

# Create FastAPI app
app = FastAPI(
    title=_settings.app_name,
    version=_settings.app_version,
    docs_url=_settings.resolved_docs_url,
    redoc_url=None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)

# Include aggregated router
app.include_router(api_router)


@app.on_event("startup")
async def _startup() -> None:
    """Connect Temporal, register the maintenance schedule and start the worker."""
    logger.info("Starting clinic dispatch server", extra={"version": _settings.app_version})

    if not get_settings().temporal_enabled:
        logger.info("Temporal disabled; scheduled maintenance relies on an external cron")
        return

    from app.services.temporal_client import get_temporal_service
    from app.temporal.schedules import ensure_schedules
    from app.temporal.worker import start_worker_background

    temporal_service = get_temporal_service()
    await temporal_service.connect()
    client = temporal_service.get_client()
    if client is None:
        logger.warning("Temporal not available; scheduled maintenance relies on an external cron")
        return

    try:
        await ensure_schedules(client)
    except Exception:
        logger.exception("Failed to register Temporal schedules")
    start_worker_background(client)
    logger.info("Temporal client connected and worker started")


@app.on_event("shutdown")
async def _shutdown() -> None:
    """Stop the worker and drop the Temporal client."""
    logger.info("Shutting down clinic dispatch server")

    from app.services.temporal_client import get_temporal_service
    from app.temporal.worker import stop_worker

    await stop_worker()
    await get_temporal_service().close()
    logger.info("Clinic dispatch server shutdown complete")


__all__ = ["app"]
