"""
Main FastAPI application for the diary service.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from daydiary.api.v1.api import api_router
from daydiary.core.config import settings
from daydiary.core.database import init_db
from daydiary.core.exceptions import (
    ChatProviderError,
    DiaryAppException,
    EntryNotFoundError,
    MediaHostError,
    MediaNotFoundError,
    ValidationError,
)
from daydiary.core.http_client import close_http_client
from daydiary.core.logging_config import log_error, log_info, log_warning, setup_logging
from daydiary.middleware.request_logging import RequestLoggingMiddleware, request_id_ctx

# -----------------------------------------------------------------------------
# Startup / Shutdown
# -----------------------------------------------------------------------------
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    log_info("Starting up Day Diary Service...")
    try:
        init_db()
        log_info("Database initialization completed!")
        if not settings.media_host_delete_enabled:
            log_warning("Media host delete credentials missing; remote cleanup will be skipped")
    except Exception as exc:
        log_error(exc)
        raise
    yield
    log_info("Shutting down Day Diary Service...")
    try:
        await close_http_client()
        log_info("HTTP client closed")
    except Exception as exc:
        log_warning(f"Failed to close HTTP client: {exc}")


# -----------------------------------------------------------------------------
# App Initialization
# -----------------------------------------------------------------------------
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A personal day diary with mood calendar, media gallery and chat companion",
    openapi_url=f"{settings.api_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# -----------------------------------------------------------------------------
# Middleware Configuration
# -----------------------------------------------------------------------------
cors_origins = settings.cors_origins or []
if settings.enable_cors:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=3600,
    )
    log_info(f"CORS enabled for origins: {cors_origins}")
else:
    log_info("CORS disabled (same-origin mode)")

# Compresses responses larger than 1KB.
app.add_middleware(GZipMiddleware, minimum_size=1024)

# Logging Middleware
app.add_middleware(RequestLoggingMiddleware)


# -----------------------------------------------------------------------------
# Exception Handlers
# -----------------------------------------------------------------------------
def _status_for(exc: DiaryAppException) -> int:
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, (EntryNotFoundError, MediaNotFoundError)):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (MediaHostError, ChatProviderError)):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors with detailed logging."""
    request_id = request_id_ctx.get()
    sanitized_errors = [
        {"loc": err.get("loc"), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]

    log_warning(
        "Request validation failed",
        request_id=request_id,
        path=request.url.path,
        method=request.method,
        errors=sanitized_errors,
        event="validation_error"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "validation_error", "message": sanitized_errors, "request_id": request_id},
    )


@app.exception_handler(DiaryAppException)
async def diary_app_exception_handler(request: Request, exc: DiaryAppException):
    request_id = request_id_ctx.get()
    status_code = _status_for(exc)
    if status_code >= 500:
        log_error(exc, request_id=request_id)
    else:
        log_warning(str(exc), request_id=request_id, path=request.url.path)

    message = (
        "An unexpected internal error occurred."
        if settings.environment == "production" and status_code == 500
        else str(exc)
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "message": message, "request_id": request_id},
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    request_id = request_id_ctx.get()
    log_error(exc, request_id=request_id)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "database_error", "message": "The diary store is unavailable.", "request_id": request_id},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    request_id = request_id_ctx.get()
    log_error(exc, request_id=request_id)
    msg = (
        "An unexpected error occurred. Please try again later."
        if settings.environment == "production"
        else str(exc)
    )
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "message": msg, "request_id": request_id},
    )

# -----------------------------------------------------------------------------
# API Routers
# -----------------------------------------------------------------------------
app.include_router(api_router, prefix=settings.api_prefix)


# -----------------------------------------------------------------------------
# Entry Point
# -----------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "daydiary.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
