"""
Logging setup and helpers shared by the API, services and background tasks.
"""
import logging
import logging.handlers
import re
from enum import Enum
from pathlib import Path


class LogCategory(str, Enum):
    """Named loggers, one per area of the service."""
    APP = "app"
    REQUEST = "app.request"
    ENTRIES = "app.entries"
    MEDIA = "app.media"
    MEDIA_HOST = "app.media_host"
    TASKS = "app.tasks"
    ERRORS = "app.errors"
    DB = "app.db"


DEFAULT_LOG_LEVEL = logging.INFO
MASK = "***MASKED***"
LOG_FILE_NAME = "app.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Key fragments whose values never reach the logs
SENSITIVE_FIELDS = (
    "password",
    "token",
    "authorization",
    "secret",
    "api_key",
    "apikey",
    "signature",
    "database_url",
    "postgres_url",
    "broker_url",
    "upload_preset",
)

_URL_CREDENTIALS = re.compile(r"^(?P<scheme>[a-z][a-z0-9+.-]*://)(?P<user>[^:/@]+):[^@/]*@", re.IGNORECASE)
_OPAQUE_KEY = re.compile(r"^[A-Za-z0-9_-]{65,}$")


def _is_sensitive_key(key) -> bool:
    lowered = str(key).lower()
    return any(fragment in lowered for fragment in SENSITIVE_FIELDS)


def _sanitize_data(data):
    """
    Mask secrets before they are logged.

    Dict values under sensitive keys are replaced, passwords embedded in
    connection URLs are hidden, and long opaque tokens are masked.
    """
    if isinstance(data, dict):
        return {
            key: MASK if _is_sensitive_key(key) else _sanitize_data(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [_sanitize_data(item) for item in data]
    if isinstance(data, str):
        if _OPAQUE_KEY.match(data):
            return MASK
        return _URL_CREDENTIALS.sub(r"\g<scheme>\g<user>:***@", data)
    return data


def _resolve_log_level(level_value, default=DEFAULT_LOG_LEVEL):
    """Turn ``"debug"``, ``"10"`` or ``10`` into a level; returns (level, used_default)."""
    if isinstance(level_value, int):
        return level_value, False
    candidate = str(level_value or "").strip().upper()
    if candidate.isdigit():
        return int(candidate), False
    level = logging.getLevelName(candidate)
    if isinstance(level, int):
        return level, False
    return default, True


def _get_settings():
    """Lazy import to avoid circular dependency with config module."""
    from daydiary.core.config import settings
    return settings


def setup_logging():
    """Configure console and rotating file output on the root logger."""
    settings = _get_settings()
    level, used_default_level = _resolve_log_level(settings.log_level)

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handlers = [
        logging.StreamHandler(),
        logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        ),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # Third-party noise
    for noisy in ("uvicorn.access", "uvicorn.error", "httpx", "httpcore", "celery"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger(LogCategory.APP.value)
    if used_default_level:
        logger.warning("Invalid log level '%s', falling back to INFO", settings.log_level)
    logger.info("Logging configured at %s, writing to %s", logging.getLevelName(level), log_file)


def _log_with_context(logger: logging.Logger, level: int, message: str, request_id: str = None, exc_info=False, **kwargs):
    """Prefix the request id and append ``key=value`` context, masking secrets."""
    if request_id:
        message = f"[{request_id}] {message}"
    if kwargs:
        context = ", ".join(f"{key}={value}" for key, value in _sanitize_data(kwargs).items())
        message = f"{message} ({context})"
    logger.log(level, message, exc_info=exc_info)


def log_entry_action(action: str, entry_date: str, request_id: str = None, **kwargs):
    """Log diary entry writes."""
    logger = logging.getLogger(LogCategory.ENTRIES.value)
    _log_with_context(logger, logging.INFO, f"Entry {entry_date} {action}", request_id, **kwargs)


def log_media_action(action: str, media_id=None, request_id: str = None, **kwargs):
    """Log gallery media changes."""
    logger = logging.getLogger(LogCategory.MEDIA.value)
    subject = f"Media {media_id}" if media_id is not None else "Media"
    _log_with_context(logger, logging.INFO, f"{subject} {action}", request_id, **kwargs)


def log_info(message: str, request_id: str = None, **kwargs):
    _log_with_context(logging.getLogger(LogCategory.APP.value), logging.INFO, message, request_id, **kwargs)


def log_debug(message: str, request_id: str = None, **kwargs):
    _log_with_context(logging.getLogger(LogCategory.APP.value), logging.DEBUG, message, request_id, **kwargs)


def log_warning(message: str, request_id: str = None, **kwargs):
    _log_with_context(logging.getLogger(LogCategory.APP.value), logging.WARNING, message, request_id, **kwargs)


def log_error(error: Exception | str, request_id: str = None, **kwargs):
    """Log an error on the errors logger; exceptions include their traceback."""
    logger = logging.getLogger(LogCategory.ERRORS.value)
    _log_with_context(
        logger,
        logging.ERROR,
        f"Error: {error}",
        request_id,
        exc_info=error if isinstance(error, Exception) else False,
        **kwargs,
    )
