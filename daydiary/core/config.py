"""
Application configuration using pydantic-settings.
"""
import json
import logging
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import field_validator, model_validator, ValidationInfo
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from daydiary import __version__

logger = logging.getLogger(__name__)

DEFAULT_SQLITE_URL = "sqlite:///./data/daydiary.db"
DEFAULT_MEDIA_HOST_BASE_URL = "https://api.cloudinary.com/v1_1"
DEFAULT_CHAT_SYSTEM_PROMPT = (
    "You are Nemo, a kind and creative diary companion who can discuss "
    "emotions, events, and reflections naturally."
)
DEFAULT_QUOTE_PROMPT = (
    "Generate a single short, poetic, and uplifting quote. "
    "It should sound natural and emotionally deep, like something from a diary. "
    "Just return the quote itself, no extra text."
)

# Define the project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent.resolve()


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Day Diary Service"
    app_version: str = __version__
    debug: bool = False
    environment: str = "development"

    # API
    api_prefix: str = "/api"
    enable_cors: bool = False
    cors_origins: Annotated[Optional[List[str]], NoDecode] = None

    # Database Configuration
    database_url: str = DEFAULT_SQLITE_URL
    postgres_url: Optional[str] = None

    # Entries
    entry_title_required: bool = True

    # Media host (Cloudinary compatible)
    media_host_base_url: str = DEFAULT_MEDIA_HOST_BASE_URL
    media_host_cloud_name: Optional[str] = None
    media_host_upload_preset: Optional[str] = None
    media_host_api_key: Optional[str] = None
    media_host_api_secret: Optional[str] = None

    # Celery Configuration
    celery_broker_url: Optional[str] = None  # e.g., "redis://localhost:6379/0"
    celery_result_backend: Optional[str] = None
    celery_task_serializer: str = "json"
    celery_result_serializer: str = "json"
    celery_accept_content: List[str] = ["json"]
    celery_timezone: str = "UTC"
    celery_enable_utc: bool = True

    # Chat completion provider (OpenRouter compatible)
    chat_api_url: str = "https://openrouter.ai/api/v1/chat/completions"
    chat_api_key: Optional[str] = None
    chat_text_model: str = "deepseek/deepseek-chat-v3.1"
    chat_vision_model: str = "qwen/qwen2.5-vl-32b-instruct"
    chat_system_prompt: str = DEFAULT_CHAT_SYSTEM_PROMPT

    # Daily quote provider (Gemini generateContent compatible)
    quote_api_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    quote_model: str = "gemini-2.0-flash"
    quote_api_key: Optional[str] = None
    quote_prompt: str = DEFAULT_QUOTE_PROMPT

    # Outbound HTTP
    http_timeout_seconds: float = 10.0

    # Logging
    log_level: str = "INFO"
    log_dir: str = "./data/logs"
    log_sql_requests: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def database_type(self) -> str:
        """Detect database type from configuration."""
        if self.postgres_url:
            return "postgresql"
        if self.database_url.startswith(("postgresql", "postgres")):
            return "postgresql"
        return "sqlite"

    @property
    def effective_database_url(self) -> str:
        """Get the effective database URL based on configuration hierarchy."""
        if self.postgres_url:
            return self.postgres_url
        return self.database_url

    @property
    def media_host_configured(self) -> bool:
        return bool(self.media_host_cloud_name)

    @property
    def media_host_delete_enabled(self) -> bool:
        """Deleting remote assets needs signed credentials."""
        return bool(
            self.media_host_cloud_name
            and self.media_host_api_key
            and self.media_host_api_secret
        )

    @property
    def celery_enabled(self) -> bool:
        return bool(self.celery_broker_url)

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from a comma separated string or JSON list."""
        if v is None:
            return None
        if isinstance(v, str):
            if not v.strip():
                return None
            if v.strip().startswith("["):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            v = v.strip('[]')
            return [item.strip().strip('"').strip("'") for item in v.split(',') if item.strip()]
        return v

    @field_validator('database_url')
    @classmethod
    def validate_database_url(cls, v: str, info: ValidationInfo) -> str:
        """Validate primary database URL."""
        if not v or not v.strip():
            logger.info(
                "DATABASE_URL not provided; defaulting to SQLite at %s", DEFAULT_SQLITE_URL
            )
            return DEFAULT_SQLITE_URL

        url = v.strip()
        if url.startswith(("sqlite", "postgresql", "postgres")):
            return url

        logger.warning(
            "DATABASE_URL uses unsupported or untested dialect '%s'. Proceed with caution.",
            url.split("://", 1)[0]
        )
        return url

    @field_validator('postgres_url')
    @classmethod
    def validate_postgres_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate PostgreSQL override URL."""
        if not v or not v.strip():
            return None

        url = v.strip()
        if not url.startswith(("postgresql", "postgres")):
            raise ValueError(
                "POSTGRES_URL must be a PostgreSQL URL (postgresql:// or postgres://)"
            )
        return url

    @field_validator('api_prefix')
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = (v or "").strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v

    @field_validator('http_timeout_seconds')
    @classmethod
    def validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("HTTP_TIMEOUT_SECONDS must be positive")
        return v

    @model_validator(mode='after')
    def validate_production_settings(self) -> 'Settings':
        """Warn about risky configuration in production."""
        if self.environment != "production":
            return self

        warnings = []
        if self.debug:
            warnings.append("DEBUG is enabled in production.")
        if self.database_type == "sqlite":
            warnings.append(
                "Using SQLite in production. Ensure you understand the durability "
                "limitations and configure regular backups."
            )
        if self.media_host_configured and not self.media_host_delete_enabled:
            warnings.append(
                "MEDIA_HOST_API_KEY/MEDIA_HOST_API_SECRET not configured. "
                "Deleted gallery items will leave their remote files behind."
            )
        if not self.celery_broker_url:
            warnings.append(
                "CELERY_BROKER_URL not configured. Remote media cleanup runs in-process."
            )

        for warning in warnings:
            logger.warning(f"Production configuration warning: {warning}")
        return self


# Create settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance."""
    return settings
