"""
Unit tests for daydiary.core.config.
"""
import pytest
from pydantic import ValidationError

from daydiary.core.config import DEFAULT_SQLITE_URL, Settings


def make_settings(**kwargs):
    """Create Settings without loading values from .env."""
    return Settings(_env_file=None, **kwargs)


class TestDatabaseSettings:
    def test_blank_database_url_falls_back_to_sqlite(self):
        settings = make_settings(database_url="  ")
        assert settings.database_url == DEFAULT_SQLITE_URL
        assert settings.database_type == "sqlite"

    def test_postgres_override_wins(self):
        settings = make_settings(
            database_url=DEFAULT_SQLITE_URL,
            postgres_url="postgresql://diary:pw@db:5432/diary",
        )
        assert settings.database_type == "postgresql"
        assert settings.effective_database_url == "postgresql://diary:pw@db:5432/diary"

    def test_postgres_override_must_be_postgres(self):
        with pytest.raises(ValidationError):
            make_settings(postgres_url="mysql://diary@db/diary")


class TestGeneralSettings:
    def test_cors_origins_parse_from_comma_separated_string(self):
        settings = make_settings(cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_cors_origins_parse_from_json_list(self):
        settings = make_settings(cors_origins='["http://a.test"]')
        assert settings.cors_origins == ["http://a.test"]

    def test_api_prefix_is_normalised(self):
        assert make_settings(api_prefix="api/").api_prefix == "/api"

    def test_http_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_settings(http_timeout_seconds=0)

    def test_title_required_by_default(self):
        assert make_settings().entry_title_required is True

    def test_media_host_delete_needs_signing_credentials(self):
        settings = make_settings(media_host_cloud_name="demo", media_host_upload_preset="unsigned")
        assert settings.media_host_configured is True
        assert settings.media_host_delete_enabled is False

        settings = make_settings(
            media_host_cloud_name="demo",
            media_host_api_key="key",
            media_host_api_secret="secret",
        )
        assert settings.media_host_delete_enabled is True

    def test_celery_enabled_only_with_broker(self):
        assert make_settings().celery_enabled is False
        assert make_settings(celery_broker_url="redis://localhost:6379/0").celery_enabled is True
