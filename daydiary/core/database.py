"""
Database configuration and session management.
Supports SQLite (default) and PostgreSQL.
"""
import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from daydiary.core.config import settings, PROJECT_ROOT
from daydiary.core.logging_config import LogCategory, _sanitize_data
from daydiary.middleware.request_logging import request_id_ctx, request_path_ctx

logger = logging.getLogger(LogCategory.DB.value)

database_url = settings.effective_database_url
database_type = settings.database_type

logger.info(f"Using {database_type} database: {_sanitize_data(database_url)}")


def _is_memory_database() -> bool:
    return database_type == "sqlite" and make_url(database_url).database in (None, "", ":memory:")


def _ensure_sqlite_directory(url) -> None:
    """SQLite will not create missing parent directories for a file database."""
    if url.database in (None, "", ":memory:"):
        return
    Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)


if database_type == "sqlite":
    url = make_url(database_url)
    is_sqlite_memory = url.database in (None, "", ":memory:")
    _ensure_sqlite_directory(url)

    engine_kwargs = {
        "echo": False,
        "connect_args": {"check_same_thread": False},
    }
    if is_sqlite_memory:
        engine_kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **engine_kwargs)
    logger.info(f"Configured SQLite engine ({'in-memory' if is_sqlite_memory else 'file-based'})")

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        """Set SQLite-specific pragma settings."""
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if not is_sqlite_memory:
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.close()

else:
    engine = create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=5,
        pool_recycle=3600,
    )
    logger.info("Configured PostgreSQL engine with connection pooling")


def create_db_and_tables():
    """Create database tables using Alembic migrations."""
    # Models must be imported so SQLModel.metadata knows every table
    from daydiary import models  # noqa: F401

    alembic_ini = PROJECT_ROOT / "alembic.ini"
    # Migrations would run against a separate throwaway in-memory database
    if alembic_ini.exists() and not _is_memory_database():
        try:
            logger.info("Running database migrations...")
            from alembic import command
            from alembic.config import Config

            alembic_cfg = Config(str(alembic_ini))
            alembic_cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
            alembic_cfg.set_main_option("sqlalchemy.url", database_url)
            command.upgrade(alembic_cfg, "head")
            logger.info("Database migrations completed successfully")
            return
        except Exception as exc:
            logger.error(exc)

    logger.info("Falling back to SQLModel create_all...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created successfully (fallback)")


def init_db():
    """Initialize database schema."""
    create_db_and_tables()


def get_session():
    """Get database session."""
    with Session(engine) as session:
        yield session


def get_session_context():
    """
    Get database session as context manager.

    Use this for background tasks and non-request contexts.

    Example:
        with get_session_context() as session:
            ...
    """
    return Session(engine)


@event.listens_for(engine, "before_cursor_execute")
def _log_sql_statement(conn, cursor, statement, parameters, context, executemany):
    if not settings.log_sql_requests:
        return
    compact = " ".join(statement.split())
    if len(compact) > 800:
        compact = f"{compact[:800]}..."
    logger.info(
        "SQL statement path=%s request_id=%s: %s",
        request_path_ctx.get(),
        request_id_ctx.get(),
        compact,
    )
