"""
Alembic environment configuration tailored for SQLModel models.

SQLModel's AutoString columns are rendered as plain ``sa.String`` so
generated migrations run on both SQLite and PostgreSQL.
"""
from logging.config import fileConfig

from alembic import context
from alembic.autogenerate import renderers
from alembic.autogenerate.api import AutogenContext
from sqlalchemy import engine_from_config, pool
from sqlmodel import SQLModel
from sqlmodel.sql.sqltypes import AutoString

from daydiary.core.config import settings
from daydiary.models import *  # noqa: F401,F403  (needed for metadata discovery)

# ---------------------------------------------------------------------------
# Global configuration
# ---------------------------------------------------------------------------
config = context.config

if config.config_file_name is not None:
    # Keep the application's loggers when migrations run at startup
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = SQLModel.metadata


# ---------------------------------------------------------------------------
# Autogenerate helpers
# ---------------------------------------------------------------------------
def _ensure_import(autogen_context: AutogenContext, import_stmt: str) -> None:
    """Ensure the given import is included in the generated migration."""
    imports = getattr(autogen_context, "imports", None)
    if imports is None:
        imports = set()
        autogen_context.imports = imports  # type: ignore[attr-defined]
    imports.add(import_stmt)


@renderers.dispatch_for(AutoString)
def _render_auto_string(type_: AutoString, autogen_context: AutogenContext) -> str:
    """Render SQLModel AutoString columns as sa.String."""
    _ensure_import(autogen_context, "import sqlalchemy as sa")
    length = getattr(type_, "length", None)
    return f"sa.String(length={length})" if length else "sa.String()"


def get_url() -> str:
    """Resolve the database URL Alembic should target."""
    return settings.effective_database_url


# ---------------------------------------------------------------------------
# Migration entrypoints
# ---------------------------------------------------------------------------
def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        render_as_batch=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    configuration = config.get_section(config.config_ini_section)
    configuration["sqlalchemy.url"] = get_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
