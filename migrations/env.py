# migrations/env.py
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from agent_admin.models import Base
from agent_admin.storage.db import database_url

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_url() -> str:
    """Same precedence as the app (DATABASE_URL, MYSQL_URL, MYSQL*/DB_*), then alembic.ini."""
    try:
        return database_url()
    except ValueError:
        # Final fallback: alembic.ini (local dev only)
        return config.get_main_option("sqlalchemy.url") or ""


def run_migrations_offline() -> None:
    url = get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section, {})
    url = get_url()

    if not url:
        raise ValueError("Database URL not configured. Set DATABASE_URL, MYSQL_URL or DB_* environment variables.")

    configuration["sqlalchemy.url"] = url

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
