"""Alembic environment for the ticketflow schema.

The application talks to Postgres through asyncpg; migrations run on a plain
psycopg2 engine. Override the target database with ``alembic -x dburl=...``.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from ticketflow.adapters.persistence.database import Base
from ticketflow.adapters.persistence.models import (  # noqa: F401  registers the tables
    SupportTicketMessageModel,
    SupportTicketModel,
)
from ticketflow.config import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _sync_url(url: str) -> str:
    if "+asyncpg" in url:
        return url.replace("+asyncpg", "+psycopg2")
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg2://", 1)
    return url


database_url = _sync_url(context.get_x_argument(as_dictionary=True).get("dburl", settings.database_url))

CONFIGURE_OPTS = {
    "target_metadata": Base.metadata,
    "compare_type": True,
}


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout instead of executing it."""
    context.configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **CONFIGURE_OPTS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(database_url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **CONFIGURE_OPTS)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
