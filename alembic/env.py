"""Alembic environment for the blog schema.

Targets lingvoblog's ORM Base and uses render_as_batch=True so ALTER TABLE
works on SQLite.
"""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context

from lingvoblog.db.orm import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata

DEFAULT_URL = "sqlite:///data/lingvoblog.db"


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout."""
    url = config.get_main_option("sqlalchemy.url", DEFAULT_URL)
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against a live connection."""
    from lingvoblog.db.engine import create_db_engine

    # -x / set_main_option override the ini value; SQLite and Postgres URLs both work
    connectable = create_db_engine(config.get_main_option("sqlalchemy.url", DEFAULT_URL))

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=True,
        )

        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
