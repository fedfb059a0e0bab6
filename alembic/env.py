"""Alembic env — DB url from ALEMBIC_DATABASE_URL or app settings."""
from logging.config import fileConfig
import os

from alembic import context

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

from ecotrack.db.base import Base  # noqa: E402
from ecotrack.core.config import get_settings  # noqa: E402
from ecotrack.db.session import make_engine  # noqa: E402

target_metadata = Base.metadata


def get_url() -> str:
    return (
        os.getenv("ALEMBIC_DATABASE_URL")
        or get_settings().database_url
        or config.get_main_option("sqlalchemy.url")
    )


def run_migrations_offline() -> None:
    url = get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=url.startswith("sqlite"),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    # same engine setup as the app, so SQLite gets foreign_keys=ON
    connectable = make_engine(get_url())

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
