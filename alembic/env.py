"""Alembic environment — migrates the run store named by RUNS_DATABASE_URL."""
from logging.config import fileConfig

from alembic import context

from recipe_dashboard.config import ListingConfig
from recipe_dashboard.database import Base, create_store_engine, store_url
import recipe_dashboard.models.processing_run  # noqa: F401  (registers tables on Base.metadata)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

listing_config = ListingConfig.from_env()
if not listing_config.store_url:
    raise RuntimeError("RUNS_DATABASE_URL must be set to run migrations")


def run_migrations_offline() -> None:
    context.configure(
        url=store_url(listing_config.store_url, listing_config.store_key),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_store_engine(listing_config.store_url, listing_config.store_key)
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
