"""
Alembic environment configuration
Runs migrations against settings.DATABASE_URL
"""
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

from inventory_api.core.config import settings
from inventory_api.database import Base

# Import every model so Base.metadata knows all tables
from inventory_api.models import (  # noqa: F401
    customers,
    inventory,
    order_items,
    orders,
    products,
    suppliers,
    users,
)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Escape % for ConfigParser interpolation
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL.replace("%", "%%"))

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
