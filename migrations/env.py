import sys
from os.path import abspath, dirname
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

# 1. Project root on the path so `aura` imports resolve
sys.path.insert(0, abspath(dirname(dirname(__file__))))

# 2. Aura components
from aura.core.config import settings
from aura.core.database import Base
# Imported so Base.metadata is populated
from aura.shared.models import (  # noqa: F401
    User, TestResult, SharedResult, ErrorLog, PerformanceMetric, MoodEntry,
)

# Alembic config object
config = context.config

# 3. Sync URL: Alembic runs on postgresql://, not postgresql+asyncpg://
sync_url = settings.DATABASE_URL.replace("+asyncpg", "")
config.set_main_option("sqlalchemy.url", sync_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# 4. Metadata target
target_metadata = Base.metadata

def run_migrations_offline() -> None:
    """Offline mode: emits SQL scripts without a live connection."""
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
    """Online mode: runs the migrations against the database."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
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
