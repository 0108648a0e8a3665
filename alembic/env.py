import sys
from pathlib import Path
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

# Ensure project root on sys.path
THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = THIS_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

# Load app settings & models
from registrar.core.config import get_settings
from registrar.db.base import Base
# Ensure all models are imported so Base.metadata is populated
import registrar.db.models  # noqa: F401

settings = get_settings()


def _ensure_driver(url: str) -> str:
    """Force the psycopg2 driver for bare postgresql:// URLs."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg2://", 1)
    return url


MIGRATIONS_URL = _ensure_driver(settings.get_database_url())
if not MIGRATIONS_URL:
    raise RuntimeError("No DATABASE_URL configured.")

# Alembic Config
config = context.config
# Inject URL dynamically (avoid secrets in ini)
config.set_main_option("sqlalchemy.url", MIGRATIONS_URL)

# Logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Model metadata for autogenerate
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=MIGRATIONS_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        render_as_batch=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    section = config.get_section(config.config_ini_section, {}).copy()
    section["sqlalchemy.url"] = MIGRATIONS_URL
    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=True,
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
