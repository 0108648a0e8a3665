"""Session forge."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from registrar.core.config import get_settings

settings = get_settings()
logger = logging.getLogger("db.session")

runtime_url = settings.get_database_url()
if not runtime_url:
    raise RuntimeError("DATABASE_URL not configured")

if settings.is_sqlite:
    engine = create_engine(
        runtime_url,
        echo=settings.debug,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
else:
    engine = create_engine(
        runtime_url,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=300,
        echo=settings.debug,
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@contextmanager
def transaction() -> Iterator[Session]:
    """Unit of work: commit when the block exits cleanly, roll back otherwise."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception as exc:
        db.rollback()
        logger.debug("transaction.rollback error=%s", type(exc).__name__)
        raise
    finally:
        db.close()


# Register every mapped class so string relationship targets resolve.
import registrar.db.models  # noqa: E402,F401
