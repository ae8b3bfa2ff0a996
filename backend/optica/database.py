from contextlib import contextmanager
import logging
import os

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()

logger = logging.getLogger(__name__)


def create_db_engine(url: str) -> Engine:
    """Build an engine for ``url`` with pool settings suited to the backend."""
    is_sqlite = url.startswith("sqlite")
    # Avoid stale idle connections causing first-hit failures after inactivity
    pool_kwargs: dict = {"pool_pre_ping": True}
    if is_sqlite:
        # SQLite uses a per-process connection; pass connect_args and avoid pool sizing
        connect_args = {"check_same_thread": False, "timeout": 15}
        if ":memory:" in url:
            # Every session must see the same in-memory database
            pool_kwargs["poolclass"] = StaticPool
    else:
        connect_args = {}
        pool_kwargs.update({
            "pool_size": int(os.getenv("DB_POOL_SIZE") or 6),
            "max_overflow": int(os.getenv("DB_MAX_OVERFLOW") or 6),
            "pool_recycle": int(os.getenv("DB_POOL_RECYCLE") or 300),
            "pool_timeout": float(os.getenv("DB_POOL_TIMEOUT") or 5.0),
        })

    engine = create_engine(url, connect_args=connect_args, **pool_kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            # Lens products reference their range; let SQLite enforce it.
            cursor.execute("PRAGMA foreign_keys=ON;")
            cursor.close()

    return engine


class Database:
    """Store handle: one engine plus the session factory bound to it.

    Constructed explicitly by ``create_app`` (or a test) and handed to
    whoever needs sessions; nothing in the package holds a global engine.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self.engine = create_db_engine(url)
        self.session_factory = sessionmaker(
            autoflush=False, bind=self.engine, expire_on_commit=False
        )

    def create_all(self) -> None:
        # Import for side effects so every table is registered on Base.metadata
        from . import models  # noqa: F401

        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def session(self):
        """Provide a short-lived session with guaranteed close.

        Use in places where FastAPI Depends is unavailable (startup hooks,
        the seed command).
        """
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()


# Dependency
def get_db(request: Request):
    database: Database = request.app.state.database
    db = database.session_factory()
    try:
        yield db
    finally:
        db.close()
