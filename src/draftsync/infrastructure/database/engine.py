"""Database engine setup for the reference SQLite post store.

SQLAlchemy Core (not ORM) is used: draftsync only ever reads one group
and writes one column per request, so sessions and identity maps buy
nothing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from draftsync.infrastructure.database.schema import metadata


def create_db_engine(db_path: Path | None = None) -> Engine:
    """Create a SQLite engine with foreign keys enabled.

    ``None`` gives a private in-memory database shared by all connections
    of the returned engine.
    """
    if db_path is None:
        engine = create_engine(
            "sqlite://",
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(db_path: Path | None = None) -> Engine:
    """Create the schema and return a ready engine.

    Idempotent — safe to call on an existing database.
    """
    if db_path is not None:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    return engine
