"""Database engine setup for the local state store.

SQLite holds one row per tracked pool: its identity and the last
remote state read for it. The DB is stored at ``{state_dir}/state.db``.

SQLAlchemy Core (not ORM) is used because poolctl is a short-lived
CLI process — no benefit from session management or identity maps.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from poolctl.infrastructure.database.schema import metadata

DB_FILENAME = "state.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_database(state_dir: Path) -> Engine:
    """Initialize the state database at ``{state_dir}/state.db``.

    Idempotent — safe to call on an existing state directory.
    """
    state_dir.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(state_dir / DB_FILENAME)
    metadata.create_all(engine)
    return engine
