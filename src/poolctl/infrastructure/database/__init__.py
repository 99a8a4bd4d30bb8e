"""SQLite state database via SQLAlchemy Core."""

from poolctl.infrastructure.database.engine import create_db_engine, init_database
from poolctl.infrastructure.database.schema import metadata, pools

__all__ = [
    "create_db_engine",
    "init_database",
    "metadata",
    "pools",
]
