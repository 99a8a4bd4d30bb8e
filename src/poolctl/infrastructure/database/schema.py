"""SQLAlchemy Core table definitions for the poolctl state database."""

from __future__ import annotations

from sqlalchemy import Column, MetaData, Table, Text

metadata = MetaData()

pools = Table(
    "pools",
    metadata,
    Column("address", Text, primary_key=True),  # lower-cased resource_group/server/name
    Column("resource_id", Text, nullable=False, unique=True),
    Column("state", Text, nullable=False),  # JSON-serialised PoolState
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)
