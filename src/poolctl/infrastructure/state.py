"""StateStore — repository for tracked pools.

The store is the single record of which pools poolctl manages. A pool
enters the store only after Azure has confirmed it exists (apply or
import) and leaves it when Azure reports it gone (show or destroy).
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update

from poolctl.domain.pool import PoolState
from poolctl.infrastructure.database.engine import DB_FILENAME, init_database
from poolctl.infrastructure.database.schema import pools

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from poolctl.domain.ids import PoolAddress

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class StateStore:
    """Persistent map of pool address (case-folded) -> last known :class:`PoolState`.

    The database is opened lazily on first access so commands that never
    touch state do not create the state directory.
    """

    def __init__(self, state_dir: Path) -> None:
        self.state_dir = state_dir
        self._engine: Engine | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = init_database(self.state_dir)
        return self._engine

    def _has_database(self) -> bool:
        return self._engine is not None or (self.state_dir / DB_FILENAME).is_file()

    def get(self, address: PoolAddress) -> PoolState | None:
        """Return the tracked state for *address*, or None."""
        if not self._has_database():
            return None
        with self.engine.connect() as conn:
            row = conn.execute(
                select(pools.c.state).where(pools.c.address == address.key)
            ).first()
        if row is None:
            return None
        return PoolState.model_validate_json(row.state)

    def put(self, state: PoolState) -> None:
        """Insert or replace the tracked state for ``state.address``."""
        address = state.address.key
        payload = state.model_dump_json()
        now = _now_iso()
        with self.engine.begin() as conn:
            existing = conn.execute(
                select(pools.c.address).where(pools.c.address == address)
            ).first()
            if existing is None:
                conn.execute(
                    insert(pools).values(
                        address=address,
                        resource_id=state.id,
                        state=payload,
                        created=now,
                        modified=now,
                    )
                )
            else:
                conn.execute(
                    update(pools)
                    .where(pools.c.address == address)
                    .values(resource_id=state.id, state=payload, modified=now)
                )
        logger.debug("Stored state for %s", address)

    def remove(self, address: PoolAddress) -> bool:
        """Forget *address*. Returns True if it was tracked."""
        if not self._has_database():
            return False
        with self.engine.begin() as conn:
            result = conn.execute(delete(pools).where(pools.c.address == address.key))
        return result.rowcount > 0

    def tracked(self) -> list[PoolState]:
        """All tracked pools ordered by address."""
        if not self._has_database():
            return []
        with self.engine.connect() as conn:
            rows = conn.execute(select(pools.c.state).order_by(pools.c.address)).all()
        return [PoolState.model_validate_json(row.state) for row in rows]

    def close(self) -> None:
        """Dispose of the engine, if it was opened."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
