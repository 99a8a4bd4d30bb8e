"""BaseService — abstract foundation for all poolctl services.

Every service receives a :class:`Workspace` at construction time. The
workspace provides the settings, the local state store and the Azure
client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from poolctl.infrastructure.workspace import Workspace


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class PoolService(BaseService):
            def read(self, address: PoolAddress) -> ServiceResult:
                prior = self._workspace.store.get(address)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace
