"""ValidationService — offline rule checks for a pool definition."""

from __future__ import annotations

import logging

from poolctl.domain.pool import PoolConfig
from poolctl.domain.rules import validate_pool
from poolctl.domain.sizing import changed_size_field, resolve_max_size_bytes, resolve_max_size_gb
from poolctl.domain.sku import billing_model
from poolctl.services.base import BaseService
from poolctl.services.result import ServiceResult
from poolctl.services.telemetry import traced

logger = logging.getLogger(__name__)


class ValidationService(BaseService):
    """Checks a definition against the elastic pool rules without calling Azure.

    The last known state (if the pool is tracked) decides which size field
    is authoritative, exactly as ``apply`` would.
    """

    @traced
    def validate(self, config: PoolConfig) -> ServiceResult:
        op = "validate"
        address = config.address
        prior = self._workspace.store.get(address)
        prior_size = prior.size if prior else None

        violation = validate_pool(config, prior=prior_size)
        if violation is not None:
            logger.debug("Rule %s failed for %s", violation.code, address)
            return ServiceResult.failure(
                op,
                violation.code,
                violation.message,
                {**violation.detail, "address": str(address)},
            )

        desired = config.size
        changed = changed_size_field(prior_size, desired)
        return ServiceResult.success(
            op,
            {
                "address": str(address),
                "sku": config.sku.name,
                "billing_model": str(billing_model(config.sku.name)),
                "max_size_gb": resolve_max_size_gb(prior_size, desired, changed),
                "max_size_bytes": resolve_max_size_bytes(prior_size, desired, changed),
                "tracked": prior is not None,
            },
        )
