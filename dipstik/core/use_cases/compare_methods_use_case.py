"""Use case for comparing alternative methods of one service."""

import logging
from typing import Any, Optional, Sequence

from dipstik.core.framework.exceptions import ConfigurationError
from dipstik.core.framework.registry import ModuleRegistry
from dipstik.core.models.execution_log import ExecutionKind
from dipstik.core.services.execution_logger import ExecutionLoggingService

logger = logging.getLogger(__name__)

MIN_COMPARED_METHODS = 2


class CompareMethodsUseCase:
    """Run several methods of a service on the same params and record the comparison."""

    def __init__(self, registry: ModuleRegistry, execution_logger: ExecutionLoggingService):
        self.registry = registry
        self.execution_logger = execution_logger

    async def execute(
        self,
        module_id: str,
        service_id: Optional[str],
        method_ids: Sequence[str],
        params: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Compare ``method_ids`` of ``service_id``.

        Raises:
            ConfigurationError: serviceId missing or fewer than two method ids
            UnknownModuleError / UnknownServiceError: ids do not resolve

        Returns:
            ``{"success": True, **comparison}``. Individual method failures
            are reported inside ``methodResults``, not raised.
        """
        if not service_id:
            raise ConfigurationError("serviceId is required")
        if len(method_ids) < MIN_COMPARED_METHODS:
            raise ConfigurationError(
                f"At least {MIN_COMPARED_METHODS} methodIds are required for comparison"
            )

        params = params or {}
        comparison = await self.registry.compare_module_service_methods(
            module_id, service_id, method_ids, params
        )
        summary = comparison["summary"]
        logger.info(
            "Compared %s/%s methods %s: %d/%d succeeded, fastest=%s",
            module_id,
            service_id,
            ",".join(method_ids),
            summary["successful"],
            summary["total"],
            summary["fastest"],
        )

        failed = [r for r in comparison["methodResults"] if not r["success"]]
        await self.execution_logger.record(
            ExecutionKind.COMPARE,
            module_id,
            success=not failed,
            params=params,
            result=comparison,
            error_message=(
                "; ".join(f"{r['methodId']}: {r['error']}" for r in failed) if failed else None
            ),
            duration_ms=comparison["totalTime"],
            service_id=service_id,
            method_ids=method_ids,
        )
        return {"success": True, **comparison}
