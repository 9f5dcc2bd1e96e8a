"""Use case for validating and executing a module."""

import logging
import time
from typing import Any

from dipstik.core.framework.registry import ModuleRegistry
from dipstik.core.models.execution_log import ExecutionKind
from dipstik.core.services.execution_logger import ExecutionLoggingService

logger = logging.getLogger(__name__)


class ExecuteModuleUseCase:
    """
    Execute a module on behalf of the API.

    Flow:
    1. Resolve the module (unknown id raises ``UnknownModuleError``)
    2. Run the module's ``validate_input``; invalid params short-circuit
    3. Execute through the registry and record the outcome
    """

    def __init__(self, registry: ModuleRegistry, execution_logger: ExecutionLoggingService):
        self.registry = registry
        self.execution_logger = execution_logger

    async def execute(self, module_id: str, params: dict[str, Any]) -> dict[str, Any]:
        """
        Args:
            module_id: Registered module id
            params: Module params including optional ``serviceConfig``/``serviceId``

        Returns:
            dict with:
                - success (bool): False only when validation failed
                - result: Module result (if success=True)
                - errors (list[str]): Validation errors (if success=False)

        Errors raised while executing are recorded and re-raised.
        """
        module = self.registry.require_module(module_id)
        service_id = params.get("serviceId")

        validation = module.validate_input(params)
        if not validation["valid"]:
            logger.info(
                "Rejected params for module %s: %s", module_id, "; ".join(validation["errors"])
            )
            await self.execution_logger.record(
                ExecutionKind.EXECUTE,
                module_id,
                success=False,
                params=params,
                error_message="Validation failed: " + ", ".join(validation["errors"]),
                service_id=service_id,
            )
            return {"success": False, "errors": validation["errors"]}

        start = time.perf_counter()
        try:
            result = await self.registry.execute_module(module_id, params)
        except Exception as exc:
            duration_ms = round((time.perf_counter() - start) * 1000, 3)
            logger.warning("Module %s failed after %.3f ms: %s", module_id, duration_ms, exc)
            await self.execution_logger.record(
                ExecutionKind.EXECUTE,
                module_id,
                success=False,
                params=params,
                error_message=str(exc),
                duration_ms=duration_ms,
                service_id=service_id,
            )
            raise

        duration_ms = round((time.perf_counter() - start) * 1000, 3)
        logger.info("Module %s executed in %.3f ms", module_id, duration_ms)
        await self.execution_logger.record(
            ExecutionKind.EXECUTE,
            module_id,
            success=True,
            params=params,
            result=result,
            duration_ms=duration_ms,
            service_id=service_id,
        )
        return {"success": True, "result": result}
