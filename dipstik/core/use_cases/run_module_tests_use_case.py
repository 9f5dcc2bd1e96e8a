"""Use case for running a module's regression cases."""

import logging
import time
from typing import Any, Optional

from dipstik.core.framework.registry import ModuleRegistry
from dipstik.core.models.execution_log import ExecutionKind
from dipstik.core.services.execution_logger import ExecutionLoggingService

logger = logging.getLogger(__name__)


class RunModuleTestsUseCase:
    def __init__(self, registry: ModuleRegistry, execution_logger: ExecutionLoggingService):
        self.registry = registry
        self.execution_logger = execution_logger

    async def execute(
        self,
        module_id: str,
        test_cases: Optional[list[dict[str, Any]]] = None,
    ) -> dict[str, Any]:
        """Run ``test_cases`` (or the module's built-in ones) and return the summary."""
        start = time.perf_counter()
        summary = await self.registry.run_module_tests(module_id, test_cases)
        duration_ms = round((time.perf_counter() - start) * 1000, 3)

        failed_names = [r["name"] for r in summary["results"] if not r["success"]]
        await self.execution_logger.record(
            ExecutionKind.TEST,
            module_id,
            success=not failed_names,
            params={"testCases": test_cases} if test_cases is not None else None,
            result=summary,
            error_message=("Failed cases: " + ", ".join(map(str, failed_names))) if failed_names else None,
            duration_ms=duration_ms,
        )
        return {"success": True, "moduleId": module_id, **summary}
