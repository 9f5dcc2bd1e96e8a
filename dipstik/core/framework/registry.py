"""
Module registry.

Central catalog of all modules and the single entry point used by the HTTP
layer to introspect, execute and compare them. One instance is built at
start-up (see ``dipstik.core.modules.build_module_registry``) and handed out
through the DI container. Modules are only ever added; registering while
requests are in flight is not synchronised.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

from dipstik.core.framework.exceptions import UnknownModuleError, UnknownServiceError
from dipstik.core.framework.module_base import ModuleBase
from dipstik.core.framework.service_base import ServiceBase
from dipstik.core.framework.test_runner import ModuleTestRunner, TestRunner

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Process-wide catalog of modules keyed by id."""

    def __init__(
        self,
        modules: Iterable[ModuleBase] = (),
        test_runner_factory: Callable[[], TestRunner] = TestRunner,
    ):
        self.modules: dict[str, ModuleBase] = {}
        self._test_runner_factory = test_runner_factory
        for module in modules:
            self.register_module(module)

    def register_module(self, module: ModuleBase) -> None:
        self.modules[module.id] = module
        logger.debug("Registered module %s", module.id)

    def get_module(self, module_id: str) -> Optional[ModuleBase]:
        return self.modules.get(module_id)

    def get_all_modules(self) -> list[ModuleBase]:
        return list(self.modules.values())

    def require_module(self, module_id: str) -> ModuleBase:
        module = self.modules.get(module_id)
        if module is None:
            raise UnknownModuleError(module_id)
        return module

    def require_service(self, module_id: str, service_id: str) -> ServiceBase:
        module = self.require_module(module_id)
        service = module.get_service(service_id)
        if service is None:
            raise UnknownServiceError(service_id, module_id)
        return service

    @staticmethod
    def _describe(module: ModuleBase) -> dict[str, Any]:
        return {**module.get_info(), "availableServices": module.get_available_services()}

    def get_module_info(self, module_id: str) -> Optional[dict[str, Any]]:
        """Metadata snapshot of one module, or None if unknown."""
        module = self.modules.get(module_id)
        if module is None:
            return None
        return self._describe(module)

    def get_all_modules_info(self) -> list[dict[str, Any]]:
        return [self._describe(module) for module in self.modules.values()]

    def register_service(self, module_id: str, service: ServiceBase) -> None:
        """Add ``service`` to an already registered module."""
        self.require_module(module_id).register_service(service)

    async def execute_module(self, module_id: str, params: dict[str, Any]) -> Any:
        """Execute a module and return its result unmodified."""
        module = self.require_module(module_id)
        logger.info("Executing module %s", module_id)
        return await module.execute(params)

    async def compare_module_service_methods(
        self,
        module_id: str,
        service_id: str,
        method_ids: Iterable[str],
        params: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Compare several methods of one service with identical params."""
        service = self.require_service(module_id, service_id)
        test_runner = self._test_runner_factory()
        return await test_runner.compare_service_methods(service, method_ids, params or {})

    async def run_module_tests(
        self,
        module_id: str,
        test_cases: Optional[list[dict[str, Any]]] = None,
    ) -> dict[str, Any]:
        """
        Run regression cases against a module.

        Falls back to the module's own ``get_test_data()["testCases"]`` when
        ``test_cases`` is not given.
        """
        module = self.require_module(module_id)
        if test_cases is None:
            test_data = module.get_test_data() or {}
            test_cases = test_data.get("testCases", [])

        runner = ModuleTestRunner(module)
        results = await runner.run_tests(test_cases)
        summary = runner.get_summary(results)
        logger.info(
            "Module %s tests: %d/%d passed",
            module_id,
            summary["passed"],
            summary["total"],
        )
        return summary
