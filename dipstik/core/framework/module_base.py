"""
Base module class.

Three-tier hierarchy:
1. Module = a capability (e.g. "Vehicle History")
2. Service = a piece/aspect of the module (e.g. "events", "narrative")
3. Method = a way to execute a service (e.g. "vehicle-databases-api")

Executing a module without a target runs ALL of its services. Each service
is told which method to use through ``serviceConfig``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from dipstik.core.framework.exceptions import UnknownServiceError
from dipstik.core.framework.service_base import ServiceBase

logger = logging.getLogger(__name__)


class ModuleBase:
    """A named capability composed of services."""

    def __init__(
        self,
        id: str,
        name: str,
        description: str = "",
        version: str = "1.0.0",
        status: str = "active",
        isolate_failures: bool = True,
    ):
        """
        Args:
            id: Registry-wide module identifier
            name: Human readable name
            description: What the capability produces
            version: Free-form version label
            status: Advisory lifecycle label ("active", "deprecated", ...)
            isolate_failures: Record a failing service as ``success: False``
                and keep going instead of aborting the whole execution
        """
        self.id = id
        self.name = name
        self.description = description
        self.version = version
        self.status = status
        self.isolate_failures = isolate_failures
        self.services: dict[str, ServiceBase] = {}

    def get_info(self) -> dict[str, str]:
        """Static module metadata."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "status": self.status,
        }

    def register_service(self, service: ServiceBase) -> None:
        if not getattr(service, "id", None):
            raise ValueError(f"Cannot register a service without an id on module '{self.id}'")
        self.services[service.id] = service
        logger.debug("Registered service %s on module %s", service.id, self.id)

    def get_service(self, service_id: str) -> Optional[ServiceBase]:
        return self.services.get(service_id)

    def get_available_services(self) -> list[dict[str, Any]]:
        """Snapshot of services with their available methods."""
        return [
            {
                "id": s.id,
                "name": s.name,
                "description": s.description,
                "availableMethods": s.get_available_methods(),
            }
            for s in self.services.values()
        ]

    def validate_input(self, params: dict[str, Any]) -> dict[str, Any]:
        """Validate execution params. Override in subclasses."""
        return {"valid": True, "errors": []}

    def get_test_data(self) -> Optional[dict[str, Any]]:
        """Sample input and ``testCases`` for this module. Override in subclasses."""
        return None

    def _check_target_service(self, params: dict[str, Any], errors: list[str]) -> None:
        service_id = params.get("serviceId")
        if service_id and service_id not in self.services:
            errors.append(f"Service '{service_id}' not found")

    async def execute(self, params: dict[str, Any]) -> Any:
        """
        Execute the module.

        ``params["serviceConfig"]`` maps service ids to ``{"methodId": ..., **extra}``.
        All other params are module params, merged into every service call
        (service config wins on key clashes).

        With ``params["serviceId"]`` only that service runs and its raw result
        is returned. Otherwise every service runs sequentially in registration
        order and the aggregate is returned::

            {"moduleId", "services", "totalServices", "successful"}
        """
        module_params = dict(params)
        service_config: dict[str, dict[str, Any]] = module_params.pop("serviceConfig", None) or {}
        target_service_id = module_params.pop("serviceId", None)

        if target_service_id:
            service = self.services.get(target_service_id)
            if service is None:
                raise UnknownServiceError(target_service_id, self.id)
            return await service.execute(
                {**module_params, **service_config.get(target_service_id, {})}
            )

        service_results: list[dict[str, Any]] = []
        for service_id, service in list(self.services.items()):
            config = service_config.get(service_id) or {}
            try:
                data = await service.execute({**module_params, **config})
            except Exception as exc:
                if not self.isolate_failures:
                    raise
                logger.warning(
                    "Service %s of module %s failed: %s", service_id, self.id, exc
                )
                service_results.append(
                    {
                        "serviceId": service_id,
                        "serviceName": service.name,
                        "success": False,
                        "error": str(exc),
                    }
                )
                continue

            service_results.append(
                {
                    "serviceId": service_id,
                    "serviceName": service.name,
                    "success": True,
                    "data": data,
                }
            )

        return {
            "moduleId": self.id,
            "services": service_results,
            "totalServices": len(service_results),
            "successful": sum(1 for r in service_results if r["success"]),
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id!r}, services={list(self.services)})>"
