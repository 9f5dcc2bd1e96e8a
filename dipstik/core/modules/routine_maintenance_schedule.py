"""MODULE: Routine Maintenance Schedule - manufacturer-recommended service intervals."""

from __future__ import annotations

from typing import Any, Optional

from dipstik.core.framework.method import MethodBase
from dipstik.core.framework.module_base import ModuleBase
from dipstik.core.framework.service_base import ServiceBase
from dipstik.core.framework.validator import Validator
from dipstik.core.utils.time import iso_now


class BaselineScheduleMethod(MethodBase):
    id = "baseline"
    name = "Baseline Schedule"
    description = "Return an empty schedule for the vehicle"

    async def execute(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "vehicle": params.get("vehicle"),
            "schedule": [],
            "source": self.id,
            "timestamp": iso_now(),
        }


class RoutineMaintenanceScheduleModule(ModuleBase):
    def __init__(self, isolate_failures: bool = True):
        super().__init__(
            id="routine-maintenance-schedule",
            name="Routine Maintenance Schedule",
            description="Build the recommended routine maintenance schedule for a vehicle",
            isolate_failures=isolate_failures,
        )

    def validate_input(self, params: dict[str, Any]) -> dict[str, Any]:
        errors = list(Validator.validate_vehicle_data(params.get("vehicle") or {})["errors"])
        self._check_target_service(params, errors)
        return {"valid": not errors, "errors": errors}

    def get_test_data(self) -> Optional[dict[str, Any]]:
        vehicle = {"make": "Honda", "model": "Civic", "year": 2020, "mileage": 50000}
        return {
            "vehicle": vehicle,
            "testCases": [
                {
                    "name": "Basic maintenance schedule",
                    "input": {
                        "vehicle": vehicle,
                        "serviceConfig": {"schedule": {"methodId": "baseline"}},
                    },
                }
            ],
        }


def build_routine_maintenance_schedule_module(
    isolate_failures: bool = True,
) -> RoutineMaintenanceScheduleModule:
    module = RoutineMaintenanceScheduleModule(isolate_failures=isolate_failures)
    service = ServiceBase(
        id="schedule",
        name="Maintenance Schedule",
        description="Recommended service items and intervals",
    )
    service.register_method(BaselineScheduleMethod())
    module.register_service(service)
    return module
