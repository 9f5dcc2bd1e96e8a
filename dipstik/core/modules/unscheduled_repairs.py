"""MODULE: Unscheduled Repairs - repairs outside the routine schedule."""

from __future__ import annotations

from typing import Any, Optional

from dipstik.core.framework.method import MethodBase
from dipstik.core.framework.module_base import ModuleBase
from dipstik.core.framework.service_base import ServiceBase
from dipstik.core.framework.validator import Validator
from dipstik.core.utils.time import iso_now


class BaselineRepairsMethod(MethodBase):
    id = "baseline"
    name = "Baseline Repairs"
    description = "Return an empty repair list for the vehicle"

    async def execute(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "vehicle": params.get("vehicle"),
            "repairs": [],
            "source": self.id,
            "timestamp": iso_now(),
        }


class UnscheduledRepairsModule(ModuleBase):
    def __init__(self, isolate_failures: bool = True):
        super().__init__(
            id="unscheduled-repairs",
            name="Unscheduled Repairs",
            description="Identify unscheduled repairs in a vehicle's service history",
            isolate_failures=isolate_failures,
        )

    def validate_input(self, params: dict[str, Any]) -> dict[str, Any]:
        errors = list(Validator.validate_vehicle_data(params.get("vehicle") or {})["errors"])

        history = params.get("serviceHistory")
        if history is not None and not isinstance(history, list):
            errors.append("serviceHistory must be an array")

        self._check_target_service(params, errors)
        return {"valid": not errors, "errors": errors}

    def get_test_data(self) -> Optional[dict[str, Any]]:
        vehicle = {"make": "Honda", "model": "Civic", "year": 2020, "mileage": 50000}
        return {
            "vehicle": vehicle,
            "serviceHistory": [],
            "testCases": [
                {
                    "name": "Basic unscheduled repairs",
                    "input": {
                        "vehicle": vehicle,
                        "serviceHistory": [],
                        "serviceConfig": {"repairs": {"methodId": "baseline"}},
                    },
                }
            ],
        }


def build_unscheduled_repairs_module(isolate_failures: bool = True) -> UnscheduledRepairsModule:
    module = UnscheduledRepairsModule(isolate_failures=isolate_failures)
    service = ServiceBase(
        id="repairs",
        name="Repair Identification",
        description="Pick out unscheduled repairs from service records",
    )
    service.register_method(BaselineRepairsMethod())
    module.register_service(service)
    return module
