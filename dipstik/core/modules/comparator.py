"""
MODULE: Comparator

Compares several vehicles side by side on the attributes every vehicle
record carries.
"""

from __future__ import annotations

from typing import Any, Optional

from dipstik.core.framework.method import MethodBase
from dipstik.core.framework.module_base import ModuleBase
from dipstik.core.framework.service_base import ServiceBase
from dipstik.core.framework.validator import Validator
from dipstik.core.utils.time import iso_now


def _label(vehicle: dict[str, Any]) -> str:
    return " ".join(str(vehicle.get(k)) for k in ("year", "make", "model") if vehicle.get(k))


class AttributeTableMethod(MethodBase):
    id = "attribute-table"
    name = "Attribute Table"
    description = "Tabulate year and mileage and point out the newest and lowest-mileage vehicle"

    async def execute(self, params: dict[str, Any]) -> dict[str, Any]:
        vehicles = params.get("vehicles") or []
        rows = [
            {
                "index": i,
                "label": _label(v),
                "year": v.get("year"),
                "mileage": v.get("mileage"),
            }
            for i, v in enumerate(vehicles)
        ]

        with_year = [r for r in rows if isinstance(r["year"], int)]
        with_mileage = [r for r in rows if isinstance(r["mileage"], (int, float))]

        return {
            "vehicles": vehicles,
            "comparisonMetrics": params.get("comparisonMetrics") or [],
            "table": rows,
            "highlights": {
                "newest": max(with_year, key=lambda r: r["year"])["index"] if with_year else None,
                "lowestMileage": (
                    min(with_mileage, key=lambda r: r["mileage"])["index"] if with_mileage else None
                ),
            },
            "source": self.id,
            "timestamp": iso_now(),
        }


class ComparatorModule(ModuleBase):
    def __init__(self, isolate_failures: bool = True):
        super().__init__(
            id="comparator",
            name="Vehicle Comparator",
            description="Compare multiple vehicles side-by-side",
            isolate_failures=isolate_failures,
        )

    def validate_input(self, params: dict[str, Any]) -> dict[str, Any]:
        errors: list[str] = []

        vehicles = params.get("vehicles")
        if not isinstance(vehicles, list):
            errors.append("vehicles must be an array")
        elif len(vehicles) < 2:
            errors.append("At least 2 vehicles are required for comparison")
        else:
            for index, vehicle in enumerate(vehicles, start=1):
                validation = Validator.validate_vehicle_data(vehicle if isinstance(vehicle, dict) else {})
                if not validation["valid"]:
                    errors.append(f"Vehicle {index}: {', '.join(validation['errors'])}")

        metrics = params.get("comparisonMetrics")
        if metrics is not None and not isinstance(metrics, list):
            errors.append("comparisonMetrics must be an array")

        self._check_target_service(params, errors)
        return {"valid": not errors, "errors": errors}

    def get_test_data(self) -> Optional[dict[str, Any]]:
        vehicles = [
            {"make": "Honda", "model": "Civic", "year": 2020, "mileage": 50000},
            {"make": "Toyota", "model": "Corolla", "year": 2020, "mileage": 45000},
        ]
        metrics = ["cost", "maintenance", "reliability"]
        return {
            "vehicles": vehicles,
            "comparisonMetrics": metrics,
            "testCases": [
                {
                    "name": "Basic vehicle comparison",
                    "input": {
                        "vehicles": vehicles,
                        "comparisonMetrics": metrics,
                        "serviceConfig": {"side-by-side": {"methodId": "attribute-table"}},
                    },
                }
            ],
        }


def build_comparator_module(isolate_failures: bool = True) -> ComparatorModule:
    module = ComparatorModule(isolate_failures=isolate_failures)
    service = ServiceBase(
        id="side-by-side",
        name="Side-by-side Comparison",
        description="Vehicles tabulated against each other",
    )
    service.register_method(AttributeTableMethod())
    module.register_service(service)
    return module
