"""
MODULE: Maintenance Gap Analysis

Compares a recommended schedule with the service history that actually
happened and lists the items that were never performed.
"""

from __future__ import annotations

from typing import Any, Optional

from dipstik.core.framework.method import MethodBase
from dipstik.core.framework.module_base import ModuleBase
from dipstik.core.framework.service_base import ServiceBase
from dipstik.core.framework.validator import Validator
from dipstik.core.utils.time import iso_now


def _item_label(item: Any) -> str:
    if isinstance(item, dict):
        return str(item.get("service") or item.get("description") or item.get("name") or "")
    return str(item or "")


class KeywordMatchMethod(MethodBase):
    id = "keyword-match"
    name = "Keyword Match"
    description = "Flag scheduled items whose name never appears in the service history"

    async def execute(self, params: dict[str, Any]) -> dict[str, Any]:
        schedule = params.get("recommendedSchedule") or []
        history = params.get("actualServiceHistory") or []
        performed = " | ".join(_item_label(r).lower() for r in history)

        gaps = []
        for item in schedule:
            label = _item_label(item)
            if label and label.lower() not in performed:
                gaps.append({"item": label, "recommended": item})

        return {
            "vehicle": params.get("vehicle"),
            "gaps": gaps,
            "overdueItems": [],
            "source": self.id,
            "timestamp": iso_now(),
        }


class MaintenanceGapAnalysisModule(ModuleBase):
    def __init__(self, isolate_failures: bool = True):
        super().__init__(
            id="maintenance-gap-analysis",
            name="Maintenance Gap Analysis",
            description="Find gaps between recommended and actual maintenance",
            isolate_failures=isolate_failures,
        )

    def validate_input(self, params: dict[str, Any]) -> dict[str, Any]:
        errors = list(Validator.validate_vehicle_data(params.get("vehicle") or {})["errors"])

        if params.get("recommendedSchedule") is None:
            errors.append("recommendedSchedule is required")

        history = params.get("actualServiceHistory")
        if history is None:
            errors.append("actualServiceHistory is required")
        elif not isinstance(history, list):
            errors.append("actualServiceHistory must be an array")

        self._check_target_service(params, errors)
        return {"valid": not errors, "errors": errors}

    def get_test_data(self) -> Optional[dict[str, Any]]:
        vehicle = {"make": "Honda", "model": "Civic", "year": 2020, "mileage": 50000}
        return {
            "vehicle": vehicle,
            "recommendedSchedule": [],
            "actualServiceHistory": [],
            "testCases": [
                {
                    "name": "Basic gap analysis",
                    "input": {
                        "vehicle": vehicle,
                        "recommendedSchedule": [{"service": "Oil change"}, {"service": "Brake fluid"}],
                        "actualServiceHistory": [{"description": "Oil change and filter"}],
                        "serviceConfig": {"gaps": {"methodId": "keyword-match"}},
                    },
                }
            ],
        }


def build_maintenance_gap_analysis_module(
    isolate_failures: bool = True,
) -> MaintenanceGapAnalysisModule:
    module = MaintenanceGapAnalysisModule(isolate_failures=isolate_failures)
    service = ServiceBase(
        id="gaps",
        name="Gap Detection",
        description="Scheduled items missing from the service history",
    )
    service.register_method(KeywordMatchMethod())
    module.register_service(service)
    return module
