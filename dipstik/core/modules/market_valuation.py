"""
MODULE: Market Valuation

Determines the market value of a vehicle from make, model, year, mileage and
condition. Valuation strategies plug in as methods of the ``valuation``
service.
"""

from __future__ import annotations

from typing import Any, Optional

from dipstik.core.framework.method import MethodBase
from dipstik.core.framework.module_base import ModuleBase
from dipstik.core.framework.service_base import ServiceBase
from dipstik.core.framework.validator import Validator
from dipstik.core.utils.time import iso_now

CONDITIONS = ("excellent", "good", "fair", "poor")


class BaselineValuationMethod(MethodBase):
    id = "baseline"
    name = "Baseline Valuation"
    description = "Echo the vehicle and condition with an empty value range"

    async def execute(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "vehicle": params.get("vehicle"),
            "condition": params.get("condition") or "good",
            "value": None,
            "valueRange": {"min": None, "max": None},
            "source": self.id,
            "timestamp": iso_now(),
        }


class MarketValuationModule(ModuleBase):
    def __init__(self, isolate_failures: bool = True):
        super().__init__(
            id="market-valuation",
            name="Market Valuation",
            description="Determine market value of vehicles",
            isolate_failures=isolate_failures,
        )

    def validate_input(self, params: dict[str, Any]) -> dict[str, Any]:
        errors = list(Validator.validate_vehicle_data(params.get("vehicle") or {})["errors"])

        condition = params.get("condition")
        if condition and condition not in CONDITIONS:
            errors.append(f"condition must be one of: {', '.join(CONDITIONS)}")

        self._check_target_service(params, errors)
        return {"valid": not errors, "errors": errors}

    def get_test_data(self) -> Optional[dict[str, Any]]:
        vehicle = {"make": "Honda", "model": "Civic", "year": 2020, "mileage": 50000}
        return {
            "vehicle": vehicle,
            "condition": "good",
            "testCases": [
                {
                    "name": "Basic market valuation",
                    "input": {
                        "vehicle": vehicle,
                        "condition": "good",
                        "serviceConfig": {"valuation": {"methodId": "baseline"}},
                    },
                }
            ],
        }


def build_market_valuation_module(isolate_failures: bool = True) -> MarketValuationModule:
    module = MarketValuationModule(isolate_failures=isolate_failures)
    service = ServiceBase(
        id="valuation",
        name="Vehicle Valuation",
        description="Estimate current market value",
    )
    service.register_method(BaselineValuationMethod())
    module.register_service(service)
    return module
