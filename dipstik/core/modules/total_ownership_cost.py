"""MODULE: Total Ownership Cost - purchase plus running costs over an ownership period."""

from __future__ import annotations

from numbers import Real
from typing import Any, Optional

from dipstik.core.framework.method import MethodBase
from dipstik.core.framework.module_base import ModuleBase
from dipstik.core.framework.service_base import ServiceBase
from dipstik.core.framework.validator import Validator
from dipstik.core.utils.time import iso_now

DEFAULT_OWNERSHIP_YEARS = 5


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class BaselineCostMethod(MethodBase):
    id = "baseline"
    name = "Baseline Cost Breakdown"
    description = "Return the purchase price with empty running-cost categories"

    async def execute(self, params: dict[str, Any]) -> dict[str, Any]:
        purchase_price = params.get("purchasePrice") or 0
        return {
            "vehicle": params.get("vehicle"),
            "purchasePrice": purchase_price,
            "ownershipPeriod": params.get("ownershipPeriod") or DEFAULT_OWNERSHIP_YEARS,
            "totalCost": None,
            "breakdown": {
                "purchase": purchase_price,
                "maintenance": 0,
                "repairs": 0,
                "insurance": 0,
                "depreciation": 0,
                "other": 0,
            },
            "source": self.id,
            "timestamp": iso_now(),
        }


class TotalOwnershipCostModule(ModuleBase):
    def __init__(self, isolate_failures: bool = True):
        super().__init__(
            id="total-ownership-cost",
            name="Total Ownership Cost",
            description="Estimate the total cost of owning a vehicle",
            isolate_failures=isolate_failures,
        )

    def validate_input(self, params: dict[str, Any]) -> dict[str, Any]:
        errors = list(Validator.validate_vehicle_data(params.get("vehicle") or {})["errors"])

        price = params.get("purchasePrice")
        if price is not None and (not _is_number(price) or price < 0):
            errors.append("purchasePrice must be a non-negative number")

        period = params.get("ownershipPeriod")
        if period is not None and (not _is_number(period) or period <= 0):
            errors.append("ownershipPeriod must be a positive number (years)")

        history = params.get("serviceHistory")
        if history is not None and not isinstance(history, list):
            errors.append("serviceHistory must be an array")

        self._check_target_service(params, errors)
        return {"valid": not errors, "errors": errors}

    def get_test_data(self) -> Optional[dict[str, Any]]:
        vehicle = {"make": "Honda", "model": "Civic", "year": 2020, "mileage": 50000}
        return {
            "vehicle": vehicle,
            "purchasePrice": 25000,
            "ownershipPeriod": DEFAULT_OWNERSHIP_YEARS,
            "serviceHistory": [],
            "testCases": [
                {
                    "name": "Basic total ownership cost",
                    "input": {
                        "vehicle": vehicle,
                        "purchasePrice": 25000,
                        "ownershipPeriod": DEFAULT_OWNERSHIP_YEARS,
                        "serviceHistory": [],
                        "serviceConfig": {"cost-breakdown": {"methodId": "baseline"}},
                    },
                }
            ],
        }


def build_total_ownership_cost_module(isolate_failures: bool = True) -> TotalOwnershipCostModule:
    module = TotalOwnershipCostModule(isolate_failures=isolate_failures)
    service = ServiceBase(
        id="cost-breakdown",
        name="Cost Breakdown",
        description="Ownership cost split into categories",
    )
    service.register_method(BaselineCostMethod())
    module.register_service(service)
    return module
