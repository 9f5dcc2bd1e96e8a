"""MODULE: Future Repair Outlook - repairs likely within a forecast period."""

from __future__ import annotations

from numbers import Real
from typing import Any, Optional

from dipstik.core.framework.method import MethodBase
from dipstik.core.framework.module_base import ModuleBase
from dipstik.core.framework.service_base import ServiceBase
from dipstik.core.framework.validator import Validator
from dipstik.core.utils.time import iso_now

DEFAULT_FORECAST_MONTHS = 12


class BaselineForecastMethod(MethodBase):
    id = "baseline"
    name = "Baseline Forecast"
    description = "Return an empty forecast for the requested period"

    async def execute(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "vehicle": params.get("vehicle"),
            "forecast": [],
            "forecastPeriod": params.get("forecastPeriod") or DEFAULT_FORECAST_MONTHS,
            "source": self.id,
            "timestamp": iso_now(),
        }


class FutureRepairOutlookModule(ModuleBase):
    def __init__(self, isolate_failures: bool = True):
        super().__init__(
            id="future-repair-outlook",
            name="Future Repair Outlook",
            description="Forecast repairs likely to come due",
            isolate_failures=isolate_failures,
        )

    def validate_input(self, params: dict[str, Any]) -> dict[str, Any]:
        errors = list(Validator.validate_vehicle_data(params.get("vehicle") or {})["errors"])

        history = params.get("serviceHistory")
        if history is not None and not isinstance(history, list):
            errors.append("serviceHistory must be an array")

        period = params.get("forecastPeriod")
        if period is not None and (
            not isinstance(period, Real) or isinstance(period, bool) or period <= 0
        ):
            errors.append("forecastPeriod must be a positive number (months)")

        self._check_target_service(params, errors)
        return {"valid": not errors, "errors": errors}

    def get_test_data(self) -> Optional[dict[str, Any]]:
        vehicle = {"make": "Honda", "model": "Civic", "year": 2020, "mileage": 50000}
        return {
            "vehicle": vehicle,
            "serviceHistory": [],
            "forecastPeriod": DEFAULT_FORECAST_MONTHS,
            "testCases": [
                {
                    "name": "Basic future repair outlook",
                    "input": {
                        "vehicle": vehicle,
                        "serviceHistory": [],
                        "forecastPeriod": DEFAULT_FORECAST_MONTHS,
                        "serviceConfig": {"forecast": {"methodId": "baseline"}},
                    },
                }
            ],
        }


def build_future_repair_outlook_module(isolate_failures: bool = True) -> FutureRepairOutlookModule:
    module = FutureRepairOutlookModule(isolate_failures=isolate_failures)
    service = ServiceBase(
        id="forecast",
        name="Repair Forecast",
        description="Repairs expected within the forecast period",
    )
    service.register_method(BaselineForecastMethod())
    module.register_service(service)
    return module
