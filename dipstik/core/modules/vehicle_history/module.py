"""
MODULE: Vehicle History

Collects and analyses vehicle history. Services:
- events (extract vehicle history events)
- narrative (summarise the extracted events)
"""

from __future__ import annotations

from typing import Any, Optional

from dipstik.core.framework.module_base import ModuleBase
from dipstik.core.framework.validator import Validator

SAMPLE_VIN = "1HGCM82633A004352"

SAMPLE_RECORDS = [
    {
        "date": "2021-03-02",
        "mileage": 12000,
        "description": "Oil and filter changed",
        "location": "Dealer Service Center",
        "cost": 59.95,
    },
    {
        "date": "2022-06-18",
        "mileage": 27500,
        "description": "Tires rotated,  brakes inspected",
        "location": "Tire Express",
    },
]

SAMPLE_EVENTS = [
    {"eventType": "service", "date": "2021-03-02", "mileage": 12000, "description": "Oil and filter changed"},
    {"eventType": "accident", "date": "2022-01-09", "mileage": 20100, "description": "Minor damage reported"},
]


class VehicleHistoryModule(ModuleBase):
    def __init__(self, isolate_failures: bool = True):
        super().__init__(
            id="vehicle-history",
            name="Vehicle History",
            description="Collect and analyze vehicle history from various sources",
            version="1.0.0",
            isolate_failures=isolate_failures,
        )

    def validate_input(self, params: dict[str, Any]) -> dict[str, Any]:
        errors: list[str] = []

        if params.get("vin"):
            vin_validation = Validator.validate_vin(params["vin"])
            if not vin_validation["valid"]:
                errors.append(vin_validation["error"])

        if "records" in params:
            history_validation = Validator.validate_service_history(
                {"records": params["records"]}
            )
            errors.extend(history_validation["errors"])

        if "events" in params and not isinstance(params["events"], list):
            errors.append("events must be an array")

        self._check_target_service(params, errors)

        return {"valid": not errors, "errors": errors}

    def get_test_data(self) -> Optional[dict[str, Any]]:
        return {
            "vin": SAMPLE_VIN,
            "records": SAMPLE_RECORDS,
            "testCases": [
                {
                    "name": "Execute module with supplied records",
                    "input": {
                        "serviceConfig": {
                            "events": {"methodId": "supplied-records"},
                            "narrative": {"methodId": "timeline-summary"},
                        },
                        "vin": SAMPLE_VIN,
                        "records": SAMPLE_RECORDS,
                        "events": SAMPLE_EVENTS,
                    },
                },
                {
                    "name": "Narrative only",
                    "input": {
                        "serviceId": "narrative",
                        "serviceConfig": {"narrative": {"methodId": "timeline-summary"}},
                        "events": SAMPLE_EVENTS,
                    },
                },
            ],
        }
