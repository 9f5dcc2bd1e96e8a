"""
Events service: extract vehicle history events from a source.

Methods:
- supplied-records: normalise records the caller already has (parsed report,
  manual entry)
- vehicle-databases-api: fetch service history from the Vehicle Databases API
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Callable, Optional

from dipstik.core.framework.method import MethodBase
from dipstik.core.framework.service_base import ServiceBase
from dipstik.core.framework.validator import Validator
from dipstik.core.services.vehicle_databases_client import VehicleDatabasesClient
from dipstik.core.utils.time import iso_now

logger = logging.getLogger(__name__)

EVENT_TYPES = frozenset(
    {
        "service",
        "accident",
        "title_change",
        "registration",
        "inspection",
        "recall",
        "warranty",
        "auction",
        "theft",
        "flood_damage",
        "fire_damage",
        "structural_damage",
        "lien",
        "other",
    }
)

_WHITESPACE_RE = re.compile(r"\s+")


def clean_description(description: Any) -> str:
    """Collapse whitespace, keep the original wording."""
    if not description:
        return ""
    return _WHITESPACE_RE.sub(" ", str(description).strip())


def _to_int(value: Any) -> Optional[int]:
    if value in (None, "", 0):
        return None
    try:
        return int(float(str(value).replace(",", "")))
    except ValueError:
        return None


def _to_float(value: Any) -> Optional[float]:
    if value in (None, "", 0):
        return None
    try:
        return float(str(value).replace(",", "").lstrip("$"))
    except ValueError:
        return None


def normalize_record(record: dict[str, Any], default_event_type: str = "service") -> dict[str, Any]:
    """Map a raw record onto the common event shape."""
    event_type = record.get("eventType") or default_event_type
    if event_type not in EVENT_TYPES:
        event_type = "other"

    return {
        "eventType": event_type,
        "date": record.get("serviceDate") or record.get("date") or None,
        "mileage": _to_int(record.get("mileage") or record.get("odometer")),
        "description": clean_description(
            record.get("description") or record.get("serviceDescription")
        ),
        "serviceType": record.get("serviceType") or record.get("type") or None,
        "cost": _to_float(record.get("cost") or record.get("amount")),
        "location": record.get("location")
        or record.get("shopName")
        or record.get("dealerName")
        or None,
    }


def summarize_records(records: list[dict[str, Any]]) -> dict[str, Any]:
    """Date and mileage ranges over normalised records."""
    dates = sorted(r["date"] for r in records if r.get("date"))
    mileages = sorted(r["mileage"] for r in records if r.get("mileage"))
    return {
        "totalRecords": len(records),
        "dateRange": {
            "earliest": dates[0] if dates else None,
            "latest": dates[-1] if dates else None,
        },
        "mileageRange": {
            "lowest": mileages[0] if mileages else None,
            "highest": mileages[-1] if mileages else None,
        },
    }


def _vehicle_info(vin: Optional[str], vehicle: Optional[dict[str, Any]]) -> dict[str, Any]:
    vehicle = vehicle or {}
    return {
        "vin": vin,
        "make": vehicle.get("make"),
        "model": vehicle.get("model"),
        "year": vehicle.get("year"),
        "trim": vehicle.get("trim"),
        "engine": vehicle.get("engine"),
    }


class SuppliedRecordsMethod(MethodBase):
    id = "supplied-records"
    name = "Supplied Records"
    description = "Normalise vehicle history records supplied by the caller"

    async def execute(self, params: dict[str, Any]) -> dict[str, Any]:
        records = params.get("records")
        if not isinstance(records, list):
            raise ValueError("records array is required for supplied-records method")

        validation = Validator.validate_service_history({"records": records})
        if not validation["valid"]:
            raise ValueError(f"Invalid records: {'; '.join(validation['errors'])}")

        vin = params.get("vin")
        normalized = [normalize_record(r) for r in records]

        return {
            "source": self.id,
            "vin": vin,
            "vehicleInfo": _vehicle_info(vin, params.get("vehicle")),
            "records": normalized,
            "metadata": {
                "sourceType": "supplied",
                "sourceFormat": "records",
                **summarize_records(normalized),
            },
            "timestamp": iso_now(),
        }


ClientFactory = Callable[[str, str, float], VehicleDatabasesClient]


class VehicleDatabasesMethod(MethodBase):
    id = "vehicle-databases-api"
    name = "Vehicle Databases API"
    description = "Fetch vehicle history from Vehicle Databases service history API"

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: str = "https://api.vehicledatabases.com/v1",
        timeout: float = 30.0,
        dev_mode: bool = False,
        client_factory: ClientFactory = VehicleDatabasesClient,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.dev_mode = dev_mode
        self.client_factory = client_factory

    async def execute(self, params: dict[str, Any]) -> dict[str, Any]:
        vin = params.get("vin")
        if not Validator.validate_vin(vin)["valid"]:
            raise ValueError("Valid 17-character VIN is required")

        api_key = params.get("apiKey") or self.api_key
        if not api_key:
            raise ValueError("API key is required")

        client = self.client_factory(api_key, params.get("apiUrl") or self.api_url, self.timeout)
        try:
            response = await client.get_service_history(vin)
        finally:
            await client.close()

        if not response["success"]:
            if self.dev_mode and response.get("transport_error"):
                logger.warning("Vehicle Databases unreachable, returning mock data for %s", vin)
                return mock_service_history(vin)
            raise RuntimeError(response["error"])

        api_data = response["data"] or {}
        raw_records = api_data.get("serviceHistory") or api_data.get("records") or []
        records = [normalize_record(r) for r in raw_records]
        api_vehicle = api_data.get("vehicle") or {}

        return {
            "source": self.id,
            "vin": vin,
            "vehicleInfo": _vehicle_info(vin, api_vehicle),
            "records": records,
            "metadata": {
                "sourceType": "api",
                "sourceFormat": "vehicle-databases",
                **summarize_records(records),
            },
            "timestamp": iso_now(),
        }


def mock_service_history(vin: str) -> dict[str, Any]:
    """Deterministic stand-in payload for development without API access."""
    this_year = date.today().year
    records = [
        normalize_record(
            {
                "date": f"{this_year - 2}-01-15",
                "mileage": 30000,
                "description": "Oil change, Filter replacement",
                "serviceType": "Oil Change",
                "cost": 45.99,
                "location": "Quick Lube Express",
            }
        ),
        normalize_record(
            {
                "date": f"{this_year - 1}-04-22",
                "mileage": 45000,
                "description": "Brake pad replacement, Brake fluid flush",
                "serviceType": "Brake Service",
                "cost": 325.00,
                "location": "AutoCare Center",
            }
        ),
    ]
    return {
        "source": VehicleDatabasesMethod.id,
        "vin": vin,
        "vehicleInfo": _vehicle_info(
            vin,
            {"make": "Toyota", "model": "Camry", "year": 2018, "trim": "LE", "engine": "2.5L I4"},
        ),
        "records": records,
        "metadata": {
            "sourceType": "api",
            "sourceFormat": "vehicle-databases",
            **summarize_records(records),
            "mockData": True,
        },
        "timestamp": iso_now(),
    }


def build_events_service(vehicle_databases_method: Optional[VehicleDatabasesMethod] = None) -> ServiceBase:
    service = ServiceBase(
        id="events",
        name="Vehicle History Events",
        description="Extract vehicle history events from various sources",
    )
    service.register_method(SuppliedRecordsMethod())
    service.register_method(vehicle_databases_method or VehicleDatabasesMethod())
    return service
