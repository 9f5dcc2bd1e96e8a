"""Standardised validation for module inputs.

Every helper returns a ``{"valid": bool, ...}`` dict and never raises.
"""

from __future__ import annotations

import re
from numbers import Real
from typing import Any

from dipstik.core.utils.time import now_utc

VIN_LENGTH = 17
MIN_MODEL_YEAR = 1900

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


class Validator:
    """Shape checks for vehicle identity, service records and VINs."""

    @staticmethod
    def validate_vin(vin: Any) -> dict:
        if not vin:
            return {"valid": False, "error": "VIN is required"}
        if not isinstance(vin, str):
            return {"valid": False, "error": "VIN must be a string"}
        if len(vin) != VIN_LENGTH:
            return {"valid": False, "error": "VIN must be exactly 17 characters"}
        return {"valid": True}

    @classmethod
    def validate_vehicle_data(cls, data: dict[str, Any]) -> dict:
        errors: list[str] = []

        if _is_blank(data.get("make")):
            errors.append("make is required")

        if _is_blank(data.get("model")):
            errors.append("model is required")

        year = data.get("year")
        max_year = now_utc().year + 1
        if (
            not year
            or not isinstance(year, int)
            or isinstance(year, bool)
            or year < MIN_MODEL_YEAR
            or year > max_year
        ):
            errors.append("year must be a valid year")

        if "mileage" in data and data["mileage"] is not None:
            mileage = data["mileage"]
            if not _is_number(mileage) or mileage < 0:
                errors.append("mileage must be a non-negative number")

        if data.get("vin"):
            vin_validation = cls.validate_vin(data["vin"])
            if not vin_validation["valid"]:
                errors.append(vin_validation["error"])

        return {"valid": not errors, "errors": errors}

    @staticmethod
    def validate_service_record(record: dict[str, Any]) -> dict:
        errors: list[str] = []

        if _is_blank(record.get("description")):
            errors.append("description is required")

        date = record.get("date")
        if date and (not isinstance(date, str) or not _DATE_RE.match(date)):
            errors.append("date must be in YYYY-MM-DD format")

        for field in ("mileage", "cost"):
            if field in record and record[field] is not None:
                value = record[field]
                if not _is_number(value) or value < 0:
                    errors.append(f"{field} must be a non-negative number")

        return {"valid": not errors, "errors": errors}

    @classmethod
    def validate_service_history(cls, history: dict[str, Any]) -> dict:
        records = history.get("records")
        if not isinstance(records, list):
            return {"valid": False, "errors": ["records must be an array"]}

        errors: list[str] = []
        for index, record in enumerate(records, start=1):
            if not isinstance(record, dict):
                errors.append(f"Record {index}: record must be an object")
                continue
            validation = cls.validate_service_record(record)
            if not validation["valid"]:
                errors.append(f"Record {index}: {', '.join(validation['errors'])}")

        return {"valid": not errors, "errors": errors}
