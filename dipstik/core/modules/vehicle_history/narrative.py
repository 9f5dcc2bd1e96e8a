"""Narrative service: turn extracted events into a readable history summary."""

from __future__ import annotations

from collections import Counter
from typing import Any

from dipstik.core.framework.method import MethodBase
from dipstik.core.framework.service_base import ServiceBase
from dipstik.core.modules.vehicle_history.events import summarize_records
from dipstik.core.utils.time import iso_now

# Event types that a buyer should be told about explicitly.
_FLAGGED_TYPES = (
    "accident",
    "structural_damage",
    "flood_damage",
    "fire_damage",
    "theft",
    "lien",
)


class TimelineSummaryMethod(MethodBase):
    id = "timeline-summary"
    name = "Timeline Summary"
    description = "Summarise extracted events into a chronological narrative"

    async def execute(self, params: dict[str, Any]) -> dict[str, Any]:
        events = params.get("events")
        if not isinstance(events, list):
            raise ValueError("events array is required for timeline-summary method")

        ordered = sorted(events, key=lambda e: e.get("date") or "")
        counts = Counter(e.get("eventType") or "other" for e in ordered)
        ranges = summarize_records(ordered)

        paragraphs = [self._overview(len(ordered), ranges)]
        flagged = [t for t in _FLAGGED_TYPES if counts.get(t)]
        if flagged:
            paragraphs.append(
                "Reported issues: "
                + ", ".join(f"{counts[t]} {t.replace('_', ' ')}" for t in flagged)
                + "."
            )
        elif ordered:
            paragraphs.append("No accidents, damage, theft or liens were reported.")

        service_count = counts.get("service", 0)
        if service_count:
            paragraphs.append(f"{service_count} service visit(s) are on record.")

        return {
            "source": self.id,
            "vin": params.get("vin"),
            "narrative": "\n\n".join(paragraphs),
            "eventCounts": dict(counts),
            "metadata": {
                "generatedAt": iso_now(),
                "sourceType": "events",
                "totalEvents": len(ordered),
                "dateRange": ranges["dateRange"],
                "mileageRange": ranges["mileageRange"],
            },
        }

    @staticmethod
    def _overview(total: int, ranges: dict[str, Any]) -> str:
        if not total:
            return "No vehicle history events were found."
        earliest = ranges["dateRange"]["earliest"]
        latest = ranges["dateRange"]["latest"]
        text = f"The vehicle history contains {total} event(s)"
        if earliest and latest:
            text += f" between {earliest} and {latest}"
        highest = ranges["mileageRange"]["highest"]
        if highest:
            text += f", with the highest recorded odometer reading at {highest:,} miles"
        return text + "."


def build_narrative_service() -> ServiceBase:
    service = ServiceBase(
        id="narrative",
        name="History Narrative",
        description="Generate a narrative analysis from vehicle history events",
    )
    service.register_method(TimelineSummaryMethod())
    return service
