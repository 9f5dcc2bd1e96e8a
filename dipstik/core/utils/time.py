"""Time helpers."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def iso_now() -> str:
    return now_utc().isoformat()
