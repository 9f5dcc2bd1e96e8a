"""Logging setup shared by the API, the module framework and scripts."""

from __future__ import annotations

import contextvars
import logging
from logging.config import dictConfig
from typing import Optional

# Set per request by the trace-id middleware
trace_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar("trace_id", default=None)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Longest matching prefix wins; the rest of the logger name is kept.
CHANNEL_PREFIXES = {
    "dipstik.core.framework": "framework",
    "dipstik.core.modules": "modules",
    "dipstik.core.use_cases": "use_cases",
    "dipstik.core.services": "services",
    "dipstik.api_v1": "api",
    "dipstik": "dipstik",
    "uvicorn.access": "http",
    "uvicorn": "uvicorn",
    "sqlalchemy.engine": "sql",
}

# Third-party loggers kept quiet unless running at DEBUG.
_LIBRARY_LEVELS = {
    "sqlalchemy": "WARNING",
    "aiosqlite": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
}

_FORMAT = "%(asctime)s | %(levelname)-8s | %(channel)-28s | %(message)s"
_TRACE_FORMAT = "%(asctime)s | %(levelname)-8s | %(channel)-28s | [%(trace_id)s] | %(message)s"


def channel_for(logger_name: str) -> str:
    """Short channel label for ``logger_name``, e.g. ``framework.registry``."""
    for prefix in sorted(CHANNEL_PREFIXES, key=len, reverse=True):
        if logger_name == prefix or logger_name.startswith(prefix + "."):
            rest = logger_name[len(prefix):].lstrip(".")
            alias = CHANNEL_PREFIXES[prefix]
            return f"{alias}.{rest}" if rest else alias
    return logger_name


class ChannelAliasFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.channel = channel_for(record.name)
        return True


class TraceIdFilter(logging.Filter):
    """Attach the current request's trace id, or ``-`` outside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = trace_id_ctx.get() or "-"
        return True


def resolve_log_level(level: Optional[str]) -> str:
    candidate = (level or "").strip().upper()
    return candidate if candidate in LOG_LEVELS else "INFO"


def build_logging_config(level: str) -> dict:
    """dictConfig payload for ``level`` (already resolved)."""
    debug = level == "DEBUG"
    access_level = "INFO" if debug else level

    loggers: dict[str, dict] = {
        "": {"handlers": ["console"], "level": level},
        "uvicorn": {"handlers": ["console"], "level": level, "propagate": False},
        "uvicorn.error": {"handlers": ["console"], "level": level, "propagate": False},
        "uvicorn.access": {"handlers": ["access"], "level": access_level, "propagate": False},
    }
    for name, quiet_level in _LIBRARY_LEVELS.items():
        loggers[name] = {
            "handlers": ["console"],
            "level": "INFO" if debug and name.startswith("http") else quiet_level,
            "propagate": False,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "channel": {"()": ChannelAliasFilter},
            "trace": {"()": TraceIdFilter},
        },
        "formatters": {
            "plain": {"format": _FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            "traced": {"format": _TRACE_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "traced",
                "level": level,
                "stream": "ext://sys.stdout",
                "filters": ["channel", "trace"],
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "traced" if debug else "plain",
                "level": access_level,
                "stream": "ext://sys.stdout",
                "filters": ["channel", "trace"],
            },
        },
        "loggers": loggers,
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the logging config; unknown levels fall back to INFO."""
    resolved = resolve_log_level(level)
    dictConfig(build_logging_config(resolved))
    logging.getLogger(__name__).debug("Logging configured with level %s", resolved)
