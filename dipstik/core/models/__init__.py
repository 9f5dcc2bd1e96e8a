"""Database models for the Dipstik capability lab."""

from dipstik.core.models.base import Base
from dipstik.core.models.execution_log import ExecutionKind, ExecutionLog

__all__ = [
    "Base",
    "ExecutionKind",
    "ExecutionLog",
]
