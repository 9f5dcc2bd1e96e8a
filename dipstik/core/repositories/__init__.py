"""Repository layer for data access."""

from dipstik.core.repositories.base import BaseRepository
from dipstik.core.repositories.execution_log_repository import ExecutionLogRepository

__all__ = [
    "BaseRepository",
    "ExecutionLogRepository",
]
