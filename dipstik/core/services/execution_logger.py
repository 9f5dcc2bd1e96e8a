"""Persist an audit row for every module execution, comparison and test run."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from dipstik.core.logging_config import trace_id_ctx
from dipstik.core.models.execution_log import ExecutionKind, ExecutionLog
from dipstik.core.repositories.execution_log_repository import ExecutionLogRepository

logger = logging.getLogger(__name__)


def _jsonable(value: Any) -> Any:
    """Coerce arbitrary method output into something a JSON column accepts."""
    if value is None:
        return None
    return json.loads(json.dumps(value, default=str))


class ExecutionLoggingService:
    """
    Write execution log entries.

    Persistence errors are logged and not re-raised.
    """

    def __init__(self, repository: ExecutionLogRepository, enabled: bool = True):
        self.repository = repository
        self.enabled = enabled

    async def record(
        self,
        kind: ExecutionKind | str,
        module_id: str,
        *,
        success: bool,
        params: Optional[dict[str, Any]] = None,
        result: Any = None,
        error_message: Optional[str] = None,
        duration_ms: Optional[float] = None,
        service_id: Optional[str] = None,
        method_ids: Optional[Iterable[str]] = None,
    ) -> Optional[UUID]:
        """Store one entry and return its id, or None when disabled or on failure."""
        if not self.enabled:
            return None

        kind_value = kind.value if isinstance(kind, ExecutionKind) else str(kind)
        entry = ExecutionLog(
            kind=kind_value,
            module_id=module_id,
            service_id=service_id,
            method_ids=list(method_ids) if method_ids is not None else None,
            params=_jsonable(params),
            result=_jsonable(result),
            success=success,
            error_message=error_message,
            duration_ms=duration_ms,
            trace_id=trace_id_ctx.get(),
        )

        try:
            await self.repository.create(entry)
            await self.repository.session.commit()
        except SQLAlchemyError as exc:
            logger.error(
                "Failed to store %s log for module %s: %s", kind_value, module_id, exc
            )
            await self.repository.session.rollback()
            return None

        logger.debug(
            "Stored %s log %s for module %s (success=%s)",
            kind_value,
            entry.id,
            module_id,
            success,
        )
        return entry.id
