"""Execution log model: audit trail of module runs, comparisons and test runs."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, Float, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from dipstik.core.models.base import Base


class ExecutionKind(str, Enum):
    EXECUTE = "execute"
    COMPARE = "compare"
    TEST = "test"


class ExecutionLog(Base):
    """One row per framework call made through the API or scripts."""

    __tablename__ = "execution_logs"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    kind: Mapped[str] = mapped_column(
        String(20), nullable=False, index=True, comment="execute, compare or test"
    )
    module_id: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True, comment="Module identifier"
    )
    service_id: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, comment="Targeted service identifier"
    )
    method_ids: Mapped[Optional[list[str]]] = mapped_column(
        JSON, nullable=True, comment="Compared method identifiers"
    )
    params: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON, nullable=True, comment="Input parameters"
    )
    result: Mapped[Optional[Any]] = mapped_column(
        JSON, nullable=True, comment="Result payload"
    )
    success: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True, comment="Call outcome"
    )
    error_message: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Error message"
    )
    duration_ms: Mapped[Optional[float]] = mapped_column(
        Float, nullable=True, comment="Wall-clock duration in milliseconds"
    )
    trace_id: Mapped[Optional[str]] = mapped_column(
        String(64), nullable=True, index=True, comment="Request trace id"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True, server_default=func.now()
    )

    def __repr__(self) -> str:
        return (
            f"<ExecutionLog(id={self.id}, kind={self.kind}, "
            f"module_id={self.module_id}, success={self.success})>"
        )
