"""Pydantic schemas for the Dipstik HTTP API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Module requests
# =============================================================================


class CompareRequest(BaseModel):
    """
    Method comparison request.

    Any key besides ``serviceId`` and ``methodIds`` is forwarded to every
    compared method as a param.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    service_id: Optional[str] = Field(None, alias="serviceId", description="Service to compare")
    method_ids: List[str] = Field(
        default_factory=list, alias="methodIds", description="Method ids, in run order"
    )

    @property
    def params(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class ModuleTestRequest(BaseModel):
    """Module regression run; omitted ``testCases`` means the module's built-in cases."""

    model_config = ConfigDict(populate_by_name=True)

    test_cases: Optional[List[dict[str, Any]]] = Field(
        None, alias="testCases", description="Cases of the form {name, input, expected?}"
    )


# =============================================================================
# Execution log responses
# =============================================================================


class ExecutionLogResponse(BaseModel):
    """Execution log entry."""

    id: UUID = Field(..., description="Log entry ID")
    kind: str = Field(..., description="execute, compare or test")
    module_id: str = Field(..., description="Module identifier")
    service_id: Optional[str] = Field(None, description="Targeted service identifier")
    method_ids: Optional[List[str]] = Field(None, description="Compared method identifiers")
    params: Optional[dict[str, Any]] = Field(None, description="Input parameters")
    result: Optional[Any] = Field(None, description="Result payload")
    success: bool = Field(..., description="Call outcome")
    error_message: Optional[str] = Field(None, description="Error message")
    duration_ms: Optional[float] = Field(None, description="Duration in milliseconds")
    trace_id: Optional[str] = Field(None, description="Request trace id")
    created_at: datetime = Field(..., description="Created timestamp")

    model_config = ConfigDict(from_attributes=True)


class ExecutionLogListResponse(BaseModel):
    """Execution log list response schema."""

    items: List[ExecutionLogResponse] = Field(..., description="Log entries, newest first")
    total: int = Field(..., description="Total count matching the filters")
    page: int = Field(..., description="Current page")
    size: int = Field(..., description="Page size")


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = Field(False, description="Always false")
    error: str = Field(..., description="Error message")
