"""Execution log endpoints."""

import logging
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dipstik.api_v1.schemas import ExecutionLogListResponse, ExecutionLogResponse
from dipstik.core.dependencies import get_execution_log_repository
from dipstik.core.models.execution_log import ExecutionKind
from dipstik.core.repositories.execution_log_repository import ExecutionLogRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/executions", tags=["executions"])


@router.get("", response_model=ExecutionLogListResponse)
@router.get("/", response_model=ExecutionLogListResponse)
async def list_executions(
    repo: Annotated[ExecutionLogRepository, Depends(get_execution_log_repository)],
    page: Annotated[int, Query(ge=1)] = 1,
    size: Annotated[int, Query(ge=1, le=200)] = 50,
    module_id: Optional[str] = None,
    kind: Optional[ExecutionKind] = None,
):
    """
    List execution log entries with pagination.

    Args:
        page: Page number (1-indexed)
        size: Page size
        module_id: Only entries for this module
        kind: Only entries of this kind

    Returns:
        Paginated list of log entries, newest first
    """
    offset = (page - 1) * size
    kind_value = kind.value if kind else None

    items = await repo.search(module_id=module_id, kind=kind_value, limit=size, offset=offset)
    total = await repo.count_filtered(module_id=module_id, kind=kind_value)

    return ExecutionLogListResponse(
        items=items,
        total=total,
        page=page,
        size=size,
    )


@router.get("/{execution_id}", response_model=ExecutionLogResponse)
async def get_execution(
    execution_id: UUID,
    repo: Annotated[ExecutionLogRepository, Depends(get_execution_log_repository)],
):
    """
    Get one execution log entry.

    Raises:
        404: If the entry does not exist
    """
    entry = await repo.get_by_id(execution_id)
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Execution {execution_id} not found",
        )
    return entry
