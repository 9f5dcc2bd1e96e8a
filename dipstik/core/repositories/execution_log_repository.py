"""Repository for ExecutionLog model."""

import logging
from typing import Optional

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dipstik.core.models.execution_log import ExecutionLog
from dipstik.core.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ExecutionLogRepository(BaseRepository[ExecutionLog]):
    """Repository for execution log operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(ExecutionLog, session)

    @staticmethod
    def _filtered(
        statement: Select,
        module_id: Optional[str] = None,
        kind: Optional[str] = None,
    ) -> Select:
        if module_id:
            statement = statement.where(ExecutionLog.module_id == module_id)
        if kind:
            statement = statement.where(ExecutionLog.kind == kind)
        return statement

    async def search(
        self,
        module_id: Optional[str] = None,
        kind: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[ExecutionLog]:
        """
        Get log entries, newest first.

        Args:
            module_id: Only entries for this module
            kind: Only entries of this kind (execute, compare, test)
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of ExecutionLog instances
        """
        statement = self._filtered(select(ExecutionLog), module_id, kind)
        result = await self.session.execute(
            statement.order_by(ExecutionLog.created_at.desc()).limit(limit).offset(offset)
        )
        return list(result.scalars().all())

    async def count_filtered(
        self,
        module_id: Optional[str] = None,
        kind: Optional[str] = None,
    ) -> int:
        statement = self._filtered(select(func.count()).select_from(ExecutionLog), module_id, kind)
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def get_failed(self, limit: int = 100, offset: int = 0) -> list[ExecutionLog]:
        result = await self.session.execute(
            select(ExecutionLog)
            .where(ExecutionLog.success.is_(False))
            .order_by(ExecutionLog.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())
