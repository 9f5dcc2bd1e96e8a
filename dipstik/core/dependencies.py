"""
FastAPI providers that wire request handlers to the DI container.

The module registry comes from the container and is shared by every request.
Sessions, repositories, the execution logger and use cases are built per
request around one ``AsyncSession``.
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dipstik.core.config import Settings, get_settings
from dipstik.core.container import Container, get_container
from dipstik.core.framework.registry import ModuleRegistry
from dipstik.core.models.db_helper import db_helper
from dipstik.core.repositories.execution_log_repository import ExecutionLogRepository
from dipstik.core.services.execution_logger import ExecutionLoggingService
from dipstik.core.use_cases.compare_methods_use_case import CompareMethodsUseCase
from dipstik.core.use_cases.execute_module_use_case import ExecuteModuleUseCase
from dipstik.core.use_cases.run_module_tests_use_case import RunModuleTestsUseCase

logger = logging.getLogger(__name__)


# ============================================================================
# Database Dependencies
# ============================================================================


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Per-request session for the execution log store.

    Yields:
        AsyncSession for database operations
    """
    async with db_helper.session_factory() as session:
        yield session


# ============================================================================
# Framework Dependencies
# ============================================================================


def get_registry(
    container: Annotated[Container, Depends(get_container)]
) -> ModuleRegistry:
    """Get the process-wide ModuleRegistry."""
    return container.module_registry()


# ============================================================================
# Repository Dependencies
# ============================================================================


def get_execution_log_repository(
    session: Annotated[AsyncSession, Depends(get_session)]
) -> ExecutionLogRepository:
    """Get ExecutionLogRepository instance."""
    return ExecutionLogRepository(session)


# ============================================================================
# Service Dependencies
# ============================================================================


def get_execution_logger(
    repo: Annotated[ExecutionLogRepository, Depends(get_execution_log_repository)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ExecutionLoggingService:
    """Provide ExecutionLoggingService honouring EXECUTION_LOG_ENABLED."""
    return ExecutionLoggingService(repo, enabled=settings.framework.execution_log_enabled)


# ============================================================================
# Use Case Dependencies
# ============================================================================


def get_execute_module_use_case(
    registry: Annotated[ModuleRegistry, Depends(get_registry)],
    execution_logger: Annotated[ExecutionLoggingService, Depends(get_execution_logger)],
) -> ExecuteModuleUseCase:
    return ExecuteModuleUseCase(registry=registry, execution_logger=execution_logger)


def get_compare_methods_use_case(
    registry: Annotated[ModuleRegistry, Depends(get_registry)],
    execution_logger: Annotated[ExecutionLoggingService, Depends(get_execution_logger)],
) -> CompareMethodsUseCase:
    return CompareMethodsUseCase(registry=registry, execution_logger=execution_logger)


def get_run_module_tests_use_case(
    registry: Annotated[ModuleRegistry, Depends(get_registry)],
    execution_logger: Annotated[ExecutionLoggingService, Depends(get_execution_logger)],
) -> RunModuleTestsUseCase:
    return RunModuleTestsUseCase(registry=registry, execution_logger=execution_logger)
