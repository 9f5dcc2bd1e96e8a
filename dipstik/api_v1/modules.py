"""Module introspection, execution, comparison and test endpoints."""

import logging
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from dipstik.api_v1.schemas import CompareRequest, ErrorResponse, ModuleTestRequest
from dipstik.core.dependencies import (
    get_compare_methods_use_case,
    get_execute_module_use_case,
    get_registry,
    get_run_module_tests_use_case,
)
from dipstik.core.framework.registry import ModuleRegistry
from dipstik.core.use_cases.compare_methods_use_case import CompareMethodsUseCase
from dipstik.core.use_cases.execute_module_use_case import ExecuteModuleUseCase
from dipstik.core.use_cases.run_module_tests_use_case import RunModuleTestsUseCase

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/modules",
    tags=["modules"],
    responses={404: {"model": ErrorResponse}},
)


@router.get("")
@router.get("/")
async def list_modules(registry: Annotated[ModuleRegistry, Depends(get_registry)]):
    """List every registered module with its services and methods."""
    return {"success": True, "modules": registry.get_all_modules_info()}


@router.get("/{module_id}")
async def get_module(
    module_id: str,
    registry: Annotated[ModuleRegistry, Depends(get_registry)],
):
    registry.require_module(module_id)
    return {"success": True, "module": registry.get_module_info(module_id)}


@router.get("/{module_id}/services")
async def list_services(
    module_id: str,
    registry: Annotated[ModuleRegistry, Depends(get_registry)],
):
    module = registry.require_module(module_id)
    return {"success": True, "services": module.get_available_services()}


@router.get("/{module_id}/services/{service_id}/methods")
async def list_methods(
    module_id: str,
    service_id: str,
    registry: Annotated[ModuleRegistry, Depends(get_registry)],
):
    service = registry.require_service(module_id, service_id)
    return {"success": True, "methods": service.get_available_methods()}


@router.post("/{module_id}/execute", responses={400: {"model": ErrorResponse}})
async def execute_module(
    module_id: str,
    use_case: Annotated[ExecuteModuleUseCase, Depends(get_execute_module_use_case)],
    params: Annotated[Optional[dict[str, Any]], Body()] = None,
):
    """
    Execute a module.

    The body holds module params plus optional ``serviceConfig`` (service id
    to ``{"methodId": ...}``) and ``serviceId`` (run one service only).

    Raises:
        400: Params rejected by the module's validation
        404: Unknown module or targeted service
    """
    result = await use_case.execute(module_id, params or {})
    if not result["success"]:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=result)
    return result


@router.post("/{module_id}/compare", responses={400: {"model": ErrorResponse}})
async def compare_methods(
    module_id: str,
    request: CompareRequest,
    use_case: Annotated[CompareMethodsUseCase, Depends(get_compare_methods_use_case)],
):
    """
    Run several methods of one service with identical params.

    Raises:
        400: Missing serviceId or fewer than two methodIds
        404: Unknown module or service
    """
    return await use_case.execute(
        module_id,
        request.service_id,
        request.method_ids,
        request.params,
    )


@router.post("/{module_id}/test")
async def run_module_tests(
    module_id: str,
    use_case: Annotated[RunModuleTestsUseCase, Depends(get_run_module_tests_use_case)],
    request: Optional[ModuleTestRequest] = None,
):
    """Run the given test cases, or the module's built-in ones when none are sent."""
    test_cases = request.test_cases if request is not None else None
    return await use_case.execute(module_id, test_cases)
