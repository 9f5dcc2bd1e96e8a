"""Use cases for business logic orchestration."""

from dipstik.core.use_cases.compare_methods_use_case import CompareMethodsUseCase
from dipstik.core.use_cases.execute_module_use_case import ExecuteModuleUseCase
from dipstik.core.use_cases.run_module_tests_use_case import RunModuleTestsUseCase

__all__ = [
    "CompareMethodsUseCase",
    "ExecuteModuleUseCase",
    "RunModuleTestsUseCase",
]
