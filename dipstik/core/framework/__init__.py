"""Capability composition framework: modules, services, methods."""

from dipstik.core.framework.exceptions import (
    CapabilityLookupError,
    ConfigurationError,
    FrameworkError,
    MissingMethodIdError,
    UnknownMethodError,
    UnknownModuleError,
    UnknownServiceError,
)
from dipstik.core.framework.method import MethodBase
from dipstik.core.framework.module_base import ModuleBase
from dipstik.core.framework.registry import ModuleRegistry
from dipstik.core.framework.service_base import ServiceBase
from dipstik.core.framework.test_runner import ModuleTestRunner, TestRunner
from dipstik.core.framework.validator import Validator

__all__ = [
    "CapabilityLookupError",
    "ConfigurationError",
    "FrameworkError",
    "MethodBase",
    "MissingMethodIdError",
    "ModuleBase",
    "ModuleRegistry",
    "ModuleTestRunner",
    "ServiceBase",
    "TestRunner",
    "UnknownMethodError",
    "UnknownModuleError",
    "UnknownServiceError",
    "Validator",
]
