"""Errors raised by the module/service/method framework.

Lookup and configuration errors are raised before any method is awaited and
always carry the offending identifiers. Errors raised by a method itself are
never wrapped.
"""


class FrameworkError(Exception):
    """Base class for errors raised by the framework itself."""


class CapabilityLookupError(FrameworkError, LookupError):
    """A module, service or method identifier did not resolve."""


class UnknownModuleError(CapabilityLookupError):
    def __init__(self, module_id: str):
        self.module_id = module_id
        super().__init__(f"Module '{module_id}' not found")


class UnknownServiceError(CapabilityLookupError):
    def __init__(self, service_id: str, module_id: str | None = None):
        self.service_id = service_id
        self.module_id = module_id
        if module_id is None:
            message = f"Service '{service_id}' not found"
        else:
            message = f"Service '{service_id}' not found in module '{module_id}'"
        super().__init__(message)


class UnknownMethodError(CapabilityLookupError):
    def __init__(self, method_id: str, service_id: str):
        self.method_id = method_id
        self.service_id = service_id
        super().__init__(f"Method '{method_id}' not found in service '{service_id}'")


class ConfigurationError(FrameworkError, ValueError):
    """The caller did not supply what the framework needs to dispatch."""


class MissingMethodIdError(ConfigurationError):
    def __init__(self, service_id: str):
        self.service_id = service_id
        super().__init__(f"methodId is required for service '{service_id}'")
