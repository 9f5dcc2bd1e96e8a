"""
Base service class.

A service is one aspect of a module (e.g. "events" of "vehicle-history"). It
owns several methods, each a different way of producing the same kind of
result, and executes exactly one of them per call.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from dipstik.core.framework.exceptions import MissingMethodIdError, UnknownMethodError
from dipstik.core.interfaces import Method

logger = logging.getLogger(__name__)


class ServiceBase:
    """A named aspect of a module, executable through one of its methods."""

    def __init__(self, id: str, name: str, description: str = ""):
        self.id = id
        self.name = name
        self.description = description
        self.methods: dict[str, Method] = {}

    def register_method(self, method: Method) -> None:
        """Insert or replace ``method`` keyed by its id."""
        if not getattr(method, "id", None):
            raise ValueError(f"Cannot register a method without an id on service '{self.id}'")
        self.methods[method.id] = method
        logger.debug("Registered method %s on service %s", method.id, self.id)

    def get_method(self, method_id: str) -> Optional[Method]:
        return self.methods.get(method_id)

    def get_available_methods(self) -> list[dict[str, str]]:
        """Snapshot of registered methods, in registration order."""
        return [
            {"id": m.id, "name": m.name, "description": m.description}
            for m in self.methods.values()
        ]

    async def execute(self, params: dict[str, Any]) -> Any:
        """
        Execute the service with the method named by ``params["methodId"]``.

        The remaining params are forwarded to the method untouched, and the
        method's result or exception is returned/propagated as is.

        Raises:
            MissingMethodIdError: ``methodId`` absent or empty
            UnknownMethodError: no method registered under ``methodId``
        """
        method_params = dict(params)
        method_id = method_params.pop("methodId", None)

        if not method_id:
            raise MissingMethodIdError(self.id)

        method = self.methods.get(method_id)
        if method is None:
            raise UnknownMethodError(method_id, self.id)

        logger.debug("Executing service %s with method %s", self.id, method_id)
        return await method.execute(method_params)

    def __repr__(self) -> str:
        return f"<ServiceBase(id={self.id!r}, methods={list(self.methods)})>"
