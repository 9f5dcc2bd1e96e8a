"""Base class for concrete method implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class MethodBase(ABC):
    """
    Convenience base for methods.

    Subclasses set ``id``, ``name`` and ``description`` as class attributes and
    implement :meth:`execute`. Any object with those attributes and an async
    ``execute`` can be registered on a service; inheriting from this class is
    optional.
    """

    id: str = ""
    name: str = ""
    description: str = ""

    def get_info(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "description": self.description}

    @abstractmethod
    async def execute(self, params: dict[str, Any]) -> Any:
        """Run the method against ``params`` and return its result."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id!r})>"
