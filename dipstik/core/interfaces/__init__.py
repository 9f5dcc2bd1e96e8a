"""
Protocols shared by the framework and the surrounding application.

Concrete methods are held behind these protocols; the framework never
inspects their concrete types.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Method(Protocol):
    """A swappable implementation strategy for a service."""

    id: str
    name: str
    description: str

    async def execute(self, params: dict[str, Any]) -> Any:
        ...


__all__ = ["Method"]
