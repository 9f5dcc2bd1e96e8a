"""
Dependency Injection Container.

Holds the process-wide objects: settings and the module registry. Request
scoped objects (sessions, repositories, use cases) are built by FastAPI
dependencies in ``dipstik.core.dependencies``.
"""

from dependency_injector import containers, providers

from dipstik.core.config import get_settings
from dipstik.core.framework.test_runner import TestRunner
from dipstik.core.modules import build_module_registry


class Container(containers.DeclarativeContainer):
    """
    Application DI container.

    The registry is a singleton built once from settings. It receives the
    ``test_runner`` factory itself, so every comparison gets a new runner.
    """

    settings = providers.Singleton(get_settings)

    test_runner = providers.Factory(
        TestRunner,
        symmetric_structure=settings.provided.framework.symmetric_structure,
    )

    module_registry = providers.Singleton(
        build_module_registry,
        settings=settings,
        test_runner_factory=test_runner.provider,
    )


container = Container()


def get_container() -> Container:
    """
    Get the global container instance.

    Used as a FastAPI dependency:
        container: Container = Depends(get_container)
    """
    return container


def reset_container():
    """Drop cached singletons so the next access rebuilds settings and the registry."""
    container.reset_singletons()
