"""FastAPI entry point for the Dipstik capability lab."""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from dipstik.api_v1.executions import router as executions_router
from dipstik.api_v1.modules import router as modules_router
from dipstik.core.config import get_settings
from dipstik.core.container import get_container
from dipstik.core.framework.exceptions import (
    CapabilityLookupError,
    ConfigurationError,
    UnknownMethodError,
)
from dipstik.core.logging_config import configure_logging, trace_id_ctx
from dipstik.core.models.db_helper import db_helper

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

TRACE_HEADER = "X-Trace-Id"


async def ping_database() -> bool:
    """True when the execution log database answers ``SELECT 1``."""
    try:
        async with db_helper.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database ping failed: %s", e)
        return False
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Prepare the execution log store and build the module registry.

    SQLite databases get their tables created in place; other backends are
    expected to be migrated with Alembic beforehand.
    """
    logger.info("Starting %s %s", settings.app_name, settings.app_version)

    if settings.database.is_sqlite:
        await db_helper.create_tables()
    if not await ping_database():
        raise RuntimeError("Execution log database is unreachable")

    registry = get_container().module_registry()
    for module in registry.get_all_modules():
        logger.info("Module %s ready with services: %s", module.id, ", ".join(module.services))

    yield

    logger.info("Shutting down %s", settings.app_name)
    await db_helper.dispose()


def _with_trace(request: Request, response: JSONResponse) -> JSONResponse:
    trace_id = getattr(request.state, "trace_id", None)
    if trace_id:
        response.headers[TRACE_HEADER] = trace_id
    return response


def _failure(request: Request, status_code: int, message: str) -> JSONResponse:
    return _with_trace(
        request,
        JSONResponse(status_code=status_code, content={"success": False, "error": message}),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map framework errors onto HTTP status codes."""

    # Registered apart from CapabilityLookupError: handlers resolve by MRO.
    @app.exception_handler(UnknownMethodError)
    @app.exception_handler(ConfigurationError)
    async def bad_configuration(request: Request, exc: Exception):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return _failure(request, 400, str(exc))

    @app.exception_handler(CapabilityLookupError)
    async def unknown_capability(request: Request, exc: CapabilityLookupError):
        logger.info("Not found %s %s: %s", request.method, request.url.path, exc)
        return _failure(request, 404, str(exc))

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _with_trace(
            request,
            JSONResponse(
                status_code=500,
                content={"detail": "Internal server error", "type": "internal_error"},
            ),
        )


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Compose, execute and compare vehicle inspection capabilities",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[TRACE_HEADER],
    )

    @app.middleware("http")
    async def attach_trace_id(request: Request, call_next):
        """Reuse the caller's trace id or mint one, and echo it back."""
        trace_id = request.headers.get(TRACE_HEADER) or str(uuid.uuid4())
        request.state.trace_id = trace_id
        token = trace_id_ctx.set(trace_id)
        try:
            response = await call_next(request)
        finally:
            trace_id_ctx.reset(token)
        response.headers[TRACE_HEADER] = trace_id
        return response

    app.include_router(modules_router, prefix="/api/v1")
    app.include_router(executions_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health():
        """Database reachability plus the number of registered modules."""
        db_status = "healthy" if await ping_database() else "unhealthy"
        registry = get_container().module_registry()
        return {
            "status": "healthy" if db_status == "healthy" else "degraded",
            "services": {"database": db_status},
            "modules": len(registry.modules),
        }

    register_exception_handlers(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dipstik.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
