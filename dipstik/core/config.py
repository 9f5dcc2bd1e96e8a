"""Environment configuration for the Dipstik capability lab."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

load_dotenv()

N = TypeVar("N", int, float)


def _bool_env(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _number_env(name: str, default: N, cast: Callable[[str], N]) -> N:
    """Parse ``name`` with ``cast``; unset or malformed values give ``default``."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return cast(value.strip())
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    return _number_env(name, default, int)


def _float_env(name: str, default: float) -> float:
    return _number_env(name, default, float)


def _list_env(name: str, default: str) -> list[str]:
    raw = os.getenv(name) or default
    return [item.strip() for item in raw.split(",") if item.strip()]


class AppSettings(BaseModel):
    name: str = Field(
        default_factory=lambda: os.getenv("APP_NAME", "Dipstik Capability Lab").strip()
        or "Dipstik Capability Lab"
    )
    version: str = Field(
        default_factory=lambda: os.getenv("APP_VERSION", "0.1.0").strip() or "0.1.0"
    )
    debug: bool = Field(default_factory=lambda: _bool_env("DEBUG", False))
    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").strip().upper()
    )

    @model_validator(mode="after")
    def _validate(self) -> "AppSettings":
        if self.log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(
                "LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )
        return self


class ServerSettings(BaseModel):
    host: str = Field(
        default_factory=lambda: os.getenv("HOST", "0.0.0.0").strip() or "0.0.0.0"
    )
    port: int = Field(default_factory=lambda: _int_env("PORT", 5001))
    cors_origins: list[str] = Field(
        default_factory=lambda: _list_env("CORS_ORIGIN", "*")
    )


class DatabaseSettings(BaseModel):
    url: str = Field(
        default_factory=lambda: os.getenv(
            "DATABASE_URL", "sqlite+aiosqlite:///./data/execution_log.db"
        ).strip()
    )
    pool_size: int = Field(default_factory=lambda: _int_env("DATABASE_POOL_SIZE", 20))
    max_overflow: int = Field(
        default_factory=lambda: _int_env("DATABASE_MAX_OVERFLOW", 30)
    )
    echo: bool = Field(default_factory=lambda: _bool_env("DATABASE_ECHO", False))

    @model_validator(mode="after")
    def _validate(self) -> "DatabaseSettings":
        if not self.url:
            raise ValueError("DATABASE_URL environment variable must be set.")
        if not self.url.startswith(("postgresql+asyncpg://", "sqlite+aiosqlite://")):
            raise ValueError(
                "DATABASE_URL must start with postgresql+asyncpg:// or sqlite+aiosqlite://"
            )
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class FrameworkSettings(BaseModel):
    """Behaviour switches for module execution and method comparison."""

    isolate_failures: bool = Field(
        default_factory=lambda: _bool_env("MODULE_ISOLATE_FAILURES", True)
    )
    symmetric_structure: bool = Field(
        default_factory=lambda: _bool_env("COMPARISON_SYMMETRIC_STRUCTURE", False)
    )
    execution_log_enabled: bool = Field(
        default_factory=lambda: _bool_env("EXECUTION_LOG_ENABLED", True)
    )


class VehicleDatabasesSettings(BaseModel):
    api_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("VEHICLE_DATABASES_API_KEY", "").strip() or None
    )
    api_url: str = Field(
        default_factory=lambda: os.getenv(
            "VEHICLE_DATABASES_API_URL", "https://api.vehicledatabases.com/v1"
        ).strip()
    )
    timeout: float = Field(
        default_factory=lambda: _float_env("VEHICLE_DATABASES_TIMEOUT", 30.0)
    )
    dev_mode: bool = Field(default_factory=lambda: _bool_env("DEV_MODE", False))


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    framework: FrameworkSettings = Field(default_factory=FrameworkSettings)
    vehicle_databases: VehicleDatabasesSettings = Field(
        default_factory=VehicleDatabasesSettings
    )

    model_config = dict(extra="ignore")

    # Flat accessors used by main.py and scripts
    @property
    def app_name(self) -> str:
        return self.app.name

    @property
    def app_version(self) -> str:
        return self.app.version

    @property
    def debug(self) -> bool:
        return self.app.debug

    @property
    def log_level(self) -> str:
        return self.app.log_level

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def database_url(self) -> str:
        return self.database.url


@lru_cache
def get_settings() -> Settings:
    return Settings()
