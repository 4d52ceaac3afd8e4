"""Application settings using pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from urban_dict_core.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_TTL_MS,
)


class Settings(BaseSettings):
    """Central configuration for urban-dict-cache."""

    model_config = SettingsConfigDict(env_prefix="UD_", env_file=".env")

    # --- Upstream ---
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Root URL of the definition API (point at a proxy to reroute)",
    )
    http_timeout_seconds: float = Field(
        default=DEFAULT_HTTP_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout for upstream requests when the client owns its HTTP session",
    )

    # --- Cache ---
    cache_backend: Literal["redis", "disk", "memory"] = Field(
        default="redis",
        description="Cache store: 'redis' for shared, 'disk' for local persistent, 'memory' for tests",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL (used when cache_backend=redis)",
    )
    cache_dir: Path = Field(
        default=Path("./.cache/urban_dict"),
        description="Directory for diskcache persistent cache (used when cache_backend=disk)",
    )
    cache_ttl_ms: int = Field(
        default=DEFAULT_TTL_MS,
        description="Time a cached response stays valid, in milliseconds",
    )
    instance_id: str = Field(
        default="",
        description="Namespace prefix for this client's cache keys",
    )
    single_flight: bool = Field(
        default=False,
        description="Share one upstream fetch between concurrent identical cache misses",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for log shipping",
    )

    @field_validator("cache_ttl_ms")
    @classmethod
    def validate_ttl(cls, value: int) -> int:
        """Reject non-positive TTLs."""
        if value <= 0:
            msg = "cache_ttl_ms must be positive"
            raise ValueError(msg)
        return value
