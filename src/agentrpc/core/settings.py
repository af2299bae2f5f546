"""
Central configuration for agentrpc.

A single typed configuration object read from environment variables
(12-factor style) using pydantic-settings.

Usage:

    from agentrpc.core.settings import get_settings

    settings = get_settings()
    if settings.framing is FramingPolicy.LAST_NUL:
        ...
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..protocol.enums import FramingPolicy

REQUEST_PARAM = "_request"


class AgentSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AGENTRPC_", extra="ignore")

    log_level: str = Field(
        default="INFO",
        description="Log level for the agentrpc loggers (DEBUG/INFO/WARNING/ERROR).",
    )
    framing: FramingPolicy = Field(
        default=FramingPolicy.SPLIT,
        description="TCP framing: 'split' (one dispatch per NUL) or 'last_nul' (legacy, one per chunk).",
    )
    read_size: int = Field(
        default=64 * 1024,
        gt=0,
        description="Maximum bytes read from a TCP stream per reactor wakeup.",
    )
    fs_block_size: int = Field(
        default=512 * 1024,
        gt=0,
        description="Bytes returned by a single fs.read call.",
    )
    default_host: str = Field(
        default="0.0.0.0",
        description="Bind host used by --http/--listen when none is given.",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        v = (v or "INFO").upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return "INFO"
        return v


@lru_cache(maxsize=1)
def get_settings() -> AgentSettings:
    """
    Cached accessor for AgentSettings.
    """
    return AgentSettings()
