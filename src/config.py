"""Configuration loading and validation.

This module is responsible for:

- Loading `.env` into the process environment (without overriding existing vars).
- Converting environment variables into strongly-typed Pydantic models.
- Validating fields and providing actionable error messages.
"""

import logging
import os
from typing import TypeVar

import dotenv
from pydantic import BaseModel, Field, field_validator

_T = TypeVar("_T", int, float)

# Reporter falls back to a no-op sink after five minutes without one.
DEFAULT_TIMEOUT_S = 5 * 60.0


def _get_optional_env(name: str) -> str | None:
    """Read an optional env var, treating empty and placeholder values as unset."""
    value = os.getenv(name, "").strip()
    if not value:
        return None
    if value.startswith("your_") and value.endswith("_here"):
        return None
    return value


def _get_env_str(name: str, default: str) -> str:
    """Read a string env var with a default."""
    return _get_optional_env(name) or default


def _get_env_number(name: str, default: _T, cast: type[_T]) -> _T:
    """Read an int/float env var with a default."""
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a {cast.__name__}. Got: {raw!r}") from exc


class ReporterConfig(BaseModel):
    """Configuration for the reporter proxy."""

    package_name: str = Field(default="reporter-proxy", description="Distribution whose version tags every signal")
    package_version: str | None = Field(default=None, description="Explicit version, skips metadata lookup")
    version_key: str = Field(default="package_version", description="Key the version is stored under")
    timeout_s: float = Field(default=DEFAULT_TIMEOUT_S, description="Seconds before falling back to a no-op sink")
    log_level: str = Field(default="INFO", description="Root log level for the demo entrypoint")

    @field_validator("package_name", "version_key")
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty names."""
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("timeout_s")
    def validate_timeout(cls, v: float) -> float:
        """Timeout must be positive."""
        if v <= 0:
            raise ValueError(f"REPORTER_TIMEOUT_S must be > 0. Got: {v}")
        return v

    @field_validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        """Accept only level names known to `logging`."""
        normalized = v.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"REPORTER_LOG_LEVEL must be a logging level name. Got: {v!r}")
        return normalized


class Config(BaseModel):
    """Top-level application configuration."""

    reporter: ReporterConfig = Field(default_factory=ReporterConfig, description="Reporter proxy configuration")


def load_config() -> Config:
    """Load application configuration from environment variables.

    Notes:
    - Calls `dotenv.load_dotenv()` so local `.env` values are visible to the process.
    - Every setting is optional; raises `ValueError` with actionable messages when
      a value is present but malformed.
    """
    # Load variables from `.env` into the process environment (without overriding
    # already-set env vars).
    dotenv.load_dotenv()

    reporter = ReporterConfig(
        package_name=_get_env_str("REPORTER_PACKAGE_NAME", "reporter-proxy"),
        package_version=_get_optional_env("REPORTER_PACKAGE_VERSION"),
        version_key=_get_env_str("REPORTER_VERSION_KEY", "package_version"),
        timeout_s=_get_env_number("REPORTER_TIMEOUT_S", DEFAULT_TIMEOUT_S, float),
        log_level=_get_env_str("REPORTER_LOG_LEVEL", "INFO"),
    )
    return Config(reporter=reporter)
