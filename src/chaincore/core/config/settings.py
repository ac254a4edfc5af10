"""
Centralized settings for chaincore.

Manifesto:
    One validated, cached settings object instead of each module reading
    environment variables on its own. Everything is overridable through
    ``CHAINCORE_*`` environment variables or a ``.env`` file.

Tags:
    chaincore, configuration, settings, pydantic, caching

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChaincoreSettings(BaseSettings):
    """Chaincore configuration.

    All fields can be set via ``CHAINCORE_*`` environment variables (e.g.
    ``CHAINCORE_LOG_FORMAT=json``) or through a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAINCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console", description="console | json")

    # ── Migrations ───────────────────────────────────────────────
    migrations_path: str | None = Field(
        default=None,
        description="Directory holding migration units, used when a chaincode has none injected",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level

    @field_validator("log_format")
    @classmethod
    def _lower_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in {"console", "json"}:
            raise ValueError(f"Unsupported log format: {value}")
        return fmt


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, ChaincoreSettings] = {}


def get_settings(*, _force_reload: bool = False) -> ChaincoreSettings:
    """Load, validate, and cache a :class:`ChaincoreSettings` instance.

    Parameters
    ----------
    _force_reload:
        Bypass cache and reload from the environment.
    """
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = ChaincoreSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Drop the cached settings (for testing)."""
    _settings_cache.clear()
