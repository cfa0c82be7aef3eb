"""Centralised application configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# src/dragboard/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class ApiConfig(BaseModel):
    """Board REST API connection."""

    base_url: str = ""
    token: SecretStr = SecretStr("123")
    timeout: float | None = 10.0

    @field_validator("timeout")
    @classmethod
    def timeout_positive(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            msg = "API__TIMEOUT must be positive (leave unset to wait forever)"
            raise ValueError(msg)
        return value


class AppConfig(BaseModel):
    """Application runtime configuration."""

    port: int = 8080
    storage_secret: SecretStr = SecretStr("dev-secret-change-me")
    log_dir: Path = Path("logs")


class BoardConfig(BaseModel):
    """Drag-and-drop persistence behaviour."""

    # Send a cross-list move as one write instead of three dependent ones.
    atomic_moves: bool = False
    # Show the computed positions before the reconciliation refetch lands.
    optimistic_updates: bool = False


class DevConfig(BaseModel):
    """Development and testing toggles."""

    api_mock: bool = False
    seed_demo_board: bool = True


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Application settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``API__BASE_URL``, ``API__TOKEN``, ``BOARD__ATOMIC_MOVES``, etc.
    """

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    api: ApiConfig = ApiConfig()
    app: AppConfig = AppConfig()
    board: BoardConfig = BoardConfig()
    dev: DevConfig = DevConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = settings.model_config.get("env_file")
    if env_file is not None and Path(str(env_file)).is_file():
        logger.info("Settings loaded .env from: %s", env_file)
    else:
        logger.info("Settings: no .env file found, using env vars and defaults")

    return settings
