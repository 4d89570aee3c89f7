# SPDX-License-Identifier: MIT
"""Centralised application configuration management.

This module exposes :class:`Settings`, a ``pydantic-settings`` model that
combines values sourced from the YAML application configuration and
environment variables. Environment variables take precedence over file-based
values and the merged configuration is validated before use.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from constants import (
    DEFAULT_CONVERSION_WINDOW_HOURS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_QUARANTINE_DIR,
    LOG_LEVELS,
)
from io_utils.loader import load_app_config


class Settings(BaseSettings):
    """Application settings combining file-based and environment configuration."""

    default_conversion_window_hours: float = Field(
        DEFAULT_CONVERSION_WINDOW_HOURS,
        gt=0,
        description="Conversion window applied when a metric has none.",
    )
    log_level: str = Field(
        DEFAULT_LOG_LEVEL, description="Base Logfire level before -v/-q flags."
    )
    logfire_token: str | None = Field(
        None, description="Logfire authentication token, if available.", repr=False
    )
    quarantine_dir: Path = Field(
        DEFAULT_QUARANTINE_DIR,
        description="Directory receiving documents that failed to upgrade.",
    )
    strict: bool = Field(
        False, description="Exit with an error when any document fails to upgrade."
    )

    model_config = SettingsConfigDict(env_prefix="SU_", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.lower()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of: {', '.join(LOG_LEVELS)}")
        return level


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load and validate application settings.

    Configuration values are read from the application configuration file and
    then merged with environment variables using ``pydantic-settings``. When a
    value is provided in both sources the environment variable wins. A ``.env``
    file in the working directory is loaded automatically when present. The
    optional ``config_path`` parameter allows overriding the default
    ``config/app.yaml`` location.

    Args:
        config_path: Optional path to a YAML configuration file.

    Returns:
        Settings: Fully validated application configuration.

    Raises:
        RuntimeError: If configuration values are invalid.
    """
    if config_path:
        cfg_path = Path(config_path)
        config = load_app_config(cfg_path.parent, cfg_path.name)
    else:
        config = load_app_config()
    env_file_path = Path(".env")
    env_file = env_file_path if env_file_path.exists() else None
    # Init kwargs outrank the environment in pydantic-settings, so only pass
    # file values that neither the environment nor ``.env`` overrides.
    overridden = {key.upper() for key in os.environ}
    if env_file is not None:
        overridden.update(key.upper() for key in dotenv_values(env_file))
    file_values = {
        name: value
        for name, value in config.model_dump().items()
        if f"SU_{name.upper()}" not in overridden
    }
    try:
        return Settings(_env_file=env_file, **file_values)
    except ValidationError as exc:
        # Summarise validation issues so the caller receives clear feedback.
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise RuntimeError(f"Invalid configuration: {details}") from exc


__all__ = ["Settings", "load_settings"]
