# SPDX-License-Identifier: MIT
"""Helpers for enabling Pydantic Logfire telemetry."""

from __future__ import annotations

import os
from typing import Literal

import logfire

LogLevel = Literal["fatal", "error", "warn", "notice", "info", "debug", "trace"]


def _mask_token(value: str | None) -> str | None:
    """Return a masked representation of ``value`` for safe logging."""

    if not value:
        return None
    return f"{value[:4]}..."


def init_logfire(token: str | None = None, min_log_level: LogLevel = "warn") -> None:
    """Configure Logfire console output and optional remote export.

    Args:
        token: Optional Logfire API token. If omitted, ``SU_LOGFIRE_TOKEN`` from the
            environment is used. Missing tokens keep telemetry local.
        min_log_level: Minimum level for console and telemetry output.
    """

    key = token or os.getenv("SU_LOGFIRE_TOKEN")
    logfire.debug("Configuring logfire", token=_mask_token(key))
    logfire.configure(
        token=key,
        send_to_logfire="if-token-present",
        service_name="schema-upgrades",
        console=logfire.ConsoleOptions(
            min_log_level=min_log_level,
            show_project_link=False,
            verbose=True,
        ),
        min_level=min_log_level,
    )
    instrument = getattr(logfire, "instrument_pydantic", None)
    if instrument:
        instrument()


__all__ = ["LogLevel", "init_logfire"]
