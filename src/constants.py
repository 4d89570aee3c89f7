"""Project-wide constants and default values.

This module centralises small constants that are imported across the
application. Keep this file minimal and free of side effects.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONVERSION_WINDOW_HOURS = 72

DEFAULT_QUARANTINE_DIR = Path("quarantine")

# Offset applied to metrics that used the legacy ``earlyStart`` flag.
EARLY_START_DELAY_HOURS = -0.5

USER_ID = "user_id"
ANONYMOUS_ID = "anonymous_id"

DEFAULT_USER_ID_TYPES = [
    {"userIdType": USER_ID, "description": "Logged-in user id"},
    {"userIdType": ANONYMOUS_ID, "description": "Anonymous visitor id"},
]

FEATURE_ENVIRONMENTS = ("dev", "production")

DOCUMENT_KINDS = ("metric", "datasource", "feature")

# Logfire levels from least to most verbose.
LOG_LEVELS = ("fatal", "error", "warn", "notice", "info", "debug", "trace")
DEFAULT_LOG_LEVEL = "warn"

__all__ = [
    "ANONYMOUS_ID",
    "DEFAULT_CONVERSION_WINDOW_HOURS",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_QUARANTINE_DIR",
    "DEFAULT_USER_ID_TYPES",
    "DOCUMENT_KINDS",
    "EARLY_START_DELAY_HOURS",
    "FEATURE_ENVIRONMENTS",
    "LOG_LEVELS",
    "USER_ID",
]
