"""Telemetry and monitoring helpers for the document upgraders.

Exports:
    init_logfire: Configure Pydantic Logfire output.
    record_upgrade: Count a processed document.
    record_failure: Count a document that failed to upgrade.
    record_quarantine: Track creation of quarantine files.
    print_summary: Output a summary of collected counts.
    has_failures: Indicate whether any document failed.
    reset: Clear stored counts and quarantine paths.
"""

from .monitoring import init_logfire
from .telemetry import (
    has_failures,
    has_quarantines,
    print_summary,
    record_failure,
    record_quarantine,
    record_upgrade,
    reset,
    snapshot,
)

__all__ = [
    "init_logfire",
    "record_upgrade",
    "record_failure",
    "record_quarantine",
    "print_summary",
    "has_failures",
    "has_quarantines",
    "reset",
    "snapshot",
]
