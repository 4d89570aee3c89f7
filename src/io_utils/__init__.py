"""Input and output helpers for configuration and document exports.

Exports:
    load_app_config: Read the YAML application configuration.
    load_json_document: Read a single JSON document from disk.
    iter_documents: Iterate over non-empty lines of a JSONL export.
    upgrade_jsonl: Upgrade every document of a JSONL export.
    atomic_write: Write files atomically.
    QuarantineWriter: Persist rejected documents and maintain a manifest.
"""

from __future__ import annotations

from .jsonl import UpgradeReport, iter_documents, upgrade_jsonl
from .loader import load_app_config, load_json_document
from .persistence import atomic_write
from .quarantine import QuarantineWriter

__all__ = [
    "load_app_config",
    "load_json_document",
    "iter_documents",
    "upgrade_jsonl",
    "UpgradeReport",
    "atomic_write",
    "QuarantineWriter",
]
