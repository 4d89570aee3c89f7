# SPDX-License-Identifier: MIT
"""Utilities for writing quarantined documents."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import logfire
from pydantic_core import from_json, to_json

from observability import telemetry

MANIFEST = "manifest.json"
ALLOWED_REASONS = {"json_parse_error", "upgrade_error", "schema_mismatch"}
MAX_EXAMPLES = 3


class QuarantineWriter:
    """Persist documents that failed to upgrade and maintain a manifest."""

    def __init__(self, base_dir: Path | str = Path("quarantine")) -> None:
        self.base_dir = Path(base_dir)

    def write(
        self, kind: str, reason: str, payload: Any, *, error: str | None = None
    ) -> Path:
        """Persist ``payload`` and update the manifest for ``kind``.

        Parameters
        ----------
        kind:
            Document kind, such as ``metric`` or ``feature``.
        reason:
            Why the document was rejected: ``json_parse_error``,
            ``upgrade_error`` or ``schema_mismatch``.
        payload:
            Offending document, or the raw line when it could not be parsed.
        error:
            Optional error text stored alongside the example in the manifest.

        Returns
        -------
        Path
            Location of the written payload file.
        """

        if reason not in ALLOWED_REASONS:
            raise ValueError(f"Unsupported quarantine reason: {reason}")

        qdir = self.base_dir / kind
        qdir.mkdir(parents=True, exist_ok=True)

        index = sum(1 for _ in qdir.glob(f"{reason}_*.json")) + 1
        file_path = qdir / f"{reason}_{index}.json"

        if isinstance(payload, str):
            file_path.write_text(payload, encoding="utf-8")
        else:
            file_path.write_text(
                to_json(payload, indent=2).decode("utf-8"),
                encoding="utf-8",
            )

        manifest_path = qdir / MANIFEST
        if manifest_path.exists():
            manifest = from_json(manifest_path.read_text(encoding="utf-8"))
        else:
            manifest = {}
        entry = manifest.setdefault(reason, {"count": 0, "examples": []})
        entry["count"] += 1
        if len(entry["examples"]) < MAX_EXAMPLES:
            entry["examples"].append({"file": file_path.name, "error": error})
        manifest_path.write_text(
            to_json(manifest, indent=2).decode("utf-8"),
            encoding="utf-8",
        )

        logfire.warning(
            "Quarantined document",
            path=str(file_path),
            kind=kind,
            reason=reason,
        )
        telemetry.record_quarantine(file_path)
        return file_path


__all__ = ["ALLOWED_REASONS", "QuarantineWriter"]
