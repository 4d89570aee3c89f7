# SPDX-License-Identifier: MIT
"""Batch upgrades of JSON Lines document exports.

Each line of the input holds one document exported from the document store.
Lines that cannot be parsed, upgraded or validated are reported, optionally
quarantined, and left out of the output so a single bad record never aborts
the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator

import logfire
from pydantic import ValidationError
from pydantic_core import from_json, to_json

from observability import telemetry
from upgrades import check_kind, upgrade_document, validate_document
from utils import ErrorHandler, LoggingErrorHandler

from .persistence import atomic_write
from .quarantine import QuarantineWriter

if TYPE_CHECKING:  # pragma: no cover - for type checkers only
    from runtime.settings import Settings


@dataclass
class UpgradeReport:
    """Outcome of upgrading one export file."""

    kind: str
    upgraded: int = 0
    unchanged: int = 0
    failed: int = 0

    @property
    def written(self) -> int:
        return self.upgraded + self.unchanged


def iter_documents(path: Path) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` for each non-empty line of ``path``.

    Bytes that are not valid UTF-8 are kept as surrogate escapes so one bad
    line does not stop iteration; :func:`upgrade_jsonl` rejects such lines.
    """

    with Path(path).open("r", encoding="utf-8", errors="surrogateescape") as handle:
        for number, raw_line in enumerate(handle, start=1):
            line = raw_line.strip()
            if line:
                yield number, line


class _BatchUpgrade:
    """Stateful line processor feeding :func:`atomic_write`."""

    def __init__(
        self,
        kind: str,
        source: Path,
        *,
        settings: "Settings | None",
        validate: bool,
        quarantine: QuarantineWriter | None,
        error_handler: ErrorHandler,
    ) -> None:
        self.report = UpgradeReport(kind=kind)
        self.kind = kind
        self.source = source
        self.settings = settings
        self.validate = validate
        self.quarantine = quarantine
        self.error_handler = error_handler

    def _reject(
        self, number: int, reason: str, payload: Any, exc: Exception
    ) -> None:
        self.report.failed += 1
        telemetry.record_failure(self.kind)
        self.error_handler.handle(
            f"Skipping {self.kind} document",
            exc,
            path=str(self.source),
            line=number,
            reason=reason,
        )
        if self.quarantine is not None:
            self.quarantine.write(self.kind, reason, payload, error=str(exc))

    def _parse(self, number: int, line: str) -> dict[str, Any] | None:
        try:
            data = line.encode("utf-8")
        except UnicodeEncodeError as exc:
            printable = line.encode("utf-8", "surrogateescape").decode(
                "utf-8", "replace"
            )
            self._reject(number, "json_parse_error", printable, exc)
            return None
        try:
            doc = from_json(data)
        except ValueError as exc:
            self._reject(number, "json_parse_error", line, exc)
            return None
        if not isinstance(doc, dict):
            exc = ValueError(f"expected a JSON object, got {type(doc).__name__}")
            self._reject(number, "json_parse_error", line, exc)
            return None
        return doc

    def lines(self) -> Iterator[str]:
        for number, line in iter_documents(self.source):
            doc = self._parse(number, line)
            if doc is None:
                continue
            try:
                upgraded = upgrade_document(self.kind, doc, settings=self.settings)
            except Exception as exc:  # pylint: disable=broad-except
                self._reject(number, "upgrade_error", doc, exc)
                continue
            if self.validate:
                try:
                    validate_document(self.kind, upgraded)
                except ValidationError as exc:
                    self._reject(number, "schema_mismatch", upgraded, exc)
                    continue
            changed = upgraded != doc
            if changed:
                self.report.upgraded += 1
            else:
                self.report.unchanged += 1
            telemetry.record_upgrade(self.kind, changed=changed)
            yield to_json(upgraded).decode("utf-8")


def upgrade_jsonl(
    kind: str,
    input_path: Path | str,
    output_path: Path | str,
    *,
    settings: "Settings | None" = None,
    validate: bool = False,
    quarantine: QuarantineWriter | None = None,
    error_handler: ErrorHandler | None = None,
) -> UpgradeReport:
    """Upgrade every ``kind`` document in ``input_path`` into ``output_path``.

    Args:
        kind: Document kind shared by every line of the file.
        input_path: Location of the legacy JSONL export.
        output_path: Destination for upgraded documents, written atomically.
        settings: Optional settings supplying configured defaults.
        validate: Check each upgraded document against its current-shape model.
        quarantine: Writer receiving rejected documents.
        error_handler: Processor for per-document errors.

    Returns:
        Counts of upgraded, unchanged and failed documents.

    Raises:
        ValueError: If ``kind`` is not supported.
        FileNotFoundError: If ``input_path`` does not exist.
    """

    # Fail before touching the output when the kind is unknown.
    check_kind(kind)
    batch = _BatchUpgrade(
        kind,
        Path(input_path),
        settings=settings,
        validate=validate,
        quarantine=quarantine,
        error_handler=error_handler or LoggingErrorHandler(),
    )
    with logfire.span(
        "upgrade.jsonl",
        attributes={
            "kind": kind,
            "input": str(input_path),
            "output": str(output_path),
        },
    ):
        atomic_write(Path(output_path), batch.lines())
        report = batch.report
        logfire.info(
            "Upgraded {kind} export",
            kind=kind,
            upgraded=report.upgraded,
            unchanged=report.unchanged,
            failed=report.failed,
        )
    return report


__all__ = ["UpgradeReport", "iter_documents", "upgrade_jsonl"]
