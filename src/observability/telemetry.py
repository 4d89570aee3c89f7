# SPDX-License-Identifier: MIT
"""Aggregate upgrade counts for end-of-run reporting."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import DefaultDict, List


@dataclass
class KindMetrics:
    """Counts collected for a single document kind."""

    upgraded: int = 0
    unchanged: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.upgraded + self.unchanged + self.failed


_metrics: DefaultDict[str, KindMetrics] = DefaultDict(KindMetrics)
_quarantine_paths: List[Path] = []


def record_upgrade(kind: str, *, changed: bool) -> None:
    """Record a successfully processed document of ``kind``."""

    if changed:
        _metrics[kind].upgraded += 1
    else:
        _metrics[kind].unchanged += 1


def record_failure(kind: str) -> None:
    """Record a document of ``kind`` that could not be upgraded."""

    _metrics[kind].failed += 1


def record_quarantine(path: Path) -> None:
    """Track creation of a quarantine ``path``."""

    _quarantine_paths.append(path)


def has_failures() -> bool:
    """Return ``True`` when any document failed to upgrade."""

    return any(m.failed for m in _metrics.values())


def has_quarantines() -> bool:
    """Return ``True`` when any quarantine files were created."""

    return bool(_quarantine_paths)


def snapshot() -> dict[str, KindMetrics]:
    """Return a copy of the collected metrics keyed by kind."""

    return {
        kind: KindMetrics(m.upgraded, m.unchanged, m.failed)
        for kind, m in _metrics.items()
    }


def reset() -> None:
    """Clear all recorded metrics and quarantine paths."""

    _metrics.clear()
    _quarantine_paths.clear()


def print_summary() -> None:
    """Write a summary of collected metrics to ``stdout``."""

    if not _metrics:
        return
    for kind, data in _metrics.items():
        print(
            f"{kind}: total={data.total} upgraded={data.upgraded} "
            f"unchanged={data.unchanged} failed={data.failed}"
        )
    if _quarantine_paths:
        print(f"Quarantined: {len(_quarantine_paths)} file(s)")


__all__ = [
    "KindMetrics",
    "has_failures",
    "has_quarantines",
    "print_summary",
    "record_failure",
    "record_quarantine",
    "record_upgrade",
    "reset",
    "snapshot",
]
