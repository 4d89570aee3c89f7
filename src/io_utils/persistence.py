# SPDX-License-Identifier: MIT
"""Atomic file writes for upgraded exports."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

import logfire


def atomic_write(path: Path, lines: Iterable[str]) -> int:
    """Write ``lines`` to ``path`` atomically.

    The lines are written to a ``.tmp`` sibling that is flushed and synced
    before :func:`os.replace` swaps it into place, so readers never observe a
    half-written export. When ``lines`` raises part way through, the temporary
    file is removed and ``path`` keeps its previous contents.

    Args:
        path: Destination file to replace.
        lines: Iterable of lines to write without trailing newlines.

    Returns:
        Number of lines written.
    """
    with logfire.span("fs.atomic_write", attributes={"path": str(path)}):
        tmp_path = Path(f"{path}.tmp")
        tmp_path.parent.mkdir(parents=True, exist_ok=True)
        count = 0
        try:
            with open(tmp_path, "w", encoding="utf-8") as handle:
                for line in lines:
                    handle.write(f"{line}\n")
                    count += 1
                handle.flush()
                os.fsync(handle.fileno())
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        os.replace(tmp_path, path)
        logfire.debug("Atomic write complete", path=str(path), lines=count)
        return count


__all__ = ["atomic_write"]
