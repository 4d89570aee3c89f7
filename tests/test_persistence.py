"""Tests for persistence utilities."""

import json
from pathlib import Path

import pytest

from io_utils.persistence import atomic_write


def test_atomic_write_creates_parent_dir(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "out.jsonl"
    count = atomic_write(path, [json.dumps({"a": 1})])
    assert path.read_text(encoding="utf-8") == '{"a": 1}\n'
    assert count == 1


def test_atomic_write_keeps_previous_file_on_error(tmp_path: Path) -> None:
    path = tmp_path / "out.jsonl"
    path.write_text("old\n", encoding="utf-8")

    def lines():
        yield "new"
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        atomic_write(path, lines())

    assert path.read_text(encoding="utf-8") == "old\n"
    assert not Path(f"{path}.tmp").exists()
