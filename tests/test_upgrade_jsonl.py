# SPDX-License-Identifier: MIT
"""Tests for batch upgrades of JSONL exports."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from io_utils import QuarantineWriter, iter_documents, upgrade_jsonl
from observability import telemetry


def _write_lines(path: Path, *lines: str) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _read_docs(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_iter_documents_skips_blank_lines(tmp_path: Path) -> None:
    source = _write_lines(tmp_path / "in.jsonl", "{}", "", "  ", '{"a": 1}')

    assert list(iter_documents(source)) == [(1, "{}"), (4, '{"a": 1}')]


def test_upgrades_every_document(tmp_path: Path) -> None:
    source = _write_lines(
        tmp_path / "metrics.jsonl",
        json.dumps({"id": "m1", "earlyStart": True, "userIdType": "user"}),
        json.dumps(
            {
                "id": "m2",
                "userIdTypes": ["user_id"],
                "userIdColumns": {"user_id": "uid"},
            }
        ),
    )
    output = tmp_path / "out.jsonl"

    report = upgrade_jsonl("metric", source, output)

    docs = _read_docs(output)
    assert [d["id"] for d in docs] == ["m1", "m2"]
    assert docs[0]["conversionDelayHours"] == -0.5
    assert docs[0]["userIdColumns"] == {"user_id": "user_id"}
    assert docs[1] == {
        "id": "m2",
        "userIdTypes": ["user_id"],
        "userIdColumns": {"user_id": "uid"},
    }
    assert (report.upgraded, report.unchanged, report.failed) == (1, 1, 0)
    assert report.written == 2
    counts = telemetry.snapshot()["metric"]
    assert (counts.upgraded, counts.unchanged) == (1, 1)


def test_bad_lines_are_skipped_and_quarantined(tmp_path: Path) -> None:
    """Invalid JSON and failing upgrades do not abort the batch."""
    source = _write_lines(
        tmp_path / "datasources.jsonl",
        "{not json",
        "[1, 2]",
        json.dumps({"id": "bad", "type": "mongodb", "settings": {}}),
        json.dumps({"id": "ok", "type": "mixpanel", "settings": {}}),
    )
    output = tmp_path / "out.jsonl"
    quarantine = QuarantineWriter(tmp_path / "q")

    report = upgrade_jsonl("datasource", source, output, quarantine=quarantine)

    assert [d["id"] for d in _read_docs(output)] == ["ok"]
    assert report.failed == 3
    assert telemetry.has_failures()
    manifest = json.loads(
        (tmp_path / "q" / "datasource" / "manifest.json").read_text(encoding="utf-8")
    )
    assert manifest["json_parse_error"]["count"] == 2
    assert manifest["upgrade_error"]["count"] == 1
    assert "mongodb" in manifest["upgrade_error"]["examples"][0]["error"]


def test_invalid_utf8_line_is_quarantined(tmp_path: Path) -> None:
    """Undecodable bytes reject only their own line."""
    source = tmp_path / "metrics.jsonl"
    source.write_bytes(b'{"id": "m1"}\n{"id": "\xff"}\n{"id": "m3"}\n')
    output = tmp_path / "out.jsonl"
    quarantine = QuarantineWriter(tmp_path / "q")

    report = upgrade_jsonl("metric", source, output, quarantine=quarantine)

    assert [d["id"] for d in _read_docs(output)] == ["m1", "m3"]
    assert report.failed == 1
    assert report.written == 2
    rejected = tmp_path / "q" / "metric" / "json_parse_error_1.json"
    assert rejected.read_text(encoding="utf-8") == '{"id": "\ufffd"}'


def test_validation_rejects_mismatched_documents(tmp_path: Path) -> None:
    """Documents that cannot take the current shape are reported."""
    source = _write_lines(
        tmp_path / "features.jsonl",
        json.dumps({"id": "f1", "environments": ["dev"]}),
        json.dumps({"id": "f2", "environmentSettings": {"dev": {"enabled": "maybe"}}}),
    )
    output = tmp_path / "out.jsonl"
    quarantine = QuarantineWriter(tmp_path / "q")

    report = upgrade_jsonl(
        "feature", source, output, validate=True, quarantine=quarantine
    )

    docs = _read_docs(output)
    assert [d["id"] for d in docs] == ["f1"]
    assert docs[0]["environmentSettings"]["dev"] == {"rules": [], "enabled": True}
    assert report.failed == 1
    assert (tmp_path / "q" / "feature" / "schema_mismatch_1.json").exists()


def test_unknown_kind_leaves_output_alone(tmp_path: Path) -> None:
    source = _write_lines(tmp_path / "in.jsonl", "{}")
    output = tmp_path / "out.jsonl"
    output.write_text("previous\n", encoding="utf-8")

    with pytest.raises(ValueError):
        upgrade_jsonl("experiment", source, output)

    assert output.read_text(encoding="utf-8") == "previous\n"


def test_missing_input_raises(tmp_path: Path) -> None:
    output = tmp_path / "out.jsonl"

    with pytest.raises(FileNotFoundError):
        upgrade_jsonl("metric", tmp_path / "missing.jsonl", output)

    assert not output.exists()
    assert not Path(f"{output}.tmp").exists()
