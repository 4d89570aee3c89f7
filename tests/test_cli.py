# SPDX-License-Identifier: MIT
"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli import main as cli_main


@pytest.fixture(autouse=True)
def _no_logfire_setup(monkeypatch):
    """Keep the test Logfire configuration in place."""

    calls: list[tuple] = []
    monkeypatch.setattr(cli_main, "init_logfire", lambda *a: calls.append(a))
    return calls


def _write_jsonl(path: Path, *docs: object) -> Path:
    path.write_text(
        "".join(json.dumps(doc) + "\n" for doc in docs), encoding="utf-8"
    )
    return path


def test_upgrade_command_writes_output(tmp_path: Path, capsys) -> None:
    source = _write_jsonl(
        tmp_path / "features.jsonl",
        {"id": "f1", "rules": [], "environments": ["dev"]},
    )
    output = tmp_path / "out.jsonl"

    cli_main.main(
        ["upgrade", "feature", "--input", str(source), "--output", str(output)]
    )

    doc = json.loads(output.read_text(encoding="utf-8"))
    assert doc["environmentSettings"]["dev"]["enabled"] is True
    summary = capsys.readouterr().out
    assert "feature: total=1 upgraded=1 unchanged=0 failed=0" in summary


def test_upgrade_applies_conversion_window_flag(tmp_path: Path) -> None:
    source = _write_jsonl(tmp_path / "metrics.jsonl", {"earlyStart": True})
    output = tmp_path / "out.jsonl"

    cli_main.main(
        [
            "upgrade",
            "metric",
            "--input",
            str(source),
            "--output",
            str(output),
            "--conversion-window-hours",
            "10",
        ]
    )

    assert json.loads(output.read_text())["conversionWindowHours"] == 10.5


def test_strict_mode_exits_on_failures(tmp_path: Path) -> None:
    source = tmp_path / "metrics.jsonl"
    source.write_text("{broken\n", encoding="utf-8")
    output = tmp_path / "out.jsonl"

    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(
            [
                "upgrade",
                "metric",
                "--input",
                str(source),
                "--output",
                str(output),
                "--strict",
                "--quarantine-dir",
                str(tmp_path / "rejected"),
            ]
        )

    assert excinfo.value.code == 1
    assert (tmp_path / "rejected" / "metric" / "json_parse_error_1.json").exists()


def test_failures_without_strict_exit_cleanly(tmp_path: Path) -> None:
    source = tmp_path / "metrics.jsonl"
    source.write_text("{broken\n", encoding="utf-8")
    output = tmp_path / "out.jsonl"

    cli_main.main(
        [
            "upgrade",
            "metric",
            "--input",
            str(source),
            "--output",
            str(output),
            "--no-quarantine",
        ]
    )

    assert output.read_text(encoding="utf-8") == ""
    assert not (tmp_path / "quarantine").exists()


def test_default_query_command(tmp_path: Path, capsys) -> None:
    settings = tmp_path / "settings.json"
    settings.write_text(
        json.dumps({"experiments": {"anonymousIdColumn": "device"}}), encoding="utf-8"
    )

    cli_main.main(
        [
            "default-query",
            "--settings",
            str(settings),
            "--user-id-type",
            "anonymous_id",
            "--schema",
            "web",
        ]
    )

    out = capsys.readouterr().out
    assert "  device as anonymous_id," in out
    assert "  web.experiment_viewed" in out


def test_verbosity_maps_to_log_level(tmp_path: Path, _no_logfire_setup) -> None:
    cli_main.main(["default-query", "-vvv"])

    assert _no_logfire_setup == [(None, "debug")]


def test_configured_log_level_is_the_base(tmp_path: Path, _no_logfire_setup) -> None:
    config = tmp_path / "app.yaml"
    config.write_text("log_level: info\n", encoding="utf-8")

    cli_main.main(["default-query", "--config", str(config), "-v"])

    assert _no_logfire_setup == [(None, "debug")]


def test_invalid_config_exits(tmp_path: Path, capsys) -> None:
    config = tmp_path / "bad.yaml"
    config.write_text("strict: [1\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(["default-query", "--config", str(config)])

    assert excinfo.value.code == 2
    assert "error:" in capsys.readouterr().err


def test_no_command_prints_help(capsys) -> None:
    with pytest.raises(SystemExit):
        cli_main.main([])

    assert "upgrade" in capsys.readouterr().out


def test_version_flag(capsys) -> None:
    cli_main.main(["--version"])

    assert capsys.readouterr().out.startswith("schema-upgrades ")
