# SPDX-License-Identifier: MIT
"""Test configuration for schema-upgrades.

Keeps Logfire local and quiet, isolates settings from the developer's
environment and resets telemetry between tests.
"""

from __future__ import annotations

from typing import Any

import logfire
import pytest

from observability import telemetry

logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Run each test from an empty directory without ``SU_`` overrides."""

    for name in (
        "SU_DEFAULT_CONVERSION_WINDOW_HOURS",
        "SU_LOG_LEVEL",
        "SU_LOGFIRE_TOKEN",
        "SU_QUARANTINE_DIR",
        "SU_STRICT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_telemetry():
    """Ensure upgrade counters are empty before and after each test."""

    telemetry.reset()
    yield
    telemetry.reset()


@pytest.fixture()
def legacy_feature() -> dict[str, Any]:
    """Feature stored with top-level rules and enabled environments."""

    return {
        "id": "checkout-redesign",
        "valueType": "boolean",
        "defaultValue": "false",
        "environments": ["production"],
        "rules": [
            {"id": "fr_1", "type": "force", "condition": '{"country": "US"}'},
        ],
    }


@pytest.fixture()
def legacy_datasource() -> dict[str, Any]:
    """Postgres data source created before exposure queries existed."""

    return {
        "id": "ds_pg",
        "type": "postgres",
        "name": "Warehouse",
        "params": {"host": "db", "defaultSchema": "analytics"},
        "settings": {
            "experiments": {"userIdColumn": "uid", "table": "viewed"},
            "experimentDimensions": ["country"],
        },
    }
