# SPDX-License-Identifier: MIT
"""Upgrade legacy feature flag documents.

Early feature documents stored one rule list and a list of enabled
environments at the top level. The current shape keeps rules and the enabled
toggle per environment under ``environmentSettings``.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Iterable

import logfire

from constants import FEATURE_ENVIRONMENTS


def _update_environment_settings(
    feature: Dict[str, Any],
    environment: str,
    rules: list[Any],
    environments: Iterable[str],
) -> None:
    """Backfill ``feature['environmentSettings'][environment]`` in place."""

    env_settings = (feature.get("environmentSettings") or {}).get(environment) or {}

    if "rules" not in env_settings:
        env_settings["rules"] = deepcopy(rules)
    if "enabled" not in env_settings:
        env_settings["enabled"] = environment in environments

    # Rules were briefly persisted as an index-keyed object, possibly empty.
    if isinstance(env_settings["rules"], dict):
        env_settings["rules"] = list(env_settings["rules"].values())

    if feature.get("environmentSettings") is None:
        feature["environmentSettings"] = {}
    feature["environmentSettings"][environment] = env_settings


def draft_has_changes(feature: Dict[str, Any]) -> bool:
    """Return ``True`` when an active draft differs from the live feature."""

    draft = feature.get("draft") or {}
    if not draft.get("active"):
        return False

    if "defaultValue" in draft and draft["defaultValue"] != feature.get(
        "defaultValue"
    ):
        return True

    draft_rules = draft.get("rules")
    if draft_rules:
        env_settings = feature.get("environmentSettings") or {}
        live = {
            env: (env_settings.get(env) or {}).get("rules") or []
            for env in draft_rules
        }
        if live != draft_rules:
            return True

    return False


def upgrade_feature_interface(feature: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``feature`` with environment-scoped rules and a clean draft.

    The legacy top-level ``rules`` are copied into each environment that has
    none of its own, and ``enabled`` is derived from the legacy
    ``environments`` list. Drafts that are active but identical to the live
    feature are deactivated.

    Args:
        feature: Feature document in any supported shape.

    Returns:
        A new document without ``rules``/``environments``; ``feature`` is left
        untouched.
    """

    upgraded = deepcopy(feature)
    rules = upgraded.pop("rules", None) or []
    environments = upgraded.pop("environments", None) or []

    for environment in FEATURE_ENVIRONMENTS:
        _update_environment_settings(upgraded, environment, rules, environments)

    if (upgraded.get("draft") or {}).get("active") and not draft_has_changes(
        upgraded
    ):
        upgraded["draft"] = {"active": False}
        logfire.debug("Discarded unchanged draft", feature=upgraded.get("id"))

    return upgraded


__all__ = ["draft_has_changes", "upgrade_feature_interface"]
