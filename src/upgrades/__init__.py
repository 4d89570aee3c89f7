# SPDX-License-Identifier: MIT
"""Upgraders converting legacy documents to their current shape.

Exports:
    upgrade_metric_doc: Upgrade an experimentation metric.
    upgrade_datasource_object: Backfill data source identifier types and queries.
    upgrade_feature_interface: Move feature rules into environment settings.
    get_default_experiment_query: Render the default exposure SQL.
    upgrade_document: Dispatch a document to the upgrader for its kind.
    validate_document: Check a document against its current-shape model.
"""

from .datasource import upgrade_datasource_object
from .feature import draft_has_changes, upgrade_feature_interface
from .metric import upgrade_metric_doc
from .queries import get_default_experiment_query
from .registry import (
    MODELS,
    UPGRADERS,
    check_kind,
    upgrade_document,
    validate_document,
)

__all__ = [
    "MODELS",
    "UPGRADERS",
    "check_kind",
    "draft_has_changes",
    "get_default_experiment_query",
    "upgrade_datasource_object",
    "upgrade_document",
    "upgrade_feature_interface",
    "upgrade_metric_doc",
    "validate_document",
]
