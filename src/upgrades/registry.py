# SPDX-License-Identifier: MIT
"""Dispatch documents to the upgrader and model for their kind."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict

from pydantic import BaseModel

from models import DataSourceDoc, FeatureDoc, MetricDoc

from .datasource import upgrade_datasource_object
from .feature import upgrade_feature_interface
from .metric import upgrade_metric_doc

if TYPE_CHECKING:  # pragma: no cover - for type checkers only
    from runtime.settings import Settings

Upgrader = Callable[[Dict[str, Any]], Dict[str, Any]]

UPGRADERS: dict[str, Upgrader] = {
    "metric": upgrade_metric_doc,
    "datasource": upgrade_datasource_object,
    "feature": upgrade_feature_interface,
}

MODELS: dict[str, type[BaseModel]] = {
    "metric": MetricDoc,
    "datasource": DataSourceDoc,
    "feature": FeatureDoc,
}


def check_kind(kind: str) -> None:
    """Raise ``ValueError`` unless ``kind`` has a registered upgrader."""
    if kind not in UPGRADERS:
        raise ValueError(
            f"Unsupported document kind: {kind!r}. "
            f"Expected one of: {', '.join(UPGRADERS)}"
        )


def upgrade_document(
    kind: str, doc: Dict[str, Any], *, settings: "Settings | None" = None
) -> Dict[str, Any]:
    """Return ``doc`` upgraded with the upgrader registered for ``kind``.

    Args:
        kind: Document kind, one of ``metric``, ``datasource`` or ``feature``.
        doc: Document to upgrade.
        settings: Optional settings supplying configured defaults.

    Raises:
        ValueError: If ``kind`` is not supported.
    """

    check_kind(kind)
    if kind == "metric" and settings is not None:
        return upgrade_metric_doc(doc, settings.default_conversion_window_hours)
    return UPGRADERS[kind](doc)


def validate_document(kind: str, doc: Dict[str, Any]) -> BaseModel:
    """Return ``doc`` parsed with the current-shape model for ``kind``.

    Raises:
        ValueError: If ``kind`` is not supported.
        pydantic.ValidationError: If ``doc`` does not match the current shape.
    """

    check_kind(kind)
    return MODELS[kind].model_validate(doc)


__all__ = [
    "MODELS",
    "UPGRADERS",
    "check_kind",
    "upgrade_document",
    "validate_document",
]
