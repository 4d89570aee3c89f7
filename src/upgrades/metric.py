# SPDX-License-Identifier: MIT
"""Upgrade legacy experimentation metric documents."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict

import logfire

from constants import (
    ANONYMOUS_ID,
    DEFAULT_CONVERSION_WINDOW_HOURS,
    EARLY_START_DELAY_HOURS,
    USER_ID,
)

# Legacy single ``userIdType`` values and the identifier types they imply.
LEGACY_USER_ID_TYPES = {
    "user": [USER_ID],
    "anonymous": [ANONYMOUS_ID],
}


def _legacy_user_id_types(doc: Dict[str, Any]) -> list[str]:
    """Return identifier types implied by the legacy ``userIdType`` field."""

    return list(
        LEGACY_USER_ID_TYPES.get(doc.get("userIdType"), [ANONYMOUS_ID, USER_ID])
    )


def _legacy_user_id_columns(doc: Dict[str, Any], types: list[str]) -> dict[str, str]:
    """Map each identifier type to the legacy column that stored it."""

    columns: dict[str, str] = {}
    for id_type in types:
        column = id_type
        if id_type == USER_ID and doc.get("userIdColumn"):
            column = doc["userIdColumn"]
        elif id_type == ANONYMOUS_ID and doc.get("anonymousIdColumn"):
            column = doc["anonymousIdColumn"]
        columns[id_type] = column
    return columns


def upgrade_metric_doc(
    doc: Dict[str, Any],
    default_conversion_window_hours: float = DEFAULT_CONVERSION_WINDOW_HOURS,
) -> Dict[str, Any]:
    """Return ``doc`` upgraded to the current metric shape.

    Three legacy layouts are converted:

    * ``earlyStart`` becomes a negative ``conversionDelayHours`` with the
      window widened by the same amount.
    * The single ``userIdType`` becomes the ``userIdTypes`` list.
    * ``userIdColumn``/``anonymousIdColumn`` become the ``userIdColumns``
      mapping keyed by identifier type.

    Args:
        doc: Metric document in any supported shape.
        default_conversion_window_hours: Window applied when the metric has
            none of its own.

    Returns:
        A new document; ``doc`` is left untouched.
    """

    upgraded = deepcopy(doc)

    if doc.get("conversionDelayHours") is None and doc.get("earlyStart"):
        window = doc.get("conversionWindowHours") or default_conversion_window_hours
        upgraded["conversionDelayHours"] = EARLY_START_DELAY_HOURS
        upgraded["conversionWindowHours"] = window - EARLY_START_DELAY_HOURS
        logfire.debug("Converted earlyStart metric", metric=doc.get("id"))

    if not doc.get("userIdTypes"):
        upgraded["userIdTypes"] = _legacy_user_id_types(doc)

    # An existing mapping is authoritative, even when empty.
    if doc.get("userIdColumns") is None:
        upgraded["userIdColumns"] = _legacy_user_id_columns(
            doc, upgraded.get("userIdTypes") or []
        )

    return upgraded


__all__ = ["LEGACY_USER_ID_TYPES", "upgrade_metric_doc"]
