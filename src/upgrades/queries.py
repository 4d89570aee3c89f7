# SPDX-License-Identifier: MIT
"""Default SQL for experiment exposure queries."""

from __future__ import annotations

from typing import Any, Mapping

from constants import ANONYMOUS_ID, USER_ID


def _section(settings: Mapping[str, Any] | None, name: str) -> Mapping[str, Any]:
    """Return ``settings[name]`` or an empty mapping when either is missing."""

    if not settings:
        return {}
    return settings.get(name) or {}


def get_default_experiment_query(
    settings: Mapping[str, Any] | None,
    user_id_type: str = USER_ID,
    schema: str | None = None,
) -> str:
    """Return the default exposure query for a data source.

    Column names come from ``settings['experiments']`` first, then from
    ``settings['default']`` where that section applies, and finally from the
    conventional event-tracking names.

    Args:
        settings: Data source settings document, possibly ``None``.
        user_id_type: Identifier type the query selects.
        schema: Schema prepended to the table when it is not already qualified.

    Returns:
        The SQL text.

    Examples:
        >>> get_default_experiment_query(None, "anonymous_id", "web").splitlines()[-1]
        '  web.experiment_viewed'
    """

    experiments = _section(settings, "experiments")
    defaults = _section(settings, "default")

    column = user_id_type
    if user_id_type == USER_ID:
        column = (
            experiments.get("userIdColumn") or defaults.get("userIdColumn") or USER_ID
        )
    elif user_id_type == ANONYMOUS_ID:
        column = (
            experiments.get("anonymousIdColumn")
            or defaults.get("anonymousIdColumn")
            or ANONYMOUS_ID
        )

    timestamp = (
        experiments.get("timestampColumn")
        or defaults.get("timestampColumn")
        or "received_at"
    )
    experiment_id = experiments.get("experimentIdColumn") or "experiment_id"
    variation_id = experiments.get("variationColumn") or "variation_id"

    table = experiments.get("table")
    prefix = f"{schema}." if schema and "." not in (table or "") else ""

    return (
        "SELECT\n"
        f"  {column} as {user_id_type},\n"
        f"  {timestamp} as timestamp,\n"
        f"  {experiment_id} as experiment_id,\n"
        f"  {variation_id} as variation_id\n"
        "FROM \n"
        f"  {prefix}{table or 'experiment_viewed'}"
    )


__all__ = ["get_default_experiment_query"]
