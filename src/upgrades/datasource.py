# SPDX-License-Identifier: MIT
"""Upgrade legacy data source documents."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Callable, Dict, Mapping

import logfire

from constants import ANONYMOUS_ID, DEFAULT_USER_ID_TYPES, USER_ID
from integrations import (
    SourceIntegration,
    SqlIntegration,
    get_source_integration_object,
)

from .queries import get_default_experiment_query

IntegrationFactory = Callable[[Mapping[str, Any]], SourceIntegration]

EXPOSURE_QUERY_NAMES = {
    USER_ID: "Logged-in User Experiments",
    ANONYMOUS_ID: "Anonymous Visitor Experiments",
}


def _exposure_queries(
    settings: Dict[str, Any], integration: SqlIntegration
) -> list[Dict[str, Any]]:
    """Build one exposure query per default identifier type."""

    queries = settings["queries"]
    dimensions = settings.get("experimentDimensions") or []
    schema = integration.get_schema()
    return [
        {
            "id": id_type,
            "name": name,
            "description": "",
            "userIdType": id_type,
            "dimensions": list(dimensions),
            "query": queries.get("experimentsQuery")
            or get_default_experiment_query(settings, id_type, schema),
        }
        for id_type, name in EXPOSURE_QUERY_NAMES.items()
    ]


def upgrade_datasource_object(
    datasource: Dict[str, Any],
    integration_factory: IntegrationFactory = get_source_integration_object,
) -> Dict[str, Any]:
    """Return ``datasource`` with randomization units and exposure queries.

    Data sources created before identifier types existed receive the default
    ``user_id``/``anonymous_id`` pair. SQL data sources without exposure
    queries get one per identifier type, reusing the legacy
    ``experimentsQuery`` when present and the generated default otherwise.

    Args:
        datasource: Data source document.
        integration_factory: Resolves the document to its integration.

    Returns:
        A new document; ``datasource`` is left untouched.

    Raises:
        UnknownDataSourceError: If exposure queries are missing and the data
            source type is not recognised.
    """

    upgraded = deepcopy(datasource)
    settings = upgraded.get("settings")
    if settings is None:
        return upgraded

    if settings.get("userIdTypes") is None:
        settings["userIdTypes"] = deepcopy(DEFAULT_USER_ID_TYPES)

    if (settings.get("queries") or {}).get("exposure") is None:
        integration = integration_factory(upgraded)
        if isinstance(integration, SqlIntegration):
            if settings.get("queries") is None:
                settings["queries"] = {}
            settings["queries"]["exposure"] = _exposure_queries(settings, integration)
            logfire.debug(
                "Added exposure queries",
                datasource=upgraded.get("id"),
                type=upgraded.get("type"),
            )

    return upgraded


__all__ = ["EXPOSURE_QUERY_NAMES", "upgrade_datasource_object"]
