# SPDX-License-Identifier: MIT
"""Resolve data source documents to integration instances."""

from __future__ import annotations

from typing import Any, Mapping

from .base import EventApiIntegration, SourceIntegration, SqlIntegration


class UnknownDataSourceError(ValueError):
    """Raised when a data source ``type`` has no known integration."""


class Postgres(SqlIntegration):
    type = "postgres"
    schema_param = "defaultSchema"


class Redshift(SqlIntegration):
    type = "redshift"
    schema_param = "defaultSchema"


class Mssql(SqlIntegration):
    type = "mssql"
    schema_param = "defaultSchema"


class Presto(SqlIntegration):
    type = "presto"
    schema_param = "schema"


class Snowflake(SqlIntegration):
    type = "snowflake"
    schema_param = "schema"


class BigQuery(SqlIntegration):
    type = "bigquery"
    schema_param = "defaultDataset"


class Mysql(SqlIntegration):
    type = "mysql"


class ClickHouse(SqlIntegration):
    type = "clickhouse"


class Databricks(SqlIntegration):
    type = "databricks"


class Athena(SqlIntegration):
    type = "athena"


class GoogleAnalytics(EventApiIntegration):
    type = "google_analytics"


class Mixpanel(EventApiIntegration):
    type = "mixpanel"


INTEGRATIONS: dict[str, type[SourceIntegration]] = {
    cls.type: cls
    for cls in (
        Postgres,
        Redshift,
        Mssql,
        Presto,
        Snowflake,
        BigQuery,
        Mysql,
        ClickHouse,
        Databricks,
        Athena,
        GoogleAnalytics,
        Mixpanel,
    )
}


def get_source_integration_object(
    datasource: Mapping[str, Any],
) -> SourceIntegration:
    """Return the integration matching ``datasource['type']``.

    Args:
        datasource: Data source document.

    Returns:
        An integration instance wrapping ``datasource``.

    Raises:
        UnknownDataSourceError: If the type is not supported.
    """

    kind = datasource.get("type")
    cls = INTEGRATIONS.get(kind) if isinstance(kind, str) else None
    if cls is None:
        raise UnknownDataSourceError(f"Unknown data source type: {kind!r}")
    return cls(datasource)


__all__ = ["INTEGRATIONS", "UnknownDataSourceError", "get_source_integration_object"]
