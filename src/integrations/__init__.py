# SPDX-License-Identifier: MIT
"""Minimal view of the query-integration layer used by the upgraders.

Exports:
    SourceIntegration: Base class for every data source integration.
    SqlIntegration: Integrations that run SQL against a warehouse.
    get_source_integration_object: Build the integration for a data source.
    UnknownDataSourceError: Raised for unsupported data source types.
"""

from .base import EventApiIntegration, SourceIntegration, SqlIntegration
from .factory import (
    INTEGRATIONS,
    UnknownDataSourceError,
    get_source_integration_object,
)

__all__ = [
    "EventApiIntegration",
    "INTEGRATIONS",
    "SourceIntegration",
    "SqlIntegration",
    "UnknownDataSourceError",
    "get_source_integration_object",
]
