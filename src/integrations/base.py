# SPDX-License-Identifier: MIT
"""Integration base classes.

Only the surface the upgraders rely on is modelled here: whether a data source
speaks SQL and, if so, which schema unqualified tables live in.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping


class SourceIntegration:
    """Integration built from a data source document."""

    type: ClassVar[str] = ""

    def __init__(self, datasource: Mapping[str, Any]) -> None:
        self.datasource = datasource
        self.params: Mapping[str, Any] = datasource.get("params") or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.datasource.get('id')!r})"


class SqlIntegration(SourceIntegration):
    """Integration that queries a SQL warehouse."""

    # Connection parameter naming the default schema, if the warehouse has one.
    schema_param: ClassVar[str | None] = None

    def get_schema(self) -> str:
        """Return the default schema for unqualified table names or ``""``."""

        if not self.schema_param:
            return ""
        return str(self.params.get(self.schema_param) or "")


class EventApiIntegration(SourceIntegration):
    """Integration backed by a hosted analytics API rather than SQL."""


__all__ = ["EventApiIntegration", "SourceIntegration", "SqlIntegration"]
