# SPDX-License-Identifier: MIT
"""Pydantic models describing the current document shapes and configuration.

Persisted documents use camelCase field names and carry many fields that the
upgraders never touch, so the document models allow extra keys and only pin
down the fields an upgrade is responsible for. These models act as the
contract between the upgraders and any code that reads upgraded documents.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from constants import (
    DEFAULT_CONVERSION_WINDOW_HOURS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_QUARANTINE_DIR,
)


class StrictModel(BaseModel):
    """Base model with strict settings to prevent shape drift."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=False)


class DocumentModel(BaseModel):
    """Base model for persisted documents using camelCase wire names."""

    model_config = ConfigDict(
        extra="allow", alias_generator=to_camel, populate_by_name=True
    )


class MetricDoc(DocumentModel):
    """Experimentation metric in its current shape."""

    id: str | None = None
    user_id_types: Annotated[
        list[str],
        Field(min_length=1, description="Identifier types the metric supports."),
    ]
    user_id_columns: dict[str, str] = Field(
        ..., description="Column holding each identifier type."
    )
    conversion_window_hours: float | None = Field(
        None, description="Hours after exposure that conversions are counted."
    )
    conversion_delay_hours: float | None = Field(
        None, description="Hours after exposure before the window opens."
    )


class UserIdTypeDef(DocumentModel):
    """Randomization unit declared by a data source."""

    user_id_type: Annotated[str, Field(min_length=1)]
    description: str = ""


class ExposureQuery(DocumentModel):
    """SQL query returning experiment exposures for one identifier type."""

    id: Annotated[str, Field(min_length=1)]
    name: str
    description: str = ""
    user_id_type: Annotated[str, Field(min_length=1)]
    dimensions: list[str] = Field(default_factory=list)
    query: str


class DataSourceQueries(DocumentModel):
    exposure: list[ExposureQuery] | None = None


class DataSourceSettings(DocumentModel):
    """Connection-independent settings of a data source."""

    user_id_types: list[UserIdTypeDef] | None = None
    queries: DataSourceQueries | None = None


class DataSourceDoc(DocumentModel):
    """Data source connection document in its current shape."""

    id: str | None = None
    type: Annotated[str, Field(min_length=1)]
    settings: DataSourceSettings | None = None


class FeatureEnvironment(DocumentModel):
    """Per-environment toggle and rule list of a feature."""

    enabled: bool
    rules: list[dict[str, Any]]


class FeatureDraft(DocumentModel):
    active: bool = False


class FeatureDoc(DocumentModel):
    """Feature flag definition with environment-scoped settings."""

    id: str | None = None
    environment_settings: dict[str, FeatureEnvironment]
    draft: FeatureDraft | None = None

    @model_validator(mode="before")
    @classmethod
    def _reject_legacy_fields(cls, data: Any) -> Any:
        """Refuse documents that still carry top-level ``environments``/``rules``."""

        if isinstance(data, dict):
            legacy = sorted(key for key in ("environments", "rules") if key in data)
            if legacy:
                raise ValueError(f"legacy feature fields present: {', '.join(legacy)}")
        return data


class AppConfig(StrictModel):
    """Top-level application configuration loaded from ``config/app.yaml``."""

    default_conversion_window_hours: float = Field(
        DEFAULT_CONVERSION_WINDOW_HOURS,
        gt=0,
        description="Conversion window applied when a metric has none.",
    )
    log_level: Annotated[
        str, Field(min_length=1, description="Base Logfire level.")
    ] = DEFAULT_LOG_LEVEL
    quarantine_dir: Path = Field(
        DEFAULT_QUARANTINE_DIR,
        description="Directory receiving documents that failed to upgrade.",
    )
    strict: bool = Field(
        False, description="Exit with an error when any document fails to upgrade."
    )


__all__ = [
    "AppConfig",
    "DataSourceDoc",
    "DataSourceQueries",
    "DataSourceSettings",
    "DocumentModel",
    "ExposureQuery",
    "FeatureDoc",
    "FeatureDraft",
    "FeatureEnvironment",
    "MetricDoc",
    "StrictModel",
    "UserIdTypeDef",
]
