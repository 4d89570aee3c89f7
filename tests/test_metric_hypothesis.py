# SPDX-License-Identifier: MIT
"""Property-based tests for the metric upgrader."""

from hypothesis import given
from hypothesis import strategies as st

from models import MetricDoc
from upgrades import upgrade_metric_doc

column = st.one_of(st.none(), st.just(""), st.text(min_size=1, max_size=12))

legacy_metrics = st.fixed_dictionaries(
    {},
    optional={
        "id": st.text(min_size=1, max_size=8),
        "userIdType": st.sampled_from(["user", "anonymous", "either"]),
        "userIdColumn": column,
        "anonymousIdColumn": column,
        "earlyStart": st.booleans(),
        "conversionWindowHours": st.one_of(
            st.none(), st.integers(min_value=0, max_value=720)
        ),
    },
)


@given(doc=legacy_metrics)
def test_upgraded_metrics_match_current_shape(doc) -> None:
    """Every legacy metric upgrades to a valid ``MetricDoc``."""
    migrated = upgrade_metric_doc(doc)

    model = MetricDoc.model_validate(migrated)
    assert set(model.user_id_columns) == set(model.user_id_types)


@given(doc=legacy_metrics)
def test_upgrade_is_idempotent(doc) -> None:
    once = upgrade_metric_doc(doc)

    assert upgrade_metric_doc(once) == once


@given(doc=legacy_metrics)
def test_columns_fall_back_to_type_names(doc) -> None:
    """Falsy legacy columns never leak into ``userIdColumns``."""
    columns = upgrade_metric_doc(doc)["userIdColumns"]

    assert all(columns.values())
    if not doc.get("userIdColumn") and "user_id" in columns:
        assert columns["user_id"] == "user_id"
