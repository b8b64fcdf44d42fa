from __future__ import annotations

from datetime import date

import pytest

from cancelaciones_sdk.query import table


def test_select_filters_order_and_range_serialize() -> None:
    params = (
        table("cancellation_records")
        .select("id, date, total_cancelled, branches ( name )")
        .eq("branch_id", 3)
        .eq("date", date(2024, 5, 10))
        .order("date", desc=True)
        .range(10, 5)
        .to_params()
    )
    assert params == {
        "select": "id,date,total_cancelled,branches ( name )",
        "branch_id": "eq.3",
        "date": "eq.2024-05-10",
        "order": "date.desc",
        "offset": "10",
        "limit": "5",
    }


def test_boolean_and_or_filters() -> None:
    query = table("flavors").eq("is_active", True).or_("total_sent.is.null", "total_sent.eq.0")
    params = query.to_params(include_select=False)
    assert params == {"is_active": "eq.true", "or": "(total_sent.is.null,total_sent.eq.0)"}
    assert query.path == "/rest/v1/flavors"


def test_range_rejects_invalid_window() -> None:
    with pytest.raises(ValueError):
        table("branches").range(-1, 5)
    with pytest.raises(ValueError):
        table("branches").range(0, 0)
