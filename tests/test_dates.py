from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from cancelaciones_sdk.models import ShiftPeriod

from cancelaciones_app.domain.dates import current_shift, format_display_date, parse_input_date, today_in

LA_PAZ = ZoneInfo("America/La_Paz")


def test_today_uses_branch_calendar() -> None:
    # 02:00 UTC is still the previous evening in La Paz (UTC-4)
    now = datetime(2024, 5, 11, 2, 0, tzinfo=timezone.utc)
    assert today_in(LA_PAZ, now) == date(2024, 5, 10)
    assert current_shift(LA_PAZ, now) is ShiftPeriod.PM


def test_morning_is_am_shift() -> None:
    now = datetime(2024, 5, 10, 13, 0, tzinfo=timezone.utc)
    assert current_shift(LA_PAZ, now) is ShiftPeriod.AM


def test_display_format() -> None:
    assert format_display_date(date(2024, 5, 3)) == "03-05-2024"
    assert format_display_date(None) == "—"


@pytest.mark.parametrize("raw", ["03-05-2024", "03/05/2024", "2024-05-03"])
def test_parse_input_date_formats(raw: str) -> None:
    assert parse_input_date(raw) == date(2024, 5, 3)


def test_parse_input_date_blank_and_invalid() -> None:
    assert parse_input_date("  ") is None
    with pytest.raises(ValueError):
        parse_input_date("31-02-2024")
