from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from cancelaciones_sdk.models import ShiftPeriod

DISPLAY_FORMAT = "%d-%m-%Y"
_INPUT_FORMATS = ("%d-%m-%Y", "%d/%m/%Y", "%Y-%m-%d")
PLACEHOLDER = "—"


def now_in(tz: ZoneInfo, now: datetime | None = None) -> datetime:
    current = now or datetime.now(tz)
    if current.tzinfo is None:
        return current.replace(tzinfo=tz)
    return current.astimezone(tz)


def today_in(tz: ZoneInfo, now: datetime | None = None) -> date:
    return now_in(tz, now).date()


def current_shift(tz: ZoneInfo, now: datetime | None = None) -> ShiftPeriod:
    return ShiftPeriod.AM if now_in(tz, now).hour < 12 else ShiftPeriod.PM


def format_display_date(value: date | None) -> str:
    if value is None:
        return PLACEHOLDER
    return value.strftime(DISPLAY_FORMAT)


def parse_input_date(text: str | None) -> date | None:
    """Blank input means no date; anything else must match a known format."""
    raw = (text or "").strip()
    if not raw:
        return None
    for fmt in _INPUT_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Fecha inválida: {raw!r} (use dd-mm-aaaa)")
