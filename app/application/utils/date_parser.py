from __future__ import annotations

import re
from datetime import date, datetime
from zoneinfo import ZoneInfo

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
SLOT_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_iso_date(text: str) -> date | None:
    """Parse a strict YYYY-MM-DD calendar date. Returns None if malformed."""
    if not isinstance(text, str) or not ISO_DATE_RE.match(text.strip()):
        return None
    try:
        return datetime.strptime(text.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def sunday_weekday(value: date) -> int:
    # date.weekday() is Monday=0; blackout rules count from Sunday=0
    return value.isoweekday() % 7


def weekday_of(date_iso: str) -> int | None:
    parsed = parse_iso_date(date_iso)
    if parsed is None:
        return None
    return sunday_weekday(parsed)


def today_iso(timezone: ZoneInfo | None = None) -> str:
    if timezone is None:
        return date.today().isoformat()
    return datetime.now(timezone).date().isoformat()


def is_slot_string(text: str) -> bool:
    return isinstance(text, str) and bool(SLOT_RE.match(text))


def slot_sort_key(slot: str) -> tuple[int, int]:
    hours, minutes = slot.split(":")
    return int(hours), int(minutes)
