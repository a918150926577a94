from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any

from ..core.exceptions import InvalidInputError

_ONE_MS = timedelta(milliseconds=1)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_timestamp(value: Any) -> datetime:
    """Coerce a stored timestamp into a naive local datetime.

    Accepts datetimes and ISO-8601 strings (a trailing ``Z`` is allowed).
    Aware values are converted to local wall-clock time and made naive.
    """

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            raise InvalidInputError(f"Thời điểm không hợp lệ: {value!r}")
    else:
        raise InvalidInputError(f"Thời điểm không hợp lệ: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def end_of_day(value: datetime) -> datetime:
    """Last representable millisecond of the day (23:59:59.999)."""
    return datetime.combine(value.date(), time(23, 59, 59, 999000))


def next_midnight(value: datetime) -> datetime:
    return start_of_day(value) + timedelta(days=1)


def ms_between(start: datetime, end: datetime) -> int:
    """Signed whole milliseconds from ``start`` to ``end``."""
    return (end - start) // _ONE_MS
