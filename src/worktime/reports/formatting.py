from __future__ import annotations

from ..core.constants import MS_PER_HOUR, MS_PER_MINUTE


def _hours_minutes(ms: int) -> tuple[int, int]:
    ms = max(0, int(ms))
    hours = ms // MS_PER_HOUR
    # half-up rounding of the leftover fraction of an hour
    minutes = ((ms % MS_PER_HOUR) * 60 + MS_PER_HOUR // 2) // MS_PER_HOUR
    if minutes == 60:
        hours, minutes = hours + 1, 0
    return hours, minutes


def format_duration(ms: int) -> str:
    """Milliseconds -> ``"{H}h {MM}m"``, e.g. ``"7h 30m"``."""
    hours, minutes = _hours_minutes(ms)
    return f"{hours}h {minutes:02d}m"


def format_clock(ms: int) -> str:
    """Milliseconds -> ``"H:MM"`` as printed on the official register."""
    hours, minutes = _hours_minutes(ms)
    return f"{hours}:{minutes:02d}"


def format_break(ms: int) -> str:
    if ms <= 0:
        return ""
    return f"{ms // MS_PER_HOUR}:{(ms % MS_PER_HOUR) // MS_PER_MINUTE:02d}"
