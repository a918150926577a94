"""Elapsed-time accounting for reconstructed shifts.

All values are integer milliseconds. Intervals that cross midnight are
split into the tail of the first day, the head of the last day, and whole
days in between.
"""

from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import ms_between, next_midnight, start_of_day
from ..core.constants import MS_PER_DAY
from .model import Break, Shift


def interval_ms(start: datetime, end: datetime) -> int:
    """Milliseconds from ``start`` to ``end``; negative when ``end`` is earlier."""

    if end < start or start.date() == end.date():
        return ms_between(start, end)

    days_between = (end.date() - start.date()).days
    total = ms_between(start, next_midnight(start))
    total += ms_between(start_of_day(end), end)
    total += MS_PER_DAY * max(0, days_between - 1)
    return total


def break_duration(brk: Break) -> int:
    # open breaks subtract nothing, even on a shift evaluated against "now"
    if brk.start is None or brk.end is None:
        return 0
    return interval_ms(brk.start.occurred_at, brk.end.occurred_at)


def breaks_duration(shift: Shift) -> int:
    return sum(break_duration(b) for b in shift.breaks)


def gross_duration(shift: Shift) -> int:
    if shift.start is None or shift.ended_at is None:
        return 0
    return interval_ms(shift.start.occurred_at, shift.ended_at)


def shift_duration(shift: Shift) -> int:
    """Worked milliseconds net of closed breaks, never below zero."""

    if shift.start is None or shift.ended_at is None:
        return 0
    return max(0, gross_duration(shift) - breaks_duration(shift))
