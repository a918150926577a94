from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_subject_id, require_timestamps
from ..punches.model import PunchEvent
from ..shifts.duration import shift_duration
from ..shifts.model import Shift
from ..shifts.reconstructor import reconstruct_shifts


@dataclass(frozen=True)
class Period:
    """Inclusive range of calendar days."""

    start: date
    end: date

    @classmethod
    def day(cls, value: date) -> "Period":
        return cls(value, value)

    @classmethod
    def week_of(cls, value: date) -> "Period":
        monday = value - timedelta(days=value.weekday())
        return cls(monday, monday + timedelta(days=6))

    @classmethod
    def month_of(cls, value: date) -> "Period":
        last = calendar.monthrange(value.year, value.month)[1]
        return cls(value.replace(day=1), value.replace(day=last))

    @classmethod
    def year(cls, year: int) -> "Period":
        return cls(date(year, 1, 1), date(year, 12, 31))

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    def days(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range((self.end - self.start).days + 1)]


def durations_by_day(shifts: Iterable[Shift]) -> dict[date, int]:
    totals: dict[date, int] = {}
    for shift in shifts:
        totals[shift.day_key] = totals.get(shift.day_key, 0) + shift_duration(shift)
    return totals


def total_duration(
    subject_id: str,
    events: Iterable[PunchEvent],
    period: Optional[Period] = None,
    *,
    now: Optional[datetime] = None,
) -> int:
    """Worked milliseconds of the shifts attributed to days inside ``period``."""

    shifts = reconstruct_shifts(subject_id, events, now=now)
    if period is not None:
        shifts = [s for s in shifts if period.contains(s.day_key)]
    return sum(durations_by_day(shifts).values())


def today_duration(subject_id: str, events: Iterable[PunchEvent], *, now: Optional[datetime] = None) -> int:
    """Worked time today, reconstructed from today's events only.

    Reconstruction runs on the filtered events because end-of-day closes
    depend on which punches are visible.
    """

    subject_id = require_subject_id(subject_id)
    events = list(events)
    require_timestamps(events)

    now = now or now_local()
    todays = [e for e in events if e.occurred_at.date() == now.date()]
    return total_duration(subject_id, todays, now=now)


def monthly_durations(shifts: Iterable[Shift], year: int) -> list[int]:
    buckets = [0] * 12
    for day, ms in durations_by_day(shifts).items():
        if day.year == year:
            buckets[day.month - 1] += ms
    return buckets
