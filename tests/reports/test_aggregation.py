from __future__ import annotations

from datetime import date, datetime

from worktime.core.enums import PunchKind
from worktime.punches.model import PunchEvent
from worktime.reports.aggregation import Period, durations_by_day, monthly_durations, today_duration, total_duration
from worktime.shifts.duration import shift_duration
from worktime.shifts.reconstructor import reconstruct_shifts

HOUR = 3_600_000


def ev(kind: PunchKind, when: datetime) -> PunchEvent:
    return PunchEvent(subject_id="emp-1", kind=kind, occurred_at=when)


def workday(day: date, start: int = 9, end: int = 17):
    return [
        ev(PunchKind.CLOCK_IN, datetime(day.year, day.month, day.day, start, 0)),
        ev(PunchKind.CLOCK_OUT, datetime(day.year, day.month, day.day, end, 0)),
    ]


def test_period_constructors():
    assert Period.week_of(date(2026, 3, 4)) == Period(date(2026, 3, 2), date(2026, 3, 8))
    assert Period.week_of(date(2026, 3, 8)) == Period(date(2026, 3, 2), date(2026, 3, 8))
    assert Period.month_of(date(2026, 2, 14)) == Period(date(2026, 2, 1), date(2026, 2, 28))
    assert Period.year(2026) == Period(date(2026, 1, 1), date(2026, 12, 31))
    assert len(Period(date(2026, 3, 1), date(2026, 3, 31)).days()) == 31


def test_total_duration_only_counts_shifts_starting_in_period():
    events = workday(date(2026, 3, 2)) + workday(date(2026, 3, 3)) + workday(date(2026, 3, 9))
    now = datetime(2026, 3, 20, 12, 0)

    assert total_duration("emp-1", events, Period.week_of(date(2026, 3, 2)), now=now) == 16 * HOUR
    assert total_duration("emp-1", events, now=now) == 24 * HOUR


def test_overnight_shift_belongs_to_its_start_day():
    events = [
        ev(PunchKind.CLOCK_IN, datetime(2026, 3, 8, 22, 0)),
        ev(PunchKind.CLOCK_OUT, datetime(2026, 3, 9, 6, 0)),
    ]
    now = datetime(2026, 3, 20, 12, 0)

    assert total_duration("emp-1", events, Period.day(date(2026, 3, 8)), now=now) == 8 * HOUR
    assert total_duration("emp-1", events, Period.day(date(2026, 3, 9)), now=now) == 0


def test_grouping_by_day_matches_flat_sum():
    events = (
        workday(date(2026, 3, 2))
        + workday(date(2026, 3, 2), 18, 20)
        + workday(date(2026, 3, 4))
        + [ev(PunchKind.CLOCK_IN, datetime(2026, 3, 5, 22, 0)), ev(PunchKind.CLOCK_OUT, datetime(2026, 3, 6, 6, 0))]
    )
    now = datetime(2026, 3, 20, 12, 0)
    shifts = reconstruct_shifts("emp-1", events, now=now)

    by_day = durations_by_day(shifts)

    assert by_day[date(2026, 3, 2)] == 10 * HOUR
    assert sum(by_day.values()) == sum(shift_duration(s) for s in shifts)
    assert total_duration("emp-1", events, now=now) == sum(by_day.values())


def test_today_reruns_reconstruction_on_todays_events():
    events = [
        ev(PunchKind.CLOCK_IN, datetime(2026, 3, 9, 22, 0)),
        ev(PunchKind.CLOCK_OUT, datetime(2026, 3, 10, 6, 0)),
        ev(PunchKind.CLOCK_IN, datetime(2026, 3, 10, 9, 0)),
    ]
    now = datetime(2026, 3, 10, 12, 0)

    # the 06:00 clock-out is an orphan once yesterday's clock-in is out of view
    assert today_duration("emp-1", events, now=now) == 3 * HOUR


def test_monthly_buckets():
    events = workday(date(2026, 1, 5)) + workday(date(2026, 3, 2)) + workday(date(2026, 3, 3)) + workday(date(2025, 3, 3))
    shifts = reconstruct_shifts("emp-1", events, now=datetime(2026, 6, 1))

    buckets = monthly_durations(shifts, 2026)

    assert len(buckets) == 12
    assert buckets[0] == 8 * HOUR
    assert buckets[2] == 16 * HOUR
    assert sum(buckets) == 24 * HOUR
