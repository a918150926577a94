from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_subject_id
from ..core.constants import DEFAULT_HOURS_LIMIT, MS_PER_HOUR
from ..core.enums import SpecialHours
from ..holidays.model import HolidayCalendar
from ..holidays.repository import HolidayRepository
from ..punches.model import PunchEvent
from ..punches.repository import PunchEventRepository
from ..punches.service import current_status
from ..shifts.duration import breaks_duration, shift_duration
from ..shifts.model import Shift
from ..shifts.reconstructor import reconstruct_shifts
from .aggregation import Period, monthly_durations, today_duration, total_duration
from .classifiers.factory import ClassifierFactory
from .model import AnnualTotals, EmployeeSummary, EmployeeTotals, OfficialDayRow, OfficialReport, ShiftRow

logger = logging.getLogger(__name__)


class WorkTimeReportService:
    def __init__(
        self,
        punches: PunchEventRepository,
        holidays: Optional[HolidayRepository] = None,
        *,
        classifiers: Optional[ClassifierFactory] = None,
        hours_limit: float = DEFAULT_HOURS_LIMIT,
    ):
        self._punches = punches
        self._holidays = holidays
        self._classifiers = classifiers or ClassifierFactory()
        self._hours_limit = hours_limit

    # -- data access -------------------------------------------------

    def _fetch(self, subject_ids: Sequence[str], period: Optional[Period] = None) -> list[PunchEvent]:
        if period is None:
            return list(self._punches.list_for_subjects(subject_ids))
        # one extra day so overnight clock-outs of the last day are visible
        return list(
            self._punches.list_for_subjects(
                subject_ids,
                start=datetime.combine(period.start, time.min),
                end=datetime.combine(period.end + timedelta(days=1), time.max),
            )
        )

    @staticmethod
    def _span_of(shifts: Sequence[Shift]) -> Optional[Period]:
        if not shifts:
            return None
        days = [s.day_key for s in shifts]
        return Period(min(days), max(days))

    def _factory(self, period: Optional[Period]) -> ClassifierFactory:
        if self._holidays is None or period is None:
            return self._classifiers
        calendar = HolidayCalendar(self._holidays.list_between(period.start, period.end))
        return replace(self._classifiers, calendar=calendar)

    # -- shifts ------------------------------------------------------

    @staticmethod
    def _select(shifts: list[Shift], period: Optional[Period], category: Optional[str]) -> list[Shift]:
        if period is not None:
            shifts = [s for s in shifts if period.contains(s.day_key)]
        if category:
            shifts = [s for s in shifts if s.category == category]
        return shifts

    def _to_rows(self, shifts: list[Shift], factory: ClassifierFactory) -> list[ShiftRow]:
        night = factory.for_kind(SpecialHours.NIGHT)
        holiday = factory.for_kind(SpecialHours.HOLIDAY)

        rows = []
        for s in shifts:
            duration = shift_duration(s)
            rows.append(
                ShiftRow(
                    subject_id=s.subject_id,
                    work_date=s.day_key,
                    clock_in=s.started_at,
                    clock_out=s.ended_at,
                    end_reason=s.end_reason,
                    category=s.category,
                    location=s.location,
                    duration_ms=duration,
                    break_ms=0 if s.is_orphan else breaks_duration(s),
                    night_ms=night.attributed_ms(s, duration),
                    holiday_ms=holiday.attributed_ms(s, duration),
                )
            )
        return rows

    def _rows_for(
        self,
        subject_id: str,
        events: Sequence[PunchEvent],
        period: Optional[Period],
        *,
        category: Optional[str],
        factory: ClassifierFactory,
        now: datetime,
    ) -> list[ShiftRow]:
        shifts = reconstruct_shifts(subject_id, events, now=now)
        return self._to_rows(self._select(shifts, period, category), factory)

    def shift_rows(
        self,
        subject_id: str,
        period: Optional[Period] = None,
        *,
        category: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[ShiftRow]:
        subject_id = require_subject_id(subject_id)
        events = self._fetch([subject_id], period)
        shifts = self._select(reconstruct_shifts(subject_id, events, now=now or now_local()), period, category)
        # without a period the holiday calendar covers the days actually worked
        return self._to_rows(shifts, self._factory(period or self._span_of(shifts)))

    # -- dashboards --------------------------------------------------

    def employee_summary(self, subject_id: str, *, now: Optional[datetime] = None) -> EmployeeSummary:
        subject_id = require_subject_id(subject_id)
        now = now or now_local()
        events = self._fetch([subject_id])

        today = now.date()
        return EmployeeSummary(
            subject_id=subject_id,
            status=current_status(subject_id, events, now=now),
            today_ms=today_duration(subject_id, events, now=now),
            week_ms=total_duration(subject_id, events, Period.week_of(today), now=now),
            month_ms=total_duration(subject_id, events, Period.month_of(today), now=now),
            total_ms=total_duration(subject_id, events, now=now),
        )

    # -- reports -----------------------------------------------------

    def _totals(
        self,
        subject_ids: Sequence[str],
        period: Period,
        *,
        category: Optional[str],
        special: SpecialHours,
        now: Optional[datetime],
    ) -> list[EmployeeTotals]:
        ids = [require_subject_id(s) for s in subject_ids]
        now = now or now_local()
        events = self._fetch(ids, period)
        factory = self._factory(period)

        out = []
        for subject_id in ids:
            rows = self._rows_for(subject_id, events, period, category=category, factory=factory, now=now)
            total = sum(r.duration_ms for r in rows)
            night = sum(r.night_ms for r in rows)
            holiday = sum(r.holiday_ms for r in rows)
            displayed = {SpecialHours.NIGHT: night, SpecialHours.HOLIDAY: holiday}.get(special, total)
            out.append(
                EmployeeTotals(
                    subject_id=subject_id,
                    total_ms=total,
                    night_ms=night,
                    holiday_ms=holiday,
                    displayed_ms=displayed,
                    category=category,
                )
            )
        return out

    def daily_report(
        self,
        subject_ids: Sequence[str],
        period: Period,
        *,
        category: Optional[str] = None,
        special: SpecialHours = SpecialHours.NONE,
        now: Optional[datetime] = None,
    ) -> list[EmployeeTotals]:
        return self._totals(subject_ids, period, category=category, special=special, now=now)

    def annual_report(
        self,
        subject_ids: Sequence[str],
        year: int,
        *,
        category: Optional[str] = None,
        special: SpecialHours = SpecialHours.NONE,
        now: Optional[datetime] = None,
    ) -> list[AnnualTotals]:
        ids = [require_subject_id(s) for s in subject_ids]
        now = now or now_local()
        period = Period.year(year)
        events = self._fetch(ids, period)
        factory = self._factory(period)
        classifier = factory.for_kind(special)

        out = []
        for subject_id in ids:
            shifts = self._select(reconstruct_shifts(subject_id, events, now=now), period, category)
            if special == SpecialHours.NONE:
                monthly = monthly_durations(shifts, year)
            else:
                monthly = [0] * 12
                for s in shifts:
                    monthly[s.day_key.month - 1] += classifier.attributed_ms(s, shift_duration(s))

            rows = self._to_rows(shifts, factory)
            out.append(
                AnnualTotals(
                    subject_id=subject_id,
                    year=year,
                    monthly_ms=monthly,
                    total_ms=sum(monthly),
                    night_ms=sum(r.night_ms for r in rows),
                    holiday_ms=sum(r.holiday_ms for r in rows),
                    category=category,
                )
            )
        return out

    def official_report(
        self,
        subject_id: str,
        period: Period,
        *,
        category: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> OfficialReport:
        """Monthly register: one row per calendar day of the period.

        Several shifts on one day are merged: first clock-in, last clock-out,
        summed breaks and hours.
        """

        rows = self.shift_rows(subject_id, period, category=category, now=now)

        by_day: dict[date, list[ShiftRow]] = {}
        for r in rows:
            by_day.setdefault(r.work_date, []).append(r)

        days = []
        for day in period.days():
            items = by_day.get(day)
            if not items:
                days.append(OfficialDayRow(work_date=day))
                continue
            starts = [r.clock_in for r in items if r.clock_in]
            ends = [r.clock_out for r in items if r.clock_out]
            days.append(
                OfficialDayRow(
                    work_date=day,
                    clock_in=min(starts) if starts else None,
                    clock_out=max(ends) if ends else None,
                    break_ms=sum(r.break_ms for r in items),
                    duration_ms=sum(r.duration_ms for r in items),
                    night_ms=sum(r.night_ms for r in items),
                    holiday_ms=sum(r.holiday_ms for r in items),
                    category=next((r.category for r in items if r.category), None),
                )
            )
        return OfficialReport(subject_id=require_subject_id(subject_id), start=period.start, end=period.end, days=days)

    def alarms_report(
        self,
        subject_ids: Sequence[str],
        period: Period,
        *,
        category: Optional[str] = None,
        hours_limit: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> list[EmployeeTotals]:
        """Employees whose worked time in the period exceeds the limit."""

        limit = self._hours_limit if hours_limit is None else hours_limit
        totals = self._totals(subject_ids, period, category=category, special=SpecialHours.NONE, now=now)
        flagged = [t for t in totals if t.total_ms > limit * MS_PER_HOUR]
        if flagged:
            logger.info("%d of %d employees over %sh between %s and %s", len(flagged), len(totals), limit, period.start, period.end)
        return flagged
