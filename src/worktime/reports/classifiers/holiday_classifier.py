from __future__ import annotations

from ...holidays.model import HolidayCalendar
from ...shifts.model import Shift
from .base import ShiftClassifier


class HolidayHoursClassifier(ShiftClassifier):
    """Shift worked on a holiday (global or of the shift's work site)."""

    def __init__(self, calendar: HolidayCalendar):
        self._calendar = calendar

    def attributed_ms(self, shift: Shift, duration_ms: int) -> int:
        if shift.is_orphan:
            return 0
        if self._calendar.is_holiday(shift.day_key, shift.location):
            return duration_ms
        return 0
