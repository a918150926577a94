from __future__ import annotations

from dataclasses import dataclass, field

from ...core.constants import DEFAULT_NIGHT_END_WINDOW, DEFAULT_NIGHT_START_WINDOW
from ...core.enums import SpecialHours
from ...holidays.model import HolidayCalendar
from .base import ShiftClassifier
from .holiday_classifier import HolidayHoursClassifier
from .night_classifier import NightHoursClassifier
from .none_classifier import NoSpecialHours


@dataclass
class ClassifierFactory:
    """Factory Pattern: choose the special-hours strategy for a report."""

    night_start_window: tuple[int, int] = DEFAULT_NIGHT_START_WINDOW
    night_end_window: tuple[int, int] = DEFAULT_NIGHT_END_WINDOW
    calendar: HolidayCalendar = field(default_factory=HolidayCalendar)

    def for_kind(self, kind: SpecialHours) -> ShiftClassifier:
        if kind == SpecialHours.NIGHT:
            return NightHoursClassifier(start_window=self.night_start_window, end_window=self.night_end_window)
        if kind == SpecialHours.HOLIDAY:
            return HolidayHoursClassifier(self.calendar)
        return NoSpecialHours()
