from __future__ import annotations

from ...core.constants import DEFAULT_NIGHT_END_WINDOW, DEFAULT_NIGHT_START_WINDOW
from ...shifts.model import Shift
from .base import ShiftClassifier


class NightHoursClassifier(ShiftClassifier):
    """Night shift: starts late evening and ends early morning.

    The whole net duration counts as night hours; partial overlap with the
    night window is not prorated.
    """

    def __init__(
        self,
        *,
        start_window: tuple[int, int] = DEFAULT_NIGHT_START_WINDOW,
        end_window: tuple[int, int] = DEFAULT_NIGHT_END_WINDOW,
    ):
        self._start_window = tuple(start_window)
        self._end_window = tuple(end_window)

    def attributed_ms(self, shift: Shift, duration_ms: int) -> int:
        if shift.started_at is None or shift.ended_at is None:
            return 0
        lo, hi = self._start_window
        end_lo, end_hi = self._end_window
        if lo <= shift.started_at.hour < hi and end_lo <= shift.ended_at.hour < end_hi:
            return duration_ms
        return 0
