from __future__ import annotations

from ...shifts.model import Shift
from .base import ShiftClassifier


class NoSpecialHours(ShiftClassifier):
    """Ordinary hours only."""

    def attributed_ms(self, shift: Shift, duration_ms: int) -> int:
        return 0
