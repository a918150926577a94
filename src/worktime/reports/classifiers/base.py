from __future__ import annotations

from abc import ABC, abstractmethod

from ...shifts.model import Shift


class ShiftClassifier(ABC):
    """Strategy Pattern: decide how much of a shift counts as special hours."""

    @abstractmethod
    def attributed_ms(self, shift: Shift, duration_ms: int) -> int:
        raise NotImplementedError
