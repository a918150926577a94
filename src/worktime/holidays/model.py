from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional


@dataclass(frozen=True)
class Holiday:
    """Ngày lễ; ``location`` rỗng nghĩa là áp dụng cho mọi nơi làm việc."""

    holiday_date: date
    name: Optional[str] = None
    location: Optional[str] = None


class HolidayCalendar:
    def __init__(self, holidays: Iterable[Holiday] = ()):
        self._keys = {(h.holiday_date, h.location) for h in holidays}

    def is_holiday(self, day: date, location: Optional[str] = None) -> bool:
        if (day, None) in self._keys:
            return True
        return location is not None and (day, location) in self._keys
