from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import ClockStatus, ShiftEndReason


@dataclass(frozen=True)
class ShiftRow:
    """Read-model phục vụ báo cáo: một ca đã tính thời lượng."""

    subject_id: str
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    end_reason: Optional[ShiftEndReason]
    category: Optional[str]
    location: Optional[str]
    duration_ms: int
    break_ms: int
    night_ms: int = 0
    holiday_ms: int = 0


@dataclass(frozen=True)
class EmployeeSummary:
    subject_id: str
    status: ClockStatus
    today_ms: int
    week_ms: int
    month_ms: int
    total_ms: int


@dataclass(frozen=True)
class EmployeeTotals:
    subject_id: str
    total_ms: int
    night_ms: int
    holiday_ms: int
    displayed_ms: int
    category: Optional[str] = None


@dataclass(frozen=True)
class AnnualTotals:
    subject_id: str
    year: int
    monthly_ms: list[int]
    total_ms: int
    night_ms: int
    holiday_ms: int
    category: Optional[str] = None


@dataclass(frozen=True)
class OfficialDayRow:
    work_date: date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    break_ms: int = 0
    duration_ms: int = 0
    night_ms: int = 0
    holiday_ms: int = 0
    category: Optional[str] = None


@dataclass(frozen=True)
class OfficialReport:
    subject_id: str
    start: date
    end: date
    days: list[OfficialDayRow] = field(default_factory=list)

    @property
    def total_ms(self) -> int:
        return sum(d.duration_ms for d in self.days)
