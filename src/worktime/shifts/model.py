from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ShiftEndReason
from ..punches.model import PunchEvent


@dataclass(frozen=True)
class Break:
    """Khoảng nghỉ thuộc về đúng một ca."""

    start: Optional[PunchEvent]
    end: Optional[PunchEvent] = None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class Shift:
    """Thực thể miền (domain): Ca làm việc được dựng lại từ các lần chấm công.

    ``start`` is absent for an orphaned clock-out. ``end`` is the closing
    clock-out when there was one; ``ended_at`` is always set and carries the
    synthetic end-of-day or "now" boundary otherwise.
    """

    subject_id: str
    start: Optional[PunchEvent]
    ended_at: Optional[datetime] = None
    end: Optional[PunchEvent] = None
    end_reason: Optional[ShiftEndReason] = None
    breaks: tuple[Break, ...] = ()
    category: Optional[str] = None
    location: Optional[str] = None

    @property
    def started_at(self) -> Optional[datetime]:
        return self.start.occurred_at if self.start else None

    @property
    def is_orphan(self) -> bool:
        return self.start is None

    @property
    def is_open(self) -> bool:
        """Still running at evaluation time (closed against "now")."""
        return self.end_reason is None or self.end_reason == ShiftEndReason.NOW

    @property
    def open_break(self) -> Optional[Break]:
        if self.breaks and self.breaks[-1].is_open:
            return self.breaks[-1]
        return None

    @property
    def anchor(self) -> datetime:
        return self.started_at or self.ended_at

    @property
    def day_key(self) -> date:
        """Calendar day the shift is attributed to."""
        return self.anchor.date()
