from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_subject_id
from ..core.enums import ClockStatus, PunchKind
from ..core.exceptions import ValidationError
from ..shifts.model import Shift
from ..shifts.reconstructor import reconstruct_shifts
from .model import PunchEvent
from .repository import PunchEventRepository

logger = logging.getLogger(__name__)


def _last_open_shift(subject_id: str, events: Iterable[PunchEvent], now: datetime) -> Optional[Shift]:
    shifts = reconstruct_shifts(subject_id, events, now=now)
    if shifts and shifts[-1].is_open and not shifts[-1].is_orphan:
        return shifts[-1]
    return None


def _status_of(shift: Optional[Shift]) -> ClockStatus:
    if shift is None:
        return ClockStatus.IDLE
    if shift.open_break is not None:
        return ClockStatus.PAUSED
    return ClockStatus.WORKING


def current_status(subject_id: str, events: Iterable[PunchEvent], *, now: Optional[datetime] = None) -> ClockStatus:
    """Where the employee stands right now, derived from the reconstruction."""
    return _status_of(_last_open_shift(subject_id, events, now or now_local()))


_ALLOWED = {
    PunchKind.CLOCK_IN: {ClockStatus.IDLE},
    PunchKind.BREAK_START: {ClockStatus.WORKING},
    PunchKind.BREAK_END: {ClockStatus.PAUSED},
    PunchKind.CLOCK_OUT: {ClockStatus.WORKING, ClockStatus.PAUSED},
}

_REJECTED = {
    PunchKind.CLOCK_IN: "Bạn đang trong ca làm việc, hãy chấm công tan ca trước",
    PunchKind.BREAK_START: "Chỉ có thể bắt đầu nghỉ khi đang làm việc",
    PunchKind.BREAK_END: "Bạn không ở trong giờ nghỉ",
    PunchKind.CLOCK_OUT: "Không có ca nào đang mở để chấm công tan ca",
}


class PunchService:
    def __init__(self, punches: PunchEventRepository):
        self._punches = punches

    def status(self, subject_id: str, *, now: Optional[datetime] = None) -> ClockStatus:
        subject_id = require_subject_id(subject_id)
        return current_status(subject_id, self._punches.list_for_subjects([subject_id]), now=now)

    def register(
        self,
        subject_id: str,
        kind: PunchKind,
        *,
        category: Optional[str] = None,
        location: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        subject_id = require_subject_id(subject_id)
        now = now or now_local()

        events = self._punches.list_for_subjects([subject_id])
        shift = _last_open_shift(subject_id, events, now)
        status = _status_of(shift)

        if status not in _ALLOWED[kind]:
            raise ValidationError(_REJECTED[kind])

        if kind == PunchKind.CLOCK_IN:
            category = require_non_empty(category or "", "Loại ca")
            location = require_non_empty(location or "", "Nơi làm việc")
        elif shift is not None:
            # break and clock-out punches carry the open shift's labels
            category, location = shift.category, shift.location

        event_id = self._punches.create(
            subject_id=subject_id,
            kind=kind,
            occurred_at=now,
            category=category,
            location=location,
        )
        logger.info("Recorded %s for subject %s at %s", kind.value, subject_id, now)
        return event_id
