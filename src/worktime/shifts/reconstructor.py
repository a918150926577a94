"""Shift reconstruction.

A fold over one subject's chronologically sorted punch events. Each step
returns a new accumulator; no shift is mutated after it is built.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from functools import reduce
from typing import Iterable, Optional

from ..common.datetime_utils import end_of_day, now_local
from ..common.validators import require_subject_id, require_timestamps
from ..core.enums import PunchKind, ShiftEndReason
from ..punches.model import PunchEvent
from ..punches.normalizer import active_only, sort_events
from .model import Break, Shift

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Fold:
    """Fold state. Finished shifts are kept with the position of the event
    that anchors them, so ties on time resolve in event order."""

    open_shift: Optional[Shift] = None
    open_index: int = -1
    emitted: tuple[tuple[int, Shift], ...] = ()
    orphans: tuple[tuple[int, Shift], ...] = ()


def _open(event: PunchEvent) -> Shift:
    return Shift(
        subject_id=event.subject_id,
        start=event,
        category=event.category,
        location=event.location,
    )


def _close_at_end_of_day(shift: Shift) -> Shift:
    # a missed clock-out is attributed entirely to the day the shift began
    logger.debug("Closing shift started %s at end of day (missing clock-out)", shift.started_at)
    return replace(
        shift,
        ended_at=end_of_day(shift.started_at),
        end_reason=ShiftEndReason.END_OF_DAY,
        breaks=tuple(b for b in shift.breaks if not b.is_open),
    )


def _on_clock_in(acc: _Fold, index: int, event: PunchEvent) -> _Fold:
    emitted = acc.emitted
    if acc.open_shift is not None:
        emitted = emitted + ((acc.open_index, _close_at_end_of_day(acc.open_shift)),)
    return replace(acc, open_shift=_open(event), open_index=index, emitted=emitted)


def _on_break_start(acc: _Fold, index: int, event: PunchEvent) -> _Fold:
    shift = acc.open_shift
    if shift is None:
        logger.debug("Ignoring break start at %s outside any shift", event.occurred_at)
        return acc
    if shift.open_break is not None:
        logger.debug("Ignoring duplicate break start at %s", event.occurred_at)
        return acc
    return replace(acc, open_shift=replace(shift, breaks=shift.breaks + (Break(start=event),)))


def _on_break_end(acc: _Fold, index: int, event: PunchEvent) -> _Fold:
    shift = acc.open_shift
    if shift is None or shift.open_break is None:
        logger.debug("Ignoring break end at %s with no open break", event.occurred_at)
        return acc
    closed = replace(shift.breaks[-1], end=event)
    return replace(acc, open_shift=replace(shift, breaks=shift.breaks[:-1] + (closed,)))


def _on_clock_out(acc: _Fold, index: int, event: PunchEvent) -> _Fold:
    shift = acc.open_shift
    if shift is None:
        logger.debug("Orphaned clock-out at %s", event.occurred_at)
        orphan = Shift(
            subject_id=event.subject_id,
            start=None,
            ended_at=event.occurred_at,
            end=event,
            end_reason=ShiftEndReason.CLOCK_OUT,
            category=event.category,
            location=event.location,
        )
        return replace(acc, orphans=acc.orphans + ((index, orphan),))

    closed = replace(shift, ended_at=event.occurred_at, end=event, end_reason=ShiftEndReason.CLOCK_OUT)
    return replace(acc, open_shift=None, emitted=acc.emitted + ((acc.open_index, closed),))


_TRANSITIONS = {
    PunchKind.CLOCK_IN: _on_clock_in,
    PunchKind.BREAK_START: _on_break_start,
    PunchKind.BREAK_END: _on_break_end,
    PunchKind.CLOCK_OUT: _on_clock_out,
}


def _step(acc: _Fold, item: tuple[int, PunchEvent]) -> _Fold:
    index, event = item
    return _TRANSITIONS[event.kind](acc, index, event)


def reconstruct_shifts(
    subject_id: str,
    events: Iterable[PunchEvent],
    *,
    now: Optional[datetime] = None,
) -> list[Shift]:
    """Rebuild the shifts of one subject from its punch events.

    Events of other subjects and inactive events are skipped. Input order
    does not matter. A shift still open after the last event is closed at
    ``now`` and keeps its open break, which then counts for nothing.
    """

    subject_id = require_subject_id(subject_id)
    own = [e for e in active_only(events) if str(e.subject_id) == subject_id]
    require_timestamps(own)

    acc = reduce(_step, enumerate(sort_events(own)), _Fold())

    shifts = list(acc.emitted)
    if acc.open_shift is not None:
        closed = replace(acc.open_shift, ended_at=now or now_local(), end_reason=ShiftEndReason.NOW)
        shifts.append((acc.open_index, closed))

    # orphans go back to their chronological position; ties follow event order
    ordered = sorted(shifts + list(acc.orphans), key=lambda item: (item[1].anchor, item[0]))
    return [s for _, s in ordered]
