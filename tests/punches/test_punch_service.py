from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from worktime.core.enums import ClockStatus, PunchKind
from worktime.core.exceptions import ValidationError
from worktime.punches.model import PunchEvent
from worktime.punches.service import PunchService, current_status


class InMemoryPunches:
    def __init__(self, events=None):
        self.events: list[PunchEvent] = list(events or [])

    def list_for_subjects(self, subject_ids, *, start=None, end=None, active_only=True):
        return [e for e in self.events if e.subject_id in subject_ids and (e.active or not active_only)]

    def create(self, *, subject_id, kind, occurred_at, category=None, location=None) -> int:
        self.events.append(
            PunchEvent(
                subject_id=subject_id,
                kind=kind,
                occurred_at=occurred_at,
                category=category,
                location=location,
                event_id=len(self.events) + 1,
            )
        )
        return len(self.events)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 2, hour, minute)


def test_status_follows_the_punch_sequence():
    repo = InMemoryPunches()
    svc = PunchService(repo)

    assert svc.status("emp-1", now=at(8)) == ClockStatus.IDLE

    svc.register("emp-1", PunchKind.CLOCK_IN, category="shift", location="Madrid", now=at(9))
    assert svc.status("emp-1", now=at(10)) == ClockStatus.WORKING

    svc.register("emp-1", PunchKind.BREAK_START, now=at(12))
    assert svc.status("emp-1", now=at(12, 10)) == ClockStatus.PAUSED

    svc.register("emp-1", PunchKind.BREAK_END, now=at(12, 30))
    svc.register("emp-1", PunchKind.CLOCK_OUT, now=at(17))
    assert svc.status("emp-1", now=at(18)) == ClockStatus.IDLE


def test_follow_up_punches_inherit_shift_labels():
    repo = InMemoryPunches()
    svc = PunchService(repo)

    svc.register("emp-1", PunchKind.CLOCK_IN, category="coordination", location="Toledo", now=at(9))
    svc.register("emp-1", PunchKind.CLOCK_OUT, now=at(17))

    out = repo.events[-1]
    assert out.kind == PunchKind.CLOCK_OUT
    assert out.category == "coordination"
    assert out.location == "Toledo"


def test_clock_in_requires_category_and_location():
    svc = PunchService(InMemoryPunches())

    with pytest.raises(ValidationError):
        svc.register("emp-1", PunchKind.CLOCK_IN, location="Madrid", now=at(9))

    with pytest.raises(ValidationError):
        svc.register("emp-1", PunchKind.CLOCK_IN, category="shift", now=at(9))


@pytest.mark.parametrize(
    "kind",
    [PunchKind.BREAK_START, PunchKind.BREAK_END, PunchKind.CLOCK_OUT],
)
def test_punches_without_open_shift_are_rejected(kind: PunchKind):
    svc = PunchService(InMemoryPunches())

    with pytest.raises(ValidationError):
        svc.register("emp-1", kind, now=at(9))


def test_double_clock_in_is_rejected():
    repo = InMemoryPunches()
    svc = PunchService(repo)
    svc.register("emp-1", PunchKind.CLOCK_IN, category="shift", location="Madrid", now=at(9))

    with pytest.raises(ValidationError):
        svc.register("emp-1", PunchKind.CLOCK_IN, category="shift", location="Madrid", now=at(10))
    assert len(repo.events) == 1


def test_current_status_ignores_orphan_clock_outs():
    events = [PunchEvent(subject_id="emp-1", kind=PunchKind.CLOCK_OUT, occurred_at=at(17))]
    assert current_status("emp-1", events, now=at(18)) == ClockStatus.IDLE


def test_clock_in_at_same_instant_as_stray_clock_out_counts_as_working():
    events = [
        PunchEvent(subject_id="emp-1", kind=PunchKind.CLOCK_OUT, occurred_at=at(9)),
        PunchEvent(subject_id="emp-1", kind=PunchKind.CLOCK_IN, occurred_at=at(9), category="shift", location="Madrid"),
    ]
    assert current_status("emp-1", events, now=at(10)) == ClockStatus.WORKING

    svc = PunchService(InMemoryPunches(events))
    with pytest.raises(ValidationError):
        svc.register("emp-1", PunchKind.CLOCK_IN, category="shift", location="Madrid", now=at(10))
    assert svc.register("emp-1", PunchKind.CLOCK_OUT, now=at(17)) == 3
