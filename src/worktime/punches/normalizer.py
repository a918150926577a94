"""Event normalizer: per-subject chronological ordering of punch events."""

from __future__ import annotations

from typing import Iterable, Sequence

from .model import PunchEvent


def active_only(events: Iterable[PunchEvent]) -> list[PunchEvent]:
    return [e for e in events if e.active]


def sort_events(events: Iterable[PunchEvent]) -> list[PunchEvent]:
    # sorted() is stable: ties keep their input order
    return sorted(events, key=lambda e: e.occurred_at)


def normalize_events(events: Sequence[PunchEvent]) -> dict[str, list[PunchEvent]]:
    """Group events by subject, each group sorted ascending by ``occurred_at``.

    Nothing is dropped or mutated; subjects keep first-seen order.
    """

    grouped: dict[str, list[PunchEvent]] = {}
    for event in events:
        grouped.setdefault(event.subject_id, []).append(event)
    return {subject_id: sort_events(items) for subject_id, items in grouped.items()}
