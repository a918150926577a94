from __future__ import annotations

from datetime import datetime

import pytest

from worktime.container import build_services
from worktime.core.enums import PunchKind
from worktime.main import create_app
from worktime.punches.model import PunchEvent


class InMemoryPunches:
    def __init__(self, events=None):
        self.events: list[PunchEvent] = list(events or [])

    def list_for_subjects(self, subject_ids, *, start=None, end=None, active_only=True):
        return [
            e
            for e in self.events
            if e.subject_id in subject_ids
            and (start is None or e.occurred_at >= start)
            and (end is None or e.occurred_at <= end)
        ]

    def create(self, *, subject_id, kind, occurred_at, category=None, location=None) -> int:
        self.events.append(
            PunchEvent(subject_id=subject_id, kind=kind, occurred_at=occurred_at, category=category, location=location)
        )
        return len(self.events)


class NoHolidays:
    def list_between(self, start, end):
        return []


@pytest.fixture
def repo():
    return InMemoryPunches(
        [
            PunchEvent(subject_id="ana", kind=PunchKind.CLOCK_IN, occurred_at=datetime(2026, 3, 2, 9, 0), category="shift"),
            PunchEvent(subject_id="ana", kind=PunchKind.BREAK_START, occurred_at=datetime(2026, 3, 2, 12, 0)),
            PunchEvent(subject_id="ana", kind=PunchKind.BREAK_END, occurred_at=datetime(2026, 3, 2, 12, 30)),
            PunchEvent(subject_id="ana", kind=PunchKind.CLOCK_OUT, occurred_at=datetime(2026, 3, 2, 17, 0)),
        ]
    )


@pytest.fixture
def client(monkeypatch, repo):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=build_services(repo, NoHolidays()))
    return app.test_client()


def test_shifts_endpoint_formats_durations(client):
    resp = client.get("/api/subjects/ana/shifts?start=2026-03-02&end=2026-03-02")

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["shifts"][0]["duration_ms"] == 27_000_000
    assert data["shifts"][0]["duration"] == "7h 30m"


def test_register_punch_then_status(client, repo):
    resp = client.post("/api/subjects/luis/punches", json={"kind": "clock_in", "category": "shift", "location": "Madrid"})
    assert resp.status_code == 201

    resp = client.get("/api/subjects/luis/status")
    assert resp.get_json()["status"] == "WORKING"


def test_register_punch_rejects_invalid_transition(client):
    resp = client.post("/api/subjects/luis/punches", json={"kind": "clock_out"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_register_punch_rejects_unknown_kind(client):
    resp = client.post("/api/subjects/luis/punches", json={"kind": "lunch"})

    assert resp.status_code == 400


def test_daily_report(client):
    resp = client.get("/api/reports/daily?subjects=ana&start=2026-03-01&end=2026-03-31")

    assert resp.status_code == 200
    row = resp.get_json()["rows"][0]
    assert row["subject_id"] == "ana"
    assert row["displayed"] == "7h 30m"


def test_official_report(client):
    resp = client.get("/api/reports/official?subject=ana&start=2026-03-01&end=2026-03-03")

    assert resp.status_code == 200
    data = resp.get_json()
    assert len(data["days"]) == 3
    assert data["days"][1]["clock_in"] == "09:00"
    assert data["days"][1]["break"] == "0:30"
    assert data["days"][1]["hours"] == "7:30"
    assert data["total"] == "7:30"


def test_report_validation_errors(client):
    assert client.get("/api/reports/weekly?subjects=ana").status_code == 400
    assert client.get("/api/reports/daily?subjects=ana&start=2026-03-05&end=2026-03-01").status_code == 400
    assert client.get("/api/reports/daily?start=2026-03-01&end=2026-03-05").status_code == 400
    assert client.get("/api/reports/annual?subjects=ana").status_code == 400


def test_summary_endpoint(client):
    resp = client.get("/api/subjects/ana/summary")

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["status"] == "IDLE"
    assert data["total_ms"] == 27_000_000
