from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_timestamp
from ..common.validators import require_subject_id
from ..core.enums import PunchKind
from ..core.exceptions import InvalidInputError


@dataclass(frozen=True)
class PunchEvent:
    """Thực thể miền (domain): Một lần chấm công."""

    subject_id: str
    kind: PunchKind
    occurred_at: datetime
    category: Optional[str] = None
    location: Optional[str] = None
    active: bool = True
    event_id: Optional[int] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "PunchEvent":
        """Build an event from a ``time_entries`` row (or an equivalent dict)."""

        try:
            kind = PunchKind(record["entry_type"])
        except (KeyError, ValueError):
            raise InvalidInputError(f"Loại chấm công không hợp lệ: {record.get('entry_type')!r}")

        event_id = record.get("id")
        return cls(
            subject_id=require_subject_id(record.get("employee_id")),
            kind=kind,
            occurred_at=parse_timestamp(record.get("timestamp")),
            category=record.get("time_type") or None,
            location=record.get("work_center") or None,
            active=bool(record.get("is_active", True)),
            event_id=int(event_id) if event_id is not None else None,
        )
