from __future__ import annotations

from datetime import datetime
from typing import Iterable

from ..core.exceptions import InvalidInputError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return value.strip()


def require_subject_id(value) -> str:
    if value is None or not str(value).strip():
        raise InvalidInputError("Mã nhân viên là bắt buộc")
    return str(value).strip()


def require_timestamps(events: Iterable) -> None:
    # the engine compares naive local wall-clock times only
    for event in events:
        if not isinstance(event.occurred_at, datetime) or event.occurred_at.tzinfo is not None:
            raise InvalidInputError(f"Thời điểm chấm công không hợp lệ: {event.occurred_at!r}")
