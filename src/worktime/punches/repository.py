from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchKind
from .model import PunchEvent


class PunchEventRepository(Protocol):
    def list_for_subjects(
        self,
        subject_ids: Sequence[str],
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        active_only: bool = True,
    ) -> Sequence[PunchEvent]:
        raise NotImplementedError

    def create(
        self,
        *,
        subject_id: str,
        kind: PunchKind,
        occurred_at: datetime,
        category: Optional[str] = None,
        location: Optional[str] = None,
    ) -> int:
        raise NotImplementedError
