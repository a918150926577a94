from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.constants import DEFAULT_FETCH_BATCH_SIZE
from ..core.enums import PunchKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import batched, db_cursor, fetchall, in_clause
from .model import PunchEvent
from .repository import PunchEventRepository


class MySQLPunchEventRepository(PunchEventRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, batch_size: int = DEFAULT_FETCH_BATCH_SIZE):
        self._conn_factory = conn_factory
        self._batch_size = int(batch_size)

    def list_for_subjects(
        self,
        subject_ids: Sequence[str],
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        active_only: bool = True,
    ) -> Sequence[PunchEvent]:
        events: list[PunchEvent] = []
        for batch in batched(list(subject_ids), self._batch_size):
            sql = f"""
                SELECT id, employee_id, entry_type, timestamp, time_type, work_center, is_active
                FROM time_entries
                WHERE employee_id IN ({in_clause(batch)})
            """
            params: list = list(batch)
            if active_only:
                sql += " AND is_active=1"
            if start is not None:
                sql += " AND timestamp >= %s"
                params.append(start)
            if end is not None:
                sql += " AND timestamp <= %s"
                params.append(end)
            sql += " ORDER BY timestamp ASC, id ASC"

            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, tuple(params))
                events.extend(PunchEvent.from_record(r) for r in fetchall(cur))
        return events

    def create(
        self,
        *,
        subject_id: str,
        kind: PunchKind,
        occurred_at: datetime,
        category: Optional[str] = None,
        location: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(employee_id, entry_type, timestamp, time_type, work_center, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (subject_id, kind.value, occurred_at, category, location),
            )
            return int(cur.lastrowid)
