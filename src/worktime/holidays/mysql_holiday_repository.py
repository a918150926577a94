from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Holiday
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_between(self, start: date, end: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT date, name, work_center
                FROM holidays
                WHERE date BETWEEN %s AND %s
                ORDER BY date
                """,
                (start, end),
            )
            return [
                Holiday(holiday_date=r["date"], name=r.get("name"), location=r.get("work_center") or None)
                for r in fetchall(cur)
            ]
