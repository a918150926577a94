from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_HOURS_LIMIT, DEFAULT_NIGHT_END_WINDOW, DEFAULT_NIGHT_START_WINDOW
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .punches.mysql_punch_repository import MySQLPunchEventRepository
from .punches.repository import PunchEventRepository
from .punches.service import PunchService
from .reports.classifiers.factory import ClassifierFactory
from .reports.service import WorkTimeReportService


@dataclass(frozen=True)
class Container:
    punches_repo: PunchEventRepository
    holidays_repo: HolidayRepository

    punch_service: PunchService
    report_service: WorkTimeReportService


def build_services(
    punches_repo: PunchEventRepository,
    holidays_repo: HolidayRepository,
    *,
    hours_limit: float = DEFAULT_HOURS_LIMIT,
    night_start_window: tuple[int, int] = DEFAULT_NIGHT_START_WINDOW,
    night_end_window: tuple[int, int] = DEFAULT_NIGHT_END_WINDOW,
) -> Container:
    classifiers = ClassifierFactory(night_start_window=night_start_window, night_end_window=night_end_window)
    return Container(
        punches_repo=punches_repo,
        holidays_repo=holidays_repo,
        punch_service=PunchService(punches_repo),
        report_service=WorkTimeReportService(
            punches_repo,
            holidays_repo,
            classifiers=classifiers,
            hours_limit=hours_limit,
        ),
    )


def build_container(*, db_config: dict, **options) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return build_services(MySQLPunchEventRepository(conn), MySQLHolidayRepository(conn), **options)
