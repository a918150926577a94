from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.enums import ReportType, SpecialHours
from ..core.exceptions import ValidationError
from .aggregation import Period
from .formatting import format_break, format_clock, format_duration
from .model import AnnualTotals, EmployeeTotals, OfficialDayRow, ShiftRow

logger = logging.getLogger(__name__)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(timespec="milliseconds") if value else None


def _shift_row_ui(r: ShiftRow) -> dict:
    return {
        "work_date": r.work_date.strftime("%Y-%m-%d"),
        "clock_in": _iso(r.clock_in),
        "clock_out": _iso(r.clock_out),
        "end_reason": r.end_reason.value if r.end_reason else None,
        "category": r.category,
        "location": r.location,
        "duration_ms": r.duration_ms,
        "duration": format_duration(r.duration_ms),
        "break_ms": r.break_ms,
        "night_ms": r.night_ms,
        "holiday_ms": r.holiday_ms,
    }


def _totals_ui(t: EmployeeTotals) -> dict:
    return {
        "subject_id": t.subject_id,
        "total_ms": t.total_ms,
        "night_ms": t.night_ms,
        "holiday_ms": t.holiday_ms,
        "displayed_ms": t.displayed_ms,
        "displayed": format_duration(t.displayed_ms),
        "category": t.category or "all",
    }


def _annual_ui(a: AnnualTotals) -> dict:
    return {
        "subject_id": a.subject_id,
        "year": a.year,
        "monthly_ms": a.monthly_ms,
        "total_ms": a.total_ms,
        "total": format_duration(a.total_ms),
        "night_ms": a.night_ms,
        "holiday_ms": a.holiday_ms,
        "category": a.category or "all",
    }


def _official_day_ui(d: OfficialDayRow) -> dict:
    return {
        "work_date": d.work_date.strftime("%Y-%m-%d"),
        "clock_in": d.clock_in.strftime("%H:%M") if d.clock_in else "",
        "clock_out": d.clock_out.strftime("%H:%M") if d.clock_out else "",
        "break": format_break(d.break_ms),
        "hours": format_clock(d.duration_ms),
        "category": d.category or "",
    }


def register(app: Flask, container: Container) -> None:
    def _parse_date(value: Optional[str], field_name: str) -> date:
        if not value:
            raise ValidationError(f"{field_name} là bắt buộc (YYYY-MM-DD)")
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"{field_name} không hợp lệ (YYYY-MM-DD)")

    def _period_from_args() -> Period:
        start = _parse_date(request.args.get("start"), "start")
        end = _parse_date(request.args.get("end"), "end")
        if end < start:
            raise ValidationError("Ngày kết thúc phải >= ngày bắt đầu")
        return Period(start, end)

    def _subjects_from_args() -> list[str]:
        subjects = [s.strip() for s in (request.args.get("subjects") or "").split(",") if s.strip()]
        if not subjects:
            raise ValidationError("subjects là bắt buộc")
        return subjects

    def _special_from_args() -> SpecialHours:
        try:
            return SpecialHours(request.args.get("special") or SpecialHours.NONE.value)
        except ValueError:
            raise ValidationError("special không hợp lệ")

    @app.route("/api/subjects/<subject_id>/summary", methods=["GET"], endpoint="api_subject_summary")
    def api_subject_summary(subject_id: str):
        try:
            s = container.report_service.employee_summary(subject_id)
            return jsonify(
                {
                    "success": True,
                    "subject_id": s.subject_id,
                    "status": s.status.value,
                    "today": format_duration(s.today_ms),
                    "week": format_duration(s.week_ms),
                    "month": format_duration(s.month_ms),
                    "total": format_duration(s.total_ms),
                    "today_ms": s.today_ms,
                    "week_ms": s.week_ms,
                    "month_ms": s.month_ms,
                    "total_ms": s.total_ms,
                }
            ), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to build summary for subject %s", subject_id)
            return jsonify({"success": False, "message": "Lỗi hệ thống"}), 500

    @app.route("/api/subjects/<subject_id>/shifts", methods=["GET"], endpoint="api_subject_shifts")
    def api_subject_shifts(subject_id: str):
        try:
            period = _period_from_args() if request.args.get("start") or request.args.get("end") else None
            rows = container.report_service.shift_rows(subject_id, period, category=request.args.get("category") or None)
            return jsonify({"success": True, "subject_id": subject_id, "shifts": [_shift_row_ui(r) for r in rows]}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to list shifts for subject %s", subject_id)
            return jsonify({"success": False, "message": "Lỗi hệ thống"}), 500

    @app.route("/api/reports/<report_type>", methods=["GET"], endpoint="api_report")
    def api_report(report_type: str):
        svc = container.report_service
        category = request.args.get("category") or None
        try:
            try:
                kind = ReportType(report_type)
            except ValueError:
                raise ValidationError("Loại báo cáo không hợp lệ")

            if kind == ReportType.ANNUAL:
                try:
                    year = int(request.args.get("year") or "")
                except ValueError:
                    raise ValidationError("year là bắt buộc")
                rows = svc.annual_report(_subjects_from_args(), year, category=category, special=_special_from_args())
                return jsonify({"success": True, "report": kind.value, "rows": [_annual_ui(a) for a in rows]}), 200

            period = _period_from_args()

            if kind == ReportType.OFFICIAL:
                subject_id = request.args.get("subject") or ""
                report = svc.official_report(subject_id, period, category=category)
                return jsonify(
                    {
                        "success": True,
                        "report": kind.value,
                        "subject_id": report.subject_id,
                        "days": [_official_day_ui(d) for d in report.days],
                        "total": format_clock(report.total_ms),
                    }
                ), 200

            if kind == ReportType.ALARMS:
                limit = request.args.get("limit")
                try:
                    hours_limit = float(limit) if limit else None
                except ValueError:
                    raise ValidationError("limit không hợp lệ")
                rows = svc.alarms_report(_subjects_from_args(), period, category=category, hours_limit=hours_limit)
            else:
                rows = svc.daily_report(_subjects_from_args(), period, category=category, special=_special_from_args())
            return jsonify({"success": True, "report": kind.value, "rows": [_totals_ui(t) for t in rows]}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to build %s report", report_type)
            return jsonify({"success": False, "message": "Lỗi hệ thống khi tạo báo cáo"}), 500
