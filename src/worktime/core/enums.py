from __future__ import annotations

from enum import Enum


class PunchKind(str, Enum):
    """Loại chấm công (giá trị lưu trong CSDL)."""

    CLOCK_IN = "clock_in"
    BREAK_START = "break_start"
    BREAK_END = "break_end"
    CLOCK_OUT = "clock_out"


class TimeType(str, Enum):
    """Known shift categories attached to a clock-in.

    Categories stay free-form strings on events; these are the values the
    punch screens offer.
    """

    SHIFT = "shift"
    COORDINATION = "coordination"
    TRAINING = "training"
    SUBSTITUTION = "substitution"
    OTHER = "other"


class ShiftEndReason(str, Enum):
    CLOCK_OUT = "CLOCK_OUT"
    END_OF_DAY = "END_OF_DAY"
    NOW = "NOW"


class ClockStatus(str, Enum):
    """Trạng thái hiện tại của nhân viên."""

    IDLE = "IDLE"
    WORKING = "WORKING"
    PAUSED = "PAUSED"


class SpecialHours(str, Enum):
    NONE = "none"
    NIGHT = "night"
    HOLIDAY = "holiday"


class ReportType(str, Enum):
    DAILY = "daily"
    ANNUAL = "annual"
    OFFICIAL = "official"
    ALARMS = "alarms"
