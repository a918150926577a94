from worktime.reports.formatting import format_break, format_clock, format_duration


def test_format_duration_whole_and_half_hours():
    assert format_duration(28_800_000) == "8h 00m"
    assert format_duration(27_000_000) == "7h 30m"
    assert format_duration(0) == "0h 00m"


def test_format_duration_rounds_minutes_half_up():
    assert format_duration(90_000) == "0h 02m"
    assert format_duration(29_999) == "0h 00m"
    assert format_duration(30_000) == "0h 01m"


def test_minute_rollover_carries_into_the_hour():
    assert format_duration(28_799_999) == "8h 00m"
    assert format_duration(53_999_999) == "15h 00m"


def test_format_clock_and_break():
    assert format_clock(27_000_000) == "7:30"
    assert format_clock(0) == "0:00"
    assert format_break(5_400_000) == "1:30"
    assert format_break(0) == ""
