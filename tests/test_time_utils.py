import pytest

from batteryinfo.utils.formatting import format_percentage, level_to_percent
from batteryinfo.utils.time import TimeUtils

SECOND = 1000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR


@pytest.mark.parametrize(
    "millis, expected",
    [
        (0, "0s"),
        (-5, "0s"),
        (45 * SECOND, "45s"),
        (MINUTE + 30 * SECOND, "1m 30s"),
        (5 * MINUTE + 29 * SECOND, "5m"),
        (5 * MINUTE + 30 * SECOND, "6m"),
        (HOUR + 5 * MINUTE, "1h 5m"),
        (2 * HOUR + 29 * MINUTE, "2h"),
        (2 * HOUR + 30 * MINUTE, "3h"),
        (DAY + 4 * HOUR, "1 day 4h"),
        (2 * DAY + 11 * HOUR, "2 days"),
        (2 * DAY + 12 * HOUR, "3 days"),
    ],
)
def test_format_short_elapsed_time(millis: int, expected: str) -> None:
    assert TimeUtils.format_short_elapsed_time(millis) == expected


def test_format_duration_us() -> None:
    assert TimeUtils.us_to_ms(2_500) == 2
    assert TimeUtils.format_duration_us(2 * HOUR * 1000) == "2h"


def test_now_us_is_monotonic() -> None:
    first = TimeUtils.now_us()
    assert TimeUtils.now_us() >= first


def test_level_to_percent() -> None:
    assert level_to_percent(50, 100) == 50
    assert level_to_percent(1, 8) == 12
    with pytest.raises(ZeroDivisionError):
        level_to_percent(10, 0)


def test_format_percentage() -> None:
    assert format_percentage(85) == "85%"
