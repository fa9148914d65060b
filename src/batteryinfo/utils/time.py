# src/batteryinfo/utils/time.py
"""Time and duration handling utilities."""

from __future__ import annotations

import time

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * 60 * 60


class TimeUtils:
    """Time-related utility functions.

    Centralized utilities for working with durations:
    - Unit conversions between microseconds and milliseconds
    - Compact elapsed-time formatting for labels
    - Monotonic "now" in microseconds for estimator queries
    """

    @staticmethod
    def us_to_ms(micros: int) -> int:
        """Convert microseconds to milliseconds, truncating."""
        return micros // 1000

    @staticmethod
    def now_us() -> int:
        """Get the current monotonic time in microseconds.

        Returns:
            Monotonic clock reading in microseconds
        """
        return time.monotonic_ns() // 1000

    @staticmethod
    def format_short_elapsed_time(millis: int) -> str:
        """Format a duration as a compact label fragment.

        Only the two most significant units are shown, and only while the
        leading unit is 1; beyond that the leading unit is rounded.

        Args:
            millis: Duration in milliseconds

        Returns:
            Formatted duration (e.g., "3 days", "1 day 4h", "2h", "1h 5m")
        """
        seconds = max(millis, 0) // 1000
        days, seconds = divmod(seconds, SECONDS_PER_DAY)
        hours, seconds = divmod(seconds, SECONDS_PER_HOUR)
        minutes, seconds = divmod(seconds, SECONDS_PER_MINUTE)

        if days >= 2:
            days += (hours + 12) // 24
            return f"{days} days"
        if days > 0:
            return f"1 day {hours}h"
        if hours >= 2:
            hours += (minutes + 30) // 60
            return f"{hours}h"
        if hours > 0:
            return f"1h {minutes}m"
        if minutes >= 2:
            minutes += (seconds + 30) // 60
            return f"{minutes}m"
        if minutes > 0:
            return f"1m {seconds}s"
        return f"{seconds}s"

    @classmethod
    def format_duration_us(cls, micros: int) -> str:
        """Format a microsecond duration with format_short_elapsed_time."""
        return cls.format_short_elapsed_time(cls.us_to_ms(micros))
