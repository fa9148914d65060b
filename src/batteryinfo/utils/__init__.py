"""Common utility functions and helpers for the batteryinfo package."""

from batteryinfo.utils.formatting import format_percentage, level_to_percent
from batteryinfo.utils.time import TimeUtils

__all__ = [
    "TimeUtils",
    "format_percentage",
    "level_to_percent",
]
