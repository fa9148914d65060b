"""Text and number formatting utilities."""

from __future__ import annotations


def level_to_percent(level: int, scale: int) -> int:
    """Convert a raw charge level to a whole percentage.

    Args:
        level: Charge level in scale units
        scale: Maximum charge level; must be positive

    Returns:
        Rounded percentage

    Raises:
        ZeroDivisionError: If scale is zero
    """
    return round(level * 100 / scale)


def format_percentage(value: int) -> str:
    """Format a whole percentage.

    Args:
        value: Percentage (0-100)

    Returns:
        Formatted percentage string
    """
    return f"{value}%"
