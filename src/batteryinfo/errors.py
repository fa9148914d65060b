"""Exception classes for battery info computation.

This module defines a small hierarchy of exceptions raised when the
inputs handed to the builder break its contract, or when configuration
cannot be loaded.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional


class BatteryInfoError(Exception):
    """Base class for all batteryinfo errors."""


class InvalidSnapshotError(BatteryInfoError, ValueError):
    """Raised when raw power-state extras cannot form a valid snapshot.

    Covers unknown plug or status codes, non-integer values and level/scale
    combinations that violate ``0 <= level <= scale, scale > 0``.
    """

    def __init__(
        self, message: str, extras: Optional[Mapping[str, Any]] = None
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            extras: The raw extras that failed to parse
        """
        super().__init__(message)
        self.message: str = message
        self.extras: Optional[dict[str, Any]] = dict(extras) if extras else None


class MissingTemplateError(BatteryInfoError, KeyError):
    """Raised when a template provider has no string for a key."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No template registered for '{self.key}'"


class ConfigError(BatteryInfoError, RuntimeError):
    """Raised when a configuration file cannot be read or validated."""

    pass
