"""Remaining-time estimation from charge/discharge level history."""

from __future__ import annotations

import logging
from collections import deque
from typing import Final, Optional, Protocol, runtime_checkable

logger: Final = logging.getLogger(__name__)

# Returned by estimators that have no reliable projection.
NO_ESTIMATE: Final = -1

FULL_LEVEL: Final = 100


@runtime_checkable
class RemainingTimeEstimator(Protocol):
    """Protocol for time-remaining estimators.

    Both queries are read-only and return microseconds, or a value
    ``<= 0`` (conventionally NO_ESTIMATE) when no estimate is available.
    """

    def estimate_charge_time_remaining(self, now_us: int) -> int:
        """Return microseconds until the battery is full."""
        ...

    def estimate_discharge_time_remaining(self, now_us: int) -> int:
        """Return microseconds until the battery is empty."""
        ...


def valid_duration(value: Optional[int]) -> Optional[int]:
    """Normalize an estimator result, mapping "no estimate" to None."""
    if value is None or value <= 0:
        return None
    return value


class _StepTracker:
    """Durations of completed whole-level steps in one direction."""

    def __init__(self, max_steps: int) -> None:
        self.steps: deque[int] = deque(maxlen=max_steps)
        self.last_level: Optional[int] = None
        self.last_time_us: Optional[int] = None

    def clear_pending(self) -> None:
        self.last_level = None
        self.last_time_us = None

    def record(self, now_us: int, level: int) -> None:
        if self.last_level is None or self.last_time_us is None:
            self.last_level, self.last_time_us = level, now_us
            return

        delta = abs(level - self.last_level)
        if delta == 0:
            return

        elapsed = now_us - self.last_time_us
        if elapsed > 0:
            per_step = elapsed // delta
            self.steps.extend([per_step] * delta)
        else:
            logger.debug(
                "Non-monotonic reading at %d us (previous %d us), step not counted",
                now_us,
                self.last_time_us,
            )
        self.last_level, self.last_time_us = level, now_us

    def average(self) -> Optional[int]:
        if not self.steps:
            return None
        return sum(self.steps) // len(self.steps)


class LevelStepEstimator:
    """In-memory estimator projecting from average level-step durations.

    Each recorded reading that moves the battery level by one or more
    percent closes a step; the time per step is averaged over the most
    recent ``max_steps`` steps in that direction:
    - discharge remaining = average discharge step x current level
    - charge remaining = average charge step x (100 - current level)

    Examples:
        est = LevelStepEstimator()
        est.record(0, 80, charging=False)
        est.record(60_000_000, 79, charging=False)
        est.estimate_discharge_time_remaining(60_000_000)  # 79 minutes in us
    """

    def __init__(self, max_steps: int = 100) -> None:
        """Initialize empty step history.

        Args:
            max_steps: Number of steps kept per direction
        """
        if max_steps <= 0:
            raise ValueError("max_steps must be positive")
        self.max_steps = max_steps
        self._charge = _StepTracker(max_steps)
        self._discharge = _StepTracker(max_steps)
        self._level: Optional[int] = None

    def record(self, now_us: int, level: int, charging: bool) -> None:
        """Record a level reading.

        Args:
            now_us: Reading time in microseconds
            level: Battery percentage (0-100)
            charging: Whether a power source is connected
        """
        if not 0 <= level <= FULL_LEVEL:
            raise ValueError(f"level must be within 0-{FULL_LEVEL}, got {level}")

        active, idle = (
            (self._charge, self._discharge) if charging else (self._discharge, self._charge)
        )
        idle.clear_pending()
        active.record(now_us, level)
        self._level = level
        logger.debug(
            "Recorded level %d%% (%s) at %d us",
            level,
            "charging" if charging else "discharging",
            now_us,
        )

    def reset(self) -> None:
        """Forget all recorded history."""
        self._charge = _StepTracker(self.max_steps)
        self._discharge = _StepTracker(self.max_steps)
        self._level = None

    def estimate_charge_time_remaining(self, now_us: int) -> int:
        avg = self._charge.average()
        if avg is None or self._level is None:
            return NO_ESTIMATE
        return avg * (FULL_LEVEL - self._level)

    def estimate_discharge_time_remaining(self, now_us: int) -> int:
        avg = self._discharge.average()
        if avg is None or self._level is None:
            return NO_ESTIMATE
        return avg * self._level


class FixedEstimator:
    """Estimator returning preset projections, regardless of time."""

    def __init__(self, charge_us: int = NO_ESTIMATE, discharge_us: int = NO_ESTIMATE) -> None:
        self.charge_us = charge_us
        self.discharge_us = discharge_us

    def estimate_charge_time_remaining(self, now_us: int) -> int:
        return self.charge_us

    def estimate_discharge_time_remaining(self, now_us: int) -> int:
        return self.discharge_us
