"""Point-in-time power snapshot and its raw-code interpretation."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from batteryinfo.errors import InvalidSnapshotError

EXTRA_PLUGGED = "plugged"
EXTRA_LEVEL = "level"
EXTRA_SCALE = "scale"
EXTRA_STATUS = "status"

DEFAULT_SCALE = 100


class PlugSource(Enum):
    """Power source the device is plugged into.

    Values match the bit codes reported by the power-state broadcast.
    """

    NONE = 0
    AC = 1
    USB = 2
    WIRELESS = 4
    DOCK = 8


class BatteryStatus(Enum):
    """Raw battery status code reported by the charger."""

    UNKNOWN = 1
    CHARGING = 2
    DISCHARGING = 3
    NOT_CHARGING = 4
    FULL = 5


class PowerSnapshot(BaseModel):
    """One reading of plug state, charge level, scale and status.

    The plug source is authoritative for deciding whether the device is
    discharging; ``status`` may lag behind it.
    """

    model_config = ConfigDict(frozen=True)

    plugged: PlugSource = PlugSource.NONE
    level: int = Field(..., ge=0, description="Current charge level in scale units")
    scale: int = Field(DEFAULT_SCALE, gt=0, description="Maximum charge level")
    status: BatteryStatus = BatteryStatus.UNKNOWN

    @model_validator(mode="after")
    def check_level_within_scale(self) -> PowerSnapshot:
        if self.level > self.scale:
            raise ValueError(f"level {self.level} exceeds scale {self.scale}")
        return self

    @property
    def is_plugged(self) -> bool:
        """Whether any power source is connected."""
        return self.plugged is not PlugSource.NONE

    @property
    def is_full(self) -> bool:
        """Whether the charger reports a full battery."""
        return self.status is BatteryStatus.FULL

    @classmethod
    def from_extras(cls, extras: Mapping[str, Any]) -> PowerSnapshot:
        """Interpret raw power-state extras as a snapshot.

        Missing keys fall back to an unplugged device at level 0 of 100
        with an unknown status.

        Args:
            extras: Mapping with optional ``plugged``, ``level``, ``scale``
                and ``status`` integer codes

        Returns:
            Validated PowerSnapshot

        Raises:
            InvalidSnapshotError: If a code is unknown or a value is invalid
        """
        try:
            plugged = PlugSource(int(extras.get(EXTRA_PLUGGED, 0)))
            status = BatteryStatus(
                int(extras.get(EXTRA_STATUS, BatteryStatus.UNKNOWN.value))
            )
        except (TypeError, ValueError) as exc:
            raise InvalidSnapshotError(f"Unrecognised power code: {exc}", extras) from exc

        try:
            return cls(
                plugged=plugged,
                level=extras.get(EXTRA_LEVEL, 0),
                scale=extras.get(EXTRA_SCALE, DEFAULT_SCALE),
                status=status,
            )
        except ValidationError as err:
            raise InvalidSnapshotError(f"Invalid power snapshot:\n{err}", extras) from err
