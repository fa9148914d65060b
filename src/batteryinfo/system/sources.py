"""Power snapshot providers."""

from __future__ import annotations

import logging
from typing import Final, Protocol, runtime_checkable

from batteryinfo.models.snapshot import BatteryStatus, PlugSource, PowerSnapshot
from batteryinfo.types.pijuice import BatteryStatusDict, PiJuiceLike

logger: Final = logging.getLogger(__name__)

# PiJuice powerInput values meaning an external supply is connected
_POWER_PRESENT: Final = frozenset({"PRESENT", "WEAK"})


@runtime_checkable
class PowerSnapshotSource(Protocol):
    """Protocol for anything that can report the current power state."""

    def get_snapshot(self) -> PowerSnapshot:
        """Read the current power state.

        Returns:
            A fresh PowerSnapshot
        """
        ...


class StaticSnapshotSource:
    """Snapshot source that always reports the same reading."""

    def __init__(self, snapshot: PowerSnapshot) -> None:
        self.snapshot = snapshot

    def get_snapshot(self) -> PowerSnapshot:
        return self.snapshot


class PiJuiceSnapshotSource:
    """Snapshot source backed by a PiJuice HAT (or compatible object)."""

    def __init__(self, pijuice: PiJuiceLike, plug_source: PlugSource = PlugSource.USB) -> None:
        """Initialize with the hardware interface.

        Args:
            pijuice: PiJuice or compatible object
            plug_source: Source reported when external power is present
        """
        self.pijuice = pijuice
        self.plug_source = plug_source

    def get_snapshot(self) -> PowerSnapshot:
        """Translate the HAT's battery status into a snapshot.

        Returns:
            PowerSnapshot with a 0-100 scale
        """
        status = self.pijuice.status.GetStatus()
        battery: BatteryStatusDict = status.get("battery", {})
        level = max(0, min(100, int(battery.get("charge_level") or 0)))

        power_input = battery.get("power_input")
        if power_input is not None:
            plugged = str(power_input).upper() in _POWER_PRESENT
        else:
            plugged = bool(battery.get("is_charging", False))

        snapshot = PowerSnapshot(
            plugged=self.plug_source if plugged else PlugSource.NONE,
            level=level,
            scale=100,
            status=self._status(battery),
        )
        logger.debug("PiJuice snapshot: %s", snapshot)
        return snapshot

    @staticmethod
    def _status(battery: BatteryStatusDict) -> BatteryStatus:
        if battery.get("is_full", False):
            return BatteryStatus.FULL
        if battery.get("is_charging", False):
            return BatteryStatus.CHARGING
        if battery.get("is_discharging", False):
            return BatteryStatus.DISCHARGING
        return BatteryStatus.UNKNOWN
