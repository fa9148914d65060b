from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Estimate:
    """A discharge estimate handed in by the caller.

    ``based_on_usage`` marks estimates derived from historical usage
    patterns rather than linear extrapolation of recent drain.
    """

    remaining_us: int
    based_on_usage: bool = False


@dataclass(frozen=True)
class BatteryInfo:
    """Human-facing battery summary.

    Built once per query by BatteryInfoBuilder and handed to the
    presentation layer:
    - ``status_label``: short state text ("Full", "Charging - 2h left")
    - ``charge_label_string``: percentage plus charge/discharge phrasing
    - ``remaining_label``: discharge duration text, or None when there is
      no estimate or the device is plugged in
    """

    discharging: bool
    battery_percentage_string: str
    status_label: str
    charge_label_string: str
    remaining_label: str | None = None
    battery_level: int = 0
    remaining_time_us: int | None = None

    @property
    def charging(self) -> bool:
        """Return True if a power source is connected."""
        return not self.discharging
