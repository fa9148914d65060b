"""Type definitions for PiJuice-style battery HAT interfaces."""

from typing import Any, Protocol, TypedDict, runtime_checkable


class BatteryStatusDict(TypedDict, total=False):
    """Battery status information dictionary."""

    charge_level: int
    is_charging: bool
    is_discharging: bool
    is_full: bool
    power_input: str
    voltage: float


@runtime_checkable
class StatusInterface(Protocol):
    """Protocol for PiJuice status API."""

    def GetStatus(self) -> dict[str, Any]: ...
    def GetChargeLevel(self) -> dict[str, int]: ...


@runtime_checkable
class PiJuiceLike(Protocol):
    """Protocol for objects that behave like PiJuice."""

    status: StatusInterface
