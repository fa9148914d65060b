"""Type definitions for external hardware interfaces."""

from batteryinfo.types.pijuice import BatteryStatusDict, PiJuiceLike, StatusInterface

__all__ = [
    "BatteryStatusDict",
    "PiJuiceLike",
    "StatusInterface",
]
