"""Data models for power snapshots and computed battery info.

This package provides the immutable input (PowerSnapshot) and output
(BatteryInfo) records handed across the builder boundary.
"""

from batteryinfo.models.info import BatteryInfo, Estimate
from batteryinfo.models.snapshot import BatteryStatus, PlugSource, PowerSnapshot

__all__ = [
    "BatteryInfo",
    "BatteryStatus",
    "Estimate",
    "PlugSource",
    "PowerSnapshot",
]
