# src/batteryinfo/system/__init__.py
"""System module for obtaining power snapshots from hardware."""

from batteryinfo.system.sources import (
    PiJuiceSnapshotSource,
    PowerSnapshotSource,
    StaticSnapshotSource,
)

__all__ = [
    "PiJuiceSnapshotSource",
    "PowerSnapshotSource",
    "StaticSnapshotSource",
]
