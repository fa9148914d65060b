"""Label settings management.

This package provides:
- LabelSettings: User-configurable presentation flags and template
  overrides loaded from a YAML config file
"""

from batteryinfo.settings.user import LabelSettings

__all__ = ["LabelSettings"]
