"""Battery status summaries from raw power readings.

This package provides:
- PowerSnapshot interpretation of plug state, level, scale and status
- Remaining-time estimators projecting charge and discharge durations
- BatteryInfoBuilder selecting the status, charge and remaining labels
"""

from batteryinfo.builder import BatteryInfoBuilder
from batteryinfo.errors import (
    BatteryInfoError,
    ConfigError,
    InvalidSnapshotError,
    MissingTemplateError,
)
from batteryinfo.estimator import (
    NO_ESTIMATE,
    FixedEstimator,
    LevelStepEstimator,
    RemainingTimeEstimator,
)
from batteryinfo.models import BatteryInfo, BatteryStatus, Estimate, PlugSource, PowerSnapshot
from batteryinfo.templates import StringTemplateProvider, TemplateCatalog, TemplateKey

__version__ = "0.1.0"

__all__ = [
    "NO_ESTIMATE",
    "BatteryInfo",
    "BatteryInfoBuilder",
    "BatteryInfoError",
    "BatteryStatus",
    "ConfigError",
    "Estimate",
    "FixedEstimator",
    "InvalidSnapshotError",
    "LevelStepEstimator",
    "MissingTemplateError",
    "PlugSource",
    "PowerSnapshot",
    "RemainingTimeEstimator",
    "StringTemplateProvider",
    "TemplateCatalog",
    "TemplateKey",
]
