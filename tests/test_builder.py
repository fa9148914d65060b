"""Tests for batteryinfo.builder label selection."""

from __future__ import annotations

import pytest

from batteryinfo.builder import BatteryInfoBuilder
from batteryinfo.errors import MissingTemplateError
from batteryinfo.estimator import NO_ESTIMATE, FixedEstimator
from batteryinfo.models import BatteryStatus, Estimate, PlugSource, PowerSnapshot
from batteryinfo.templates import TemplateCatalog, TemplateKey
from batteryinfo.utils.time import TimeUtils

ENHANCED_STRING_SUFFIX = "left based on your usage"
REMAINING_TIME = 2
NOW_US = 5_000_000

TWO_HOURS_US = 2 * 60 * 60 * 1_000_000


class _RecordingEstimator:
    """Estimator that records which queries were made."""

    def __init__(self, charge_us: int = NO_ESTIMATE, discharge_us: int = NO_ESTIMATE) -> None:
        self.charge_us = charge_us
        self.discharge_us = discharge_us
        self.calls: list[tuple[str, int]] = []

    def estimate_charge_time_remaining(self, now_us: int) -> int:
        self.calls.append(("charge", now_us))
        return self.charge_us

    def estimate_discharge_time_remaining(self, now_us: int) -> int:
        self.calls.append(("discharge", now_us))
        return self.discharge_us


@pytest.fixture
def builder() -> BatteryInfoBuilder:
    return BatteryInfoBuilder()


@pytest.fixture
def discharging_full() -> PowerSnapshot:
    return PowerSnapshot(plugged=PlugSource.NONE, level=0, scale=100, status=BatteryStatus.FULL)


@pytest.fixture
def charging() -> PowerSnapshot:
    return PowerSnapshot(plugged=PlugSource.AC, level=50, scale=100, status=BatteryStatus.UNKNOWN)


def test_status_label_full(builder: BatteryInfoBuilder, discharging_full: PowerSnapshot) -> None:
    info = builder.build(discharging_full, FixedEstimator(), NOW_US, short_string=True)
    assert info.status_label == "Full"


@pytest.mark.parametrize("plugged", list(PlugSource))
@pytest.mark.parametrize("charge_us", [NO_ESTIMATE, TWO_HOURS_US])
def test_full_status_wins_everywhere(
    builder: BatteryInfoBuilder, plugged: PlugSource, charge_us: int
) -> None:
    snapshot = PowerSnapshot(plugged=plugged, level=100, status=BatteryStatus.FULL)
    info = builder.build(snapshot, FixedEstimator(charge_us=charge_us), NOW_US)
    assert info.status_label == "Full"
    assert "until fully charged" not in info.charge_label_string


def test_charge_label_with_remaining_time(
    builder: BatteryInfoBuilder, charging: PowerSnapshot
) -> None:
    info = builder.build(charging, FixedEstimator(charge_us=REMAINING_TIME), NOW_US)

    expected = TemplateCatalog().get_string(
        TemplateKey.CHARGING_DURATION,
        percentage="50%",
        time=TimeUtils.format_duration_us(REMAINING_TIME),
    )
    assert info.charge_label_string == expected
    assert info.remaining_time_us == REMAINING_TIME


def test_charge_label_without_remaining_time(
    builder: BatteryInfoBuilder, charging: PowerSnapshot
) -> None:
    info = builder.build(charging, FixedEstimator(charge_us=NO_ESTIMATE), NOW_US)
    assert info.charge_label_string == "50% - charging"
    assert info.status_label == "Charging"
    assert info.remaining_time_us is None


def test_charging_duration_is_rendered(
    builder: BatteryInfoBuilder, charging: PowerSnapshot
) -> None:
    info = builder.build(charging, FixedEstimator(charge_us=TWO_HOURS_US), NOW_US)
    assert info.status_label == "Charging - 2h left"
    assert info.charge_label_string == "50% - 2h until fully charged"
    assert info.charge_label_string != "50% - charging"


def test_short_charging_duration(builder: BatteryInfoBuilder, charging: PowerSnapshot) -> None:
    info = builder.build(
        charging, FixedEstimator(charge_us=TWO_HOURS_US), NOW_US, short_string=True
    )
    assert info.charge_label_string == "50% - 2h left"


def test_plugged_in_not_discharging(builder: BatteryInfoBuilder, charging: PowerSnapshot) -> None:
    info = builder.build(charging, FixedEstimator(), NOW_US, short_string=True)
    assert info.discharging is False
    assert info.charging is True
    assert info.remaining_label is None


@pytest.mark.parametrize("status", list(BatteryStatus))
def test_unplugged_is_discharging(builder: BatteryInfoBuilder, status: BatteryStatus) -> None:
    snapshot = PowerSnapshot(plugged=PlugSource.NONE, level=40, status=status)
    info = builder.build(snapshot, FixedEstimator(charge_us=TWO_HOURS_US), NOW_US)
    assert info.discharging is True


def test_stale_charging_status_reads_discharging(builder: BatteryInfoBuilder) -> None:
    snapshot = PowerSnapshot(plugged=PlugSource.NONE, level=40, status=BatteryStatus.CHARGING)
    info = builder.build(snapshot, FixedEstimator(), NOW_US)
    assert info.status_label == "Discharging"


@pytest.mark.parametrize("short_string", [False, True])
def test_based_on_usage_uses_usage_string(
    builder: BatteryInfoBuilder, discharging_full: PowerSnapshot, short_string: bool
) -> None:
    info = builder.build(
        discharging_full,
        FixedEstimator(),
        NOW_US,
        short_string=short_string,
        drain_time_us=1000,
        based_on_usage=True,
    )
    assert info.remaining_label is not None
    assert ENHANCED_STRING_SUFFIX in info.remaining_label


@pytest.mark.parametrize("short_string", [False, True])
def test_not_based_on_usage_uses_default_string(
    builder: BatteryInfoBuilder, discharging_full: PowerSnapshot, short_string: bool
) -> None:
    info = builder.build(
        discharging_full,
        FixedEstimator(),
        NOW_US,
        short_string=short_string,
        drain_time_us=1000,
        based_on_usage=False,
    )
    assert info.remaining_label is not None
    assert ENHANCED_STRING_SUFFIX not in info.remaining_label
    assert ENHANCED_STRING_SUFFIX not in info.charge_label_string


def test_enhanced_template_missing_falls_back_to_plain(discharging_full: PowerSnapshot) -> None:
    builder = BatteryInfoBuilder(templates=TemplateCatalog.without_enhanced())
    info = builder.build(
        discharging_full,
        FixedEstimator(discharge_us=TWO_HOURS_US),
        NOW_US,
        based_on_usage=True,
    )
    assert info.remaining_label == "About 2h left"
    assert info.charge_label_string == "0% - about 2h left"


def test_discharge_labels(builder: BatteryInfoBuilder) -> None:
    snapshot = PowerSnapshot(level=75, status=BatteryStatus.DISCHARGING)
    estimator = FixedEstimator(discharge_us=TWO_HOURS_US)

    long_info = builder.build(snapshot, estimator, NOW_US)
    short_info = builder.build(snapshot, estimator, NOW_US, short_string=True)

    assert long_info.status_label == "Discharging"
    assert long_info.remaining_label == "About 2h left"
    assert long_info.charge_label_string == "75% - about 2h left"
    assert short_info.remaining_label == "2h left"
    assert short_info.charge_label_string == "75% - 2h left"
    assert long_info.remaining_time_us == TWO_HOURS_US


def test_discharge_without_estimate(builder: BatteryInfoBuilder) -> None:
    snapshot = PowerSnapshot(level=75, status=BatteryStatus.DISCHARGING)
    info = builder.build(snapshot, FixedEstimator(), NOW_US, based_on_usage=True)
    assert info.remaining_label is None
    assert info.charge_label_string == "75%"
    assert info.remaining_time_us is None


def test_drain_time_skips_discharge_query(
    builder: BatteryInfoBuilder, discharging_full: PowerSnapshot
) -> None:
    estimator = _RecordingEstimator(discharge_us=TWO_HOURS_US)
    builder.build(discharging_full, estimator, NOW_US, drain_time_us=1000)
    assert estimator.calls == []

    builder.build(discharging_full, estimator, NOW_US)
    assert estimator.calls == [("discharge", NOW_US)]


def test_plugged_queries_charge_estimate(
    builder: BatteryInfoBuilder, charging: PowerSnapshot
) -> None:
    estimator = _RecordingEstimator()
    builder.build(charging, estimator, NOW_US)
    assert estimator.calls == [("charge", NOW_US)]


def test_build_from_estimate(builder: BatteryInfoBuilder) -> None:
    snapshot = PowerSnapshot(level=30, status=BatteryStatus.DISCHARGING)
    info = builder.build_from_estimate(
        snapshot, FixedEstimator(), NOW_US, Estimate(TWO_HOURS_US, based_on_usage=True)
    )
    assert info.remaining_label == "About 2h left based on your usage"

    fallback = builder.build_from_estimate(snapshot, FixedEstimator(), NOW_US, None)
    assert fallback.remaining_label is None


@pytest.mark.parametrize(
    "level, scale, expected",
    [
        (50, 100, "50%"),
        (1, 3, "33%"),
        (2, 3, "67%"),
        (0, 100, "0%"),
        (255, 255, "100%"),
        (1, 8, "12%"),  # exact half rounds to even
        (3, 8, "38%"),
    ],
)
def test_percentage_string(
    builder: BatteryInfoBuilder, level: int, scale: int, expected: str
) -> None:
    snapshot = PowerSnapshot(level=level, scale=scale)
    info = builder.build(snapshot, FixedEstimator(), NOW_US)
    assert info.battery_percentage_string == expected


def test_custom_duration_formatter(charging: PowerSnapshot) -> None:
    builder = BatteryInfoBuilder(duration_formatter=lambda us: f"<{us}>")
    info = builder.build(charging, FixedEstimator(charge_us=42), NOW_US)
    assert info.status_label == "Charging - <42> left"


def test_missing_plain_template_raises(charging: PowerSnapshot) -> None:
    builder = BatteryInfoBuilder(templates=TemplateCatalog({}))
    with pytest.raises(MissingTemplateError):
        builder.build(charging, FixedEstimator(), NOW_US)
