"""Battery summary builder.

Turns a power snapshot and a remaining-time estimator into a BatteryInfo
record by choosing among the charge, discharge and usage-based label
templates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Final, Optional

from batteryinfo.errors import MissingTemplateError
from batteryinfo.estimator import RemainingTimeEstimator, valid_duration
from batteryinfo.models.info import BatteryInfo, Estimate
from batteryinfo.models.snapshot import BatteryStatus, PowerSnapshot
from batteryinfo.templates import StringTemplateProvider, TemplateCatalog, TemplateKey
from batteryinfo.utils.formatting import format_percentage, level_to_percent
from batteryinfo.utils.time import TimeUtils

logger: Final = logging.getLogger(__name__)

DurationFormatter = Callable[[int], str]

_STATUS_KEYS: Final = {
    BatteryStatus.CHARGING: TemplateKey.STATUS_DISCHARGING,
    BatteryStatus.DISCHARGING: TemplateKey.STATUS_DISCHARGING,
    BatteryStatus.NOT_CHARGING: TemplateKey.STATUS_NOT_CHARGING,
    BatteryStatus.FULL: TemplateKey.BATTERY_FULL,
    BatteryStatus.UNKNOWN: TemplateKey.STATUS_UNKNOWN,
}


class BatteryInfoBuilder:
    """Builds BatteryInfo records from power snapshots.

    The builder keeps no per-call state; one instance can serve any
    number of callers.
    """

    def __init__(
        self,
        templates: StringTemplateProvider | None = None,
        duration_formatter: DurationFormatter | None = None,
    ) -> None:
        """Initialize with collaborators.

        Args:
            templates: Template provider (default: TemplateCatalog())
            duration_formatter: Renders a microsecond duration
                (default: TimeUtils.format_duration_us)
        """
        self.templates = templates or TemplateCatalog()
        self.format_duration = duration_formatter or TimeUtils.format_duration_us

    def build(
        self,
        snapshot: PowerSnapshot,
        estimator: RemainingTimeEstimator,
        now_us: int,
        short_string: bool = False,
        drain_time_us: Optional[int] = None,
        based_on_usage: bool = False,
    ) -> BatteryInfo:
        """Compute the battery summary for one snapshot.

        Args:
            snapshot: Current power state
            estimator: Source of charge and discharge projections
            now_us: Reference time in microseconds for estimator queries
            short_string: Use the terse phrasing of each template
            drain_time_us: Precomputed discharge estimate; when given the
                estimator's discharge query is skipped
            based_on_usage: Whether the discharge estimate comes from
                usage history

        Returns:
            Immutable BatteryInfo
        """
        level = level_to_percent(snapshot.level, snapshot.scale)
        percentage = format_percentage(level)
        discharging = not snapshot.is_plugged

        if discharging:
            if drain_time_us is None:
                drain_time_us = estimator.estimate_discharge_time_remaining(now_us)
            duration = valid_duration(drain_time_us)
            status_label = self._status_text(snapshot.status)
            remaining_label, charge_label = self._discharge_labels(
                percentage, duration, short_string, based_on_usage
            )
        else:
            duration = valid_duration(estimator.estimate_charge_time_remaining(now_us))
            if snapshot.is_full:
                duration = None
            status_label, charge_label = self._charge_labels(
                snapshot, percentage, duration, short_string
            )
            remaining_label = None

        logger.debug(
            "Battery %s, %s, estimate=%s us: %r",
            percentage,
            "discharging" if discharging else "plugged",
            duration,
            status_label,
        )
        return BatteryInfo(
            discharging=discharging,
            battery_percentage_string=percentage,
            status_label=status_label,
            charge_label_string=charge_label,
            remaining_label=remaining_label,
            battery_level=level,
            remaining_time_us=duration,
        )

    def build_from_estimate(
        self,
        snapshot: PowerSnapshot,
        estimator: RemainingTimeEstimator,
        now_us: int,
        estimate: Estimate | None,
        short_string: bool = False,
    ) -> BatteryInfo:
        """Compute the summary using a caller-supplied discharge Estimate.

        Without an estimate this is equivalent to build() with the
        estimator's own discharge projection.
        """
        if estimate is None:
            return self.build(snapshot, estimator, now_us, short_string)
        return self.build(
            snapshot,
            estimator,
            now_us,
            short_string,
            drain_time_us=estimate.remaining_us,
            based_on_usage=estimate.based_on_usage,
        )

    def _status_text(self, status: BatteryStatus) -> str:
        return self.templates.get_string(_STATUS_KEYS[status])

    def _charge_labels(
        self,
        snapshot: PowerSnapshot,
        percentage: str,
        duration: Optional[int],
        short_string: bool,
    ) -> tuple[str, str]:
        if snapshot.is_full:
            status_label = self.templates.get_string(TemplateKey.BATTERY_FULL)
        elif duration is None:
            status_label = self.templates.get_string(TemplateKey.STATUS_CHARGING)
        else:
            status_label = self.templates.get_string(
                TemplateKey.STATUS_CHARGING_DURATION, time=self.format_duration(duration)
            )

        if duration is None:
            charge_label = self.templates.get_string(
                TemplateKey.CHARGING,
                percentage=percentage,
                status=self.templates.get_string(TemplateKey.CHARGING_LOWER),
            )
        else:
            key = (
                TemplateKey.CHARGING_DURATION_SHORT
                if short_string
                else TemplateKey.CHARGING_DURATION
            )
            charge_label = self.templates.get_string(
                key, percentage=percentage, time=self.format_duration(duration)
            )
        return status_label, charge_label

    def _discharge_labels(
        self,
        percentage: str,
        duration: Optional[int],
        short_string: bool,
        based_on_usage: bool,
    ) -> tuple[Optional[str], str]:
        if duration is None:
            return None, percentage

        time = self.format_duration(duration)
        if short_string:
            remaining = self._with_usage_fallback(
                based_on_usage,
                TemplateKey.REMAINING_DURATION_ONLY_SHORT_ENHANCED,
                TemplateKey.REMAINING_DURATION_ONLY_SHORT,
                time=time,
            )
            charge = self.templates.get_string(
                TemplateKey.DISCHARGING_DURATION_SHORT, percentage=percentage, time=time
            )
        else:
            remaining = self._with_usage_fallback(
                based_on_usage,
                TemplateKey.REMAINING_DURATION_ONLY_ENHANCED,
                TemplateKey.REMAINING_DURATION_ONLY,
                time=time,
            )
            charge = self._with_usage_fallback(
                based_on_usage,
                TemplateKey.DISCHARGING_DURATION_ENHANCED,
                TemplateKey.DISCHARGING_DURATION,
                percentage=percentage,
                time=time,
            )
        return remaining, charge

    def _with_usage_fallback(
        self,
        based_on_usage: bool,
        enhanced: TemplateKey,
        plain: TemplateKey,
        **values: str,
    ) -> str:
        if based_on_usage:
            try:
                return self.templates.get_string(enhanced, **values)
            except MissingTemplateError:
                logger.debug("No usage-based template %s, using %s", enhanced.value, plain.value)
        return self.templates.get_string(plain, **values)
