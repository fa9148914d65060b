"""Battery info CLI application.

This module provides the command-line interface for computing battery
summaries from a power reading, and for checking label configuration.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Final

import typer

from batteryinfo.builder import BatteryInfoBuilder
from batteryinfo.errors import ConfigError, InvalidSnapshotError
from batteryinfo.estimator import NO_ESTIMATE, FixedEstimator
from batteryinfo.models.snapshot import BatteryStatus, PlugSource, PowerSnapshot
from batteryinfo.settings.user import LabelSettings
from batteryinfo.utils.time import TimeUtils

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Battery status summary CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "batteryinfo.cli"


class PlugChoice(str, Enum):
    none = "none"
    ac = "ac"
    usb = "usb"
    wireless = "wireless"
    dock = "dock"


class StatusChoice(str, Enum):
    unknown = "unknown"
    charging = "charging"
    discharging = "discharging"
    not_charging = "not_charging"
    full = "full"


# Options for the show command
PLUGGED_OPTION = typer.Option(PlugChoice.none, "--plugged", help="Connected power source")
LEVEL_OPTION = typer.Option(..., "--level", "-l", help="Charge level in scale units")
SCALE_OPTION = typer.Option(100, "--scale", help="Maximum charge level")
STATUS_OPTION = typer.Option(StatusChoice.unknown, "--status", help="Charger status code")
CHARGE_US_OPTION = typer.Option(NO_ESTIMATE, "--charge-us", help="Charge time estimate (us)")
DISCHARGE_US_OPTION = typer.Option(
    NO_ESTIMATE, "--discharge-us", help="Discharge time estimate (us)"
)
DRAIN_US_OPTION = typer.Option(
    None, "--drain-us", help="Precomputed discharge estimate overriding --discharge-us"
)
SHORT_OPTION = typer.Option(False, "--short", "-s", help="Use terse phrasing")
USAGE_OPTION = typer.Option(False, "--based-on-usage", "-u", help="Estimate is usage-based")
CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _load_settings(config: Path | None) -> LabelSettings:
    if config is None:
        return LabelSettings()
    try:
        return LabelSettings.load(config)
    except ConfigError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def show(
    plugged: PlugChoice = PLUGGED_OPTION,
    level: int = LEVEL_OPTION,
    scale: int = SCALE_OPTION,
    status: StatusChoice = STATUS_OPTION,
    charge_us: int = CHARGE_US_OPTION,
    discharge_us: int = DISCHARGE_US_OPTION,
    drain_us: int | None = DRAIN_US_OPTION,
    short: bool = SHORT_OPTION,
    based_on_usage: bool = USAGE_OPTION,
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Compute and print the battery summary for one reading."""
    _configure_logging(debug)
    settings = _load_settings(config)

    try:
        snapshot = PowerSnapshot.from_extras(
            {
                "plugged": PlugSource[plugged.name.upper()].value,
                "level": level,
                "scale": scale,
                "status": BatteryStatus[status.name.upper()].value,
            }
        )
    except InvalidSnapshotError as exc:
        typer.secho(exc.message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    builder = BatteryInfoBuilder(templates=settings.template_catalog())
    info = builder.build(
        snapshot,
        FixedEstimator(charge_us=charge_us, discharge_us=discharge_us),
        TimeUtils.now_us(),
        short_string=short or settings.short_string,
        drain_time_us=drain_us,
        based_on_usage=based_on_usage or settings.based_on_usage,
    )

    typer.echo(f"discharging: {str(info.discharging).lower()}")
    typer.echo(f"percentage: {info.battery_percentage_string}")
    typer.echo(f"status: {info.status_label}")
    typer.echo(f"charge_label: {info.charge_label_string}")
    typer.echo(f"remaining: {info.remaining_label or '-'}")


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        LabelSettings.load(file)
        typer.echo("✅ Config valid")
    except (ConfigError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("templates")
def list_templates(config: Path | None = CONFIG_OPTION):
    """Print the effective label templates."""
    settings = _load_settings(config)
    for key, pattern in settings.template_catalog().items():
        typer.echo(f"{key.value}: {pattern}")


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
