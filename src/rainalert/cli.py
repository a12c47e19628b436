"""Precipitation alert CLI application.

This module provides the command-line interface for rainalert: the
polling service itself, a one-off location lookup, and configuration
utilities.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Final

import typer

from rainalert.controller import RainAlert
from rainalert.scheduler import Scheduler
from rainalert.settings import UserSettings
from rainalert.weather.api import WeatherAPI
from rainalert.weather.errors import WeatherAPIError

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Precipitation alert CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "rainalert.cli"

# Options for the main command
CONFIG_OPTION = typer.Option(
    None, "--config", "-c", exists=True, dir_okay=False, help="Path to config.yaml"
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
ONCE_OPTION = typer.Option(False, "--once", "-1", help="Run one check then exit")
SIMULATE_OPTION = typer.Option(
    False, "--simulate", help="Pretend rain is coming to test notifications"
)
NAME_ARGUMENT = typer.Argument(..., help="Location name to resolve")


@app.command()
def run(
    config: Path | None = CONFIG_OPTION,
    once: bool = ONCE_OPTION,
    simulate: bool = SIMULATE_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Check the weather on a fixed interval and push alerts."""
    try:
        controller = RainAlert(config, simulate=simulate, debug=debug)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    logger.info("Precipitation alert started for %s", controller.config.location)
    scheduler = Scheduler(controller)
    try:
        scheduler.run(once=once)
    except KeyboardInterrupt:
        scheduler.stop()


@app.command()
def locate(
    name: str = NAME_ARGUMENT,
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Resolve a location name to its provider ID."""
    try:
        settings = UserSettings.load(config)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    try:
        location_id = WeatherAPI(settings).resolver.resolve(name)
    except WeatherAPIError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"{name}: {location_id}")


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
