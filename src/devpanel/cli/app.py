from __future__ import annotations

from typing import Annotated

import typer

from devpanel.utils.logging import setup_logging

from . import config as config_cmd
from . import env as env_cmd
from .devices import register as register_devices

app = typer.Typer(
    help="devpanel - control panel for mobile app devices and environments",
    no_args_is_help=True,
)

devices_app = typer.Typer(
    help="Find and select devices, simulators and emulators", no_args_is_help=True
)
register_devices(devices_app)

app.add_typer(devices_app, name="devices")
app.add_typer(env_cmd.app, name="env", help="Switch project environments")
app.add_typer(config_cmd.app, name="config", help="Manage devpanel settings")


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show detailed output and logs"),
    ] = False,
) -> None:
    """devpanel CLI."""
    setup_logging("DEBUG" if verbose else None)

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"devpanel version {get_version('devpanel')}")
        raise typer.Exit()
