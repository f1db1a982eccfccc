from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from devpanel.core import list_devices, select_device
from devpanel.models import DEFAULT_DEVICE, DeviceCategory, DeviceSource
from devpanel.utils.redaction import Redactor

from .common import SkipSelection, load_settings_or_exit, make_special_input_handler

logger = logging.getLogger(__name__)

CATEGORY_STYLES = {
    DeviceCategory.PHYSICAL: "green",
    DeviceCategory.OFFLINE: "bright_black",
    DeviceCategory.SIMULATOR: "cyan",
}


def list_command(
    source: DeviceSource = typer.Argument(
        DeviceSource.IOS, help="Device source to enumerate"
    ),
    redact: bool = typer.Option(
        False,
        "--redact",
        help="Redact device identifiers in output",
    ),
) -> None:
    """List physical devices, offline devices and simulators/emulators."""
    console = Console()
    settings = load_settings_or_exit()

    console.print(f"Listing {source.value} devices...")
    devices = asyncio.run(list_devices(source, settings.devices))

    rows = devices.all_devices()
    if not rows:
        console.print(f"No {source.value} devices found.")
        return

    redactor = Redactor(enabled=redact)
    table = Table()
    table.add_column("Category")
    table.add_column("Name", style="bold")
    table.add_column("ID")
    table.add_column("OS")
    table.add_column("Platform")

    for device in rows:
        style = CATEGORY_STYLES[device.category]
        table.add_row(
            f"[{style}]{device.category.value}[/{style}]",
            escape(device.name),
            escape(redactor.redact_id(device.id)),
            device.os_version or "",
            device.platform or "",
        )

    console.print(table)
    console.print(f"\n[green]Found {len(rows)} device(s)[/green]")


def select_command(
    source: DeviceSource = typer.Argument(
        DeviceSource.IOS, help="Device source to choose from"
    ),
) -> None:
    """Pick a device interactively and print its identifier."""
    console = Console()
    settings = load_settings_or_exit()

    devices = asyncio.run(list_devices(source, settings.devices))
    try:
        selection = select_device(
            devices,
            source,
            console=console,
            escape_token=settings.devices.escape_token(source),
            intercept=make_special_input_handler(console),
            max_attempts=settings.devices.max_attempts,
        )
    except SkipSelection:
        selection = DEFAULT_DEVICE

    if selection is None:
        console.print("[yellow]⚠ No device selected.[/yellow]")
        raise typer.Exit(1)
    if selection is DEFAULT_DEVICE:
        console.print("Target: default")
        return

    logger.debug("Selected %s (%s)", selection.name, selection.id)
    console.print(f"Target: {escape(selection.id)}")


def register(app: typer.Typer) -> None:
    app.command("list")(list_command)
    app.command("select")(select_command)
