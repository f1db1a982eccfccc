"""Numbered, interactive device selection.

Physical devices are listed first, then offline devices (shown, never
selectable), then simulators/emulators. Numbering is 1-based and continues
across groups. Invalid answers never abort the prompt loop: after
``max_attempts`` consecutive misses the list is shown again and counting
restarts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape

from devpanel.models import (
    DEFAULT_DEVICE,
    CategorizedDevices,
    DefaultDevice,
    Device,
    DeviceSource,
)

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]
SpecialInputHandler = Callable[[str, str], bool]
Selection = Device | DefaultDevice | None

MAX_ATTEMPTS = 3
SELECTION_STEP = "device"

SIMULATOR_TITLES = {
    DeviceSource.IOS: "Simulators",
    DeviceSource.ANDROID: "Emulators",
}


def number_devices(devices: CategorizedDevices) -> dict[int, Device]:
    """Assign session indices to every selectable device, in display order."""
    selectable = [*devices.physical_devices, *devices.simulators]
    return {
        index: device.model_copy(update={"index": index})
        for index, device in enumerate(selectable, start=1)
    }


def resolve_choice(
    answer: str, choices: dict[int, Device], escape_token: str | None = None
) -> Device | DefaultDevice | None:
    """Map one answer to a device, the default sentinel, or None if invalid."""
    text = answer.strip()
    if escape_token and text.lower() == escape_token.lower():
        return DEFAULT_DEVICE
    if text.isascii() and text.isdecimal():
        return choices.get(int(text))
    return None


@dataclass
class DeviceSelector:
    devices: CategorizedDevices
    source: DeviceSource
    console: Console
    prompt: Prompt
    escape_token: str | None = None
    intercept: SpecialInputHandler | None = None
    max_attempts: int = MAX_ATTEMPTS
    choices: dict[int, Device] = field(init=False)

    def __post_init__(self) -> None:
        self.choices = number_devices(self.devices)

    @property
    def prompt_text(self) -> str:
        text = "\n→ Select a device by number"
        if self.escape_token:
            text += f' (or "{escape(self.escape_token)}" to use the default)'
        return f"[yellow]{text}:[/yellow] "

    def render(self) -> None:
        numbered = list(self.choices.items())
        physical_count = len(self.devices.physical_devices)

        self.console.print("\n[bold]== Devices ==[/bold]")
        if physical_count:
            for index, device in numbered[:physical_count]:
                self._print_choice(index, device, "green")
        else:
            self.console.print("[yellow]No physical devices connected[/yellow]")

        if self.devices.offline_devices:
            self.console.print("\n[bold]== Devices Offline ==[/bold]")
            for device in self.devices.offline_devices:
                self.console.print(
                    f"[bright_black]Device unavailable - {escape(device.name)} "
                    f"({escape(device.id)})[/bright_black]"
                )

        if self.devices.simulators:
            title = SIMULATOR_TITLES[self.source]
            self.console.print(f"\n[bold]== {title} ==[/bold]")
            for index, device in numbered[physical_count:]:
                self._print_choice(index, device, "cyan")

    def _print_choice(self, index: int, device: Device, style: str) -> None:
        self.console.print(
            f"[{style}]{index} - {escape(device.name)} ({escape(device.id)})[/{style}]"
        )

    def _invalid(self) -> None:
        message = f"Please enter a number between 1 and {len(self.choices)}"
        if self.escape_token:
            message += f' or "{escape(self.escape_token)}"'
        self.console.print(f"[red]⚠ Invalid selection. {message}.[/red]")

    def select(self) -> Selection:
        if not self.choices:
            self.render()
            self.console.print("[red]\n⚠ No devices or simulators available[/red]")
            return None

        self.render()
        attempts = 0
        while True:
            answer = self.prompt(self.prompt_text)
            if self.intercept is not None and self.intercept(answer, SELECTION_STEP):
                continue

            choice = resolve_choice(answer, self.choices, self.escape_token)
            if choice is DEFAULT_DEVICE:
                self.console.print("[green]\n✓ Using the default device[/green]")
                return choice
            if choice is not None:
                self.console.print(
                    f"[green]\n✓ Selected device: {escape(choice.name)}[/green]"
                )
                return choice

            attempts += 1
            logger.debug("Invalid selection %r (attempt %d)", answer, attempts)
            self._invalid()
            if attempts >= self.max_attempts:
                self.console.print(
                    "[yellow]\n⚠ Maximum attempts reached. "
                    "Showing device list again:[/yellow]"
                )
                attempts = 0
                self.render()


def select_device(
    devices: CategorizedDevices,
    source: DeviceSource,
    console: Console | None = None,
    prompt: Prompt | None = None,
    escape_token: str | None = None,
    intercept: SpecialInputHandler | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> Selection:
    console = console or Console()
    selector = DeviceSelector(
        devices=devices,
        source=source,
        console=console,
        prompt=prompt or console.input,
        escape_token=escape_token,
        intercept=intercept,
        max_attempts=max_attempts,
    )
    return selector.select()
