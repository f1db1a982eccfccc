from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from devpanel.config import Settings, get_settings, resolve_config_path

EXIT_COMMANDS = frozenset({"exit", "quit"})
SKIP_COMMAND = "skip"


class SkipSelection(Exception):
    """Raised when the user types "skip" at a prompt."""

    def __init__(self, step: str) -> None:
        self.step = step
        super().__init__(f"Skipped {step} selection")


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def make_special_input_handler(console: Console):
    """Build the handler for commands accepted at any prompt.

    ``exit``/``quit`` ask for confirmation and leave the program, ``skip``
    abandons the current step via SkipSelection. Anything else is left to
    the prompt that asked.
    """

    def handle(answer: str, step: str) -> bool:
        command = answer.strip().lower()
        if command in EXIT_COMMANDS:
            if typer.confirm("Are you sure you want to exit?", default=False):
                console.print("[bright_black]Exiting application...[/bright_black]")
                raise typer.Exit(0)
            return True
        if command == SKIP_COMMAND:
            console.print(f"[yellow]⏩ Skipping {step} selection...[/yellow]")
            raise SkipSelection(step)
        return False

    return handle
