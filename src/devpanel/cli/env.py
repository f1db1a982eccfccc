from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from devpanel.core import EnvironmentManager

from .common import load_settings_or_exit

app = typer.Typer(no_args_is_help=True)

ProjectDir = Annotated[
    Path,
    typer.Option("--project", "-p", help="Project root directory"),
]


def _manager(project: Path) -> EnvironmentManager:
    settings = load_settings_or_exit()
    return EnvironmentManager(project, settings.environment)


@app.command("show")
def show_environment(project: ProjectDir = Path(".")) -> None:
    """Show the active environment and available templates."""
    manager = _manager(project)
    status = manager.current()
    console = Console()

    if not status.exists:
        console.print(f"No {manager.target_path.name} file in {project}")
    else:
        console.print(f"Current environment: [bold]{status.name or 'unknown'}[/bold]")

    console.print("\n[bold]Templates[/bold]")
    for name, exists in manager.templates().items():
        mark = "[green]✓[/green]" if exists else "[red]✗[/red]"
        console.print(f"  {mark} {name}")


@app.command("switch")
def switch_environment(
    name: str = typer.Argument(..., help="Environment to activate"),
    project: ProjectDir = Path("."),
) -> None:
    """Generate the project's .env file from an environment template."""
    manager = _manager(project)
    previous = manager.current().name
    console = Console()

    try:
        target = manager.switch(name)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(1) from exc

    if previous == name:
        console.print(f"[green]✓[/green] Refreshed the {name} environment ({target})")
    else:
        console.print(
            f"[green]✓[/green] Switched from {previous or 'none'} to {name} "
            f"({target})"
        )
