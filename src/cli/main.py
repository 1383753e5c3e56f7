"""zcc CLI entry point."""

import typer

from . import __version__
from .common import get_core, setup_logging
from .config_command import app as config_app
from .console import console
from .find_command import find_command
from .list_command import list_command
from .show_command import show_command

app = typer.Typer(
    name="zcc",
    help="zcc - find and inspect modes, workflows, agents and other components",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"zcc version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable debug logging",
    ),
) -> None:
    """zcc - find and inspect components across project, global and built-in scopes."""
    setup_logging(verbose)


@app.command(name="status")
def status_command() -> None:
    """Show which scopes exist and how many components each holds."""
    status = get_core().get_status()

    builtin = (
        f"[green]✓ {status.builtin_components} components[/green]"
        if status.builtin_available
        else "[red]✗ Not available[/red]"
    )
    global_ = (
        f"[green]✓ {status.global_components} components[/green]"
        if status.global_exists
        else "[yellow]○ Not initialized[/yellow]"
    )
    project = (
        f"[green]✓ {status.project_components} components[/green]"
        if status.project_exists
        else "[yellow]○ Not initialized[/yellow]"
    )

    console.print("[bold]zcc Status:[/bold]\n")
    console.print(f"Built-in:  {builtin}")
    console.print(f"Global:    {global_}  [dim]{status.global_path}[/dim]")
    console.print(f"Project:   {project}  [dim]{status.project_path}[/dim]")
    console.print(
        f"\nTotal: {status.total_components} components "
        f"({status.unique_components} unique)"
    )


app.command(name="list")(list_command)
app.command(name="find")(find_command)
app.command(name="show")(show_command)
app.add_typer(config_app, name="config")


if __name__ == "__main__":
    app()
