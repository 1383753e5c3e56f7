"""Console output helpers.

Usage:
    from cli.console import console, print_success, print_error

    console.print("Hello world", style="bold")
    print_success("Operation completed")
    print_zcc_error(error)
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from zcc.errors import ZccError

console = Console()


def configure_console(color_output: bool) -> None:
    """Apply the ui.colorOutput setting."""
    console.no_color = not color_output


def print_success(message: str) -> None:
    """Print a success message (green checkmark)."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message (red X)."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message (yellow warning sign)."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message (blue info sign)."""
    console.print(f"[blue]ℹ[/blue] {message}")


def print_zcc_error(error: ZccError) -> None:
    """Print an error with its remediation hint."""
    print_error(escape(error.message))
    if error.suggestion:
        console.print(f"  [dim]{escape(error.suggestion)}[/dim]")


def create_table(title: str = "") -> Table:
    return Table(title=title) if title else Table()


ORIGIN_STYLES = {
    "project": "green",
    "global": "blue",
    "builtin": "dim",
}


def origin_badge(origin: str) -> str:
    style = ORIGIN_STYLES.get(origin, "white")
    return f"[{style}]\\[{origin}][/{style}]"
