"""The zcc list command."""

import typer

from zcc.errors import ZccError
from zcc.models import ComponentType, Origin, ResolvedComponent

from .common import fail, get_core
from .console import console, origin_badge


def _print_component(resolved: ResolvedComponent, verbose: bool) -> None:
    component = resolved.component
    badge = origin_badge(resolved.origin.value)
    description = component.metadata.description if component.metadata.is_semantic else None

    if verbose and description:
        console.print(f"  • {component.name} {badge}")
        console.print(f"    [dim]{description}[/dim]")
        if component.metadata.tags:
            console.print(f"    [cyan]Tags:[/cyan] {', '.join(component.metadata.tags)}")
    else:
        suffix = f" - {description}" if description else ""
        console.print(f"  • {component.name} {badge}{suffix}")


def list_command(
    component_type: str | None = typer.Option(
        None,
        "--type",
        "-t",
        help="Filter by component type (mode, workflow, agent, ...; plurals accepted)",
    ),
    scope: str | None = typer.Option(
        None,
        "--scope",
        "-s",
        help="Filter by scope: builtin, global, or project",
    ),
    conflicts: bool = typer.Option(
        False,
        "--conflicts",
        "-c",
        help="Show only components present in more than one scope",
    ),
    installed: bool = typer.Option(
        False,
        "--installed",
        help="Show only project and global components",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show descriptions and tags",
    ),
) -> None:
    """List components across all scopes (built-in, global, project)."""
    try:
        types = [ComponentType.parse(component_type)] if component_type else list(ComponentType)
        origin = Origin.parse(scope) if scope else None
    except ZccError as e:
        fail(e)

    core = get_core()
    shown = False

    for current_type in types:
        entries = core.get_components_by_type_with_source(current_type)

        if conflicts:
            counts: dict[str, int] = {}
            for entry in entries:
                counts[entry.name] = counts.get(entry.name, 0) + 1
            entries = [e for e in entries if counts[e.name] > 1]
        if origin is not None:
            entries = [e for e in entries if e.origin is origin]
        if installed:
            entries = [e for e in entries if e.origin is not Origin.BUILTIN]

        if not entries:
            continue

        shown = True
        console.print(f"[bold]{current_type.dir_name.capitalize()}:[/bold]")
        for entry in entries:
            _print_component(entry, verbose)
        console.print()

    if not shown:
        if conflicts:
            console.print("[dim]No conflicting components found.[/dim]")
        else:
            console.print("[dim]No components found.[/dim]")
