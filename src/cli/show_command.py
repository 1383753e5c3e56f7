"""The zcc show command."""

import json

import typer
from rich.markup import escape

from zcc.errors import ZccError

from .common import fail, get_core
from .console import console, origin_badge


def show_command(
    component_type: str = typer.Argument(..., help="Component type (mode, workflow, ...)"),
    name: str = typer.Argument(..., help="Exact component name"),
    as_json: bool = typer.Option(False, "--json", help="Print the component as JSON"),
) -> None:
    """Show the active copy of a component and every scope that defines it."""
    core = get_core()
    try:
        resolved = core.require_component(name, component_type)
    except ZccError as e:
        fail(e)

    component = resolved.component
    shadowed = [
        r for r in core.get_component_conflicts(component.name, component.type)
        if r.origin is not resolved.origin
    ]

    if as_json:
        data = component.to_dict()
        data["origin"] = resolved.origin.value
        data["shadows"] = [r.origin.value for r in shadowed]
        console.print_json(json.dumps(data, default=str))
        return

    console.print(f"[bold]{component.name}[/bold] {origin_badge(resolved.origin.value)}")
    console.print(f"  Type: {component.type.value}")
    console.print(f"  Path: {escape(component.path)}")
    if component.metadata.is_semantic:
        if component.metadata.description:
            console.print(f"  Description: {escape(component.metadata.description)}")
        if component.metadata.tags:
            console.print(f"  Tags: {', '.join(component.metadata.tags)}")
    if shadowed:
        console.print(f"  Shadows: {', '.join(r.origin.value for r in shadowed)}")
