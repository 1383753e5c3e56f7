"""The zcc find command."""

import typer

from zcc.context import context_from_env
from zcc.errors import ZccError
from zcc.fuzzy_matcher import FuzzyMatchOptions
from zcc.models import ComponentType

from .common import fail, get_core
from .console import console, create_table, origin_badge, print_warning


def find_command(
    query: str = typer.Argument(..., help="Approximate component name"),
    component_type: str | None = typer.Option(
        None,
        "--type",
        "-t",
        help="Restrict the search to one component type",
    ),
    max_results: int = typer.Option(10, "--max-results", "-n", help="Maximum results"),
    min_score: int = typer.Option(20, "--min-score", help="Minimum score (0-100)"),
    non_interactive: bool = typer.Option(
        False,
        "--non-interactive",
        "-y",
        help="Only report a single confident match (also enabled by ZCC_NON_INTERACTIVE or CI)",
    ),
) -> None:
    """Find components by approximate name, abbreviation or acronym."""
    try:
        parsed_type = ComponentType.parse(component_type) if component_type else None
    except ZccError as e:
        fail(e)

    context = context_from_env(non_interactive=non_interactive)
    core = get_core(context.project_root)
    options = FuzzyMatchOptions(max_results=max_results, min_score=min_score)

    results = core.find_components_for_mode(
        query, parsed_type, options, non_interactive=context.non_interactive
    )

    if not results:
        # Re-run the unrestricted ranking to tell "ambiguous" from "nothing"
        candidates = core.find_components(query, parsed_type, options) if context.non_interactive else []
        if candidates:
            print_warning(f"'{query}' is ambiguous. Use a more specific name:")
            for result in candidates:
                console.print(f"  • {result.name} ({result.component.type.value}, {result.score})")
        else:
            print_warning(f"No components match '{query}'.")
            suggestions = core.generate_suggestions(query, parsed_type)
            if suggestions:
                console.print(f"Did you mean: {', '.join(suggestions)}?")
        raise typer.Exit(1)

    table = create_table(f"Matches for '{query}'")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Scope")
    table.add_column("Score", justify="right")
    table.add_column("Match", style="dim")
    table.add_column("Also in", style="dim")

    for result in results:
        also_in = ""
        if result.conflicts_with:
            also_in = ", ".join(
                r.origin.value for r in result.conflicts_with if r.origin is not result.origin
            )
        table.add_row(
            result.name,
            result.component.type.value,
            origin_badge(result.origin.value),
            str(result.score),
            result.match_type,
            also_in,
        )

    console.print(table)
