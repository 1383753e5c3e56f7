"""zcc config subcommands: get, set, unset, list."""

import copy

import typer
import yaml
from rich.markup import escape

from zcc.config import set_nested_value, validate_config
from zcc.errors import ValidationError, ZccError

from .common import fail, get_core
from .console import console, print_success, print_warning

app = typer.Typer(
    name="config",
    help="Read and change zcc configuration",
    no_args_is_help=True,
)


def parse_value(raw: str):
    """Interpret a CLI value as YAML so 'true', '3' and '[a, b]' become typed values."""
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw


@app.command(name="get")
def get_value(key: str = typer.Argument(..., help="Dot-separated key, e.g. ui.colorOutput")) -> None:
    """Show the effective value of a configuration key."""
    value = get_core().get_config_value(key)
    if value is None:
        print_warning(f"'{key}' is not set")
        raise typer.Exit(1)
    if isinstance(value, (dict, list)):
        console.print(yaml.safe_dump(value, default_flow_style=False).rstrip())
    else:
        console.print(str(value))


@app.command(name="set")
def set_value(
    key: str = typer.Argument(..., help="Dot-separated key, e.g. defaultMode"),
    value: str = typer.Argument(..., help="Value (parsed as YAML)"),
    is_global: bool = typer.Option(False, "--global", "-g", help="Write to the global scope"),
) -> None:
    """Set a configuration value in the project (or global) scope."""
    core = get_core()
    scope = core.get_scopes()["global" if is_global else "project"]
    parsed = parse_value(value)

    try:
        candidate = copy.deepcopy(scope.get_config() or {})
        set_nested_value(candidate, key, parsed)
        result = validate_config(candidate)
        if not result.valid:
            raise ValidationError(result.errors[0], key)
        for warning in result.warnings:
            print_warning(warning)

        core.set_config_value(key, parsed, is_global=is_global)
    except ZccError as e:
        fail(e)

    print_success(f"Set {key} = {escape(repr(parsed))} in {scope.scope_type} config")


@app.command(name="unset")
def unset_value(
    key: str = typer.Argument(..., help="Dot-separated key"),
    is_global: bool = typer.Option(False, "--global", "-g", help="Change the global scope"),
) -> None:
    """Remove a configuration key from the project (or global) scope."""
    core = get_core()
    try:
        core.unset_config_value(key, is_global=is_global)
    except ZccError as e:
        fail(e)
    print_success(f"Removed {key}")


@app.command(name="list")
def list_config() -> None:
    """Show the merged configuration (defaults, global, project, environment)."""
    config = get_core().get_config()
    console.print(yaml.safe_dump(config, default_flow_style=False, sort_keys=False).rstrip())
