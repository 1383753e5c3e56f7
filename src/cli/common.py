"""Helpers shared by the zcc CLI commands."""

import logging
from pathlib import Path

import typer

from zcc.core import ZccCore
from zcc.errors import ZccError

from .console import configure_console, print_zcc_error

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        force=True,
    )


def get_core(project_root: Path | None = None) -> ZccCore:
    """Create a resolver for the current directory and apply UI settings."""
    core = ZccCore(project_root or Path.cwd())
    try:
        config = core.get_config()
    except ZccError as e:
        fail(e)

    ui = config.get("ui") or {}
    configure_console(ui.get("colorOutput", True))
    if ui.get("verboseLogging"):
        logging.getLogger().setLevel(logging.DEBUG)
    return core


def fail(error: ZccError) -> None:
    """Report an error and exit with status 1."""
    logger.debug(f"{error.code}: {error.message}")
    print_zcc_error(error)
    raise typer.Exit(1)
