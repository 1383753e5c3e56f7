"""Run context for a single CLI invocation.

The context is an explicit value passed to whatever needs it, never a
process-wide singleton.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

TRUTHY_ENV_VALUES = ("true", "1", "TRUE", "True")


@dataclass
class CliContext:
    non_interactive: bool = False
    force: bool = False
    verbose: bool = False
    debug: bool = False
    project_root: Path = field(default_factory=Path.cwd)


def _env_flag(environ: dict[str, str], name: str) -> bool:
    return environ.get(name, "") in TRUTHY_ENV_VALUES


def context_from_env(
    non_interactive: bool = False,
    force: bool | None = None,
    verbose: bool = False,
    debug: bool = False,
    project_root: Path | None = None,
    environ: dict[str, str] | None = None,
) -> CliContext:
    """
    Build a CliContext from CLI options and the environment.

    ZCC_NON_INTERACTIVE or CI switch on non-interactive mode. Non-interactive
    mode implies ``force`` unless ``force`` was given explicitly.
    """
    env = os.environ if environ is None else environ

    if _env_flag(env, "ZCC_NON_INTERACTIVE") or _env_flag(env, "CI"):
        non_interactive = True

    if force is None:
        force = non_interactive

    return CliContext(
        non_interactive=non_interactive,
        force=force,
        verbose=verbose,
        debug=debug,
        project_root=project_root or Path.cwd(),
    )
