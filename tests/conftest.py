"""Shared pytest fixtures for zcc tests.

Most tests run against an in-memory filesystem laid out as:

    /project/.zcc/   project scope
    /home/.zcc/      global scope
    /builtin/        built-in templates

A smaller set of tests uses ``tmp_path`` to exercise the real disk.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from zcc.builtin_provider import BuiltinComponentProvider
from zcc.core import ZccCore
from zcc.filesystem import MemoryFileSystem

from tests.helpers import (
    BUILTIN_ROOT,
    GLOBAL_ROOT,
    GLOBAL_SCOPE,
    PROJECT_ROOT,
    PROJECT_SCOPE,
    markdown,
)


# =============================================================================
# Filesystem Fixtures
# =============================================================================


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """Return an empty in-memory filesystem."""
    return MemoryFileSystem()


@pytest.fixture
def make_core(memory_fs: MemoryFileSystem) -> Callable[..., ZccCore]:
    """Factory building a ZccCore over ``memory_fs``.

    Accepts ``environ`` (defaults to an empty environment so the host's
    ZCC_* variables never leak into tests).
    """

    def _make(environ: dict[str, str] | None = None) -> ZccCore:
        return ZccCore(
            PROJECT_ROOT,
            fs=memory_fs,
            global_root=GLOBAL_ROOT,
            builtin_provider=BuiltinComponentProvider(BUILTIN_ROOT, fs=memory_fs),
            environ=environ if environ is not None else {},
        )

    return _make


@pytest.fixture
def core(make_core: Callable[..., ZccCore]) -> ZccCore:
    """Return a ZccCore over ``memory_fs`` with an empty environment."""
    return make_core()


@pytest.fixture
def layered_fs(memory_fs: MemoryFileSystem) -> MemoryFileSystem:
    """Populate all three scopes with overlapping components.

    - mode "engineer" exists in all three scopes
    - mode "architect" only built-in
    - mode "reviewer" global and built-in
    - workflow "review" project only
    """
    memory_fs.write_text(f"{BUILTIN_ROOT}/modes/engineer.md", markdown("Builtin engineer"))
    memory_fs.write_text(f"{BUILTIN_ROOT}/modes/architect.md", markdown("Designs systems"))
    memory_fs.write_text(f"{BUILTIN_ROOT}/modes/reviewer.md", markdown("Builtin reviewer"))
    memory_fs.write_text(f"{GLOBAL_SCOPE}/modes/engineer.md", markdown("Global engineer"))
    memory_fs.write_text(f"{GLOBAL_SCOPE}/modes/reviewer.md", markdown("Global reviewer"))
    memory_fs.write_text(f"{PROJECT_SCOPE}/modes/engineer.md", markdown("Project engineer"))
    memory_fs.write_text(f"{PROJECT_SCOPE}/workflows/review.md", markdown("Project review"))
    return memory_fs


# =============================================================================
# Disk Fixtures
# =============================================================================


@pytest.fixture
def temp_project(tmp_path: Path) -> Path:
    """Create a temporary project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def temp_home(tmp_path: Path) -> Path:
    """Create a temporary home directory for the global scope."""
    home = tmp_path / "home"
    home.mkdir()
    return home
