"""Test helpers for zcc.

- Builders: component files, scope layouts and in-memory candidates
- Assertions: common checks on fuzzy lookup results
"""

from .assertions import assert_scores_sorted, assert_top_match
from .builders import (
    BUILTIN_ROOT,
    GLOBAL_ROOT,
    GLOBAL_SCOPE,
    PROJECT_ROOT,
    PROJECT_SCOPE,
    candidate,
    markdown,
    write_component,
)

__all__ = [
    # Layout
    "PROJECT_ROOT",
    "GLOBAL_ROOT",
    "BUILTIN_ROOT",
    "PROJECT_SCOPE",
    "GLOBAL_SCOPE",
    # Builders
    "candidate",
    "markdown",
    "write_component",
    # Assertions
    "assert_top_match",
    "assert_scores_sorted",
]
