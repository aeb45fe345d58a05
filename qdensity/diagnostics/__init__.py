"""Validation predicates and debugging utilities for qdensity."""

from .core import (
    DEFAULT_ATOL,
    assert_density,
    assert_matches_space,
    assert_self_adjoint,
    assert_square,
    is_density,
    is_self_adjoint,
    is_square,
    matches_space,
    state_norm,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "DEFAULT_ATOL",
    "state_norm",
    "is_square",
    "is_self_adjoint",
    "is_density",
    "matches_space",
    "assert_square",
    "assert_self_adjoint",
    "assert_density",
    "assert_matches_space",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
