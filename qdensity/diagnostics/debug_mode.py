"""Process-wide debug switch.

With debug mode on, :class:`~qdensity.states.QuantumState` logs the spectrum
it computed for every validated density matrix, and partial traces compare
the trace of the reduced matrix against the trace of the input.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

DEBUG_ENV_VAR = "QDENSITY_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag_from_env() -> bool:
    return os.getenv(DEBUG_ENV_VAR, "0").strip().lower() in _TRUTHY


_debug_enabled: bool = _flag_from_env()


def is_debug_enabled() -> bool:
    """
    Return whether debug mode is on.

    The initial value comes from the QDENSITY_DEBUG environment variable
    ("1", "true", "yes" or "on", case-insensitive).
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Turn debug mode on or off for the whole process."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily set debug mode, restoring the previous value on exit.

    Example
    -------
    >>> from qdensity import HilbertSpace, QuantumState
    >>> with debug_context(True):
    ...     state = QuantumState([[1.0], [0.0]], HilbertSpace(2))
    """
    global _debug_enabled
    previous = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = previous
