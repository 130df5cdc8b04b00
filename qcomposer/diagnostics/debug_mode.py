"""Debug mode switch for the simulator.

While debug mode is on, every state-vector kernel checks that the state it
returns is still normalized, so a broken gate is caught at the gate that
broke it rather than when probabilities are read out.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_DEBUG_ENV_VAR = "QCOMPOSER_DEBUG"
_TRUTHY = ("1", "true", "yes", "on")

_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").strip().lower() in _TRUTHY


def is_debug_enabled() -> bool:
    """
    Return whether simulator debug checks are enabled.

    The initial value comes from the ``QCOMPOSER_DEBUG`` environment
    variable; :func:`set_debug_enabled` and :func:`debug_context` override it.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Globally enable or disable simulator debug checks."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily enable or disable debug checks.

    Example
    -------
    >>> with debug_context():
    ...     state = circuit.simulate_state()
    """
    global _debug_enabled
    previous = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = previous


__all__ = ["is_debug_enabled", "set_debug_enabled", "debug_context"]
