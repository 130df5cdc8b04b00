"""Diagnostics and debugging utilities for qcomposer."""

from .core import assert_normalized, fidelity, is_normalized, state_norm
from .debug_mode import debug_context, is_debug_enabled, set_debug_enabled

__all__ = [
    "state_norm",
    "is_normalized",
    "assert_normalized",
    "fidelity",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
