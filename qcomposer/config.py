"""Runtime configuration for qcomposer.

Limits and defaults are collected in an immutable :class:`ComposerConfig`.
The process-wide instance is built from environment variables on first use
and can be replaced with :func:`set_config` or temporarily with
:func:`config_context`.

Environment variables:
    QCOMPOSER_DEFAULT_QUBITS   qubits in a fresh circuit (default 3)
    QCOMPOSER_MAX_QUBITS       largest circuit that can be built (default 10)
    QCOMPOSER_MAX_SIM_QUBITS   largest circuit that can be simulated (default 4)
"""

from __future__ import annotations

import math
import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Iterator, Optional


@dataclass(frozen=True)
class ComposerConfig:
    """
    Limits and defaults shared by the circuit, simulator and codecs.

    Attributes
    ----------
    default_qubits:
        Qubit count of a circuit created without an explicit size.
    max_qubits:
        Largest qubit count a circuit may have.
    max_simulated_qubits:
        Largest qubit count accepted by the exact state-vector simulator.
    default_rotation_angle:
        Angle used for RX/RY/RZ gates added without one.
    atol:
        Absolute tolerance of the debug-mode normalization check after each gate.
    """

    default_qubits: int = 3
    max_qubits: int = 10
    max_simulated_qubits: int = 4
    default_rotation_angle: float = math.pi / 2.0
    atol: float = 1e-9

    def __post_init__(self) -> None:
        if self.max_qubits < 1:
            raise ValueError(f"max_qubits must be >= 1, got {self.max_qubits}")
        if not 1 <= self.default_qubits <= self.max_qubits:
            raise ValueError(
                f"default_qubits must be in [1, {self.max_qubits}], "
                f"got {self.default_qubits}"
            )
        if self.max_simulated_qubits < 1:
            raise ValueError(
                "max_simulated_qubits must be >= 1, "
                f"got {self.max_simulated_qubits}"
            )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}")


def config_from_env() -> ComposerConfig:
    """Build a configuration from the QCOMPOSER_* environment variables."""
    return ComposerConfig(
        default_qubits=_env_int("QCOMPOSER_DEFAULT_QUBITS", 3),
        max_qubits=_env_int("QCOMPOSER_MAX_QUBITS", 10),
        max_simulated_qubits=_env_int("QCOMPOSER_MAX_SIM_QUBITS", 4),
    )


_config: Optional[ComposerConfig] = None


def get_config() -> ComposerConfig:
    """Return the active configuration, reading the environment on first use."""
    global _config
    if _config is None:
        _config = config_from_env()
    return _config


def set_config(config: Optional[ComposerConfig] = None, **overrides: Any) -> ComposerConfig:
    """
    Replace the active configuration.

    Parameters
    ----------
    config:
        New configuration. If None, the active one is used as the base.
    **overrides:
        Field values applied on top of ``config``.

    Returns
    -------
    ComposerConfig
        The configuration now in effect.
    """
    global _config
    base = config if config is not None else get_config()
    _config = replace(base, **overrides) if overrides else base
    return _config


@contextmanager
def config_context(**overrides: Any) -> Iterator[ComposerConfig]:
    """
    Temporarily override configuration fields.

    Example
    -------
    >>> with config_context(max_simulated_qubits=6):
    ...     pass
    """
    global _config
    prev = get_config()
    _config = replace(prev, **overrides)
    try:
        yield _config
    finally:
        _config = prev


__all__ = [
    "ComposerConfig",
    "config_from_env",
    "get_config",
    "set_config",
    "config_context",
]
