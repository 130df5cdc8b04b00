"""Pytest configuration and shared fixtures for qcomposer tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Isolation of the global configuration and debug flag between tests
- A random circuit builder for property-style tests
"""

import math
import os
from typing import Callable

import numpy as np
import pytest
import torch

from qcomposer.circuit import Circuit
from qcomposer.config import set_config
from qcomposer.diagnostics import is_debug_enabled, set_debug_enabled
from qcomposer.gates import GateKind, spec_for


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic torch RNG on the default device."""
    from qcomposer.core.device import default_device

    generator = torch.Generator(device=default_device().as_torch_device())
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the global numpy and torch RNGs for every test."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture(scope="function", autouse=True)
def restore_global_state():
    """Restore the active configuration and debug flag after each test."""
    config = set_config()
    debug = is_debug_enabled()
    yield
    set_config(config)
    set_debug_enabled(debug)


@pytest.fixture(scope="function")
def random_circuit(rng: np.random.Generator) -> Callable[..., Circuit]:
    """Build random circuits with one gate per column.

    Two-qubit kinds are placed so that their partner qubit exists, and
    rotations get a random angle in (-2*pi, 2*pi).
    """

    def build(n_qubits: int = 3, n_gates: int = 8, include_measure: bool = True) -> Circuit:
        kinds = [k for k in GateKind if include_measure or k is not GateKind.MEASURE]
        if n_qubits < 2:
            kinds = [k for k in kinds if not spec_for(k).is_two_qubit]

        circuit = Circuit(n_qubits)
        for column in range(n_gates):
            kind = kinds[int(rng.integers(len(kinds)))]
            spec = spec_for(kind)
            top = n_qubits - 1 if spec.is_two_qubit else n_qubits
            qubit = int(rng.integers(top))
            angle = float(rng.uniform(-2 * math.pi, 2 * math.pi)) if spec.is_rotation else None
            circuit.add_gate(kind, qubit, column, angle)
        return circuit

    return build


@pytest.fixture(scope="function")
def log_stream():
    """Route qcomposer log output at DEBUG level into a StringIO for the test."""
    import io
    import logging

    from qcomposer.logging import configure_logging

    stream = io.StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    yield stream
    configure_logging(level=logging.WARNING)
