"""Tests for state diagnostics and debug mode."""

import math

import pytest
import torch

from qcomposer.backend import simulate
from qcomposer.backend.statevector import apply_gate
from qcomposer.circuit import Circuit
from qcomposer.config import config_context
from qcomposer.diagnostics import (
    assert_normalized,
    debug_context,
    fidelity,
    is_debug_enabled,
    is_normalized,
    set_debug_enabled,
    state_norm,
)


def test_state_norm_batched():
    states = torch.tensor([[1.0, 0.0], [3.0, 4.0]], dtype=torch.complex128)
    assert state_norm(states).tolist() == pytest.approx([1.0, 5.0])


def test_state_norm_rejects_scalars():
    with pytest.raises(ValueError):
        state_norm(torch.tensor(1.0 + 0j))


def test_is_normalized():
    s = 1 / math.sqrt(2)
    assert is_normalized(torch.tensor([s, s], dtype=torch.complex128))
    assert not is_normalized(torch.tensor([1.0, 1.0], dtype=torch.complex128))
    assert not is_normalized(torch.tensor([float("nan"), 0.0], dtype=torch.complex128))


def test_assert_normalized_raises():
    with pytest.raises(ValueError, match="not normalized"):
        assert_normalized(torch.tensor([2.0, 0.0], dtype=torch.complex128))


def test_fidelity_ignores_global_phase():
    circuit = Circuit(1)
    circuit.add_gate("H", 0, 0)
    state = simulate(circuit)
    assert fidelity(state, 1j * state).item() == pytest.approx(1.0)


def test_fidelity_shape_mismatch():
    with pytest.raises(ValueError, match="same shape"):
        fidelity(torch.zeros(2, dtype=torch.complex128), torch.zeros(4, dtype=torch.complex128))


def test_set_debug_enabled():
    set_debug_enabled(True)
    assert is_debug_enabled()
    set_debug_enabled(False)
    assert not is_debug_enabled()


def test_debug_context_restores():
    set_debug_enabled(False)
    with debug_context():
        assert is_debug_enabled()
        with debug_context(False):
            assert not is_debug_enabled()
        assert is_debug_enabled()
    assert not is_debug_enabled()


def test_debug_mode_catches_non_unitary_kernel():
    state = torch.tensor([1.0, 0.0], dtype=torch.complex128)
    doubled = torch.tensor([[2.0, 0.0], [0.0, 2.0]], dtype=torch.complex128)
    assert apply_gate(state, doubled, 0, 1).abs()[0].item() == pytest.approx(2.0)
    with debug_context():
        with pytest.raises(ValueError, match="not normalized"):
            apply_gate(state, doubled, 0, 1)


def test_debug_tolerance_comes_from_config():
    state = torch.tensor([1.0, 0.0], dtype=torch.complex128)
    nearly_unitary = torch.eye(2, dtype=torch.complex128) * (1.0 + 1e-7)
    with debug_context():
        with pytest.raises(ValueError, match="not normalized"):
            apply_gate(state, nearly_unitary, 0, 1)
        with config_context(atol=1e-6):
            assert apply_gate(state, nearly_unitary, 0, 1).abs()[0].item() == pytest.approx(1.0)
