"""Exact state-vector simulation of a :class:`~qcomposer.circuit.Circuit`."""

from __future__ import annotations

from typing import Callable, Dict

import torch

from qcomposer.circuit.core import Circuit, Gate
from qcomposer.config import get_config
from qcomposer.core.device import Device, resolve_device
from qcomposer.errors import UnsupportedScaleError
from qcomposer.gates.catalog import GateKind, single_qubit_matrix
from qcomposer.gates.standard import to_tensor
from qcomposer.logging import get_logger

from .statevector import apply_cx, apply_cz, apply_gate, apply_swap, zero_state

logger = get_logger(__name__)

GateRule = Callable[[torch.Tensor, Gate, int], torch.Tensor]


def _single_qubit_rule(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    matrix = to_tensor(
        single_qubit_matrix(gate.kind, gate.angle),
        dtype=state.dtype,
        device=state.device,
    )
    return apply_gate(state, matrix, gate.qubit, n_qubits)


def _cx_rule(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    return apply_cx(state, gate.control, gate.target, n_qubits)


def _cz_rule(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    return apply_cz(state, gate.control, gate.target, n_qubits)


def _swap_rule(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    a, b = gate.qubits
    return apply_swap(state, a, b, n_qubits)


def _measure_rule(state: torch.Tensor, gate: Gate, n_qubits: int) -> torch.Tensor:
    # Collapse is not modelled; probabilities are read out afterwards.
    return state


GATE_RULES: Dict[GateKind, GateRule] = {
    GateKind.H: _single_qubit_rule,
    GateKind.X: _single_qubit_rule,
    GateKind.Y: _single_qubit_rule,
    GateKind.Z: _single_qubit_rule,
    GateKind.S: _single_qubit_rule,
    GateKind.T: _single_qubit_rule,
    GateKind.RX: _single_qubit_rule,
    GateKind.RY: _single_qubit_rule,
    GateKind.RZ: _single_qubit_rule,
    GateKind.CX: _cx_rule,
    GateKind.CZ: _cz_rule,
    GateKind.SWAP: _swap_rule,
    GateKind.MEASURE: _measure_rule,
}


def check_scale(circuit: Circuit) -> None:
    """Raise UnsupportedScaleError if the circuit is too large to simulate."""
    limit = get_config().max_simulated_qubits
    if circuit.n_qubits > limit:
        raise UnsupportedScaleError(circuit.n_qubits, limit)


def simulate(circuit: Circuit, device: Device | str | None = None) -> torch.Tensor:
    """
    Simulate ``circuit`` from |0...0⟩ and return the final state vector.

    Gates are applied in :meth:`Circuit.ordered_gates` order. MEASURE gates
    leave the state untouched.

    Parameters
    ----------
    circuit:
        Circuit to simulate.
    device:
        Device or device name; defaults to the CPU complex128 device.

    Returns
    -------
    torch.Tensor
        Complex tensor of shape (2**n_qubits,).

    Raises
    ------
    UnsupportedScaleError
        If ``circuit.n_qubits`` exceeds ``config.max_simulated_qubits``.
    """
    check_scale(circuit)
    n_qubits = circuit.n_qubits
    state = zero_state(n_qubits, device=resolve_device(device))

    for gate in circuit.ordered_gates():
        rule = GATE_RULES.get(gate.kind)
        if rule is None:
            raise ValueError(f"No simulation rule for gate kind {gate.kind.value}")
        logger.debug("column %d: %s on %s", gate.column, gate.kind.value, gate.qubits)
        state = rule(state, gate, n_qubits)

    return state


__all__ = ["GATE_RULES", "check_scale", "simulate"]
