"""State-vector kernels for pure quantum states.

Convention: in a register of ``n`` qubits, qubit ``q`` is bit ``n - 1 - q`` of
the basis index, so qubit 0 is the most significant bit and the binary label
of an index reads ``q0 q1 ... q(n-1)``.

Every kernel returns a freshly allocated tensor; the input state is never
modified, so paired amplitude updates always read pre-gate values.
"""

from __future__ import annotations

import math
from typing import Dict, List, Tuple

import torch

from qcomposer.config import get_config
from qcomposer.core.complex import Complex
from qcomposer.core.device import Device, resolve_device
from qcomposer.diagnostics import assert_normalized, is_debug_enabled


def zero_state(
    n_qubits: int,
    device: Device | str | None = None,
) -> torch.Tensor:
    """
    Create the zero state |0...0⟩ for n_qubits.

    Args:
        n_qubits: Number of qubits. Must be >= 1.
        device: Device, device name, or None for the CPU device.

    Returns:
        A complex tensor of shape (2**n_qubits,) with amplitude 1 at index 0.

    Raises:
        ValueError: If n_qubits < 1.
    """
    if n_qubits < 1:
        raise ValueError(f"n_qubits must be >= 1, got {n_qubits}")

    qdevice = resolve_device(device)
    state = torch.zeros(
        1 << n_qubits,
        dtype=qdevice.complex_dtype,
        device=qdevice.as_torch_device(),
    )
    state[0] = 1.0 + 0.0j
    return state


def n_qubits_of(state: torch.Tensor, n_qubits: int | None = None) -> int:
    """
    Return the qubit count of a 1-D state, checking it against ``n_qubits``.

    Raises:
        ValueError: If the state is not a 1-D complex tensor whose length is
            a power of 2 (equal to 2**n_qubits when given).
    """
    if not torch.is_complex(state):
        raise ValueError(f"state must be complex dtype, got {state.dtype}")
    if state.dim() != 1:
        raise ValueError(f"state must be 1-D, got shape {tuple(state.shape)}")

    dim = state.shape[-1]
    if n_qubits is None:
        n_qubits = int(math.log2(dim)) if dim > 0 else 0
        if n_qubits < 1 or 2**n_qubits != dim:
            raise ValueError(
                f"state dimension {dim} is not a power of 2. "
                "Please specify n_qubits explicitly."
            )
    elif 2**n_qubits != dim:
        raise ValueError(
            f"state dimension {dim} does not match 2**n_qubits = {2**n_qubits}"
        )
    return n_qubits


def qubit_mask(qubit: int, n_qubits: int) -> int:
    """Bit mask selecting ``qubit`` in a basis index."""
    if qubit < 0 or qubit >= n_qubits:
        raise ValueError(f"qubit index {qubit} out of range [0, {n_qubits})")
    return 1 << (n_qubits - 1 - qubit)


def _basis_indices(state: torch.Tensor) -> torch.Tensor:
    return torch.arange(state.shape[-1], device=state.device)


def _checked(new_state: torch.Tensor) -> torch.Tensor:
    if is_debug_enabled():
        assert_normalized(new_state, atol=get_config().atol)
    return new_state


def apply_gate(
    state: torch.Tensor,
    gate: torch.Tensor,
    qubit: int,
    n_qubits: int | None = None,
) -> torch.Tensor:
    """
    Apply a single-qubit gate to one qubit of the state vector.

    For every basis index with the target bit clear, the amplitude pair
    (index, index | bit) is replaced by ``gate @ (a0, a1)``.

    Args:
        state: State vector of shape (2**n_qubits,).
        gate: Single-qubit gate matrix of shape (2, 2).
        qubit: Target qubit (0 = most significant bit).
        n_qubits: Number of qubits. If None, inferred from the state.

    Returns:
        A new state vector with the gate applied.
    """
    if gate.shape != (2, 2):
        raise ValueError(f"gate must have shape (2, 2), got {tuple(gate.shape)}")
    n_qubits = n_qubits_of(state, n_qubits)
    bit = qubit_mask(qubit, n_qubits)
    gate = gate.to(dtype=state.dtype, device=state.device)

    idx = _basis_indices(state)
    i0 = idx[(idx & bit) == 0]
    i1 = i0 | bit
    a0 = state[i0]
    a1 = state[i1]

    new_state = torch.empty_like(state)
    new_state[i0] = gate[0, 0] * a0 + gate[0, 1] * a1
    new_state[i1] = gate[1, 0] * a0 + gate[1, 1] * a1
    return _checked(new_state)


def apply_cx(
    state: torch.Tensor,
    control: int,
    target: int,
    n_qubits: int | None = None,
) -> torch.Tensor:
    """Flip ``target`` on every basis state where ``control`` is 1."""
    n_qubits = n_qubits_of(state, n_qubits)
    cbit = qubit_mask(control, n_qubits)
    tbit = qubit_mask(target, n_qubits)
    if cbit == tbit:
        raise ValueError(f"control and target must differ, got {control}")

    idx = _basis_indices(state)
    source = torch.where((idx & cbit) != 0, idx ^ tbit, idx)
    return _checked(state[source])


def apply_cz(
    state: torch.Tensor,
    control: int,
    target: int,
    n_qubits: int | None = None,
) -> torch.Tensor:
    """Negate every amplitude whose ``control`` and ``target`` bits are both 1."""
    n_qubits = n_qubits_of(state, n_qubits)
    cbit = qubit_mask(control, n_qubits)
    tbit = qubit_mask(target, n_qubits)
    if cbit == tbit:
        raise ValueError(f"control and target must differ, got {control}")

    idx = _basis_indices(state)
    both = ((idx & cbit) != 0) & ((idx & tbit) != 0)
    return _checked(torch.where(both, -state, state))


def apply_swap(
    state: torch.Tensor,
    qubit_a: int,
    qubit_b: int,
    n_qubits: int | None = None,
) -> torch.Tensor:
    """Exchange amplitudes of basis states that differ by swapping two qubits."""
    n_qubits = n_qubits_of(state, n_qubits)
    abit = qubit_mask(qubit_a, n_qubits)
    bbit = qubit_mask(qubit_b, n_qubits)
    if abit == bbit:
        raise ValueError(f"swapped qubits must differ, got {qubit_a}")

    idx = _basis_indices(state)
    differ = ((idx & abit) != 0) != ((idx & bbit) != 0)
    source = torch.where(differ, idx ^ (abit | bbit), idx)
    return _checked(state[source])


def measure_probs(state: torch.Tensor) -> torch.Tensor:
    """
    Probability of each computational basis state, ``|state[i]|**2``.

    Returns:
        A real tensor with the same shape as ``state``.
    """
    n_qubits_of(state)
    return (torch.abs(state) ** 2).contiguous()


def probability_distribution(state: torch.Tensor) -> Dict[str, float]:
    """
    Map each basis-state label to its probability.

    Labels are the ``n``-bit binary form of the basis index, e.g. ``"01"``.
    Every basis state appears, including those with probability 0.
    """
    n_qubits = n_qubits_of(state)
    probs = measure_probs(state).detach().cpu().tolist()
    return {format(i, f"0{n_qubits}b"): float(p) for i, p in enumerate(probs)}


def reduced_amplitude(
    state: torch.Tensor,
    qubit: int,
    bit_value: int,
) -> Complex:
    """
    Sum of all amplitudes whose ``qubit`` bit equals ``bit_value``.

    This is the projection used for the Bloch-sphere view, not a partial
    trace; see :func:`qcomposer.viz.bloch.bloch_point`.
    """
    if bit_value not in (0, 1):
        raise ValueError(f"bit_value must be 0 or 1, got {bit_value!r}")
    n_qubits = n_qubits_of(state)
    bit = qubit_mask(qubit, n_qubits)

    idx = _basis_indices(state)
    selected = ((idx & bit) != 0) == bool(bit_value)
    total = complex(state[selected].sum().item())
    return Complex(total.real, total.imag)


def marginal_probabilities(state: torch.Tensor, qubit: int) -> Tuple[float, float]:
    """Return ``(P(qubit = 0), P(qubit = 1))``."""
    n_qubits = n_qubits_of(state)
    bit = qubit_mask(qubit, n_qubits)

    idx = _basis_indices(state)
    probs = measure_probs(state)
    p1 = float(probs[(idx & bit) != 0].sum().item())
    p0 = float(probs[(idx & bit) == 0].sum().item())
    return p0, p1


def amplitudes(state: torch.Tensor) -> List[Complex]:
    """Convert a state tensor into a list of :class:`Complex` amplitudes."""
    n_qubits_of(state)
    return [
        Complex(float(a.real), float(a.imag))
        for a in (complex(v) for v in state.detach().cpu().tolist())
    ]


__all__ = [
    "zero_state",
    "n_qubits_of",
    "qubit_mask",
    "apply_gate",
    "apply_cx",
    "apply_cz",
    "apply_swap",
    "measure_probs",
    "probability_distribution",
    "reduced_amplitude",
    "marginal_probabilities",
    "amplitudes",
]
