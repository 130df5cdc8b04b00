"""Bloch sphere coordinates for one qubit of a state vector.

:func:`bloch_point` is the projection the composer shows next to a circuit:
it sums the amplitudes where the qubit reads 0 and where it reads 1 and
treats the two sums as a single-qubit state. That is exact whenever the qubit
is not entangled with the rest of the register. :func:`reduced_density_matrix`
gives the rigorous partial trace for callers that need it.
"""

from __future__ import annotations

import math
from typing import Tuple

import torch

from qcomposer.backend.statevector import n_qubits_of, qubit_mask, reduced_amplitude
from qcomposer.core.complex import Complex

BlochPoint = Tuple[float, float, float]

_LABEL_TOL = 1e-6

_CARDINAL_STATES = (
    ((0.0, 0.0, 1.0), "|0⟩"),
    ((0.0, 0.0, -1.0), "|1⟩"),
    ((1.0, 0.0, 0.0), "|+⟩"),
    ((-1.0, 0.0, 0.0), "|-⟩"),
    ((0.0, 1.0, 0.0), "|+i⟩"),
    ((0.0, -1.0, 0.0), "|-i⟩"),
)


def bloch_point(state: torch.Tensor, qubit: int = 0) -> BlochPoint:
    """
    Project one qubit of a state vector onto the Bloch sphere.

    With ``alpha`` and ``beta`` the renormalized reduced amplitudes of the
    qubit, the coordinates are::

        x = 2 * Re(alpha * conj(beta))
        y = 2 * Im(conj(alpha) * beta)
        z = |alpha|**2 - |beta|**2

    Parameters
    ----------
    state:
        State vector of shape (2**n_qubits,).
    qubit:
        Qubit to project (0 = most significant bit).

    Returns
    -------
    Tuple[float, float, float]
        Bloch coordinates (x, y, z). ``(0, 0, 0)`` if both reduced amplitudes
        vanish.
    """
    alpha, beta = _reduced_pair(state, qubit)
    norm = math.sqrt(alpha.magnitude_squared() + beta.magnitude_squared())
    if norm == 0.0:
        return (0.0, 0.0, 0.0)

    alpha = alpha.scale(1.0 / norm)
    beta = beta.scale(1.0 / norm)

    x = 2.0 * (alpha * beta.conj()).re
    y = 2.0 * (alpha.conj() * beta).im
    z = alpha.magnitude_squared() - beta.magnitude_squared()
    return (float(x), float(y), float(z))


def bloch_state_label(point: BlochPoint, tol: float = _LABEL_TOL) -> str:
    """
    Name the cardinal state at ``point``, or ``"superposition"``.

    The six cardinal states are |0⟩, |1⟩, |+⟩, |-⟩, |+i⟩ and |-i⟩.
    """
    for target, label in _CARDINAL_STATES:
        if all(abs(p - t) < tol for p, t in zip(point, target)):
            return label
    return "superposition"


def bloch_phase_degrees(amplitude: Complex) -> float:
    """Phase of an amplitude in degrees, in (-180, 180]."""
    if amplitude.magnitude_squared() == 0.0:
        return 0.0
    return math.degrees(math.atan2(amplitude.im, amplitude.re))


def reduced_density_matrix(state: torch.Tensor, qubit: int) -> torch.Tensor:
    """
    Compute the reduced density matrix of one qubit by tracing out the others.

    For a pure state |psi⟩ this is ``rho = Tr_others(|psi⟩⟨psi|)``. Indices
    are paired so that ``rho[a, b]`` sums ``psi[i] * conj(psi[j])`` over all
    index pairs that agree on every other qubit and read ``a`` and ``b`` on
    ``qubit``.

    Parameters
    ----------
    state:
        State vector of shape (2**n_qubits,).
    qubit:
        Qubit to keep (0 = most significant bit).

    Returns
    -------
    torch.Tensor
        Hermitian tensor of shape (2, 2) with unit trace.
    """
    n_qubits = n_qubits_of(state)
    bit = qubit_mask(qubit, n_qubits)

    idx = torch.arange(state.shape[-1], device=state.device)
    i0 = idx[(idx & bit) == 0]
    i1 = i0 | bit
    halves = torch.stack([state[i0], state[i1]])  # (2, 2**(n-1))

    return halves @ halves.conj().transpose(0, 1)


def bloch_point_from_density(rho: torch.Tensor) -> BlochPoint:
    """
    Bloch coordinates from a single-qubit density matrix.

    For ``rho = [[a, b], [conj(b), d]]``: ``x = 2 Re(b)``,
    ``y = -2 Im(b)``, ``z = a - d``.
    """
    if rho.shape != (2, 2):
        raise ValueError(f"rho must have shape (2, 2), got {tuple(rho.shape)}")

    a = complex(rho[0, 0].item()).real
    b = complex(rho[0, 1].item())
    d = complex(rho[1, 1].item()).real
    return (float(2.0 * b.real), float(-2.0 * b.imag), float(a - d))


def _reduced_pair(state: torch.Tensor, qubit: int) -> Tuple[Complex, Complex]:
    return reduced_amplitude(state, qubit, 0), reduced_amplitude(state, qubit, 1)


__all__ = [
    "BlochPoint",
    "bloch_point",
    "bloch_state_label",
    "bloch_phase_degrees",
    "reduced_density_matrix",
    "bloch_point_from_density",
]
