"""Standard single-qubit gate matrices.

Each function returns a 2x2 unitary as a pair of rows of :class:`Complex`
entries. :func:`to_tensor` converts such a matrix into a torch tensor for
the simulator.
"""

from __future__ import annotations

import math
from typing import Tuple

import torch

from qcomposer.core.complex import Complex

Row = Tuple[Complex, Complex]
Matrix2 = Tuple[Row, Row]

_SQRT1_2 = 1.0 / math.sqrt(2.0)


def _m(a: complex, b: complex, c: complex, d: complex) -> Matrix2:
    return (
        (Complex.from_complex(a), Complex.from_complex(b)),
        (Complex.from_complex(c), Complex.from_complex(d)),
    )


def I() -> Matrix2:
    """Identity gate."""
    return _m(1, 0, 0, 1)


def X() -> Matrix2:
    """Pauli-X gate (bit-flip, NOT gate)."""
    return _m(0, 1, 1, 0)


def Y() -> Matrix2:
    """Pauli-Y gate."""
    return _m(0, -1j, 1j, 0)


def Z() -> Matrix2:
    """Pauli-Z gate (phase-flip)."""
    return _m(1, 0, 0, -1)


def H() -> Matrix2:
    """Hadamard gate: 1/sqrt(2) * [[1, 1], [1, -1]]."""
    return _m(_SQRT1_2, _SQRT1_2, _SQRT1_2, -_SQRT1_2)


def S() -> Matrix2:
    """S gate (phase gate, sqrt(Z)): diag(1, i)."""
    return _m(1, 0, 0, 1j)


def T() -> Matrix2:
    """T gate (pi/8 gate): diag(1, exp(i*pi/4))."""
    return _m(1, 0, 0, complex(_SQRT1_2, _SQRT1_2))


def RX(theta: float) -> Matrix2:
    """
    Rotation around the X axis: RX(theta) = exp(-i*theta*X/2).

    Matrix form:
        [[cos(theta/2), -i sin(theta/2)],
         [-i sin(theta/2), cos(theta/2)]]
    """
    c = math.cos(theta / 2.0)
    s = math.sin(theta / 2.0)
    return _m(c, -1j * s, -1j * s, c)


def RY(theta: float) -> Matrix2:
    """
    Rotation around the Y axis: RY(theta) = exp(-i*theta*Y/2).

    Matrix form:
        [[cos(theta/2), -sin(theta/2)],
         [sin(theta/2), cos(theta/2)]]
    """
    c = math.cos(theta / 2.0)
    s = math.sin(theta / 2.0)
    return _m(c, -s, s, c)


def RZ(theta: float) -> Matrix2:
    """
    Rotation around the Z axis: RZ(theta) = exp(-i*theta*Z/2).

    Matrix form:
        [[exp(-i theta/2), 0],
         [0, exp(i theta/2)]]
    """
    half = theta / 2.0
    phase = complex(math.cos(half), math.sin(half))
    return _m(phase.conjugate(), 0, 0, phase)


def to_tensor(
    matrix: Matrix2,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Convert a Complex 2x2 matrix into a (2, 2) complex tensor.

    Args:
        matrix: Rows of Complex entries.
        dtype: Complex dtype. Defaults to torch.complex128.
        device: PyTorch device. Defaults to CPU.
    """
    if dtype is None:
        dtype = torch.complex128
    if device is None:
        device = torch.device("cpu")
    return torch.tensor(
        [[complex(entry) for entry in row] for row in matrix],
        dtype=dtype,
        device=device,
    )


def is_unitary(matrix: Matrix2 | torch.Tensor, atol: float = 1e-9) -> bool:
    """
    Check if a matrix is unitary within a given tolerance.

    A matrix U is unitary if U†U = I, where U† is the conjugate transpose.

    Args:
        matrix: Complex 2x2 matrix or a tensor of shape (..., n, n).
        atol: Absolute tolerance for the check.
    """
    if not isinstance(matrix, torch.Tensor):
        matrix = to_tensor(matrix)
    if matrix.shape[-1] != matrix.shape[-2]:
        return False

    adjoint = matrix.conj().transpose(-1, -2)
    product = torch.matmul(adjoint, matrix)

    n = matrix.shape[-1]
    identity = torch.eye(n, dtype=matrix.dtype, device=matrix.device)
    if product.ndim > 2:
        identity = identity.expand(product.shape)

    return bool(torch.all(torch.abs(product - identity) < atol).item())


__all__ = [
    "Matrix2",
    "I",
    "X",
    "Y",
    "Z",
    "H",
    "S",
    "T",
    "RX",
    "RY",
    "RZ",
    "to_tensor",
    "is_unitary",
]
