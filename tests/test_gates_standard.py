"""Tests for standard single-qubit gate matrices."""

import math

import pytest
import torch

from qcomposer.gates import standard
from qcomposer.gates.standard import is_unitary, to_tensor


class TestStaticGates:
    """Tests for static single-qubit gates."""

    def test_to_tensor_shape_and_dtype(self):
        """Converted matrices are (2, 2) complex128 by default."""
        gate = to_tensor(standard.H())
        assert gate.shape == (2, 2)
        assert gate.dtype == torch.complex128

    def test_to_tensor_custom_dtype(self):
        gate = to_tensor(standard.X(), dtype=torch.complex64)
        assert gate.dtype == torch.complex64

    def test_i_gate_matrix(self):
        expected = torch.eye(2, dtype=torch.complex128)
        assert torch.allclose(to_tensor(standard.I()), expected)

    def test_x_gate_matrix(self):
        expected = torch.tensor([[0.0, 1.0], [1.0, 0.0]], dtype=torch.complex128)
        assert torch.allclose(to_tensor(standard.X()), expected)

    def test_y_gate_matrix(self):
        expected = torch.tensor([[0.0, -1.0j], [1.0j, 0.0]], dtype=torch.complex128)
        assert torch.allclose(to_tensor(standard.Y()), expected)

    def test_z_gate_matrix(self):
        expected = torch.tensor([[1.0, 0.0], [0.0, -1.0]], dtype=torch.complex128)
        assert torch.allclose(to_tensor(standard.Z()), expected)

    def test_h_gate_matrix(self):
        s = 1.0 / math.sqrt(2.0)
        expected = torch.tensor([[s, s], [s, -s]], dtype=torch.complex128)
        assert torch.allclose(to_tensor(standard.H()), expected)

    def test_s_gate_matrix(self):
        expected = torch.tensor([[1.0, 0.0], [0.0, 1.0j]], dtype=torch.complex128)
        assert torch.allclose(to_tensor(standard.S()), expected)

    def test_t_gate_matrix(self):
        phase = complex(math.cos(math.pi / 4), math.sin(math.pi / 4))
        expected = torch.tensor([[1.0, 0.0], [0.0, phase]], dtype=torch.complex128)
        assert torch.allclose(to_tensor(standard.T()), expected)

    def test_t_squared_is_s(self):
        t = to_tensor(standard.T())
        assert torch.allclose(t @ t, to_tensor(standard.S()))


class TestRotationGates:
    """Tests for parameterized rotation gates."""

    def test_rx_pi_is_minus_i_x(self):
        expected = -1j * to_tensor(standard.X())
        assert torch.allclose(to_tensor(standard.RX(math.pi)), expected, atol=1e-12)

    def test_ry_pi_half(self):
        s = 1.0 / math.sqrt(2.0)
        expected = torch.tensor([[s, -s], [s, s]], dtype=torch.complex128)
        assert torch.allclose(to_tensor(standard.RY(math.pi / 2)), expected)

    def test_rz_phases(self):
        theta = 0.3
        gate = to_tensor(standard.RZ(theta))
        assert torch.allclose(gate[0, 0], torch.tensor(complex(math.cos(theta / 2), -math.sin(theta / 2)), dtype=torch.complex128))
        assert torch.allclose(gate[1, 1], torch.tensor(complex(math.cos(theta / 2), math.sin(theta / 2)), dtype=torch.complex128))
        assert gate[0, 1] == 0 and gate[1, 0] == 0

    def test_zero_angle_is_identity(self):
        identity = torch.eye(2, dtype=torch.complex128)
        for rotation in (standard.RX, standard.RY, standard.RZ):
            assert torch.allclose(to_tensor(rotation(0.0)), identity)


class TestIsUnitary:
    """Tests for the unitarity check."""

    @pytest.mark.parametrize("factory", [standard.I, standard.X, standard.Y, standard.Z, standard.H, standard.S, standard.T])
    def test_static_gates_unitary(self, factory):
        assert is_unitary(factory(), atol=1e-9)

    def test_rotations_unitary_for_random_angles(self, rng):
        for theta in rng.uniform(-4 * math.pi, 4 * math.pi, size=20):
            for rotation in (standard.RX, standard.RY, standard.RZ):
                assert is_unitary(rotation(float(theta)), atol=1e-9)

    def test_non_unitary_detected(self):
        matrix = torch.tensor([[1.0, 1.0], [0.0, 1.0]], dtype=torch.complex128)
        assert not is_unitary(matrix)

    def test_non_square_rejected(self):
        assert not is_unitary(torch.ones(2, 3, dtype=torch.complex128))
