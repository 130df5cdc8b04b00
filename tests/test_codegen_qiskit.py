"""Tests for the Qiskit-style generator and parser."""

from __future__ import annotations

import math

import pytest

from qcomposer.circuit import Circuit
from qcomposer.errors import ParseError
from qcomposer.gates import GateKind
from qcomposer.io import export_circuit_to_qiskit, parse_qiskit_string
from qcomposer.io.qiskit import parse_qiskit

BELL_QISKIT = """from qiskit import ClassicalRegister, QuantumCircuit, QuantumRegister, transpile
from qiskit_aer import AerSimulator

# Create quantum circuit
qr = QuantumRegister(2, 'q')
cr = ClassicalRegister(2, 'c')
circuit = QuantumCircuit(qr, cr)

circuit.h(qr[0])
circuit.cx(qr[0], qr[1])

# Simulate and print the measurement counts
simulator = AerSimulator()
result = simulator.run(transpile(circuit, simulator), shots=1024).result()
print(result.get_counts(circuit))
"""


def bell_circuit() -> Circuit:
    circuit = Circuit(2)
    circuit.add_gate("H", 0, 0)
    circuit.add_gate("CX", 0, 1)
    return circuit


def test_export_bell():
    assert export_circuit_to_qiskit(bell_circuit()) == BELL_QISKIT


def test_rotation_and_measure_lines():
    circuit = Circuit(2)
    circuit.add_gate("RY", 1, 0, 0.5)
    circuit.add_gate("MEASURE", 1, 1)
    lines = export_circuit_to_qiskit(circuit).splitlines()
    assert "circuit.ry(0.5, qr[1])" in lines
    assert "circuit.measure(qr[1], cr[1])" in lines


def test_parse_generated_bell():
    assert parse_qiskit_string(BELL_QISKIT, strict=True) == bell_circuit()


def test_parse_numpy_pi_angles():
    source = (
        "import numpy as np\n"
        "qr = QuantumRegister(1, 'q')\n"
        "circuit.rx(np.pi/2, qr[0])\n"
        "circuit.rz(-math.pi / 4, qr[0])  # quarter turn back\n"
    )
    gates = parse_qiskit_string(source, strict=True).ordered_gates()
    assert [g.kind for g in gates] == [GateKind.RX, GateKind.RZ]
    assert [g.angle for g in gates] == pytest.approx([math.pi / 2, -math.pi / 4])


def test_unknown_call_is_diagnosed():
    source = "qr = QuantumRegister(2, 'q')\ncircuit.barrier(qr)\ncircuit.x(qr[1])\n"
    result = parse_qiskit(source)
    assert [g.kind for g in result.circuit.ordered_gates()] == [GateKind.X]
    assert [d.line_number for d in result.diagnostics] == [2]


def test_missing_register_raises():
    with pytest.raises(ParseError, match="QuantumRegister"):
        parse_qiskit_string("circuit.h(qr[0])\n")
