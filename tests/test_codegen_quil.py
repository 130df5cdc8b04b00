"""Tests for the Quil-style generator and parser."""

from __future__ import annotations

import math

import pytest

from qcomposer.circuit import Circuit
from qcomposer.errors import ParseError
from qcomposer.gates import GateKind
from qcomposer.io import export_circuit_to_quil, parse_quil_string
from qcomposer.io.quil import parse_quil

BELL_QUIL = """# Quantum circuit in Quil
DECLARE mem BIT[2]

H 0
CNOT 0 1
"""


def bell_circuit() -> Circuit:
    circuit = Circuit(2)
    circuit.add_gate("H", 0, 0)
    circuit.add_gate("CX", 0, 1)
    return circuit


def test_export_bell():
    assert export_circuit_to_quil(bell_circuit()) == BELL_QUIL


def test_angles_use_pi_fractions():
    circuit = Circuit(2)
    circuit.add_gate("RX", 0, 0, math.pi / 2)
    circuit.add_gate("RZ", 1, 1, 0.3)
    circuit.add_gate("MEASURE", 1, 2)
    body = export_circuit_to_quil(circuit).splitlines()[3:]
    assert body == ["RX(pi/2) 0", "RZ(0.3) 1", "MEASURE 1 mem[1]"]


def test_parse_generated_bell():
    assert parse_quil_string(BELL_QUIL, strict=True) == bell_circuit()


def test_parse_angles_and_measure():
    source = "DECLARE mem BIT[2]\nRY(-3*pi/4) 1\nMEASURE 0 mem[0]\nCZ 0 1\n"
    gates = parse_quil_string(source, strict=True).ordered_gates()
    assert [(g.kind, g.qubit) for g in gates] == [
        (GateKind.RY, 1),
        (GateKind.MEASURE, 0),
        (GateKind.CZ, 0),
    ]
    assert gates[0].angle == pytest.approx(-3 * math.pi / 4)


def test_measure_into_other_bit_is_diagnosed():
    result = parse_quil("DECLARE mem BIT[2]\nMEASURE 0 mem[1]\n")
    assert len(result.circuit) == 0
    assert result.diagnostics[0].reason == "unrecognized statement"


def test_missing_declaration_raises():
    with pytest.raises(ParseError, match="DECLARE mem"):
        parse_quil_string("H 0\n")


def test_bare_measure_is_accepted():
    result = parse_quil("DECLARE mem BIT[1]\nH 0\nMEASURE 0\n")
    assert result.ok
    assert [(g.kind, g.qubit) for g in result.circuit.ordered_gates()] == [
        (GateKind.H, 0),
        (GateKind.MEASURE, 0),
    ]
