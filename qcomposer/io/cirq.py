"""Cirq-style Python dialect.

Qubits are declared one per line as ``qK = cirq.GridQubit(K, 0)``; the
register size is the number of such lines.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from qcomposer.circuit.core import Circuit
from qcomposer.gates.catalog import Dialect, GateShape

from .dialect import DialectCodec, LineTemplates, ParseResult
from .utils import python_angle_to_float

_GRID_QUBIT = re.compile(r"^q(\d+)\s*=\s*cirq\.GridQubit\(\s*(\d+)\s*,\s*0\s*\)$")


class CirqCodec(DialectCodec):
    dialect = Dialect.CIRQ
    comment_marker = "#"
    templates = LineTemplates(
        plain="circuit.append({token}(q{q0}))",
        rotation="circuit.append({token}({angle})(q{q0}))",
        pair="circuit.append({token}(q{q0}, q{q1}))",
        measure="circuit.append({token}(q{q0}, key='m{q0}'))",
    )
    parse_variants = {GateShape.MEASURE: ("circuit.append({token}(q{q0}))",)}
    declaration = _GRID_QUBIT
    declaration_hint = "declare each qubit with 'q<k> = cirq.GridQubit(<k>, 0)'."
    boilerplate = (
        re.compile(r"^import\b"),
        re.compile(r"^from\s+[\w.]+\s+import\b"),
        re.compile(r"^circuit\s*=\s*cirq\.Circuit\(\)$"),
        re.compile(r"^simulator\s*=\s*cirq\.Simulator\(\)$"),
        re.compile(r"^result\s*=\s*simulator\.simulate\("),
        re.compile(r"^print\("),
    )

    def preamble(self, n_qubits: int) -> List[str]:
        lines = ["import cirq", "", "# Create qubits"]
        lines.extend(f"q{i} = cirq.GridQubit({i}, 0)" for i in range(n_qubits))
        lines.extend(["", "# Create circuit", "circuit = cirq.Circuit()", ""])
        return lines

    def epilogue(self, n_qubits: int) -> List[str]:
        return [
            "",
            "# Simulate and print the final state",
            "simulator = cirq.Simulator()",
            "result = simulator.simulate(circuit)",
            "print(result)",
        ]

    def parse_angle(self, text: str) -> float:
        return python_angle_to_float(text)

    def declared_qubits(self, lines: Sequence[str]) -> Optional[int]:
        declared = {int(m.group(1)) for m in map(_GRID_QUBIT.match, lines) if m}
        return len(declared) or None


_CODEC = CirqCodec()


def export_circuit_to_cirq(circuit: Circuit) -> str:
    """Export a circuit as a Cirq script."""
    return _CODEC.generate(circuit)


def parse_cirq(
    source: str,
    *,
    strict: bool = False,
    default_qubits: Optional[int] = None,
) -> ParseResult:
    """Parse a Cirq script, returning the circuit and its diagnostics."""
    return _CODEC.parse(source, strict=strict, default_qubits=default_qubits)


def parse_cirq_string(
    source: str,
    *,
    strict: bool = False,
    default_qubits: Optional[int] = None,
) -> Circuit:
    """Parse a Cirq script; see :meth:`DialectCodec.parse`."""
    return parse_cirq(source, strict=strict, default_qubits=default_qubits).circuit


__all__ = [
    "CirqCodec",
    "export_circuit_to_cirq",
    "parse_cirq",
    "parse_cirq_string",
]
