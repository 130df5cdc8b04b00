"""Quil-style assembly dialect.

Measurements are read into the classical register ``mem``, declared with
one bit per qubit.
"""

from __future__ import annotations

import re
from typing import List, Optional

from qcomposer.circuit.core import Circuit
from qcomposer.gates.catalog import Dialect, GateShape

from .dialect import DialectCodec, LineTemplates, ParseResult
from .utils import float_to_angle_str


class QuilCodec(DialectCodec):
    dialect = Dialect.QUIL
    comment_marker = "#"
    templates = LineTemplates(
        plain="{token} {q0}",
        rotation="{token}({angle}) {q0}",
        pair="{token} {q0} {q1}",
        measure="{token} {q0} mem[{q0}]",
    )
    parse_variants = {GateShape.MEASURE: ("{token} {q0}",)}
    declaration = re.compile(r"^DECLARE\s+mem\s+BIT\[\s*(\d+)\s*\]$")
    declaration_hint = "declare the classical register with 'DECLARE mem BIT[<n>]'."

    def preamble(self, n_qubits: int) -> List[str]:
        return [
            "# Quantum circuit in Quil",
            f"DECLARE mem BIT[{n_qubits}]",
            "",
        ]

    def format_angle(self, angle: float) -> str:
        return float_to_angle_str(angle)


_CODEC = QuilCodec()


def export_circuit_to_quil(circuit: Circuit) -> str:
    """Export a circuit as a Quil program."""
    return _CODEC.generate(circuit)


def parse_quil(
    source: str,
    *,
    strict: bool = False,
    default_qubits: Optional[int] = None,
) -> ParseResult:
    """Parse a Quil program, returning the circuit and its diagnostics."""
    return _CODEC.parse(source, strict=strict, default_qubits=default_qubits)


def parse_quil_string(
    source: str,
    *,
    strict: bool = False,
    default_qubits: Optional[int] = None,
) -> Circuit:
    """Parse a Quil program; see :meth:`DialectCodec.parse`."""
    return parse_quil(source, strict=strict, default_qubits=default_qubits).circuit


__all__ = [
    "QuilCodec",
    "export_circuit_to_quil",
    "parse_quil",
    "parse_quil_string",
]
