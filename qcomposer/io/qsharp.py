"""Q#-style dialect.

The circuit becomes the body of a ``RunCircuit`` operation that allocates
``Qubit[n]``, applies the gates and resets the qubits before releasing them.
"""

from __future__ import annotations

import re
from typing import List, Optional

from qcomposer.circuit.core import Circuit
from qcomposer.gates.catalog import Dialect

from .dialect import DialectCodec, LineTemplates, ParseResult
from .utils import qsharp_angle_to_float

_BODY_INDENT = " " * 12


class QSharpCodec(DialectCodec):
    dialect = Dialect.QSHARP
    comment_marker = "//"
    templates = LineTemplates(
        plain="{token}(qubits[{q0}]);",
        rotation="{token}({angle}, qubits[{q0}]);",
        pair="{token}(qubits[{q0}], qubits[{q1}]);",
        measure="{token}(qubits[{q0}]);",
    )
    declaration = re.compile(r"Qubit\[\s*(\d+)\s*\]")
    declaration_hint = "allocate the register with 'using (qubits = Qubit[<n>])'."
    boilerplate = (
        re.compile(r"^namespace\b"),
        re.compile(r"^open\b"),
        re.compile(r"^operation\b"),
        re.compile(r"^ResetAll\(\s*qubits\s*\)\s*;$"),
        re.compile(r"^[{}]+$"),
    )
    indent = _BODY_INDENT

    def preamble(self, n_qubits: int) -> List[str]:
        return [
            "namespace QuantumCircuit {",
            "    open Microsoft.Quantum.Canon;",
            "    open Microsoft.Quantum.Intrinsic;",
            "",
            "    operation RunCircuit() : Unit {",
            f"        using (qubits = Qubit[{n_qubits}]) {{",
        ]

    def epilogue(self, n_qubits: int) -> List[str]:
        return [
            f"{_BODY_INDENT}ResetAll(qubits);",
            "        }",
            "    }",
            "}",
        ]

    def parse_angle(self, text: str) -> float:
        return qsharp_angle_to_float(text)


_CODEC = QSharpCodec()


def export_circuit_to_qsharp(circuit: Circuit) -> str:
    """Export a circuit as a Q# operation."""
    return _CODEC.generate(circuit)


def parse_qsharp(
    source: str,
    *,
    strict: bool = False,
    default_qubits: Optional[int] = None,
) -> ParseResult:
    """Parse a Q# operation, returning the circuit and its diagnostics."""
    return _CODEC.parse(source, strict=strict, default_qubits=default_qubits)


def parse_qsharp_string(
    source: str,
    *,
    strict: bool = False,
    default_qubits: Optional[int] = None,
) -> Circuit:
    """Parse a Q# operation; see :meth:`DialectCodec.parse`."""
    return parse_qsharp(source, strict=strict, default_qubits=default_qubits).circuit


__all__ = [
    "QSharpCodec",
    "export_circuit_to_qsharp",
    "parse_qsharp",
    "parse_qsharp_string",
]
