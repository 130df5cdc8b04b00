"""Qiskit-style Python dialect.

Generated scripts build the circuit on a ``QuantumRegister``/``ClassicalRegister``
pair and finish by running it on the Aer simulator and printing the counts.
"""

from __future__ import annotations

import re
from typing import List, Optional

from qcomposer.circuit.core import Circuit
from qcomposer.gates.catalog import Dialect

from .dialect import DialectCodec, LineTemplates, ParseResult
from .utils import python_angle_to_float


class QiskitCodec(DialectCodec):
    dialect = Dialect.QISKIT
    comment_marker = "#"
    templates = LineTemplates(
        plain="{token}(qr[{q0}])",
        rotation="{token}({angle}, qr[{q0}])",
        pair="{token}(qr[{q0}], qr[{q1}])",
        measure="{token}(qr[{q0}], cr[{q0}])",
    )
    declaration = re.compile(r"QuantumRegister\(\s*(\d+)")
    declaration_hint = "declare the register with 'qr = QuantumRegister(<n>, 'q')'."
    boilerplate = (
        re.compile(r"^from\s+[\w.]+\s+import\b"),
        re.compile(r"^import\b"),
        re.compile(r"^cr\s*=\s*ClassicalRegister\("),
        re.compile(r"^circuit\s*=\s*QuantumCircuit\("),
        re.compile(r"^simulator\s*=\s*AerSimulator\("),
        re.compile(r"^result\s*=\s*simulator\.run\("),
        re.compile(r"^print\("),
    )

    def preamble(self, n_qubits: int) -> List[str]:
        return [
            "from qiskit import ClassicalRegister, QuantumCircuit, QuantumRegister, transpile",
            "from qiskit_aer import AerSimulator",
            "",
            "# Create quantum circuit",
            f"qr = QuantumRegister({n_qubits}, 'q')",
            f"cr = ClassicalRegister({n_qubits}, 'c')",
            "circuit = QuantumCircuit(qr, cr)",
            "",
        ]

    def epilogue(self, n_qubits: int) -> List[str]:
        return [
            "",
            "# Simulate and print the measurement counts",
            "simulator = AerSimulator()",
            "result = simulator.run(transpile(circuit, simulator), shots=1024).result()",
            "print(result.get_counts(circuit))",
        ]

    def parse_angle(self, text: str) -> float:
        return python_angle_to_float(text)


_CODEC = QiskitCodec()


def export_circuit_to_qiskit(circuit: Circuit) -> str:
    """Export a circuit as a Qiskit script."""
    return _CODEC.generate(circuit)


def parse_qiskit(
    source: str,
    *,
    strict: bool = False,
    default_qubits: Optional[int] = None,
) -> ParseResult:
    """Parse a Qiskit script, returning the circuit and its diagnostics."""
    return _CODEC.parse(source, strict=strict, default_qubits=default_qubits)


def parse_qiskit_string(
    source: str,
    *,
    strict: bool = False,
    default_qubits: Optional[int] = None,
) -> Circuit:
    """Parse a Qiskit script; see :meth:`DialectCodec.parse`."""
    return parse_qiskit(source, strict=strict, default_qubits=default_qubits).circuit


__all__ = [
    "QiskitCodec",
    "export_circuit_to_qiskit",
    "parse_qiskit",
    "parse_qiskit_string",
]
