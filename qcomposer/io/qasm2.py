"""OpenQASM 2.0 generator and parser.

Supported subset:
    - ``OPENQASM 2.0;`` header and ``include "qelib1.inc";`` (skipped)
    - one ``qreg q[n];`` declaration, ``creg`` declarations (skipped)
    - h, x, y, z, s, t, rx, ry, rz, cx, cz, swap and ``measure q[i] -> c[i];``
    - ``//`` line comments and ``/* */`` block comments
    - several statements on one line

Unsupported (reported as diagnostics):
    - custom gate definitions, ``if`` statements, barriers, U gates
    - two-qubit gates on non-adjacent qubits
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from qcomposer.circuit.core import Circuit
from qcomposer.gates.catalog import Dialect

from .dialect import DialectCodec, LineTemplates, ParseResult
from .utils import float_to_angle_str


class QasmCodec(DialectCodec):
    """OpenQASM 2.0 with a ``q`` quantum and a ``c`` classical register."""

    dialect = Dialect.QASM
    comment_marker = "//"
    templates = LineTemplates(
        plain="{token} q[{q0}];",
        rotation="{token}({angle}) q[{q0}];",
        pair="{token} q[{q0}],q[{q1}];",
        measure="{token} q[{q0}] -> c[{q0}];",
    )
    declaration = re.compile(r"^qreg\s+q\s*\[\s*(\d+)\s*\]\s*;?$")
    declaration_hint = "declare the register with 'qreg q[<n>];'."
    boilerplate = (
        re.compile(r"^OPENQASM\b"),
        re.compile(r"^include\b"),
        re.compile(r"^creg\b"),
    )

    def __init__(self, include_qelib: bool = True) -> None:
        super().__init__()
        self.include_qelib = include_qelib

    def preamble(self, n_qubits: int) -> List[str]:
        lines = ["OPENQASM 2.0;"]
        if self.include_qelib:
            lines.append('include "qelib1.inc";')
        lines.append(f"qreg q[{n_qubits}];")
        lines.append(f"creg c[{n_qubits}];")
        lines.append("")
        return lines

    def format_angle(self, angle: float) -> str:
        return float_to_angle_str(angle)

    def source_lines(self, text: str) -> List[Tuple[int, str]]:
        statements: List[Tuple[int, str]] = []
        in_block_comment = False

        for number, line in enumerate(text.splitlines(), start=1):
            if in_block_comment:
                if "*/" not in line:
                    continue
                line = line[line.index("*/") + 2 :]
                in_block_comment = False

            line = re.sub(r"/\*.*?\*/", "", line)
            if "/*" in line:
                line = line[: line.index("/*")]
                in_block_comment = True

            if "//" in line:
                line = line[: line.index("//")]

            for statement in line.split(";"):
                statement = statement.strip()
                if statement:
                    statements.append((number, statement + ";"))

        return statements


_CODEC = QasmCodec()
_CODEC_NO_QELIB = QasmCodec(include_qelib=False)


def export_circuit_to_qasm(circuit: Circuit, include_qelib: bool = True) -> str:
    """
    Export a circuit to OpenQASM 2.0.

    Parameters
    ----------
    circuit : Circuit
        Circuit to export.
    include_qelib : bool
        Whether to include the qelib1.inc header.

    Returns
    -------
    str
        OpenQASM 2.0 source code ending with a newline.
    """
    codec = _CODEC if include_qelib else _CODEC_NO_QELIB
    return codec.generate(circuit)


def parse_qasm(
    qasm: str,
    *,
    strict: bool = False,
    default_qubits: Optional[int] = None,
) -> ParseResult:
    """Parse OpenQASM 2.0 source, returning the circuit and its diagnostics."""
    return _CODEC.parse(qasm, strict=strict, default_qubits=default_qubits)


def parse_qasm_string(
    qasm: str,
    *,
    strict: bool = False,
    default_qubits: Optional[int] = None,
) -> Circuit:
    """
    Parse an OpenQASM 2.0 string into a circuit.

    Parameters
    ----------
    qasm : str
        OpenQASM 2.0 source code.
    strict : bool
        Raise on the first statement that cannot be parsed.
    default_qubits : int, optional
        Qubit count to assume when there is no ``qreg`` declaration.

    Returns
    -------
    Circuit
        Parsed circuit, one column per gate statement.

    Raises
    ------
    ParseError
        If the ``qreg`` declaration is missing, or ``strict`` is set and a
        statement is not supported.
    """
    return parse_qasm(qasm, strict=strict, default_qubits=default_qubits).circuit


def parse_qasm_file(path: str, **kwargs) -> Circuit:
    """
    Parse an OpenQASM 2.0 file into a circuit.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ParseError
        See :func:`parse_qasm_string`.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"QASM file not found: {path}")

    return parse_qasm_string(content, **kwargs)


__all__ = [
    "QasmCodec",
    "export_circuit_to_qasm",
    "parse_qasm",
    "parse_qasm_string",
    "parse_qasm_file",
]
