"""Dialect-keyed entry points: ``generate(dialect, circuit)`` and ``parse(dialect, text)``."""

from __future__ import annotations

from typing import Dict, Optional

from qcomposer.circuit.core import Circuit
from qcomposer.gates.catalog import Dialect, coerce_dialect

from .cirq import CirqCodec
from .dialect import DialectCodec, ParseResult
from .qasm2 import QasmCodec
from .qiskit import QiskitCodec
from .qsharp import QSharpCodec
from .quil import QuilCodec

CODECS: Dict[Dialect, DialectCodec] = {
    Dialect.QASM: QasmCodec(),
    Dialect.QISKIT: QiskitCodec(),
    Dialect.CIRQ: CirqCodec(),
    Dialect.QSHARP: QSharpCodec(),
    Dialect.QUIL: QuilCodec(),
}


def get_codec(dialect: Dialect | str) -> DialectCodec:
    """
    Return the codec for ``dialect``.

    Raises
    ------
    ValueError
        If the dialect name is unknown.
    """
    return CODECS[coerce_dialect(dialect)]


def generate(dialect: Dialect | str, circuit: Circuit) -> str:
    """Render ``circuit`` as source text in ``dialect``."""
    return get_codec(dialect).generate(circuit)


def parse_with_diagnostics(
    dialect: Dialect | str,
    text: str,
    *,
    strict: bool = False,
    default_qubits: Optional[int] = None,
) -> ParseResult:
    """Parse ``text`` and also return the lines that were not understood."""
    return get_codec(dialect).parse(text, strict=strict, default_qubits=default_qubits)


def parse(
    dialect: Dialect | str,
    text: str,
    *,
    strict: bool = False,
    default_qubits: Optional[int] = None,
) -> Circuit:
    """
    Parse source text in ``dialect`` into a circuit.

    Parameters
    ----------
    dialect:
        Dialect name or :class:`Dialect` member (case-insensitive).
    text:
        Source text.
    strict:
        Raise :class:`~qcomposer.errors.ParseError` on the first line that
        is not understood instead of skipping it.
    default_qubits:
        Qubit count to assume if the text has no register declaration.

    Returns
    -------
    Circuit
        Parsed circuit with gates at sequential columns.
    """
    return parse_with_diagnostics(
        dialect, text, strict=strict, default_qubits=default_qubits
    ).circuit


__all__ = ["CODECS", "get_codec", "generate", "parse", "parse_with_diagnostics"]
