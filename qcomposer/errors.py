"""Exception types raised by qcomposer.

All errors derive from :class:`ValueError` so callers that only guard
against bad input keep working, and from :class:`QComposerError` so the
package's own failures can be told apart from everything else.
"""

from __future__ import annotations

from typing import Optional


class QComposerError(ValueError):
    """Base class for all qcomposer errors."""


class ValidationError(QComposerError):
    """A circuit mutation or import would violate a circuit invariant."""


class UnsupportedScaleError(QComposerError):
    """Exact simulation was requested for more qubits than the limit allows.

    Recoverable by reducing the qubit count.
    """

    def __init__(self, n_qubits: int, limit: int) -> None:
        self.n_qubits = int(n_qubits)
        self.limit = int(limit)
        super().__init__(
            f"Exact simulation is limited to {self.limit} qubits, "
            f"circuit has {self.n_qubits}. Reduce the qubit count to simulate."
        )


class ParseError(QComposerError):
    """Source text in a dialect could not be turned into a circuit."""

    def __init__(
        self,
        dialect: str,
        message: str,
        line_number: Optional[int] = None,
        hint: Optional[str] = None,
    ) -> None:
        self.dialect = dialect
        self.line_number = line_number
        self.hint = hint

        text = f"[{dialect}] {message}"
        if line_number is not None:
            text = f"[{dialect}] line {line_number}: {message}"
        if hint:
            text = f"{text} Hint: {hint}"
        super().__init__(text)


__all__ = [
    "QComposerError",
    "ValidationError",
    "UnsupportedScaleError",
    "ParseError",
]
