"""Gate catalog: the single table describing every supported gate kind.

For each :class:`GateKind` the catalog records its arity, how its source
line is shaped, its unitary (single-qubit kinds only) and the literal token
used for it in each :class:`Dialect`. Generators and parsers read dialect
tokens from here and nowhere else, which keeps both directions in sync.

Two-qubit kinds act on a fixed adjacent pair: the gate placed on qubit ``q``
controls (or swaps with) qubit ``partner_qubit(q) == q + 1``. Code that needs
the second qubit goes through :func:`partner_qubit` rather than adding one
itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from qcomposer.errors import ValidationError

from . import standard as stdgates
from .standard import Matrix2


class GateKind(str, Enum):
    """Closed set of gate kinds a circuit may contain."""

    H = "H"
    X = "X"
    Y = "Y"
    Z = "Z"
    S = "S"
    T = "T"
    RX = "RX"
    RY = "RY"
    RZ = "RZ"
    CX = "CX"
    CZ = "CZ"
    SWAP = "SWAP"
    MEASURE = "MEASURE"

    def __str__(self) -> str:
        return self.value


class Dialect(str, Enum):
    """Textual formats a circuit can be generated in and parsed from."""

    QASM = "qasm"
    QISKIT = "qiskit"
    CIRQ = "cirq"
    QSHARP = "qsharp"
    QUIL = "quil"

    def __str__(self) -> str:
        return self.value


class GateShape(Enum):
    """How a gate is written as a source line."""

    PLAIN = "plain"  # one qubit, no parameters
    ROTATION = "rotation"  # one qubit, one angle
    PAIR = "pair"  # two adjacent qubits
    MEASURE = "measure"  # one qubit into its classical bit


@dataclass(frozen=True)
class GateSpec:
    """Catalog entry for one gate kind."""

    kind: GateKind
    arity: int
    shape: GateShape
    tokens: Mapping[Dialect, Optional[str]]
    matrix: Optional[Callable[..., Matrix2]] = None
    description: str = field(default="", compare=False)

    @property
    def is_rotation(self) -> bool:
        return self.shape is GateShape.ROTATION

    @property
    def is_two_qubit(self) -> bool:
        return self.arity == 2


def _tokens(qasm: str, qiskit: str, cirq: str, qsharp: str, quil: str) -> Dict[Dialect, Optional[str]]:
    return {
        Dialect.QASM: qasm,
        Dialect.QISKIT: qiskit,
        Dialect.CIRQ: cirq,
        Dialect.QSHARP: qsharp,
        Dialect.QUIL: quil,
    }


CATALOG: Dict[GateKind, GateSpec] = {
    spec.kind: spec
    for spec in (
        GateSpec(GateKind.H, 1, GateShape.PLAIN,
                 _tokens("h", "circuit.h", "cirq.H", "H", "H"),
                 stdgates.H, "Hadamard"),
        GateSpec(GateKind.X, 1, GateShape.PLAIN,
                 _tokens("x", "circuit.x", "cirq.X", "X", "X"),
                 stdgates.X, "Pauli-X"),
        GateSpec(GateKind.Y, 1, GateShape.PLAIN,
                 _tokens("y", "circuit.y", "cirq.Y", "Y", "Y"),
                 stdgates.Y, "Pauli-Y"),
        GateSpec(GateKind.Z, 1, GateShape.PLAIN,
                 _tokens("z", "circuit.z", "cirq.Z", "Z", "Z"),
                 stdgates.Z, "Pauli-Z"),
        GateSpec(GateKind.S, 1, GateShape.PLAIN,
                 _tokens("s", "circuit.s", "cirq.S", "S", "S"),
                 stdgates.S, "Phase"),
        GateSpec(GateKind.T, 1, GateShape.PLAIN,
                 _tokens("t", "circuit.t", "cirq.T", "T", "T"),
                 stdgates.T, "T"),
        GateSpec(GateKind.RX, 1, GateShape.ROTATION,
                 _tokens("rx", "circuit.rx", "cirq.rx", "Rx", "RX"),
                 stdgates.RX, "X-rotation"),
        GateSpec(GateKind.RY, 1, GateShape.ROTATION,
                 _tokens("ry", "circuit.ry", "cirq.ry", "Ry", "RY"),
                 stdgates.RY, "Y-rotation"),
        GateSpec(GateKind.RZ, 1, GateShape.ROTATION,
                 _tokens("rz", "circuit.rz", "cirq.rz", "Rz", "RZ"),
                 stdgates.RZ, "Z-rotation"),
        GateSpec(GateKind.CX, 2, GateShape.PAIR,
                 _tokens("cx", "circuit.cx", "cirq.CNOT", "CNOT", "CNOT"),
                 None, "CNOT"),
        GateSpec(GateKind.CZ, 2, GateShape.PAIR,
                 _tokens("cz", "circuit.cz", "cirq.CZ", "CZ", "CZ"),
                 None, "Controlled-Z"),
        GateSpec(GateKind.SWAP, 2, GateShape.PAIR,
                 _tokens("swap", "circuit.swap", "cirq.SWAP", "SWAP", "SWAP"),
                 None, "Swap"),
        GateSpec(GateKind.MEASURE, 1, GateShape.MEASURE,
                 _tokens("measure", "circuit.measure", "cirq.measure", "M", "MEASURE"),
                 None, "Measurement"),
    )
}

# Alternative spellings accepted when a kind is given by name.
_SYNONYMS: Dict[str, GateKind] = {
    "CNOT": GateKind.CX,
    "NOT": GateKind.X,
    "M": GateKind.MEASURE,
}


def spec_for(kind: GateKind) -> GateSpec:
    """Return the catalog entry for ``kind``."""
    return CATALOG[kind]


def coerce_kind(value: GateKind | str) -> GateKind:
    """
    Normalize a gate kind given as an enum member or a case-insensitive name.

    Raises
    ------
    ValidationError
        If the name does not denote a supported gate kind.
    """
    if isinstance(value, GateKind):
        return value
    name = str(value).strip().upper()
    if name in _SYNONYMS:
        return _SYNONYMS[name]
    try:
        return GateKind(name)
    except ValueError:
        supported = ", ".join(k.value for k in GateKind)
        raise ValidationError(
            f"Unsupported gate kind {value!r}. Supported kinds: {supported}."
        )


def coerce_dialect(value: Dialect | str) -> Dialect:
    """Normalize a dialect given as an enum member or a case-insensitive name."""
    if isinstance(value, Dialect):
        return value
    try:
        return Dialect(str(value).strip().lower())
    except ValueError:
        supported = ", ".join(d.value for d in Dialect)
        raise ValueError(f"Unknown dialect {value!r}. Supported dialects: {supported}.")


def token_for(kind: GateKind, dialect: Dialect) -> Optional[str]:
    """Return the token for ``kind`` in ``dialect``, or None if it has none."""
    return CATALOG[kind].tokens.get(dialect)


def kind_for_token(dialect: Dialect, token: str) -> Optional[GateKind]:
    """Reverse lookup: the gate kind written as ``token`` in ``dialect``."""
    for spec in CATALOG.values():
        if spec.tokens.get(dialect) == token:
            return spec.kind
    return None


def kinds_with_shape(shape: GateShape) -> Tuple[GateKind, ...]:
    """Return the kinds written with the given line shape, in catalog order."""
    return tuple(spec.kind for spec in CATALOG.values() if spec.shape is shape)


def missing_tokens() -> List[Tuple[GateKind, Dialect]]:
    """List every (kind, dialect) pair the catalog has no token for."""
    return [
        (kind, dialect)
        for kind, spec in CATALOG.items()
        for dialect in Dialect
        if not spec.tokens.get(dialect)
    ]


def partner_qubit(qubit: int) -> int:
    """Second qubit of a two-qubit gate placed on ``qubit``."""
    return qubit + 1


def single_qubit_matrix(kind: GateKind, angle: Optional[float] = None) -> Matrix2:
    """
    Return the 2x2 unitary for a single-qubit kind.

    Rotation kinds are evaluated at ``angle``; other kinds ignore it.

    Raises
    ------
    ValueError
        If ``kind`` has no single-qubit matrix (two-qubit kinds, MEASURE) or a
        rotation is requested without an angle.
    """
    spec = CATALOG[kind]
    if spec.matrix is None:
        raise ValueError(f"Gate kind {kind.value} has no single-qubit matrix.")
    if spec.is_rotation:
        if angle is None:
            raise ValueError(f"Gate kind {kind.value} requires an angle.")
        return spec.matrix(float(angle))
    return spec.matrix()


__all__ = [
    "GateKind",
    "Dialect",
    "GateShape",
    "GateSpec",
    "CATALOG",
    "spec_for",
    "coerce_kind",
    "coerce_dialect",
    "token_for",
    "kind_for_token",
    "kinds_with_shape",
    "missing_tokens",
    "partner_qubit",
    "single_qubit_matrix",
]
