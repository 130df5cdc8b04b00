"""Gate matrices and the gate catalog."""

from .catalog import (
    CATALOG,
    Dialect,
    GateKind,
    GateShape,
    GateSpec,
    coerce_dialect,
    coerce_kind,
    kind_for_token,
    missing_tokens,
    partner_qubit,
    single_qubit_matrix,
    spec_for,
    token_for,
)
from .standard import is_unitary, to_tensor

__all__ = [
    "CATALOG",
    "Dialect",
    "GateKind",
    "GateShape",
    "GateSpec",
    "coerce_dialect",
    "coerce_kind",
    "kind_for_token",
    "missing_tokens",
    "partner_qubit",
    "single_qubit_matrix",
    "spec_for",
    "token_for",
    "is_unitary",
    "to_tensor",
]
