"""Core circuit IR types."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple

from qcomposer.config import get_config
from qcomposer.errors import ValidationError
from qcomposer.gates.catalog import (
    GateKind,
    GateSpec,
    coerce_kind,
    partner_qubit,
    spec_for,
)
from qcomposer.logging import get_logger

if TYPE_CHECKING:
    import torch

    from qcomposer.core.device import Device

logger = get_logger(__name__)


@dataclass(frozen=True)
class Gate:
    """
    A single gate placed in a circuit.

    Attributes
    ----------
    kind:
        Gate kind from the catalog.
    qubit:
        Qubit the gate is placed on. For two-qubit kinds this is the control
        (CX, CZ) or first swapped qubit; the second qubit is implied.
    column:
        Time step used to order gates and lay out the circuit.
    angle:
        Rotation angle in radians for RX/RY/RZ, None for every other kind.
    """

    kind: GateKind
    qubit: int
    column: int
    angle: Optional[float] = None

    @property
    def spec(self) -> GateSpec:
        return spec_for(self.kind)

    @property
    def is_two_qubit(self) -> bool:
        return self.spec.is_two_qubit

    @property
    def qubits(self) -> Tuple[int, ...]:
        """All qubits the gate acts on."""
        if self.is_two_qubit:
            return (self.qubit, partner_qubit(self.qubit))
        return (self.qubit,)

    @property
    def control(self) -> int:
        return self.qubits[0]

    @property
    def target(self) -> int:
        return self.qubits[-1]


def _as_index(value: object, what: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{what} must be an integer, got {value!r}")
    try:
        index = operator.index(value)
    except TypeError:
        raise ValidationError(f"{what} must be an integer, got {value!r}")
    if index < 0:
        raise ValidationError(f"{what} must be >= 0, got {index}")
    return index


def _check_qubit_count(n_qubits: object) -> int:
    n = _as_index(n_qubits, "n_qubits")
    limit = get_config().max_qubits
    if n < 1 or n > limit:
        raise ValidationError(f"n_qubits must be in [1, {limit}], got {n}")
    return n


class Circuit:
    """
    Circuit IR: a qubit count and the gates placed on it.

    Gates are keyed by ``(column, qubit)``; placing a gate on an occupied key
    replaces the previous gate. Execution and code generation follow
    :meth:`ordered_gates`: column ascending, then insertion order.
    """

    def __init__(self, n_qubits: Optional[int] = None) -> None:
        """Initialize an empty circuit (``config.default_qubits`` if n_qubits is None)."""
        if n_qubits is None:
            n_qubits = get_config().default_qubits
        self._n_qubits = _check_qubit_count(n_qubits)
        self._gates: List[Gate] = []

    @property
    def n_qubits(self) -> int:
        """Return the number of qubits in this circuit."""
        return self._n_qubits

    @property
    def gates(self) -> Tuple[Gate, ...]:
        """Return the gates in insertion order."""
        return tuple(self._gates)

    def add_gate(
        self,
        kind: GateKind | str,
        qubit: int,
        column: int,
        angle: Optional[float] = None,
    ) -> Gate:
        """
        Place a gate, replacing any gate already at ``(column, qubit)``.

        Parameters
        ----------
        kind:
            Gate kind, as a :class:`GateKind` or a name such as ``"h"`` or
            ``"CNOT"``.
        qubit:
            Qubit index (0-based). Two-qubit kinds also act on
            ``qubit + 1``, which must exist.
        column:
            Non-negative time step.
        angle:
            Rotation angle in radians. Only valid for RX/RY/RZ; those kinds
            default to ``config.default_rotation_angle`` when omitted.

        Returns
        -------
        Gate
            The gate that was placed.

        Raises
        ------
        ValidationError
            If the gate would violate a circuit invariant.
        """
        gate = self._validated_gate(kind, qubit, column, angle)

        replaced = self._pop_at(gate.qubit, gate.column)
        if replaced is not None:
            logger.debug("Replacing %s at column %d, qubit %d", replaced.kind, gate.column, gate.qubit)
        self._gates.append(gate)
        return gate

    def remove_gate(self, qubit: int, column: int) -> Optional[Gate]:
        """Remove the gate at ``(column, qubit)``; return it, or None if empty."""
        removed = self._pop_at(qubit, column)
        if removed is not None:
            logger.debug("Removed %s at column %d, qubit %d", removed.kind, column, qubit)
        return removed

    def set_qubit_count(self, n_qubits: int) -> List[Gate]:
        """
        Grow or shrink the register.

        Gates that touch a removed qubit are dropped.

        Returns
        -------
        List[Gate]
            The gates that were dropped.
        """
        n = _check_qubit_count(n_qubits)
        kept: List[Gate] = []
        dropped: List[Gate] = []
        for gate in self._gates:
            (kept if max(gate.qubits) < n else dropped).append(gate)
        self._n_qubits = n
        self._gates = kept
        if dropped:
            logger.info("Dropped %d gate(s) outside a %d-qubit register", len(dropped), n)
        return dropped

    def clear(self) -> None:
        """Remove every gate."""
        self._gates = []

    def ordered_gates(self) -> List[Gate]:
        """Gates in execution order: column ascending, ties by insertion order."""
        return sorted(self._gates, key=lambda g: g.column)

    def copy(self) -> "Circuit":
        """Return an independent copy of this circuit."""
        new = Circuit(self._n_qubits)
        new._gates.extend(self._gates)
        return new

    def __len__(self) -> int:
        return len(self._gates)

    def __iter__(self) -> Iterator[Gate]:
        return iter(self.ordered_gates())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Circuit):
            return NotImplemented
        return self._n_qubits == other._n_qubits and self._gates == other._gates

    def __repr__(self) -> str:
        return f"Circuit(n_qubits={self._n_qubits}, gates={len(self._gates)})"

    def gate_counts(self) -> Dict[str, int]:
        """Return a dictionary mapping gate kind names to their counts."""
        counts: Dict[str, int] = {}
        for gate in self._gates:
            counts[gate.kind.value] = counts.get(gate.kind.value, 0) + 1
        return counts

    def depth(self) -> int:
        """Number of distinct columns that hold at least one gate."""
        return len({gate.column for gate in self._gates})

    def simulate_state(self, device: "Device | str | None" = None) -> "torch.Tensor":
        """Simulate this circuit from |0...0⟩; see :func:`qcomposer.backend.simulate`."""
        from qcomposer.backend.simulator import simulate

        return simulate(self, device=device)

    def to_text_diagram(self) -> str:
        """
        Return a simple ASCII diagram of the circuit.

        Each qubit is a horizontal wire and each occupied column one slot.
        CX draws '●' on the control and '⊕' on the target, CZ draws '●' on
        both qubits and SWAP draws '×' on both.
        """
        columns = sorted({gate.column for gate in self._gates})
        slot_of = {column: i for i, column in enumerate(columns)}
        wire_segments: List[List[str]] = [
            ["─────"] * len(columns) for _ in range(self._n_qubits)
        ]

        for gate in self.ordered_gates():
            slot = slot_of[gate.column]
            if gate.kind is GateKind.CX:
                labels = ("●", "⊕")
            elif gate.kind is GateKind.CZ:
                labels = ("●", "●")
            elif gate.kind is GateKind.SWAP:
                labels = ("×", "×")
            elif gate.kind is GateKind.MEASURE:
                labels = ("M",)
            else:
                labels = (gate.kind.value,)
            for q, label in zip(gate.qubits, labels):
                wire_segments[q][slot] = f"{label:─^5}"

        return "\n".join(
            f"q{q}: " + "".join(wire_segments[q]) for q in range(self._n_qubits)
        )

    def _validated_gate(
        self,
        kind: GateKind | str,
        qubit: int,
        column: int,
        angle: Optional[float],
    ) -> Gate:
        gate_kind = coerce_kind(kind)
        spec = spec_for(gate_kind)
        q = _as_index(qubit, "qubit")
        col = _as_index(column, "column")

        if q >= self._n_qubits:
            raise ValidationError(
                f"Qubit index {q} is out of range for this circuit "
                f"(n_qubits={self._n_qubits})."
            )
        if spec.is_two_qubit and partner_qubit(q) >= self._n_qubits:
            raise ValidationError(
                f"{gate_kind.value} on qubit {q} needs qubit {partner_qubit(q)}, "
                f"but the circuit has only {self._n_qubits} qubits."
            )

        if spec.is_rotation:
            value = get_config().default_rotation_angle if angle is None else angle
            try:
                value = float(value)
            except (TypeError, ValueError):
                raise ValidationError(f"{gate_kind.value} angle must be a number, got {angle!r}")
            if not math.isfinite(value):
                raise ValidationError(f"{gate_kind.value} angle must be finite, got {value}")
            return Gate(gate_kind, q, col, value)

        if angle is not None:
            raise ValidationError(f"{gate_kind.value} gate does not take an angle")
        return Gate(gate_kind, q, col)

    def _pop_at(self, qubit: int, column: int) -> Optional[Gate]:
        for i, gate in enumerate(self._gates):
            if gate.qubit == qubit and gate.column == column:
                return self._gates.pop(i)
        return None


def new_circuit(n_qubits: Optional[int] = None) -> Circuit:
    """Create an empty circuit."""
    return Circuit(n_qubits)


def add_gate(
    circuit: Circuit,
    kind: GateKind | str,
    qubit: int,
    column: int,
    angle: Optional[float] = None,
) -> Circuit:
    """Return a copy of ``circuit`` with the gate placed; raises ValidationError."""
    new = circuit.copy()
    new.add_gate(kind, qubit, column, angle)
    return new


def remove_gate(circuit: Circuit, qubit: int, column: int) -> Circuit:
    """Return a copy of ``circuit`` without the gate at ``(column, qubit)``."""
    new = circuit.copy()
    new.remove_gate(qubit, column)
    return new


def set_qubit_count(circuit: Circuit, n_qubits: int) -> Circuit:
    """Return a copy of ``circuit`` resized to ``n_qubits`` qubits."""
    new = circuit.copy()
    new.set_qubit_count(n_qubits)
    return new


__all__ = [
    "Gate",
    "Circuit",
    "new_circuit",
    "add_gate",
    "remove_gate",
    "set_qubit_count",
]
