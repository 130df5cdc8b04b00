"""Tests for the gate catalog."""

import pytest

from qcomposer.backend.simulator import GATE_RULES
from qcomposer.errors import ValidationError
from qcomposer.gates import (
    CATALOG,
    Dialect,
    GateKind,
    GateShape,
    coerce_dialect,
    coerce_kind,
    is_unitary,
    kind_for_token,
    missing_tokens,
    partner_qubit,
    single_qubit_matrix,
    spec_for,
    token_for,
)
from qcomposer.gates.catalog import kinds_with_shape


class TestCatalogCompleteness:
    """The catalog must cover every kind in every dialect."""

    def test_every_kind_has_an_entry(self):
        assert set(CATALOG) == set(GateKind)

    def test_every_kind_has_a_token_in_every_dialect(self):
        assert missing_tokens() == []

    def test_tokens_are_unique_per_dialect(self):
        for dialect in Dialect:
            tokens = [token_for(kind, dialect) for kind in GateKind]
            assert len(tokens) == len(set(tokens)), dialect

    def test_every_kind_has_a_simulation_rule(self):
        assert set(GATE_RULES) == set(GateKind)


class TestGateSpecs:
    """Tests for arity, shape and matrices."""

    def test_two_qubit_kinds(self):
        two_qubit = {kind for kind in GateKind if spec_for(kind).is_two_qubit}
        assert two_qubit == {GateKind.CX, GateKind.CZ, GateKind.SWAP}

    def test_rotation_kinds(self):
        assert kinds_with_shape(GateShape.ROTATION) == (GateKind.RX, GateKind.RY, GateKind.RZ)

    def test_single_qubit_matrices_unitary(self):
        for kind in GateKind:
            spec = spec_for(kind)
            if spec.matrix is None:
                continue
            angle = 1.234 if spec.is_rotation else None
            assert is_unitary(single_qubit_matrix(kind, angle), atol=1e-9), kind

    def test_measure_and_two_qubit_have_no_matrix(self):
        for kind in (GateKind.MEASURE, GateKind.CX, GateKind.CZ, GateKind.SWAP):
            with pytest.raises(ValueError):
                single_qubit_matrix(kind)

    def test_rotation_requires_angle(self):
        with pytest.raises(ValueError, match="requires an angle"):
            single_qubit_matrix(GateKind.RX)

    def test_partner_qubit_is_next_qubit(self):
        assert partner_qubit(0) == 1
        assert partner_qubit(4) == 5


class TestLookups:
    """Tests for token and name lookups."""

    def test_known_tokens(self):
        assert token_for(GateKind.CX, Dialect.QASM) == "cx"
        assert token_for(GateKind.CX, Dialect.CIRQ) == "cirq.CNOT"
        assert token_for(GateKind.RX, Dialect.QSHARP) == "Rx"
        assert token_for(GateKind.MEASURE, Dialect.QUIL) == "MEASURE"
        assert token_for(GateKind.H, Dialect.QISKIT) == "circuit.h"

    def test_kind_for_token(self):
        assert kind_for_token(Dialect.QUIL, "CNOT") is GateKind.CX
        assert kind_for_token(Dialect.QSHARP, "M") is GateKind.MEASURE
        assert kind_for_token(Dialect.QASM, "u3") is None

    @pytest.mark.parametrize(
        "name, kind",
        [("h", GateKind.H), ("Rx", GateKind.RX), ("cnot", GateKind.CX), ("M", GateKind.MEASURE), (" swap ", GateKind.SWAP)],
    )
    def test_coerce_kind(self, name, kind):
        assert coerce_kind(name) is kind

    def test_coerce_kind_unknown(self):
        with pytest.raises(ValidationError, match="Unsupported gate kind"):
            coerce_kind("toffoli")

    def test_coerce_dialect(self):
        assert coerce_dialect("QASM") is Dialect.QASM
        assert coerce_dialect(Dialect.QUIL) is Dialect.QUIL

    def test_coerce_dialect_unknown(self):
        with pytest.raises(ValueError, match="Unknown dialect"):
            coerce_dialect("braket")
