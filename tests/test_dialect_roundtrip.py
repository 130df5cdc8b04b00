"""Cross-dialect properties of the generators and parsers."""

from __future__ import annotations

import dataclasses

import pytest

from qcomposer.circuit import Circuit
from qcomposer.gates import CATALOG, Dialect, GateKind
from qcomposer.io import CODECS, generate, get_codec, parse, parse_with_diagnostics
from qcomposer.io.dialect import template_to_regex

DIALECTS = [d.value for d in Dialect]


def _signature(circuit: Circuit):
    return [(g.kind, g.qubit) for g in circuit.ordered_gates()]


def _angles(circuit: Circuit):
    return [g.angle for g in circuit.ordered_gates() if g.angle is not None]


@pytest.mark.parametrize("dialect", DIALECTS)
class TestRoundTrip:
    def test_random_circuits(self, dialect, random_circuit):
        for n_qubits in (1, 2, 4):
            original = random_circuit(n_qubits=n_qubits, n_gates=12)
            result = parse_with_diagnostics(dialect, generate(dialect, original))
            assert result.ok, [str(d) for d in result.diagnostics]
            assert result.circuit.n_qubits == n_qubits
            assert _signature(result.circuit) == _signature(original)
            assert _angles(result.circuit) == pytest.approx(_angles(original), abs=1e-12)

    def test_columns_are_compacted(self, dialect):
        original = Circuit(2)
        original.add_gate("X", 1, 7)
        original.add_gate("H", 0, 2)
        parsed = parse(dialect, generate(dialect, original), strict=True)
        assert [(g.kind, g.column) for g in parsed.ordered_gates()] == [
            (GateKind.H, 0),
            (GateKind.X, 1),
        ]

    def test_generation_is_deterministic(self, dialect, random_circuit):
        circuit = random_circuit(n_qubits=3, n_gates=10)
        assert generate(dialect, circuit) == generate(dialect, circuit.copy())

    def test_output_ends_with_one_newline(self, dialect, random_circuit):
        text = generate(dialect, random_circuit())
        assert text.endswith("\n") and not text.endswith("\n\n")

    def test_empty_circuit_parses_back(self, dialect):
        parsed = parse(dialect, generate(dialect, Circuit(3)), strict=True)
        assert parsed.n_qubits == 3
        assert len(parsed) == 0

    def test_missing_token_is_skipped(self, dialect, monkeypatch, log_stream):
        spec = CATALOG[GateKind.T]
        tokens = dict(spec.tokens)
        tokens[Dialect(dialect)] = None
        monkeypatch.setitem(CATALOG, GateKind.T, dataclasses.replace(spec, tokens=tokens))

        circuit = Circuit(1)
        circuit.add_gate("H", 0, 0)
        circuit.add_gate("T", 0, 1)
        circuit.add_gate("X", 0, 2)
        text = generate(dialect, circuit)

        assert _signature(parse(dialect, text)) == [(GateKind.H, 0), (GateKind.X, 0)]
        assert "Skipping T gate at column 1" in log_stream.getvalue()


def test_registry_covers_every_dialect():
    assert set(CODECS) == set(Dialect)


def test_dialect_names_are_case_insensitive():
    assert get_codec("QASM") is get_codec(Dialect.QASM)
    assert get_codec(" Quil ") is CODECS[Dialect.QUIL]


def test_unknown_dialect():
    with pytest.raises(ValueError, match="Unknown dialect"):
        generate("braket", Circuit(1))
    with pytest.raises(ValueError, match="Unknown dialect"):
        parse("braket", "")


class TestTemplateRegex:
    def test_flexible_whitespace(self):
        pattern = template_to_regex("{token} q[{q0}],q[{q1}];", "cx")
        match = pattern.fullmatch("cx  q[ 0 ] ,  q[1] ;")
        assert match is not None
        assert match.group("q0") == "0" and match.group("q1") == "1"

    def test_word_separation_is_required(self):
        pattern = template_to_regex("{token} {q0}", "H")
        assert pattern.fullmatch("H 0") is not None
        assert pattern.fullmatch("H0") is None

    def test_repeated_field_must_repeat_value(self):
        pattern = template_to_regex("{token} q[{q0}] -> c[{q0}];", "measure")
        assert pattern.fullmatch("measure q[1] -> c[1];") is not None
        assert pattern.fullmatch("measure q[1] -> c[0];") is None

    def test_angle_capture(self):
        pattern = template_to_regex("{token}({angle}) q[{q0}];", "rx")
        assert pattern.fullmatch("rx( 3*pi/4 ) q[2];").group("angle") == "3*pi/4"

    def test_unknown_field(self):
        with pytest.raises(ValueError, match="Unknown template field"):
            template_to_regex("{token} {target}", "h")
