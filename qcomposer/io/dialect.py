"""Shared engine behind every dialect generator and parser.

A dialect is described declaratively: a comment marker, a preamble and
epilogue, the register declaration pattern, the boilerplate lines a parser
may skip, and one line template per :class:`~qcomposer.gates.GateShape`.
Templates are ``str.format`` strings over the fields ``token``, ``q0``,
``q1`` and ``angle``. The generator renders them with the catalog token for
each gate kind; the parser compiles the very same templates into anchored
regular expressions, so the two directions cannot drift apart.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Mapping, Optional, Pattern, Sequence, Tuple

from qcomposer.circuit.core import Circuit, Gate
from qcomposer.errors import ParseError, ValidationError
from qcomposer.gates.catalog import CATALOG, Dialect, GateKind, GateShape, partner_qubit, token_for
from qcomposer.logging import get_logger

from .utils import angle_str_to_float, float_literal, strip_comment

logger = get_logger(__name__)

_FLEX_PUNCTUATION = frozenset(",()[];=")


@dataclass(frozen=True)
class LineTemplates:
    """One ``str.format`` template per gate line shape."""

    plain: str
    rotation: str
    pair: str
    measure: str

    def for_shape(self, shape: GateShape) -> str:
        return {
            GateShape.PLAIN: self.plain,
            GateShape.ROTATION: self.rotation,
            GateShape.PAIR: self.pair,
            GateShape.MEASURE: self.measure,
        }[shape]


@dataclass(frozen=True)
class ParseDiagnostic:
    """A source line the parser could not turn into a gate."""

    line_number: int
    text: str
    reason: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.reason} ({self.text!r})"


@dataclass
class ParseResult:
    """Circuit produced by a parse, with every line that was not understood."""

    circuit: Circuit
    diagnostics: List[ParseDiagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def template_to_regex(template: str, token: str) -> Pattern[str]:
    """
    Compile a line template into an anchored regular expression.

    ``{token}`` matches the literal token, ``{q0}``/``{q1}`` capture qubit
    indices (a repeated field must repeat the same index) and ``{angle}``
    captures the angle expression. Whitespace between two words is required,
    any other whitespace, and whitespace around ``, ( ) [ ] ; =``, is
    optional.

    Parameters
    ----------
    template:
        Line template, e.g. ``"{token} q[{q0}],q[{q1}];"``.
    token:
        Catalog token substituted for ``{token}``.

    Returns
    -------
    Pattern[str]
        Pattern with named groups ``q0``, ``q1`` and ``angle`` as present.
    """
    pieces = list(string.Formatter().parse(template))
    parts: List[str] = []
    seen = set()

    for i, (literal, name, _spec, _conversion) in enumerate(pieces):
        word_before = i > 0
        word_after = name is not None
        parts.append(_literal_regex(literal, word_before, word_after))

        if name is None:
            continue
        if name == "token":
            parts.append(re.escape(token))
        elif name in ("q0", "q1"):
            parts.append(f"(?P={name})" if name in seen else rf"(?P<{name}>\d+)")
            seen.add(name)
        elif name == "angle":
            parts.append(r"(?P<angle>.+?)")
        else:
            raise ValueError(f"Unknown template field {name!r} in {template!r}")

    return re.compile("".join(parts))


def _literal_regex(literal: str, word_before: bool, word_after: bool) -> str:
    chunks = re.findall(r"\s+|\S", literal)
    out = []
    for k, chunk in enumerate(chunks):
        if chunk.isspace():
            left = _is_word(chunks[k - 1][-1]) if k > 0 else word_before
            right = _is_word(chunks[k + 1][0]) if k + 1 < len(chunks) else word_after
            out.append(r"\s+" if left and right else r"\s*")
        elif chunk in _FLEX_PUNCTUATION:
            out.append(r"\s*" + re.escape(chunk) + r"\s*")
        else:
            out.append(re.escape(chunk))
    return "".join(out)


def _is_word(char: str) -> bool:
    return char.isalnum() or char == "_"


class DialectCodec:
    """
    Generator and parser for one textual dialect.

    Subclasses fill in the class attributes and, where the dialect needs it,
    override :meth:`preamble`, :meth:`epilogue`, :meth:`format_angle`,
    :meth:`parse_angle` or :meth:`declared_qubits`.
    """

    dialect: ClassVar[Dialect]
    comment_marker: ClassVar[str]
    templates: ClassVar[LineTemplates]
    declaration: ClassVar[Pattern[str]]
    declaration_hint: ClassVar[str]
    boilerplate: ClassVar[Tuple[Pattern[str], ...]] = ()
    # Extra templates accepted by the parser only, per shape.
    parse_variants: ClassVar[Mapping[GateShape, Tuple[str, ...]]] = {}
    indent: ClassVar[str] = ""

    def __init__(self) -> None:
        self._line_patterns: List[Tuple[GateKind, Pattern[str]]] = []
        for kind, spec in CATALOG.items():
            token = token_for(kind, self.dialect)
            if not token:
                continue
            templates = (self.templates.for_shape(spec.shape),)
            templates += tuple(self.parse_variants.get(spec.shape, ()))
            for template in templates:
                self._line_patterns.append((kind, template_to_regex(template, token)))

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def preamble(self, n_qubits: int) -> List[str]:
        raise NotImplementedError

    def epilogue(self, n_qubits: int) -> List[str]:
        return []

    def format_angle(self, angle: float) -> str:
        return float_literal(angle)

    def render_gate(self, gate: Gate) -> Optional[str]:
        """Render one gate line, or None if the dialect has no token for it."""
        token = token_for(gate.kind, self.dialect)
        if not token:
            logger.warning(
                "Skipping %s gate at column %d: no %s token",
                gate.kind.value,
                gate.column,
                self.dialect.value,
            )
            return None

        qubits = gate.qubits
        fields: Dict[str, object] = {"token": token, "q0": qubits[0]}
        if len(qubits) > 1:
            fields["q1"] = qubits[1]
        if gate.angle is not None:
            fields["angle"] = self.format_angle(gate.angle)
        return self.indent + self.templates.for_shape(gate.spec.shape).format(**fields)

    def generate(self, circuit: Circuit) -> str:
        """
        Render ``circuit`` as source text in this dialect.

        Output is deterministic and ends with exactly one newline.
        """
        lines = list(self.preamble(circuit.n_qubits))
        for gate in circuit.ordered_gates():
            line = self.render_gate(gate)
            if line is not None:
                lines.append(line)
        lines.extend(self.epilogue(circuit.n_qubits))
        return "\n".join(lines).rstrip("\n") + "\n"

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse_angle(self, text: str) -> float:
        return angle_str_to_float(text)

    def source_lines(self, text: str) -> List[Tuple[int, str]]:
        """Non-blank statements with comments removed, as ``(line_number, text)``."""
        numbered = [
            (number, strip_comment(raw, self.comment_marker))
            for number, raw in enumerate(text.splitlines(), start=1)
        ]
        return [(number, line) for number, line in numbered if line]

    def declared_qubits(self, lines: Sequence[str]) -> Optional[int]:
        """Qubit count from the register declaration, or None if absent."""
        for line in lines:
            match = self.declaration.search(line)
            if match:
                return int(match.group(1))
        return None

    def is_boilerplate(self, line: str) -> bool:
        if self.declaration.search(line):
            return True
        return any(pattern.search(line) for pattern in self.boilerplate)

    def match_gate(self, line: str) -> Optional[Tuple[GateKind, Dict[str, str]]]:
        """Match a gate line; return the kind and the captured fields, or None."""
        for kind, pattern in self._line_patterns:
            match = pattern.fullmatch(line)
            if match is not None:
                return kind, match.groupdict()
        return None

    def gate_arguments(self, fields: Dict[str, str]) -> Tuple[int, Optional[float]]:
        """
        Turn captured fields into ``(qubit, angle)``.

        Raises
        ------
        ValueError
            If a two-qubit gate does not act on ``q`` and ``partner_qubit(q)``
            or the angle expression is invalid.
        """
        qubit = int(fields["q0"])
        if fields.get("q1") is not None and int(fields["q1"]) != partner_qubit(qubit):
            raise ValueError(
                f"two-qubit gates act on qubits {qubit} and {partner_qubit(qubit)}, "
                f"got {qubit} and {fields['q1']}"
            )
        angle_text = fields.get("angle")
        angle = None if angle_text is None else self.parse_angle(angle_text)
        return qubit, angle

    def parse(
        self,
        text: str,
        *,
        strict: bool = False,
        default_qubits: Optional[int] = None,
    ) -> ParseResult:
        """
        Parse source text into a circuit.

        Gates are placed at sequential columns 0, 1, 2, ... in line order.

        Parameters
        ----------
        text:
            Source text in this dialect.
        strict:
            Raise on the first line that cannot be turned into a gate instead
            of collecting it as a diagnostic.
        default_qubits:
            Qubit count to use when the text has no register declaration.

        Returns
        -------
        ParseResult
            The circuit and the diagnostics for every ignored line.

        Raises
        ------
        ParseError
            If the register declaration is missing (and no default was given),
            declares an invalid qubit count, or ``strict`` is set and a line
            could not be parsed.
        """
        numbered = self.source_lines(text)
        n_qubits = self._qubit_count([line for _, line in numbered], default_qubits)
        try:
            circuit = Circuit(n_qubits)
        except ValidationError as e:
            raise ParseError(self.dialect.value, str(e), hint=self.declaration_hint)
        result = ParseResult(circuit)
        column = 0

        for number, line in numbered:
            if self.is_boilerplate(line):
                continue

            matched = self.match_gate(line)
            if matched is None:
                self._diagnose(result, number, line, "unrecognized statement", strict)
                continue

            kind, fields = matched
            try:
                qubit, angle = self.gate_arguments(fields)
                circuit.add_gate(kind, qubit, column, angle)
            except ValueError as e:
                self._diagnose(result, number, line, str(e), strict)
                continue
            column += 1

        logger.info(
            "Parsed %d gate(s) on %d qubit(s) from %s source (%d line(s) ignored)",
            len(circuit),
            circuit.n_qubits,
            self.dialect.value,
            len(result.diagnostics),
        )
        return result

    def _qubit_count(self, lines: Sequence[str], default_qubits: Optional[int]) -> int:
        declared = self.declared_qubits(lines)
        if declared is None:
            if default_qubits is None:
                raise ParseError(
                    self.dialect.value,
                    "no qubit register declaration found.",
                    hint=self.declaration_hint,
                )
            logger.warning(
                "No register declaration in %s source; using %d qubit(s)",
                self.dialect.value,
                default_qubits,
            )
            declared = default_qubits
        return declared

    def _diagnose(
        self,
        result: ParseResult,
        line_number: int,
        line: str,
        reason: str,
        strict: bool,
    ) -> None:
        if strict:
            raise ParseError(self.dialect.value, f"{reason}: {line!r}", line_number=line_number)
        logger.debug("%s line %d ignored (%s): %r", self.dialect.value, line_number, reason, line)
        result.diagnostics.append(ParseDiagnostic(line_number, line, reason))


__all__ = [
    "LineTemplates",
    "ParseDiagnostic",
    "ParseResult",
    "DialectCodec",
    "template_to_regex",
]
