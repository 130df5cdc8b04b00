"""Tests for angle parsing and formatting helpers."""

from __future__ import annotations

import math

import pytest

from qcomposer.io.utils import (
    angle_str_to_float,
    float_literal,
    float_to_angle_str,
    pi_fraction,
    python_angle_to_float,
    qsharp_angle_to_float,
    strip_comment,
)


class TestAngleParsing:
    """Tests for angle expression parsing."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("pi/2", math.pi / 2),
            ("3*pi/4", 3 * math.pi / 4),
            ("-pi", -math.pi),
            ("PI/4", math.pi / 4),
            ("(3/4*pi)", 0.75 * math.pi),
            ("0.785", 0.785),
            ("1.5e-3", 1.5e-3),
            ("2E+1", 20.0),
            ("+0.5", 0.5),
            ("pi + 1", math.pi + 1),
            ("  2 * ( pi - 1 ) ", 2 * (math.pi - 1)),
            ("0", 0.0),
        ],
    )
    def test_valid_expressions(self, text, expected):
        assert angle_str_to_float(text) == pytest.approx(expected)

    def test_repr_roundtrip_is_exact(self):
        for value in (0.1, 1.5707963267948966, -2.718281828459045, 1e-7):
            assert angle_str_to_float(repr(value)) == value

    @pytest.mark.parametrize(
        "text, message",
        [
            ("", "Empty"),
            ("theta", "disallowed characters"),
            ("__import__('os')", "disallowed characters"),
            ("e", "Unknown identifier"),
            ("pi/0", "Division by zero"),
            ("pi**2", "Unsupported operator"),
            ("1.2.3", "Invalid angle expression syntax"),
            ("1e999", "not finite"),
        ],
    )
    def test_invalid_expressions(self, text, message):
        with pytest.raises(ValueError, match=message):
            angle_str_to_float(text)

    def test_python_pi_spellings(self):
        assert python_angle_to_float("np.pi/2") == pytest.approx(math.pi / 2)
        assert python_angle_to_float("math.pi") == pytest.approx(math.pi)
        assert python_angle_to_float("-numpy.pi / 4") == pytest.approx(-math.pi / 4)

    def test_qsharp_pi_function(self):
        assert qsharp_angle_to_float("PI() / 2.0") == pytest.approx(math.pi / 2)
        assert qsharp_angle_to_float("2.0 * PI()") == pytest.approx(2 * math.pi)
        assert qsharp_angle_to_float("-PI( )") == pytest.approx(-math.pi)
        with pytest.raises(ValueError):
            qsharp_angle_to_float("PI(2)")


class TestAngleFormatting:
    """Tests for angle output."""

    @pytest.mark.parametrize(
        "angle, text",
        [
            (math.pi, "pi"),
            (-math.pi, "-pi"),
            (2 * math.pi, "2*pi"),
            (math.pi / 2, "pi/2"),
            (-math.pi / 4, "-pi/4"),
            (3 * math.pi / 4, "3*pi/4"),
            (2 * math.pi / 3, "2*pi/3"),
            (0.0, "0"),
        ],
    )
    def test_pi_fractions(self, angle, text):
        assert float_to_angle_str(angle) == text

    def test_non_fraction_uses_repr(self):
        assert float_to_angle_str(0.1234) == "0.1234"
        assert float_to_angle_str(1e-13) == "1e-13"

    def test_pi_fraction_none(self):
        assert pi_fraction(1.0) is None

    def test_near_fraction_keeps_exact_value(self):
        angle = math.pi / 4 + 5e-13
        assert pi_fraction(angle) is None
        assert float_to_angle_str(angle) == repr(angle)
        assert angle_str_to_float(float_to_angle_str(angle)) == angle

    def test_fractions_parse_back_exactly(self):
        for q in range(1, 13):
            for k in range(-5, 6):
                text = pi_fraction(k * math.pi / q)
                if text is not None:
                    assert angle_str_to_float(text) == k * math.pi / q

    def test_formatted_angles_parse_back(self, rng):
        values = [k * math.pi / q for q in range(1, 13) for k in range(-5, 6)]
        values += [float(v) for v in rng.uniform(-10, 10, size=20)]
        for value in values:
            assert angle_str_to_float(float_to_angle_str(value)) == pytest.approx(value, abs=1e-12)

    def test_float_literal(self):
        assert float_literal(1) == "1.0"
        assert float_literal(math.pi / 2) == "1.5707963267948966"


class TestStripComment:
    def test_trailing_comment(self):
        assert strip_comment("h q[0]; // hadamard", "//") == "h q[0];"

    def test_full_line_comment(self):
        assert strip_comment("   # setup", "#") == ""

    def test_no_comment(self):
        assert strip_comment("  H 0  ", "#") == "H 0"
