"""Helpers shared by the dialect generators and parsers.

Angle expressions are read with a small AST evaluator rather than ``eval``,
and written either as pi fractions (``pi/2``, ``3*pi/4``) or as the
round-trippable ``repr`` of the float.
"""

from __future__ import annotations

import ast
import math
import re
from typing import Optional

_ALLOWED_ANGLE_CHARS = re.compile(r"^[0-9\.\s\*\-\+/\(\)eEpiPI]+$")
_PI_NAME = "PI_PLACEHOLDER"
_PYTHON_PI = re.compile(r"\b(?:np|numpy|math)\.pi\b")
_QSHARP_PI = re.compile(r"\bPI\(\s*\)")


def angle_str_to_float(s: str) -> float:
    """
    Parse an angle expression to a float value in radians.

    Supports numeric expressions composed of:
    - Decimal numbers, including scientific notation ("1.5", "2.5e-3")
    - Pi multiples ("pi", "pi/2", "3*pi/4", "-pi")
    - ``+``, ``-``, ``*``, ``/``, parentheses and unary signs

    Parameters
    ----------
    s : str
        Angle expression string.

    Returns
    -------
    float
        Angle value in radians.

    Raises
    ------
    ValueError
        If the expression cannot be parsed or contains disallowed operations.
    """
    s = s.strip()
    if not s:
        raise ValueError("Empty angle expression.")

    if not _ALLOWED_ANGLE_CHARS.match(s):
        raise ValueError(
            f"Angle expression contains disallowed characters: {s!r}. "
            "Only numbers, 'pi', '+', '-', '*', '/', '(', ')' are allowed."
        )

    normalized = re.sub(r"\bpi\b", _PI_NAME, s, flags=re.IGNORECASE)
    try:
        tree = ast.parse(normalized, mode="eval")
    except SyntaxError as e:
        raise ValueError(f"Invalid angle expression syntax: {s!r}. Error: {e}")

    def eval_node(node: ast.AST) -> float:
        if isinstance(node, ast.Constant):
            if isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
                return float(node.value)
            raise ValueError(f"Unsupported constant in angle expression: {s!r}")

        if isinstance(node, ast.Name):
            if node.id == _PI_NAME:
                return math.pi
            raise ValueError(
                f"Unknown identifier '{node.id}' in angle expression: {s!r}. "
                "Only 'pi' is supported."
            )

        if isinstance(node, ast.BinOp):
            left = eval_node(node.left)
            right = eval_node(node.right)
            if isinstance(node.op, ast.Mult):
                return left * right
            if isinstance(node.op, ast.Div):
                if right == 0:
                    raise ValueError(f"Division by zero in angle expression: {s!r}")
                return left / right
            if isinstance(node.op, ast.Add):
                return left + right
            if isinstance(node.op, ast.Sub):
                return left - right
            raise ValueError(
                f"Unsupported operator in angle expression: {s!r}. "
                "Only *, /, +, - are supported."
            )

        if isinstance(node, ast.UnaryOp):
            if isinstance(node.op, ast.USub):
                return -eval_node(node.operand)
            if isinstance(node.op, ast.UAdd):
                return eval_node(node.operand)
            raise ValueError(f"Unsupported unary operator in angle expression: {s!r}")

        raise ValueError(f"Unsupported syntax in angle expression: {s!r}")

    value = eval_node(tree.body)
    if not math.isfinite(value):
        raise ValueError(f"Angle expression is not finite: {s!r}")
    return value


def python_angle_to_float(s: str) -> float:
    """Like :func:`angle_str_to_float`, also accepting ``np.pi``/``math.pi``."""
    return angle_str_to_float(_PYTHON_PI.sub("pi", s))


def qsharp_angle_to_float(s: str) -> float:
    """Like :func:`angle_str_to_float`, also accepting the Q# constant ``PI()``."""
    return angle_str_to_float(_QSHARP_PI.sub("pi", s))


def pi_fraction(angle: float, max_denominator: int = 12, tol: float = 1e-12) -> Optional[str]:
    """
    Write ``angle`` as a fraction of pi, or return None if it is not one.

    Only denominators up to ``max_denominator`` are tried, and a fraction is
    returned only if it evaluates back to exactly ``angle``. Forms produced:
    ``pi``, ``-pi``, ``2*pi``, ``pi/2``, ``-pi/4``, ``3*pi/4``.
    """
    multiple = angle / math.pi
    for q in range(1, max_denominator + 1):
        p_float = multiple * q
        p = round(p_float)
        if p == 0 or abs(p_float - p) >= tol:
            continue

        g = math.gcd(abs(p), q)
        p, q = p // g, q // g
        if p == 1:
            numerator = "pi"
        elif p == -1:
            numerator = "-pi"
        else:
            numerator = f"{p}*pi"
        text = numerator if q == 1 else f"{numerator}/{q}"
        if angle_str_to_float(text) == angle:
            return text
    return None


def float_to_angle_str(angle: float) -> str:
    """
    Convert an angle in radians to a readable expression.

    Small rational multiples of pi become pi fractions; zero becomes ``0``;
    anything else is ``repr(float(angle))``, which parses back exactly.
    """
    angle = float(angle)
    if angle == 0.0:
        return "0"
    fraction = pi_fraction(angle)
    if fraction is not None:
        return fraction
    return repr(angle)


def float_literal(angle: float) -> str:
    """Round-trippable decimal literal for an angle."""
    return repr(float(angle))


def strip_comment(line: str, marker: str) -> str:
    """Remove a trailing ``marker`` comment and surrounding whitespace."""
    index = line.find(marker)
    if index >= 0:
        line = line[:index]
    return line.strip()


__all__ = [
    "angle_str_to_float",
    "python_angle_to_float",
    "qsharp_angle_to_float",
    "pi_fraction",
    "float_to_angle_str",
    "float_literal",
    "strip_comment",
]
