"""Immutable complex-number value type."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Complex:
    """
    A complex number ``re + i*im`` with value semantics.

    Every operation returns a new instance. Operators ``+``, ``-`` and ``*``
    accept other :class:`Complex` values as well as plain Python numbers.
    """

    re: float = 0.0
    im: float = 0.0

    @classmethod
    def from_complex(cls, value: complex | float | int) -> "Complex":
        """Build a Complex from a Python number."""
        c = complex(value)
        return cls(float(c.real), float(c.imag))

    def add(self, other: "Complex") -> "Complex":
        return Complex(self.re + other.re, self.im + other.im)

    def sub(self, other: "Complex") -> "Complex":
        return Complex(self.re - other.re, self.im - other.im)

    def mul(self, other: "Complex") -> "Complex":
        return Complex(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    def conj(self) -> "Complex":
        return Complex(self.re, -self.im)

    def magnitude_squared(self) -> float:
        """Return ``|z|**2``."""
        return self.re * self.re + self.im * self.im

    def scale(self, factor: float) -> "Complex":
        return Complex(self.re * factor, self.im * factor)

    def __add__(self, other: object) -> "Complex":
        return self.add(_coerce(other))

    def __radd__(self, other: object) -> "Complex":
        return _coerce(other).add(self)

    def __sub__(self, other: object) -> "Complex":
        return self.sub(_coerce(other))

    def __rsub__(self, other: object) -> "Complex":
        return _coerce(other).sub(self)

    def __mul__(self, other: object) -> "Complex":
        return self.mul(_coerce(other))

    def __rmul__(self, other: object) -> "Complex":
        return _coerce(other).mul(self)

    def __neg__(self) -> "Complex":
        return Complex(-self.re, -self.im)

    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    def __abs__(self) -> float:
        return self.magnitude_squared() ** 0.5

    def __str__(self) -> str:
        sign = "+" if self.im >= 0 else "-"
        return f"{self.re:.3f} {sign} {abs(self.im):.3f}i"


def _coerce(value: object) -> Complex:
    if isinstance(value, Complex):
        return value
    if isinstance(value, (int, float, complex)):
        return Complex.from_complex(value)
    raise TypeError(f"Cannot combine Complex with {type(value).__name__}")


ZERO = Complex(0.0, 0.0)
ONE = Complex(1.0, 0.0)
I = Complex(0.0, 1.0)

__all__ = ["Complex", "ZERO", "ONE", "I"]
