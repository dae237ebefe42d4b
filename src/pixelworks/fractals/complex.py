"""Immutable complex number with parsing and formatting.

Magnitude and angle are computed once when a number is created. The angle is
atan2(imaginary, real) + pi, which lies in (0, 2*pi]; root() works from this
stored angle.

Root literals accepted by Complex.parse:
    "3.51", "-3.17", "-i2.71", "i", "1", "-2.71 - i3.15", "2 + i"

that is, an optional real term followed by an optional signed imaginary term
in which a bare "i" or "-i" stands for a coefficient of 1 or -1.

Example:
    >>> from src.pixelworks.fractals.complex import Complex
    >>> z = Complex.parse("2 + i")
    >>> str(z.multiply(Complex.IM))
    '-1 + i2'
"""

import math
import re
from dataclasses import dataclass, field
from typing import ClassVar

from src.pixelworks.core.checks import require, require_non_negative

_NUMBER = r"\d*\.?\d+"
_LITERAL = re.compile(
    rf"([+-]?{_NUMBER})\s*([+-]\s*i({_NUMBER})?)"  # real and imaginary
    rf"|([+-]?{_NUMBER})"  # real only
    rf"|(-?i({_NUMBER})?)"  # imaginary only
)


class ComplexParseError(ValueError):
    """Raised when a string is not a valid complex literal."""


def _format_part(value: float) -> str:
    """Format with at most two decimals and no trailing zeros."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _imaginary_coefficient(expression: str) -> float:
    """Turn '+', '-', '+2.5', '-i2.5' style fragments into a coefficient."""
    coefficient = expression.replace("i", "", 1).replace(" ", "").strip()
    if coefficient in ("", "+"):
        return 1.0
    if coefficient == "-":
        return -1.0
    return float(coefficient)


@dataclass(frozen=True)
class Complex:
    """An immutable complex number.

    Attributes:
        real: Real part.
        imaginary: Imaginary part.
        magnitude: Distance from the origin, computed at construction.
        angle: atan2(imaginary, real) + pi, computed at construction.
    """

    real: float = 0.0
    imaginary: float = 0.0
    magnitude: float = field(init=False, compare=False, repr=False)
    angle: float = field(init=False, compare=False, repr=False)

    ZERO: ClassVar["Complex"]
    ONE: ClassVar["Complex"]
    ONE_NEG: ClassVar["Complex"]
    IM: ClassVar["Complex"]
    IM_NEG: ClassVar["Complex"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "magnitude", math.sqrt(self.real * self.real + self.imaginary * self.imaginary))
        object.__setattr__(self, "angle", math.atan2(self.imaginary, self.real) + math.pi)

    @classmethod
    def from_magnitude_and_angle(cls, magnitude: float, angle: float) -> "Complex":
        """Build a complex number from polar coordinates."""
        return cls(magnitude * math.cos(angle), magnitude * math.sin(angle))

    def module(self) -> float:
        """Return the modulus |z|."""
        return math.sqrt(self.real * self.real + self.imaginary * self.imaginary)

    def add(self, c: "Complex") -> "Complex":
        require(c, "Summand")
        return Complex(self.real + c.real, self.imaginary + c.imaginary)

    def sub(self, c: "Complex") -> "Complex":
        require(c, "Subtrahend")
        return Complex(self.real - c.real, self.imaginary - c.imaginary)

    def multiply(self, c: "Complex") -> "Complex":
        require(c, "Multiplicand")
        return Complex(
            self.real * c.real - self.imaginary * c.imaginary,
            self.real * c.imaginary + self.imaginary * c.real,
        )

    def divide(self, c: "Complex") -> "Complex":
        """Divide this number by c.

        Raises:
            ValueError: If c is None.
            ZeroDivisionError: If c is zero.
        """
        require(c, "Divisor")
        denominator = c.real * c.real + c.imaginary * c.imaginary
        if denominator == 0:
            raise ZeroDivisionError("Cannot divide by zero.")
        return Complex(
            (self.real * c.real + self.imaginary * c.imaginary) / denominator,
            (self.imaginary * c.real - self.real * c.imaginary) / denominator,
        )

    def negate(self) -> "Complex":
        return Complex(-self.real, -self.imaginary)

    def power(self, n: int) -> "Complex":
        """Raise this number to the n-th power by repeated multiplication.

        Raises:
            ValueError: If n is negative.
        """
        require_non_negative(n)
        result = Complex.ONE
        for _ in range(n):
            result = result.multiply(self)
        return result

    def root(self, n: int) -> list["Complex"]:
        """Compute the n n-th roots of this number.

        The roots have magnitude ** (1 / n) and angles (angle + 2*pi*k) / n
        for k = 0 .. n - 1. Zero roots are returned for n == 0.

        Raises:
            ValueError: If n is negative.
        """
        require_non_negative(n)
        if n == 0:
            return []
        magnitude = self.magnitude ** (1.0 / n)
        return [
            Complex.from_magnitude_and_angle(magnitude, (self.angle + 2.0 * k * math.pi) / n)
            for k in range(n)
        ]

    @classmethod
    def parse(cls, text: str) -> "Complex":
        """Parse a root literal such as "-2.71 - i3.15" or "i".

        Raises:
            ComplexParseError: If text is not a valid literal.
        """
        if text is None:
            raise ComplexParseError("Cannot parse None as a complex number.")
        match = _LITERAL.fullmatch(text.strip())
        if match is None:
            raise ComplexParseError(f"Cannot parse complex number: {text!r}")

        real = 0.0
        imaginary = 0.0
        if match.group(1) is not None:
            real = float(match.group(1))
            imaginary = _imaginary_coefficient(match.group(2))
        elif match.group(4) is not None:
            real = float(match.group(4))
        else:
            imaginary = _imaginary_coefficient(match.group(5))
        return cls(real, imaginary)

    def __add__(self, other: "Complex") -> "Complex":
        if not isinstance(other, Complex):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "Complex") -> "Complex":
        if not isinstance(other, Complex):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other: "Complex") -> "Complex":
        if not isinstance(other, Complex):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: "Complex") -> "Complex":
        if not isinstance(other, Complex):
            return NotImplemented
        return self.divide(other)

    def __neg__(self) -> "Complex":
        return self.negate()

    def __abs__(self) -> float:
        return self.module()

    def __str__(self) -> str:
        parts = []
        if self.real == 0 and self.imaginary == 0:
            parts.append("0")
        if self.real != 0:
            parts.append(_format_part(self.real))
        if self.imaginary != 0:
            if self.real != 0:
                parts.append(" + " if self.imaginary > 0 else " - ")
            elif self.imaginary < 0:
                parts.append("-")
            parts.append("i")
            if self.imaginary not in (1, -1):
                parts.append(_format_part(abs(self.imaginary)))
        return "".join(parts)


Complex.ZERO = Complex(0, 0)
Complex.ONE = Complex(1, 0)
Complex.ONE_NEG = Complex(-1, 0)
Complex.IM = Complex(0, 1)
Complex.IM_NEG = Complex(0, -1)
