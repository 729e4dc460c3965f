"""
Exact rational numbers.

A Fraction stores numerator and denominator as Python integers, always reduced
to lowest terms with a positive denominator, so structural equality is value
equality.
"""

from __future__ import annotations

import decimal
from decimal import Decimal
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import PreconditionError


def gcd(a: int, b: int) -> int:
    """Greatest Common Divisor (always non-negative)."""
    a, b = abs(a), abs(b)
    if a < b:
        a, b = b, a
    if b == 0:
        return a
    r = a % b
    while r != 0:
        a, b = b, r
        r = a % b
    return b


def lcm(a: int, b: int) -> int:
    """Least Common Multiple."""
    return (a // gcd(a, b)) * b


def reduce_fraction(num: int, den: int) -> tuple[int, int]:
    """
    Reduce fraction to lowest terms.

    Ensures denominator is positive; zero is normalised to 0/1.
    """
    if den < 0:
        num, den = -num, -den
    if num == 0:
        return (0, 1)
    g = gcd(num, den)
    return (num // g, den // g)


class Fraction(BaseModel):
    """
    Fraction represents a rational number as numerator/denominator.

    Examples:
        >>> Fraction(1, 2)   # 1/2
        >>> Fraction(6, -8)  # -3/4
        >>> Fraction(5)      # 5/1
    """

    model_config = ConfigDict(frozen=True)

    numerator: int = Field(description="The numerator")
    denominator: int = Field(description="The denominator, always positive")

    ZERO: ClassVar[Fraction]
    ONE: ClassVar[Fraction]

    def __init__(self, numerator: int, denominator: int = 1, **kwargs: Any):
        if not _is_integer(numerator) or not _is_integer(denominator):
            raise PreconditionError(
                "Fraction parts must be integers",
                expected="int",
                actual=f"{type(numerator).__name__}/{type(denominator).__name__}",
            )
        if denominator == 0:
            raise PreconditionError("Fraction denominator cannot be zero", expected="denominator != 0", actual=0)

        num, den = reduce_fraction(int(numerator), int(denominator))
        super().__init__(numerator=num, denominator=den, **kwargs)

    @classmethod
    def of(cls, value: Any) -> Fraction:
        """Convert an int, Decimal or Fraction into a Fraction exactly."""
        if isinstance(value, Fraction):
            return value
        if _is_integer(value):
            return cls(value)
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise PreconditionError("cannot convert non-finite decimal", expected="finite", actual=value)
            num, den = value.as_integer_ratio()
            return cls(num, den)
        raise PreconditionError("cannot convert to Fraction", expected="int, Decimal or Fraction",
                                actual=type(value).__name__)

    def signum(self) -> int:
        """Sign of the fraction: -1, 0 or 1."""
        return (self.numerator > 0) - (self.numerator < 0)

    def is_invertible(self) -> bool:
        """A fraction is invertible unless it is zero."""
        return self.numerator != 0

    def invert(self) -> Fraction:
        """Multiplicative inverse."""
        if not self.is_invertible():
            raise PreconditionError("cannot invert zero", expected="non-zero fraction", actual=self)
        return Fraction(self.denominator, self.numerator)

    def to_decimal(self, precision: int | None = None) -> Decimal:
        """
        Convert to Decimal.

        Args:
            precision: Significant digits of the quotient (default from settings)
        """
        if precision is None:
            from ..core.config import get_settings

            precision = get_settings().WORKING_PRECISION
        context = decimal.Context(prec=precision, rounding=decimal.ROUND_HALF_EVEN)
        return context.divide(Decimal(self.numerator), Decimal(self.denominator))

    def to_string(self) -> str:
        """Convert to string representation."""
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"

    def to_tex(self) -> str:
        """Convert to LaTeX representation."""
        if self.denominator == 1:
            return str(self.numerator)
        sign = "-" if self.numerator < 0 else ""
        return f"{sign}\\frac{{{abs(self.numerator)}}}{{{self.denominator}}}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Fraction({self.numerator}, {self.denominator})"

    def __hash__(self) -> int:
        return hash((self.numerator, self.denominator))

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Fraction):
            return self.numerator == other.numerator and self.denominator == other.denominator
        if _is_integer(other):
            return self.denominator == 1 and self.numerator == other
        return NotImplemented

    # Arithmetic operators

    def __add__(self, other: Any) -> Fraction:
        """Addition: a/b + c/d = (a*(l/b) + c*(l/d)) / l with l = lcm(b, d)."""
        other = _as_fraction(other)
        if other is None:
            return NotImplemented
        l = lcm(self.denominator, other.denominator)
        new_num = self.numerator * (l // self.denominator) + other.numerator * (l // other.denominator)
        return Fraction(new_num, l)

    def __radd__(self, other: Any) -> Fraction:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Fraction:
        other = _as_fraction(other)
        if other is None:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other: Any) -> Fraction:
        other = _as_fraction(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other: Any) -> Fraction:
        other = _as_fraction(other)
        if other is None:
            return NotImplemented
        return Fraction(self.numerator * other.numerator, self.denominator * other.denominator)

    def __rmul__(self, other: Any) -> Fraction:
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Fraction:
        other = _as_fraction(other)
        if other is None:
            return NotImplemented
        return self * other.invert()

    def __rtruediv__(self, other: Any) -> Fraction:
        other = _as_fraction(other)
        if other is None:
            return NotImplemented
        return other * self.invert()

    def __pow__(self, exponent: Any) -> Fraction:
        """Integer powers only; negative exponents invert first."""
        if not _is_integer(exponent):
            return NotImplemented
        if exponent >= 0:
            return Fraction(self.numerator ** exponent, self.denominator ** exponent)
        inverse = self.invert()
        return Fraction(inverse.numerator ** -exponent, inverse.denominator ** -exponent)

    def __neg__(self) -> Fraction:
        return Fraction(-self.numerator, self.denominator)

    def __pos__(self) -> Fraction:
        return self

    def __abs__(self) -> Fraction:
        return Fraction(abs(self.numerator), self.denominator)

    # Ordering

    def _compare(self, other: Any) -> int | None:
        other = _as_fraction(other)
        if other is None:
            return None
        left = self.numerator * other.denominator
        right = other.numerator * self.denominator
        return (left > right) - (left < right)

    def __lt__(self, other: Any) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: Any) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: Any) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: Any) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result >= 0


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_fraction(value: Any) -> Fraction | None:
    if isinstance(value, Fraction):
        return value
    if _is_integer(value):
        return Fraction(value)
    return None


Fraction.ZERO = Fraction(0)
Fraction.ONE = Fraction(1)
