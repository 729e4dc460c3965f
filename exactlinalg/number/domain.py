"""
Scalar domains for the vector and matrix engines.

A ScalarDomain bundles the arithmetic a vector or matrix needs from its
elements: identities, the ring operations, magnitudes and the notion of a
unit. One singleton exists per supported scalar type:

- INTEGERS: Python ``int``
- DECIMALS: ``decimal.Decimal`` with exact (unrounded) arithmetic
- FRACTIONS: :class:`~exactlinalg.number.fraction.Fraction`
- SIMPLE_COMPLEX_NUMBERS: Gaussian integers
- REAL_COMPLEX_NUMBERS: complex numbers with decimal parts

Magnitudes live in a "norm codomain" which may differ from the element type,
e.g. complex elements have decimal absolute values.

The arithmetic hooks take an optional ``decimal.Context``. Decimal and
decimal-complex domains round every operation to it; integer, rational and
Gaussian-integer arithmetic is always exact and ignores it.
"""

from __future__ import annotations

import decimal
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, ClassVar, Iterable, Optional

from ..core.errors import PreconditionError
from .complex import RealComplexNumber, SimpleComplexNumber
from .fraction import Fraction
from .rounding import EXACT_CONTEXT, RoundingMode


def exact_sum(values: Iterable[Any], start: Any = 0, context: Optional[decimal.Context] = None) -> Any:
    """
    Sum norm-codomain values.

    Decimal terms are added through ``context``, or without rounding when it
    is None; ints and fractions use their own exact operators.
    """
    total = start
    for value in values:
        if isinstance(total, Decimal) or isinstance(value, Decimal):
            total = (context or EXACT_CONTEXT).add(Decimal(total), Decimal(value))
        else:
            total = total + value
    return total


def to_decimal(value: Any) -> Decimal:
    """Convert a norm-codomain value (int, Decimal or Fraction) to Decimal."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, Fraction):
        return value.to_decimal()
    if isinstance(value, int) and not isinstance(value, bool):
        return Decimal(value)
    raise PreconditionError("cannot convert to Decimal", expected="int, Decimal or Fraction",
                            actual=type(value).__name__)


class ScalarDomain(ABC):
    """
    Arithmetic contract of a vector or matrix element type.

    Subclasses must implement:
    - zero / one: the additive and multiplicative identities
    - coerce: validation of incoming Python values
    - abs / abs_pow2: magnitudes in the norm codomain
    - is_unit: the domain's notion of an invertible element

    The remaining operations default to Python operators.
    """

    name: ClassVar[str]

    @abstractmethod
    def zero(self) -> Any:
        """Additive identity."""

    @abstractmethod
    def one(self) -> Any:
        """Multiplicative identity."""

    @abstractmethod
    def coerce(self, value: Any) -> Any:
        """
        Validate a Python value and convert it into this domain.

        Raises:
            PreconditionError: For None or values of a foreign type
        """

    @abstractmethod
    def abs(self, value: Any) -> Any:
        """Absolute value in the norm codomain."""

    @abstractmethod
    def abs_pow2(self, value: Any, context: Optional[decimal.Context] = None) -> Any:
        """Squared magnitude in the inner-product codomain."""

    @abstractmethod
    def is_unit(self, value: Any) -> bool:
        """True if the value is invertible in this domain."""

    def add(self, a: Any, b: Any, context: Optional[decimal.Context] = None) -> Any:
        return a + b

    def subtract(self, a: Any, b: Any, context: Optional[decimal.Context] = None) -> Any:
        return a - b

    def multiply(self, a: Any, b: Any, context: Optional[decimal.Context] = None) -> Any:
        return a * b

    def negate(self, value: Any, context: Optional[decimal.Context] = None) -> Any:
        return -value

    def equals(self, a: Any, b: Any) -> bool:
        return a == b

    def is_zero(self, value: Any) -> bool:
        return self.equals(value, self.zero())

    def is_one(self, value: Any) -> bool:
        return self.equals(value, self.one())

    def to_decimal(self, value: Any) -> Decimal:
        """Convert a norm-codomain value to Decimal for the square-root calculator."""
        return to_decimal(value)

    def round_determinant(self, determinant: Any, reference: Any) -> Any:
        """Adjust a rule-of-Sarrus result; ``reference`` is the (1, 1) entry."""
        return determinant

    def _reject(self, value: Any, expected: str) -> None:
        if value is None:
            raise PreconditionError(f"{self.name} element must not be None")
        raise PreconditionError(f"invalid {self.name} element", expected=expected, actual=type(value).__name__)

    def __eq__(self, other: Any) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self).__name__)

    def __repr__(self) -> str:
        return self.name


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class IntegerDomain(ScalarDomain):
    """Arbitrary-precision integers; units are 1 and -1."""

    name = "INTEGERS"

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def coerce(self, value: Any) -> int:
        if _is_integer(value):
            return value
        self._reject(value, "int")

    def abs(self, value: int) -> int:
        return abs(value)

    def abs_pow2(self, value: int, context: Optional[decimal.Context] = None) -> int:
        return value * value

    def is_unit(self, value: int) -> bool:
        return value in (1, -1)


class DecimalDomain(ScalarDomain):
    """
    Arbitrary-precision decimals.

    Addition, subtraction and multiplication never round. Equality is by
    numeric value, so ``Decimal("1.0")`` equals ``Decimal("1")``.
    """

    name = "DECIMALS"

    def zero(self) -> Decimal:
        return Decimal(0)

    def one(self) -> Decimal:
        return Decimal(1)

    def coerce(self, value: Any) -> Decimal:
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise PreconditionError("decimal element must be finite", expected="finite decimal", actual=value)
            return value
        if _is_integer(value):
            return Decimal(value)
        if isinstance(value, str):
            try:
                return self.coerce(Decimal(value))
            except ArithmeticError as exc:
                raise PreconditionError("not a decimal literal", actual=value) from exc
        self._reject(value, "Decimal")

    def add(self, a: Decimal, b: Decimal, context: Optional[decimal.Context] = None) -> Decimal:
        return (context or EXACT_CONTEXT).add(a, b)

    def subtract(self, a: Decimal, b: Decimal, context: Optional[decimal.Context] = None) -> Decimal:
        return (context or EXACT_CONTEXT).subtract(a, b)

    def multiply(self, a: Decimal, b: Decimal, context: Optional[decimal.Context] = None) -> Decimal:
        return (context or EXACT_CONTEXT).multiply(a, b)

    def negate(self, value: Decimal, context: Optional[decimal.Context] = None) -> Decimal:
        if context is None:
            return value.copy_negate()
        return context.minus(value)

    def abs(self, value: Decimal) -> Decimal:
        return value.copy_abs()

    def abs_pow2(self, value: Decimal, context: Optional[decimal.Context] = None) -> Decimal:
        return (context or EXACT_CONTEXT).multiply(value, value)

    def is_unit(self, value: Decimal) -> bool:
        return value != 0

    def round_determinant(self, determinant: Decimal, reference: Decimal) -> Decimal:
        """Quantize to the scale of the (1, 1) entry, rounding half up."""
        return RoundingMode.HALF_UP.set_scale(determinant, -reference.as_tuple().exponent)


class FractionDomain(ScalarDomain):
    """Exact rationals; every non-zero fraction is a unit."""

    name = "FRACTIONS"

    def zero(self) -> Fraction:
        return Fraction.ZERO

    def one(self) -> Fraction:
        return Fraction.ONE

    def coerce(self, value: Any) -> Fraction:
        if isinstance(value, Fraction):
            return value
        if _is_integer(value):
            return Fraction(value)
        self._reject(value, "Fraction")

    def abs(self, value: Fraction) -> Fraction:
        return abs(value)

    def abs_pow2(self, value: Fraction, context: Optional[decimal.Context] = None) -> Fraction:
        return value * value

    def is_unit(self, value: Fraction) -> bool:
        return value.is_invertible()


class SimpleComplexDomain(ScalarDomain):
    """
    Gaussian integers.

    Absolute values are decimals computed by the square-root calculator;
    squared magnitudes stay integers. Units are 1, -1, i and -i.
    """

    name = "SIMPLE_COMPLEX_NUMBERS"

    def zero(self) -> SimpleComplexNumber:
        return SimpleComplexNumber.ZERO

    def one(self) -> SimpleComplexNumber:
        return SimpleComplexNumber.ONE

    def coerce(self, value: Any) -> SimpleComplexNumber:
        if isinstance(value, SimpleComplexNumber):
            return value
        if _is_integer(value):
            return SimpleComplexNumber(value, 0)
        self._reject(value, "SimpleComplexNumber")

    def abs(self, value: SimpleComplexNumber) -> Decimal:
        return value.abs()

    def abs_pow2(self, value: SimpleComplexNumber, context: Optional[decimal.Context] = None) -> int:
        return value.abs_pow2()

    def is_unit(self, value: SimpleComplexNumber) -> bool:
        return value.is_unit()


class RealComplexDomain(ScalarDomain):
    """Complex numbers with decimal parts; every non-zero value is a unit."""

    name = "REAL_COMPLEX_NUMBERS"

    def zero(self) -> RealComplexNumber:
        return RealComplexNumber.ZERO

    def one(self) -> RealComplexNumber:
        return RealComplexNumber.ONE

    def coerce(self, value: Any) -> RealComplexNumber:
        if isinstance(value, (RealComplexNumber, SimpleComplexNumber, Decimal)) or _is_integer(value):
            return RealComplexNumber.of(value)
        self._reject(value, "RealComplexNumber")

    def abs(self, value: RealComplexNumber) -> Decimal:
        return value.abs()

    def add(self, a: RealComplexNumber, b: RealComplexNumber,
            context: Optional[decimal.Context] = None) -> RealComplexNumber:
        return a.add(b, context)

    def subtract(self, a: RealComplexNumber, b: RealComplexNumber,
                 context: Optional[decimal.Context] = None) -> RealComplexNumber:
        return a.subtract(b, context)

    def multiply(self, a: RealComplexNumber, b: RealComplexNumber,
                 context: Optional[decimal.Context] = None) -> RealComplexNumber:
        return a.multiply(b, context)

    def negate(self, value: RealComplexNumber, context: Optional[decimal.Context] = None) -> RealComplexNumber:
        return value.negate(context)

    def abs_pow2(self, value: RealComplexNumber, context: Optional[decimal.Context] = None) -> Decimal:
        return value.abs_pow2(context)

    def is_unit(self, value: RealComplexNumber) -> bool:
        return value.is_unit()


INTEGERS = IntegerDomain()
DECIMALS = DecimalDomain()
FRACTIONS = FractionDomain()
SIMPLE_COMPLEX_NUMBERS = SimpleComplexDomain()
REAL_COMPLEX_NUMBERS = RealComplexDomain()

DOMAINS = (INTEGERS, DECIMALS, FRACTIONS, SIMPLE_COMPLEX_NUMBERS, REAL_COMPLEX_NUMBERS)
