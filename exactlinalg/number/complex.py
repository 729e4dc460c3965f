"""
Exact complex number types: SimpleComplexNumber and RealComplexNumber.

SimpleComplexNumber has integer parts (Gaussian integers); RealComplexNumber
has decimal parts. Both are immutable and compute add, subtract, multiply and
negate exactly. Magnitudes go through the square-root calculator and are
returned as Decimal.

RealComplexNumber arithmetic accepts an optional ``decimal.Context`` that
bounds the precision of every part operation; Gaussian integers ignore it.
"""

from __future__ import annotations

import decimal
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import PreconditionError
from .rounding import EXACT_CONTEXT, check_context


class _ComplexNumber(BaseModel, ABC):
    """
    Shared behaviour of the complex number types.

    Subclasses must implement:
    - _coerce_part: validation and conversion of a real or imaginary part

    Subclasses may override the part arithmetic ``_add``, ``_sub`` and
    ``_mul``, which default to Python operators.
    """

    model_config = ConfigDict(frozen=True)

    def __init__(self, real: Any = 0, imaginary: Any = 0, **kwargs: Any):
        super().__init__(
            real=self._coerce_part(real, "real"),
            imaginary=self._coerce_part(imaginary, "imaginary"),
            **kwargs,
        )

    @classmethod
    @abstractmethod
    def _coerce_part(cls, value: Any, name: str) -> Any:
        """
        Validate one part.

        Raises:
            PreconditionError: If the part has the wrong type
        """

    @staticmethod
    def _add(a: Any, b: Any, context: Optional[decimal.Context] = None) -> Any:
        return a + b

    @staticmethod
    def _sub(a: Any, b: Any, context: Optional[decimal.Context] = None) -> Any:
        return a - b

    @staticmethod
    def _mul(a: Any, b: Any, context: Optional[decimal.Context] = None) -> Any:
        return a * b

    def _new(self, real: Any, imaginary: Any):
        return type(self)(real, imaginary)

    def _lift(self, other: Any):
        """Bring an operand into this type or return None."""
        if isinstance(other, type(self)):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return type(self)(other, 0)
        return None

    def _operand(self, other: Any):
        lifted = self._lift(other)
        if lifted is None:
            raise PreconditionError("invalid operand", expected=type(self).__name__, actual=type(other).__name__)
        return lifted

    # Arithmetic

    def add(self, summand: Any, context: Optional[decimal.Context] = None):
        summand = self._operand(summand)
        context = check_context(context)
        return self._new(
            self._add(self.real, summand.real, context),
            self._add(self.imaginary, summand.imaginary, context),
        )

    def subtract(self, subtrahend: Any, context: Optional[decimal.Context] = None):
        subtrahend = self._operand(subtrahend)
        context = check_context(context)
        return self._new(
            self._sub(self.real, subtrahend.real, context),
            self._sub(self.imaginary, subtrahend.imaginary, context),
        )

    def multiply(self, factor: Any, context: Optional[decimal.Context] = None):
        """(a + bi)(c + di) = (ac - bd) + (ad + bc)i"""
        factor = self._operand(factor)
        context = check_context(context)
        real_part = self._sub(
            self._mul(self.real, factor.real, context),
            self._mul(self.imaginary, factor.imaginary, context),
            context,
        )
        imag_part = self._add(
            self._mul(self.real, factor.imaginary, context),
            self._mul(self.imaginary, factor.real, context),
            context,
        )
        return self._new(real_part, imag_part)

    def negate(self, context: Optional[decimal.Context] = None):
        context = check_context(context)
        return self._new(self._sub(0, self.real, context), self._sub(0, self.imaginary, context))

    # Arithmetic operators

    def __add__(self, other: Any):
        other = self._lift(other)
        if other is None:
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: Any):
        return self.__add__(other)

    def __sub__(self, other: Any):
        other = self._lift(other)
        if other is None:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: Any):
        other = self._lift(other)
        if other is None:
            return NotImplemented
        return other.subtract(self)

    def __mul__(self, other: Any):
        other = self._lift(other)
        if other is None:
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: Any):
        return self.__mul__(other)

    def __pow__(self, exponent: Any):
        """Non-negative integer powers by repeated multiplication."""
        if not isinstance(exponent, int) or isinstance(exponent, bool):
            return NotImplemented
        if exponent < 0:
            raise PreconditionError("negative exponent", expected="exponent >= 0", actual=exponent)
        result = self._new(1, 0)
        for _ in range(exponent):
            result = result * self
        return result

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self) -> Decimal:
        return self.abs()

    def conjugate(self):
        """Complex conjugate a - bi."""
        return self._new(self.real, self._sub(0, self.imaginary))

    def abs_pow2(self, context: Optional[decimal.Context] = None) -> Any:
        """Square of the magnitude, re^2 + im^2 (exact unless a context is given)."""
        context = check_context(context)
        return self._add(
            self._mul(self.real, self.real, context),
            self._mul(self.imaginary, self.imaginary, context),
            context,
        )

    def abs(self, calculator: Any = None) -> Decimal:
        """
        Magnitude of the complex number.

        Args:
            calculator: SquareRootCalculator to use (default settings if None)
        """
        from ..sqrt import SquareRootCalculator

        calculator = calculator or SquareRootCalculator()
        return calculator.sqrt(self.abs_pow2())

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.real, self.imaginary))

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, type(self)):
            return self.real == other.real and self.imaginary == other.imaginary
        return NotImplemented

    def to_string(self) -> str:
        """Convert to string."""
        if self.imaginary == 0:
            return str(self.real)
        if self.real == 0:
            if self.imaginary == 1:
                return "i"
            if self.imaginary == -1:
                return "-i"
            return f"{self.imaginary}i"
        sign = "+" if self.imaginary > 0 else "-"
        magnitude = self._sub(0, self.imaginary) if self.imaginary < 0 else self.imaginary
        imag_str = "" if magnitude == 1 else str(magnitude)
        return f"{self.real} {sign} {imag_str}i"

    def to_tex(self) -> str:
        """Convert to LaTeX."""
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.real!r}, {self.imaginary!r})"


class SimpleComplexNumber(_ComplexNumber):
    """
    Complex number with arbitrary-precision integer parts.

    Examples:
        >>> SimpleComplexNumber(3, 4).abs_pow2()
        25
    """

    real: int = Field(description="The real part")
    imaginary: int = Field(description="The imaginary part")

    ZERO: ClassVar[SimpleComplexNumber]
    ONE: ClassVar[SimpleComplexNumber]
    IMAGINARY: ClassVar[SimpleComplexNumber]

    @classmethod
    def _coerce_part(cls, value: Any, name: str) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise PreconditionError(f"{name} part must be an int", expected="int", actual=type(value).__name__)

    def is_unit(self) -> bool:
        """Units of the Gaussian integers are 1, -1, i and -i."""
        return self.abs_pow2() == 1


class RealComplexNumber(_ComplexNumber):
    """
    Complex number with arbitrary-precision decimal parts.

    Arithmetic is exact; equality compares parts by numeric value.
    """

    real: Decimal = Field(description="The real part")
    imaginary: Decimal = Field(description="The imaginary part")

    ZERO: ClassVar[RealComplexNumber]
    ONE: ClassVar[RealComplexNumber]
    IMAGINARY: ClassVar[RealComplexNumber]

    @classmethod
    def of(cls, value: Any) -> RealComplexNumber:
        """Convert an int, Decimal, SimpleComplexNumber or RealComplexNumber."""
        if isinstance(value, RealComplexNumber):
            return value
        if isinstance(value, SimpleComplexNumber):
            return cls(value.real, value.imaginary)
        return cls(value, 0)

    @classmethod
    def _coerce_part(cls, value: Any, name: str) -> Decimal:
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise PreconditionError(f"{name} part must be finite", expected="finite decimal", actual=value)
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return Decimal(value)
        if isinstance(value, str):
            try:
                return cls._coerce_part(Decimal(value), name)
            except ArithmeticError as exc:
                raise PreconditionError(f"{name} part is not a decimal literal", actual=value) from exc
        raise PreconditionError(f"{name} part must be a Decimal", expected="Decimal", actual=type(value).__name__)

    def _lift(self, other: Any):
        if isinstance(other, (Decimal, SimpleComplexNumber)):
            return RealComplexNumber.of(other)
        return super()._lift(other)

    @staticmethod
    def _add(a: Any, b: Any, context: Optional[decimal.Context] = None) -> Decimal:
        return (context or EXACT_CONTEXT).add(Decimal(a), Decimal(b))

    @staticmethod
    def _sub(a: Any, b: Any, context: Optional[decimal.Context] = None) -> Decimal:
        return (context or EXACT_CONTEXT).subtract(Decimal(a), Decimal(b))

    @staticmethod
    def _mul(a: Any, b: Any, context: Optional[decimal.Context] = None) -> Decimal:
        return (context or EXACT_CONTEXT).multiply(Decimal(a), Decimal(b))

    def is_unit(self) -> bool:
        """Every non-zero decimal complex number is invertible."""
        return self.real != 0 or self.imaginary != 0


SimpleComplexNumber.ZERO = SimpleComplexNumber(0, 0)
SimpleComplexNumber.ONE = SimpleComplexNumber(1, 0)
SimpleComplexNumber.IMAGINARY = SimpleComplexNumber(0, 1)

RealComplexNumber.ZERO = RealComplexNumber(0, 0)
RealComplexNumber.ONE = RealComplexNumber(1, 0)
RealComplexNumber.IMAGINARY = RealComplexNumber(0, 1)
