"""
Arbitrary-precision square roots.

SquareRootCalculator runs Heron's iteration

    next = (estimate^2 + x) / (2 * estimate)

at a working precision wide enough for the requested stopping precision and
output scale. The iteration stops once two successive estimates differ by
less than the precision, or after ``max_iterations`` steps; the final
estimate is then set to ``scale`` fractional digits with ``rounding_mode``.

Example:
    >>> SquareRootCalculator(scale=4).sqrt(2)
    Decimal('1.4142')
"""

from __future__ import annotations

import decimal
import math
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .core.config import get_settings
from .core.errors import PreconditionError
from .core.logging import get_operation_logger
from .number.rounding import EXACT_CONTEXT, RoundingMode

# Extra significant digits carried beyond what precision and scale demand
GUARD_DIGITS = 5


class ScientificNotation(BaseModel):
    """
    A non-negative decimal written as ``mantissa * 100 ** exponent``.

    For non-zero values the mantissa lies in ``[1, 100)``; zero is ``0 * 100 ** 0``.
    """

    model_config = ConfigDict(frozen=True)

    mantissa: Decimal = Field(description="Value in [0, 100)")
    exponent: int = Field(description="Number of times 100 was divided out (negative if multiplied in)")

    def to_decimal(self) -> Decimal:
        """Reassemble the original value."""
        return self.mantissa.scaleb(2 * self.exponent, context=EXACT_CONTEXT)

    def seed(self) -> Decimal:
        """Initial estimate of the square root: 2 or 6 times 10 ** exponent."""
        return Decimal(6 if self.mantissa >= 10 else 2).scaleb(self.exponent)

    def __str__(self) -> str:
        return f"{self.mantissa} * 100^{self.exponent}"


def _as_decimal(value: Any, name: str = "value") -> Decimal:
    """Accept int or finite Decimal input, rejecting everything else."""
    if value is None:
        raise PreconditionError(f"{name} must not be None")
    if isinstance(value, bool):
        raise PreconditionError(f"invalid {name}", expected="int or Decimal", actual=value)
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise PreconditionError(f"{name} must be finite", expected="finite decimal", actual=value)
        return value
    raise PreconditionError(f"invalid {name}", expected="int or Decimal", actual=type(value).__name__)


def _require_integer(value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise PreconditionError("expected an integer", expected="int", actual=type(value).__name__)
    return value


def scientific_notation_for_sqrt(value: Any) -> ScientificNotation:
    """
    Normalise a non-negative value to ``mantissa * 100 ** exponent``.

    Dividing by 100 halves the order of magnitude of the root, so the
    exponent carries over directly to the seed of the iteration.

    Raises:
        PreconditionError: If the value is negative
    """
    radicand = _as_decimal(value)
    if radicand < 0:
        raise PreconditionError("value must be non-negative", expected="value >= 0", actual=radicand)
    if radicand == 0:
        return ScientificNotation(mantissa=Decimal(0), exponent=0)

    # adjusted() is the power of ten of the leading digit
    exponent = radicand.adjusted() // 2
    return ScientificNotation(mantissa=radicand.scaleb(-2 * exponent, context=EXACT_CONTEXT), exponent=exponent)


def is_perfect_square(value: Any) -> bool:
    """True if the integer is the square of an integer (negative values never are)."""
    value = _require_integer(value)
    if value < 0:
        return False
    root = math.isqrt(value)
    return root * root == value


def sqrt_of_perfect_square(value: Any) -> int:
    """
    Exact integer square root.

    Raises:
        PreconditionError: If the value is negative or not a perfect square
    """
    value = _require_integer(value)
    if value < 0:
        raise PreconditionError("value must be non-negative", expected="value >= 0", actual=value)
    root = math.isqrt(value)
    if root * root != value:
        raise PreconditionError("value is not a perfect square", expected="perfect square", actual=value)
    return root


class SquareRootCalculator(BaseModel):
    """
    Square root calculator with configurable convergence and rounding.

    Omitted parameters fall back to the library settings
    (``SQRT_PRECISION``, ``SQRT_SCALE``, ``SQRT_ROUNDING_MODE`` and
    ``SQRT_MAX_ITERATIONS``).

    Examples:
        >>> SquareRootCalculator().sqrt(25)
        Decimal('5.0000000000')
        >>> SquareRootCalculator(scale=2, rounding_mode="DOWN").sqrt(Decimal("2"))
        Decimal('1.41')
    """

    model_config = ConfigDict(frozen=True)

    precision: Decimal = Field(description="Stop once successive estimates differ by less; in (0, 1)")
    scale: int = Field(description="Fractional digits of the result")
    rounding_mode: RoundingMode = Field(description="Rounding applied when setting the scale")
    max_iterations: int = Field(description="Upper bound on Heron steps")

    def __init__(
        self,
        precision: Any = None,
        scale: Any = None,
        rounding_mode: Any = None,
        max_iterations: Any = None,
        **kwargs: Any,
    ):
        config = get_settings()
        precision = _resolve_precision(config.SQRT_PRECISION if precision is None else precision)
        scale = config.SQRT_SCALE if scale is None else scale
        rounding_mode = RoundingMode.of(config.SQRT_ROUNDING_MODE if rounding_mode is None else rounding_mode)
        max_iterations = config.SQRT_MAX_ITERATIONS if max_iterations is None else max_iterations

        if not isinstance(scale, int) or isinstance(scale, bool) or scale < 0:
            raise PreconditionError("invalid scale", expected="int >= 0", actual=scale)
        if not isinstance(max_iterations, int) or isinstance(max_iterations, bool) or max_iterations < 1:
            raise PreconditionError("invalid max_iterations", expected="int >= 1", actual=max_iterations)

        super().__init__(
            precision=precision,
            scale=scale,
            rounding_mode=rounding_mode,
            max_iterations=max_iterations,
            **kwargs,
        )

    def working_precision(self, value: Decimal) -> int:
        """Significant digits needed to resolve the root of ``value``."""
        leading_digit = value.adjusted() // 2 + 1
        fractional_digits = max(self.scale, -self.precision.adjusted())
        return max(get_settings().WORKING_PRECISION, leading_digit + fractional_digits + GUARD_DIGITS)

    def sqrt(self, value: Any) -> Decimal:
        """
        Square root of a non-negative int or Decimal.

        Perfect-square ints skip the iteration and use the exact integer root.

        Raises:
            PreconditionError: If the value is negative or not a number
        """
        radicand = _as_decimal(value)
        if radicand < 0:
            raise PreconditionError("value must be non-negative", expected="value >= 0", actual=radicand)
        if radicand == 0:
            return self.rounding_mode.set_scale(Decimal(0), self.scale)
        log = get_operation_logger(__name__, "sqrt", radicand=str(radicand), scale=self.scale)
        if isinstance(value, int) and is_perfect_square(value):
            log.debug("perfect square")
            return self.rounding_mode.set_scale(Decimal(math.isqrt(value)), self.scale)

        context = decimal.Context(prec=self.working_precision(radicand), rounding=decimal.ROUND_HALF_EVEN)
        estimate = scientific_notation_for_sqrt(radicand).seed()

        for iteration in range(1, self.max_iterations + 1):
            successor = context.divide(
                context.add(context.multiply(estimate, estimate), radicand),
                context.multiply(2, estimate),
            )
            difference = context.subtract(successor, estimate).copy_abs()
            estimate = successor
            log.debug("iteration %d: estimate=%s difference=%s", iteration, estimate, difference)
            if difference < self.precision:
                break
        else:
            log.debug("stopped after %d iterations", self.max_iterations)

        return self.rounding_mode.set_scale(estimate, self.scale)

    def sqrt_of_perfect_square(self, value: Any) -> int:
        """Exact root of a perfect square."""
        return sqrt_of_perfect_square(value)

    def is_perfect_square(self, value: Any) -> bool:
        return is_perfect_square(value)

    def scientific_notation_for_sqrt(self, value: Any) -> ScientificNotation:
        return scientific_notation_for_sqrt(value)


def _resolve_precision(value: Any) -> Decimal:
    if isinstance(value, float):
        value = Decimal(str(value))
    elif isinstance(value, str):
        try:
            value = Decimal(value)
        except ArithmeticError as exc:
            raise PreconditionError("invalid precision", expected="decimal in (0, 1)", actual=value) from exc
    if not isinstance(value, Decimal) or not value.is_finite() or not 0 < value < 1:
        raise PreconditionError("invalid precision", expected="decimal in (0, 1)", actual=value)
    return value


def sqrt(value: Any, precision: Any = None, scale: Any = None, rounding_mode: Any = None) -> Decimal:
    """
    Square root with the given (or default) precision, scale and rounding mode.

    Example:
        >>> sqrt(2, scale=3)
        Decimal('1.414')
    """
    return SquareRootCalculator(precision=precision, scale=scale, rounding_mode=rounding_mode).sqrt(value)
