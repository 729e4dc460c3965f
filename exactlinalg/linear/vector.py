"""
Immutable dense vectors over a scalar domain.

Elements are addressed by 1-based index. All operations return new vectors;
operands of binary operations must share size and domain, otherwise a
PreconditionError is raised before anything is computed.

Algebraic operations take an optional ``decimal.Context`` that bounds the
precision of decimal and decimal-complex arithmetic.
"""

from __future__ import annotations

import decimal
from typing import Any, Iterable, Iterator, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import PreconditionError, check_argument
from ..number.domain import INTEGERS, ScalarDomain, exact_sum
from ..number.rounding import check_context
from ..sqrt import SquareRootCalculator


class Vector(BaseModel):
    """
    Fixed-size, 1-indexed vector.

    Examples:
        >>> v = Vector.of(3, 4)
        >>> v.taxicab_norm(), v.max_norm(), v.euclidean_norm_pow2()
        (7, 4, 25)
        >>> v.element(2)
        4
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    domain: ScalarDomain = Field(description="Scalar domain of the elements")
    elements: tuple[Any, ...] = Field(description="Elements in index order")

    def __init__(self, elements: Iterable[Any], domain: ScalarDomain = INTEGERS, **kwargs: Any):
        if not isinstance(domain, ScalarDomain):
            raise PreconditionError("invalid domain", expected="ScalarDomain", actual=type(domain).__name__)
        if elements is None:
            raise PreconditionError("elements must not be None")
        values = tuple(domain.coerce(value) for value in elements)
        check_argument(len(values) > 0, "vector must not be empty", expected="size >= 1", actual=0)
        super().__init__(domain=domain, elements=values, **kwargs)

    @classmethod
    def of(cls, *values: Any, domain: ScalarDomain = INTEGERS) -> Vector:
        """Vector of the given values, in order."""
        return cls(values, domain=domain)

    @classmethod
    def builder(cls, size: int, domain: ScalarDomain = INTEGERS):
        """Create a VectorBuilder for a vector of ``size`` elements."""
        from .builders import VectorBuilder

        return VectorBuilder(size, domain)

    # Access

    @property
    def size(self) -> int:
        return len(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.elements)

    def element(self, index: int) -> Any:
        """
        Element at a 1-based index.

        Raises:
            PreconditionError: If index is outside [1, size]
        """
        check_argument(
            isinstance(index, int) and not isinstance(index, bool) and 1 <= index <= self.size,
            "index out of range",
            expected=f"index in [1, {self.size}]",
            actual=index,
        )
        return self.elements[index - 1]

    def entries(self) -> Iterator[tuple[int, Any]]:
        """(index, element) pairs in index order."""
        return enumerate(self.elements, start=1)

    def _check_compatible(self, other: Any) -> Vector:
        if not isinstance(other, Vector):
            raise PreconditionError("expected a vector", expected="Vector", actual=type(other).__name__)
        check_argument(self.domain == other.domain, "vector domains differ",
                       expected=self.domain, actual=other.domain)
        check_argument(self.size == other.size, "vector sizes differ", expected=self.size, actual=other.size)
        return other

    def _new(self, values: Iterable[Any]) -> Vector:
        return Vector(values, domain=self.domain)

    # Algebra

    def add(self, other: Vector, context: Optional[decimal.Context] = None) -> Vector:
        other = self._check_compatible(other)
        context = check_context(context)
        return self._new(self.domain.add(a, b, context) for a, b in zip(self.elements, other.elements))

    def subtract(self, other: Vector, context: Optional[decimal.Context] = None) -> Vector:
        other = self._check_compatible(other)
        context = check_context(context)
        return self._new(self.domain.subtract(a, b, context) for a, b in zip(self.elements, other.elements))

    def scalar_multiply(self, scalar: Any, context: Optional[decimal.Context] = None) -> Vector:
        scalar = self.domain.coerce(scalar)
        context = check_context(context)
        return self._new(self.domain.multiply(scalar, value, context) for value in self.elements)

    def negate(self, context: Optional[decimal.Context] = None) -> Vector:
        context = check_context(context)
        return self._new(self.domain.negate(value, context) for value in self.elements)

    def dot_product(self, other: Vector, context: Optional[decimal.Context] = None) -> Any:
        """Sum of elementwise products (complex elements are not conjugated)."""
        other = self._check_compatible(other)
        context = check_context(context)
        total = self.domain.zero()
        for a, b in zip(self.elements, other.elements):
            total = self.domain.add(total, self.domain.multiply(a, b, context), context)
        return total

    def is_orthogonal_to(self, other: Vector, context: Optional[decimal.Context] = None) -> bool:
        """True if the dot product is zero."""
        return self.domain.is_zero(self.dot_product(other, context))

    def dyadic_product(self, other: Vector, context: Optional[decimal.Context] = None):
        """
        Outer product: the square matrix with cell (i, j) = self[i] * other[j].

        Raises:
            PreconditionError: If sizes or domains differ
        """
        from .builders import MatrixBuilder

        other = self._check_compatible(other)
        context = check_context(context)
        builder = MatrixBuilder(self.size, other.size, self.domain)
        for index, value in self.entries():
            for other_index, other_value in other.entries():
                builder.put(index, other_index, self.domain.multiply(value, other_value, context))
        return builder.build()

    # Norms

    def taxicab_norm(self) -> Any:
        """Sum of absolute values."""
        return exact_sum(self.domain.abs(value) for value in self.elements)

    def max_norm(self) -> Any:
        """Largest absolute value."""
        return max(self.domain.abs(value) for value in self.elements)

    def euclidean_norm_pow2(self, context: Optional[decimal.Context] = None) -> Any:
        """Sum of squared magnitudes."""
        context = check_context(context)
        return exact_sum((self.domain.abs_pow2(value, context) for value in self.elements), context=context)

    def euclidean_norm(self, precision: Any = None, scale: Any = None, rounding_mode: Any = None):
        """
        Euclidean length via the square-root calculator.

        Args:
            precision: Stopping precision in (0, 1) (default from settings)
            scale: Fractional digits of the result (default from settings)
            rounding_mode: Rounding used to set the scale (default from settings)

        Returns:
            Decimal
        """
        calculator = SquareRootCalculator(precision=precision, scale=scale, rounding_mode=rounding_mode)
        return calculator.sqrt(self.domain.to_decimal(self.euclidean_norm_pow2()))

    def taxicab_distance(self, other: Vector) -> Any:
        return self.subtract(other).taxicab_norm()

    def max_distance(self, other: Vector) -> Any:
        return self.subtract(other).max_norm()

    def euclidean_distance_pow2(self, other: Vector) -> Any:
        return self.subtract(other).euclidean_norm_pow2()

    def euclidean_distance(self, other: Vector, precision: Any = None, scale: Any = None,
                           rounding_mode: Any = None):
        return self.subtract(other).euclidean_norm(precision, scale, rounding_mode)

    # Output

    def to_string(self) -> str:
        """Convert to string."""
        return "<" + ", ".join(str(value) for value in self.elements) + ">"

    def to_tex(self) -> str:
        """Convert to LaTeX."""
        parts = ", ".join(_tex(value) for value in self.elements)
        return f"\\left\\langle {parts} \\right\\rangle"

    def to_numpy(self) -> np.ndarray:
        """Object-dtype NumPy array holding the exact elements."""
        array = np.empty(self.size, dtype=object)
        array[:] = list(self.elements)
        return array

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Vector({self.to_string()}, domain={self.domain!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return (
            self.domain == other.domain
            and self.size == other.size
            and all(self.domain.equals(a, b) for a, b in zip(self.elements, other.elements))
        )

    def __hash__(self) -> int:
        return hash((self.domain, self.elements))

    # Operators

    def __add__(self, other: Any) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> Vector:
        return self.negate()


def _tex(value: Any) -> str:
    to_tex = getattr(value, "to_tex", None)
    return to_tex() if callable(to_tex) else str(value)
