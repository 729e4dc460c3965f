"""
Immutable dense matrices over a scalar domain.

Cells are addressed by 1-based (row, column). The determinant is exact in
every domain unless a ``decimal.Context`` is passed:

1. triangular matrices use the product of the diagonal
2. 1 x 1 and 2 x 2 matrices use the closed forms
3. 3 x 3 matrices use the rule of Sarrus
4. larger matrices use the Leibniz formula (factorial time)
"""

from __future__ import annotations

import decimal
import itertools
from typing import Any, Iterable, Iterator, Optional, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import IllegalStateError, MatrixNotSquareError, PreconditionError, check_argument
from ..core.logging import get_operation_logger
from ..number.domain import INTEGERS, ScalarDomain, exact_sum
from ..number.rounding import check_context
from ..sqrt import SquareRootCalculator
from .vector import Vector, _tex


def inversions(permutation: Sequence[int]) -> int:
    """Number of pairs i < j with permutation[i] > permutation[j]."""
    count = 0
    for i in range(len(permutation)):
        for j in range(i + 1, len(permutation)):
            if permutation[i] > permutation[j]:
                count += 1
    return count


class Matrix(BaseModel):
    """
    Fixed-shape, 1-indexed matrix.

    Examples:
        >>> m = Matrix.of([[1, 2], [3, 4]])
        >>> m.determinant(), m.trace()
        (-2, 5)
        >>> m.transpose().to_string()
        '[[1, 3], [2, 4]]'
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    domain: ScalarDomain = Field(description="Scalar domain of the entries")
    table: tuple[tuple[Any, ...], ...] = Field(description="Entries in row-major order")

    def __init__(self, rows: Iterable[Iterable[Any]], domain: ScalarDomain = INTEGERS, **kwargs: Any):
        if not isinstance(domain, ScalarDomain):
            raise PreconditionError("invalid domain", expected="ScalarDomain", actual=type(domain).__name__)
        if rows is None:
            raise PreconditionError("rows must not be None")
        table = tuple(
            tuple(domain.coerce(value) for value in (row.elements if isinstance(row, Vector) else row))
            for row in rows
        )
        check_argument(len(table) > 0, "matrix must have at least one row", expected="row_size >= 1", actual=0)
        width = len(table[0])
        check_argument(width > 0, "matrix must have at least one column", expected="column_size >= 1", actual=0)
        for index, row in enumerate(table, start=1):
            check_argument(len(row) == width, f"row {index} has the wrong length", expected=width, actual=len(row))
        super().__init__(domain=domain, table=table, **kwargs)

    @classmethod
    def of(cls, rows: Iterable[Iterable[Any]], domain: ScalarDomain = INTEGERS) -> Matrix:
        """Matrix from a sequence of rows."""
        return cls(rows, domain=domain)

    @classmethod
    def builder(cls, row_size: int, column_size: int, domain: ScalarDomain = INTEGERS):
        """Create a MatrixBuilder for a matrix of the given shape."""
        from .builders import MatrixBuilder

        return MatrixBuilder(row_size, column_size, domain)

    # Access

    @property
    def row_size(self) -> int:
        return len(self.table)

    @property
    def column_size(self) -> int:
        return len(self.table[0])

    @property
    def shape(self) -> tuple[int, int]:
        return (self.row_size, self.column_size)

    @property
    def size(self) -> int:
        """Number of cells."""
        return self.row_size * self.column_size

    def _check_row_index(self, index: Any) -> int:
        check_argument(
            isinstance(index, int) and not isinstance(index, bool) and 1 <= index <= self.row_size,
            "row index out of range",
            expected=f"row index in [1, {self.row_size}]",
            actual=index,
        )
        return index

    def _check_column_index(self, index: Any) -> int:
        check_argument(
            isinstance(index, int) and not isinstance(index, bool) and 1 <= index <= self.column_size,
            "column index out of range",
            expected=f"column index in [1, {self.column_size}]",
            actual=index,
        )
        return index

    def element(self, row: int, column: int) -> Any:
        """Entry at (row, column)."""
        return self.table[self._check_row_index(row) - 1][self._check_column_index(column) - 1]

    def row(self, index: int) -> Vector:
        """Row ``index`` as a Vector."""
        return Vector(self.table[self._check_row_index(index) - 1], domain=self.domain)

    def column(self, index: int) -> Vector:
        """Column ``index`` as a Vector."""
        column = self._check_column_index(index) - 1
        return Vector((row[column] for row in self.table), domain=self.domain)

    def rows(self) -> tuple[Vector, ...]:
        return tuple(Vector(row, domain=self.domain) for row in self.table)

    def columns(self) -> tuple[Vector, ...]:
        return tuple(self.column(index) for index in range(1, self.column_size + 1))

    def cells(self) -> Iterator[tuple[int, int, Any]]:
        """(row, column, entry) triples in row-major order."""
        for row_index, row in enumerate(self.table, start=1):
            for column_index, value in enumerate(row, start=1):
                yield (row_index, column_index, value)

    def elements(self) -> tuple[Any, ...]:
        """All entries in row-major order."""
        return tuple(value for row in self.table for value in row)

    def _diagonal(self) -> list[Any]:
        return [self.table[i][i] for i in range(min(self.shape))]

    # Predicates

    def is_square(self) -> bool:
        return self.row_size == self.column_size

    def is_upper_triangular(self) -> bool:
        """Square with only zeros below the diagonal."""
        if not self.is_square():
            return False
        return all(self.domain.is_zero(value) for row, column, value in self.cells() if row > column)

    def is_lower_triangular(self) -> bool:
        """Square with only zeros above the diagonal."""
        if not self.is_square():
            return False
        return all(self.domain.is_zero(value) for row, column, value in self.cells() if row < column)

    def is_triangular(self) -> bool:
        return self.is_upper_triangular() or self.is_lower_triangular()

    def is_diagonal(self) -> bool:
        return self.is_upper_triangular() and self.is_lower_triangular()

    def is_identity(self) -> bool:
        return self.is_diagonal() and all(self.domain.is_one(value) for value in self._diagonal())

    def is_symmetric(self) -> bool:
        return self.is_square() and self == self.transpose()

    def is_skew_symmetric(self) -> bool:
        return self.is_square() and self == self.transpose().negate()

    def is_invertible(self) -> bool:
        """
        Square, with a determinant that is a unit of the domain.

        Integer and Gaussian-integer matrices need a determinant of 1, -1
        (or i, -i); the remaining domains only need a non-zero determinant.
        The test uses the unrounded determinant, so a decimal matrix whose
        rule-of-Sarrus result would round to zero is still invertible.
        """
        if not self.is_square():
            return False
        return self.domain.is_unit(self._determinant(None, rounded=False))

    def _require_square(self) -> None:
        if not self.is_square():
            raise MatrixNotSquareError(self.row_size, self.column_size)

    # Algebra

    def _check_same_shape(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            raise PreconditionError("expected a matrix", expected="Matrix", actual=type(other).__name__)
        check_argument(self.domain == other.domain, "matrix domains differ",
                       expected=self.domain, actual=other.domain)
        check_argument(self.shape == other.shape, "matrix shapes differ", expected=self.shape, actual=other.shape)
        return other

    def _new(self, rows: Iterable[Iterable[Any]]) -> Matrix:
        return Matrix(rows, domain=self.domain)

    def add(self, other: Matrix, context: Optional[decimal.Context] = None) -> Matrix:
        other = self._check_same_shape(other)
        context = check_context(context)
        return self._new(
            [self.domain.add(a, b, context) for a, b in zip(row, other_row)]
            for row, other_row in zip(self.table, other.table)
        )

    def subtract(self, other: Matrix, context: Optional[decimal.Context] = None) -> Matrix:
        other = self._check_same_shape(other)
        context = check_context(context)
        return self._new(
            [self.domain.subtract(a, b, context) for a, b in zip(row, other_row)]
            for row, other_row in zip(self.table, other.table)
        )

    def scalar_multiply(self, scalar: Any, context: Optional[decimal.Context] = None) -> Matrix:
        scalar = self.domain.coerce(scalar)
        context = check_context(context)
        return self._new([self.domain.multiply(scalar, value, context) for value in row] for row in self.table)

    def negate(self, context: Optional[decimal.Context] = None) -> Matrix:
        context = check_context(context)
        return self._new([self.domain.negate(value, context) for value in row] for row in self.table)

    def multiply_row_with_column(self, row: Vector, column: Vector, context: Optional[decimal.Context] = None) -> Any:
        """Dot product of a row vector with a column vector of equal size."""
        if not isinstance(row, Vector) or not isinstance(column, Vector):
            raise PreconditionError("expected vectors", expected="Vector",
                                    actual=f"{type(row).__name__}/{type(column).__name__}")
        check_argument(row.domain == self.domain and column.domain == self.domain, "vector domain differs",
                       expected=self.domain, actual=f"{row.domain}/{column.domain}")
        return row.dot_product(column, context)

    def multiply(self, other: Matrix, context: Optional[decimal.Context] = None) -> Matrix:
        """
        Matrix product.

        Raises:
            PreconditionError: If column_size differs from other.row_size
        """
        if not isinstance(other, Matrix):
            raise PreconditionError("expected a matrix", expected="Matrix", actual=type(other).__name__)
        check_argument(self.domain == other.domain, "matrix domains differ",
                       expected=self.domain, actual=other.domain)
        check_argument(self.column_size == other.row_size, "column size must equal the other row size",
                       expected=self.column_size, actual=other.row_size)
        context = check_context(context)
        rows = self.rows()
        columns = other.columns()
        return self._new(
            [self.multiply_row_with_column(row, column, context) for column in columns] for row in rows
        )

    def multiply_vector(self, vector: Vector, context: Optional[decimal.Context] = None) -> Vector:
        """
        Matrix-vector product.

        Raises:
            PreconditionError: If column_size differs from vector.size
        """
        if not isinstance(vector, Vector):
            raise PreconditionError("expected a vector", expected="Vector", actual=type(vector).__name__)
        check_argument(self.domain == vector.domain, "vector domain differs",
                       expected=self.domain, actual=vector.domain)
        check_argument(self.column_size == vector.size, "column size must equal the vector size",
                       expected=self.column_size, actual=vector.size)
        context = check_context(context)
        return Vector(
            (self.multiply_row_with_column(row, vector, context) for row in self.rows()),
            domain=self.domain,
        )

    def transpose(self) -> Matrix:
        return self._new(zip(*self.table))

    def minor(self, row: int, column: int) -> Matrix:
        """
        Submatrix without the given row and column, renumbered contiguously.

        Raises:
            PreconditionError: For out-of-range indices or a single row or column
        """
        row = self._check_row_index(row)
        column = self._check_column_index(column)
        check_argument(self.row_size > 1 and self.column_size > 1, "minor needs at least two rows and columns",
                       expected="shape >= 2 x 2", actual=f"{self.row_size} x {self.column_size}")
        return self._new(
            [value for column_index, value in enumerate(values, start=1) if column_index != column]
            for row_index, values in enumerate(self.table, start=1)
            if row_index != row
        )

    def trace(self, context: Optional[decimal.Context] = None) -> Any:
        """
        Sum of the diagonal entries.

        Raises:
            MatrixNotSquareError: If the matrix is not square
        """
        self._require_square()
        context = check_context(context)
        total = self.domain.zero()
        for value in self._diagonal():
            total = self.domain.add(total, value, context)
        return total

    # Determinant

    def determinant(self, context: Optional[decimal.Context] = None) -> Any:
        """
        Determinant, exact unless a context bounds decimal arithmetic.

        Raises:
            MatrixNotSquareError: If the matrix is not square
        """
        return self._determinant(check_context(context), rounded=True)

    def _determinant(self, context: Optional[decimal.Context], rounded: bool) -> Any:
        self._require_square()
        size = self.row_size
        log = get_operation_logger(__name__, "determinant", shape=self.shape, domain=self.domain.name)
        if self.is_triangular():
            log.debug("%d x %d triangular matrix: diagonal product", size, size)
            return self._diagonal_product(context)
        if size == 2:
            (a, b), (c, d) = self.table
            domain = self.domain
            return domain.subtract(domain.multiply(a, d, context), domain.multiply(b, c, context), context)
        if size == 3:
            log.debug("3 x 3 matrix: rule of Sarrus")
            determinant = self._sarrus(context)
            return self.domain.round_determinant(determinant, self.table[0][0]) if rounded else determinant
        log.debug("%d x %d matrix: Leibniz formula", size, size)
        return self.leibniz_formula(context)

    def _diagonal_product(self, context: Optional[decimal.Context] = None) -> Any:
        product = self.domain.one()
        for value in self._diagonal():
            product = self.domain.multiply(product, value, context)
        return product

    def leibniz_formula(self, context: Optional[decimal.Context] = None) -> Any:
        """
        Sum over all permutations s of sign(s) * prod(M[s(i), i]).

        Raises:
            MatrixNotSquareError: If the matrix is not square
        """
        self._require_square()
        context = check_context(context)
        domain = self.domain
        total = domain.zero()
        for permutation in itertools.permutations(range(self.row_size)):
            product = domain.one()
            for column, row in enumerate(permutation):
                product = domain.multiply(product, self.table[row][column], context)
            if inversions(permutation) % 2 == 0:
                total = domain.add(total, product, context)
            else:
                total = domain.subtract(total, product, context)
        return total

    def rule_of_sarrus(self, context: Optional[decimal.Context] = None) -> Any:
        """
        Closed-form determinant of a 3 x 3 matrix.

        Decimal results are quantized to the scale of the (1, 1) entry.

        Raises:
            MatrixNotSquareError: If the matrix is not square
            IllegalStateError: If the matrix is not 3 x 3
        """
        self._require_square()
        if self.row_size != 3:
            raise IllegalStateError(f"rule of Sarrus needs a 3 x 3 matrix but actual {self.row_size} x "
                                    f"{self.column_size}")
        return self.domain.round_determinant(self._sarrus(check_context(context)), self.table[0][0])

    def _sarrus(self, context: Optional[decimal.Context]) -> Any:
        domain = self.domain
        (a11, a12, a13), (a21, a22, a23), (a31, a32, a33) = self.table

        def triple(x: Any, y: Any, z: Any) -> Any:
            return domain.multiply(domain.multiply(x, y, context), z, context)

        def sum3(x: Any, y: Any, z: Any) -> Any:
            return domain.add(domain.add(x, y, context), z, context)

        forward = sum3(triple(a11, a22, a33), triple(a12, a23, a31), triple(a13, a21, a32))
        backward = sum3(triple(a31, a22, a13), triple(a32, a23, a11), triple(a33, a21, a12))
        return domain.subtract(forward, backward, context)

    # Norms

    def max_abs_column_sum_norm(self) -> Any:
        """Largest column sum of absolute values."""
        return max(
            exact_sum(self.domain.abs(row[column]) for row in self.table)
            for column in range(self.column_size)
        )

    def max_abs_row_sum_norm(self) -> Any:
        """Largest row sum of absolute values."""
        return max(exact_sum(self.domain.abs(value) for value in row) for row in self.table)

    def frobenius_norm_pow2(self, context: Optional[decimal.Context] = None) -> Any:
        """Sum of squared magnitudes of all entries."""
        context = check_context(context)
        return exact_sum((self.domain.abs_pow2(value, context) for value in self.elements()), context=context)

    def frobenius_norm(self, precision: Any = None, scale: Any = None, rounding_mode: Any = None):
        """Square root of frobenius_norm_pow2 (Decimal)."""
        calculator = SquareRootCalculator(precision=precision, scale=scale, rounding_mode=rounding_mode)
        return calculator.sqrt(self.domain.to_decimal(self.frobenius_norm_pow2()))

    def max_norm(self) -> Any:
        """Largest absolute entry."""
        return max(self.domain.abs(value) for value in self.elements())

    # Output

    def to_string(self) -> str:
        """Convert to string."""
        rows_str = ", ".join("[" + ", ".join(str(value) for value in row) + "]" for row in self.table)
        return f"[{rows_str}]"

    def to_tex(self) -> str:
        """Convert to LaTeX (pmatrix)."""
        rows_tex = " \\\\ ".join(" & ".join(_tex(value) for value in row) for row in self.table)
        return f"\\begin{{pmatrix}} {rows_tex} \\end{{pmatrix}}"

    def to_numpy(self) -> np.ndarray:
        """Object-dtype NumPy array holding the exact entries."""
        array = np.empty(self.shape, dtype=object)
        for row, column, value in self.cells():
            array[row - 1, column - 1] = value
        return array

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Matrix({self.to_string()}, domain={self.domain!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self.domain == other.domain
            and self.shape == other.shape
            and all(self.domain.equals(a, b) for a, b in zip(self.elements(), other.elements()))
        )

    def __hash__(self) -> int:
        return hash((self.domain, self.table))

    # Operators

    def __add__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> Matrix:
        return self.negate()

    def __matmul__(self, other: Any):
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, Vector):
            return self.multiply_vector(other)
        return NotImplemented
