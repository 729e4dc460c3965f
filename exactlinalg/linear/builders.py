"""
Builders: mutable staging for immutable vectors and matrices.

A builder is created with its declared size, populated with ``put`` calls
(overwriting is allowed) and consumed by ``build()``, which checks that every
position holds a value. Builders are single-use: once built, any further
``put`` or ``build`` raises IllegalStateError.

Example:
    >>> builder = VectorBuilder(3)
    >>> builder.put(1).put(2).put(3, 7).build().to_string()
    '<1, 2, 7>'
"""

from __future__ import annotations

from typing import Any, Optional

from ..core.errors import IllegalStateError, IncompleteBuilderError, PreconditionError, check_argument
from ..core.logging import get_logger
from ..number.domain import INTEGERS, ScalarDomain
from .matrix import Matrix
from .vector import Vector

logger = get_logger(__name__)


def _check_size(value: Any, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise PreconditionError(f"invalid {name}", expected=f"{name} >= 1", actual=value)
    return value


def _check_domain(domain: Any) -> ScalarDomain:
    if not isinstance(domain, ScalarDomain):
        raise PreconditionError("invalid domain", expected="ScalarDomain", actual=type(domain).__name__)
    return domain


def _check_index(index: Any, upper: int, name: str) -> int:
    check_argument(
        isinstance(index, int) and not isinstance(index, bool) and 1 <= index <= upper,
        f"{name} out of range",
        expected=f"{name} in [1, {upper}]",
        actual=index,
    )
    return index


class _Builder:
    """Shared staging state and single-use bookkeeping."""

    def __init__(self, domain: ScalarDomain):
        self._domain = _check_domain(domain)
        self._staged: dict[Any, Any] = {}
        self._built = False

    @property
    def domain(self) -> ScalarDomain:
        return self._domain

    def _check_open(self) -> None:
        if self._built:
            raise IllegalStateError(f"{type(self).__name__} has already been built")

    def _positions(self) -> list:
        raise NotImplementedError

    def missing(self) -> list:
        """Positions that do not hold a value yet."""
        return [position for position in self._positions() if position not in self._staged]

    def is_complete(self) -> bool:
        return not self.missing()

    def put_all(self, element: Any):
        """Set every position to ``element``, overwriting staged values."""
        self._check_open()
        value = self._domain.coerce(element)
        for position in self._positions():
            self._staged[position] = value
        return self

    def fill_remaining(self, element: Any):
        """Set every position without a value to ``element``."""
        self._check_open()
        value = self._domain.coerce(element)
        for position in self.missing():
            self._staged[position] = value
        return self

    def _freeze(self) -> list:
        self._check_open()
        missing = self.missing()
        if missing:
            raise IncompleteBuilderError(missing)
        self._built = True
        values = [self._staged[position] for position in self._positions()]
        self._staged = {}
        return values


class VectorBuilder(_Builder):
    """
    Staging area for a Vector of fixed size.

    ``put(element)`` fills the lowest index without a value;
    ``put(index, element)`` sets an explicit 1-based index.
    """

    def __init__(self, size: int, domain: ScalarDomain = INTEGERS):
        self._size = _check_size(size, "size")
        super().__init__(domain)

    @property
    def size(self) -> int:
        return self._size

    def _positions(self) -> list:
        return list(range(1, self._size + 1))

    def put(self, *args: Any) -> VectorBuilder:
        """
        Stage an element.

        Args:
            *args: ``(element)`` or ``(index, element)``

        Raises:
            IllegalStateError: If ``put(element)`` finds no unfilled index
        """
        self._check_open()
        if len(args) == 1:
            missing = self.missing()
            if not missing:
                raise IllegalStateError(f"vector of size {self._size} is already full")
            index, element = missing[0], args[0]
        elif len(args) == 2:
            index, element = args
            _check_index(index, self._size, "index")
        else:
            raise PreconditionError("invalid put arguments", expected="(element) or (index, element)",
                                    actual=f"{len(args)} arguments")
        self._staged[index] = self._domain.coerce(element)
        return self

    def element(self, index: int) -> Optional[Any]:
        """Staged value at ``index`` or None."""
        self._check_open()
        _check_index(index, self._size, "index")
        return self._staged.get(index)

    def build(self) -> Vector:
        """
        Freeze the staged values into a Vector.

        Raises:
            IncompleteBuilderError: If any index has no value
        """
        vector = Vector(self._freeze(), domain=self._domain)
        logger.debug("built %s vector of size %d", self._domain, self._size)
        return vector


class MatrixBuilder(_Builder):
    """Staging area for a Matrix of fixed shape, addressed by 1-based (row, column)."""

    def __init__(self, row_size: int, column_size: int, domain: ScalarDomain = INTEGERS):
        self._row_size = _check_size(row_size, "row_size")
        self._column_size = _check_size(column_size, "column_size")
        super().__init__(domain)

    @property
    def row_size(self) -> int:
        return self._row_size

    @property
    def column_size(self) -> int:
        return self._column_size

    def _positions(self) -> list:
        return [
            (row, column)
            for row in range(1, self._row_size + 1)
            for column in range(1, self._column_size + 1)
        ]

    def _check_cell(self, row: int, column: int) -> tuple[int, int]:
        _check_index(row, self._row_size, "row index")
        _check_index(column, self._column_size, "column index")
        return (row, column)

    def put(self, row: int, column: int, element: Any) -> MatrixBuilder:
        """Stage ``element`` at (row, column)."""
        self._check_open()
        cell = self._check_cell(row, column)
        self._staged[cell] = self._domain.coerce(element)
        return self

    def element(self, row: int, column: int) -> Optional[Any]:
        """Staged value at (row, column) or None."""
        self._check_open()
        return self._staged.get(self._check_cell(row, column))

    def build(self) -> Matrix:
        """
        Freeze the staged values into a Matrix.

        Raises:
            IncompleteBuilderError: If any cell has no value
        """
        values = self._freeze()
        width = self._column_size
        rows = [values[start:start + width] for start in range(0, len(values), width)]
        matrix = Matrix(rows, domain=self._domain)
        logger.debug("built %s matrix of shape %d x %d", self._domain, self._row_size, self._column_size)
        return matrix
