"""Zero and identity factories, built through the builders."""

from ..number.domain import INTEGERS, ScalarDomain
from .builders import MatrixBuilder, VectorBuilder
from .matrix import Matrix
from .vector import Vector


def zero_vector(size: int, domain: ScalarDomain = INTEGERS) -> Vector:
    """Vector of ``size`` zeros."""
    return VectorBuilder(size, domain).put_all(domain.zero()).build()


def zero_matrix(row_size: int, column_size: int, domain: ScalarDomain = INTEGERS) -> Matrix:
    """Matrix of the given shape filled with zeros."""
    return MatrixBuilder(row_size, column_size, domain).put_all(domain.zero()).build()


def identity_matrix(size: int, domain: ScalarDomain = INTEGERS) -> Matrix:
    """Square matrix with ones on the diagonal and zeros elsewhere."""
    builder = MatrixBuilder(size, size, domain)
    for index in range(1, size + 1):
        builder.put(index, index, domain.one())
    return builder.fill_remaining(domain.zero()).build()
