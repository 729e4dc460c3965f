"""Vectors, matrices, their builders and factories"""

from .builders import MatrixBuilder, VectorBuilder
from .factories import identity_matrix, zero_matrix, zero_vector
from .matrix import Matrix
from .vector import Vector

__all__ = [
    "Vector",
    "Matrix",
    "VectorBuilder",
    "MatrixBuilder",
    "zero_vector",
    "zero_matrix",
    "identity_matrix",
]
