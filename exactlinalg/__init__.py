"""
exactlinalg - exact linear algebra over arbitrary-precision scalars

Immutable vectors and matrices generic over a scalar domain with:
- Exact arithmetic for int, Decimal, Fraction and complex scalars
- Norms, determinants and structural predicates
- Builders that enforce completeness
- An arbitrary-precision square-root calculator
"""

from .core.errors import (
    IllegalStateError,
    IncompleteBuilderError,
    LinearAlgebraError,
    MatrixNotSquareError,
    PreconditionError,
)
from .linear import (
    Matrix,
    MatrixBuilder,
    Vector,
    VectorBuilder,
    identity_matrix,
    zero_matrix,
    zero_vector,
)
from .number import (
    DECIMALS,
    FRACTIONS,
    INTEGERS,
    REAL_COMPLEX_NUMBERS,
    SIMPLE_COMPLEX_NUMBERS,
    Fraction,
    RealComplexNumber,
    RoundingMode,
    ScalarDomain,
    SimpleComplexNumber,
)
from .sqrt import ScientificNotation, SquareRootCalculator, sqrt

__version__ = "0.1.0"

__all__ = [
    "Vector",
    "Matrix",
    "VectorBuilder",
    "MatrixBuilder",
    "zero_vector",
    "zero_matrix",
    "identity_matrix",
    "ScalarDomain",
    "INTEGERS",
    "DECIMALS",
    "FRACTIONS",
    "SIMPLE_COMPLEX_NUMBERS",
    "REAL_COMPLEX_NUMBERS",
    "Fraction",
    "SimpleComplexNumber",
    "RealComplexNumber",
    "RoundingMode",
    "SquareRootCalculator",
    "ScientificNotation",
    "sqrt",
    "LinearAlgebraError",
    "PreconditionError",
    "IllegalStateError",
    "MatrixNotSquareError",
    "IncompleteBuilderError",
]
