"""Scalar types, rounding modes and scalar domains"""

from .complex import RealComplexNumber, SimpleComplexNumber
from .domain import (
    DECIMALS,
    DOMAINS,
    FRACTIONS,
    INTEGERS,
    REAL_COMPLEX_NUMBERS,
    SIMPLE_COMPLEX_NUMBERS,
    ScalarDomain,
)
from .fraction import Fraction
from .rounding import RoundingMode, check_context

__all__ = [
    "Fraction",
    "SimpleComplexNumber",
    "RealComplexNumber",
    "RoundingMode",
    "check_context",
    "ScalarDomain",
    "INTEGERS",
    "DECIMALS",
    "FRACTIONS",
    "SIMPLE_COMPLEX_NUMBERS",
    "REAL_COMPLEX_NUMBERS",
    "DOMAINS",
]
