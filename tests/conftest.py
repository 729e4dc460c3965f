"""
Shared pytest fixtures for the exactlinalg test suite.

This module provides:
- A seeded random source and factories for random vectors and matrices
- Scalar generators for every domain
- Settings and logger isolation helpers
"""

import logging
import random
from decimal import Decimal
from typing import Any, Callable

import pytest

from exactlinalg.core.config import get_settings
from exactlinalg.core.logging import LIBRARY_LOGGER
from exactlinalg.linear import Matrix, MatrixBuilder, Vector, VectorBuilder
from exactlinalg.number import (
    DECIMALS,
    FRACTIONS,
    INTEGERS,
    REAL_COMPLEX_NUMBERS,
    SIMPLE_COMPLEX_NUMBERS,
    Fraction,
    RealComplexNumber,
    ScalarDomain,
    SimpleComplexNumber,
)


def random_scalar(rng: random.Random, domain: ScalarDomain, bound: int = 9) -> Any:
    """Random scalar of the domain with integer or two-digit decimal parts in [-bound, bound]."""
    def integer() -> int:
        return rng.randint(-bound, bound)

    def decimal() -> Decimal:
        return Decimal(rng.randint(-bound * 100, bound * 100)).scaleb(-2)

    if domain == INTEGERS:
        return integer()
    if domain == DECIMALS:
        return decimal()
    if domain == FRACTIONS:
        return Fraction(integer(), rng.randint(1, bound))
    if domain == SIMPLE_COMPLEX_NUMBERS:
        return SimpleComplexNumber(integer(), integer())
    return RealComplexNumber(decimal(), decimal())


@pytest.fixture(
    params=[INTEGERS, DECIMALS, FRACTIONS, SIMPLE_COMPLEX_NUMBERS, REAL_COMPLEX_NUMBERS],
    ids=lambda domain: domain.name,
)
def domain(request) -> ScalarDomain:
    """Every scalar domain in turn."""
    return request.param


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(20240229)


@pytest.fixture
def make_vector(rng) -> Callable[..., Vector]:
    """Factory for random vectors built through VectorBuilder."""
    def _make(size: int, domain: ScalarDomain = INTEGERS, bound: int = 9) -> Vector:
        builder = VectorBuilder(size, domain)
        for _ in range(size):
            builder.put(random_scalar(rng, domain, bound))
        return builder.build()
    return _make


@pytest.fixture
def make_matrix(rng) -> Callable[..., Matrix]:
    """Factory for random matrices built through MatrixBuilder."""
    def _make(row_size: int, column_size: int, domain: ScalarDomain = INTEGERS, bound: int = 9) -> Matrix:
        builder = MatrixBuilder(row_size, column_size, domain)
        for row in range(1, row_size + 1):
            for column in range(1, column_size + 1):
                builder.put(row, column, random_scalar(rng, domain, bound))
        return builder.build()
    return _make


@pytest.fixture
def make_triangular_matrix(rng) -> Callable[..., Matrix]:
    """Factory for random upper or lower triangular square matrices."""
    def _make(size: int, domain: ScalarDomain = INTEGERS, upper: bool = True, bound: int = 9) -> Matrix:
        builder = MatrixBuilder(size, size, domain)
        for row in range(1, size + 1):
            for column in range(1, size + 1):
                keep = column >= row if upper else column <= row
                builder.put(row, column, random_scalar(rng, domain, bound) if keep else domain.zero())
        return builder.build()
    return _make


@pytest.fixture
def fresh_settings():
    """Clear the cached settings before and after a test that changes the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def library_logger():
    """The library logger, restored to its import-time state afterwards."""
    logger = logging.getLogger(LIBRARY_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
