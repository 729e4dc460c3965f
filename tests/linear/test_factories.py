"""Tests for the zero and identity factories."""

from decimal import Decimal

import pytest

from exactlinalg.core.errors import PreconditionError
from exactlinalg.linear.factories import identity_matrix, zero_matrix, zero_vector
from exactlinalg.linear.matrix import Matrix
from exactlinalg.linear.vector import Vector
from exactlinalg.number import DECIMALS, FRACTIONS, Fraction


class TestZeroFactories:
    """Test zero vectors and matrices."""

    def test_zero_vector(self):
        """Test an integer zero vector."""
        assert zero_vector(3) == Vector.of(0, 0, 0)

    def test_zero_vector_is_additive_identity(self, domain, make_vector):
        """Test v + 0 = v in every domain."""
        v = make_vector(3, domain)
        assert v.add(zero_vector(3, domain)) == v

    def test_zero_matrix(self):
        """Test a rational zero matrix."""
        m = zero_matrix(2, 3, FRACTIONS)
        assert m.shape == (2, 3)
        assert all(value == Fraction(0) for value in m.elements())
        assert m.domain == FRACTIONS

    def test_invalid_sizes(self):
        """Test that sizes must be positive."""
        with pytest.raises(PreconditionError):
            zero_vector(0)
        with pytest.raises(PreconditionError):
            zero_matrix(2, 0)
        with pytest.raises(PreconditionError):
            identity_matrix(-1)


class TestIdentityFactory:
    """Test identity matrices."""

    def test_identity(self):
        """Test a 3 x 3 integer identity."""
        assert identity_matrix(3) == Matrix.of([[1, 0, 0], [0, 1, 0], [0, 0, 1]])

    def test_identity_properties(self, domain):
        """Test predicates and determinant in every domain."""
        m = identity_matrix(4, domain)
        assert m.is_identity()
        assert m.is_diagonal()
        assert m.is_symmetric()
        assert m.is_invertible()
        assert domain.is_one(m.determinant())
        assert domain.equals(m.trace(), domain.coerce(4))

    def test_decimal_identity(self):
        """Test decimal entries."""
        assert identity_matrix(2, DECIMALS).element(1, 1) == Decimal(1)
