"""Tests for the square-root calculator."""

import logging
import math
from decimal import Decimal

import pytest

from exactlinalg.core.errors import PreconditionError
from exactlinalg.number.rounding import RoundingMode
from exactlinalg.sqrt import (
    ScientificNotation,
    SquareRootCalculator,
    is_perfect_square,
    scientific_notation_for_sqrt,
    sqrt,
    sqrt_of_perfect_square,
)


@pytest.fixture
def calculator() -> SquareRootCalculator:
    return SquareRootCalculator()


class TestDefaults:
    """Test construction from settings."""

    def test_default_parameters(self, calculator):
        """Test the library defaults."""
        assert calculator.precision == Decimal("1E-10")
        assert calculator.scale == 10
        assert calculator.rounding_mode is RoundingMode.HALF_UP
        assert calculator.max_iterations == 100

    def test_explicit_parameters(self):
        """Test string precision and named rounding mode."""
        calc = SquareRootCalculator(precision="0.001", scale=3, rounding_mode="FLOOR", max_iterations=5)
        assert calc.precision == Decimal("0.001")
        assert calc.rounding_mode is RoundingMode.FLOOR
        assert calc.max_iterations == 5

    @pytest.mark.parametrize("kwargs", [
        {"precision": 0},
        {"precision": 1},
        {"precision": Decimal("1.5")},
        {"precision": Decimal("-0.1")},
        {"precision": "abc"},
        {"scale": -1},
        {"scale": 1.5},
        {"rounding_mode": "BOGUS"},
        {"rounding_mode": 9},
        {"max_iterations": 0},
    ])
    def test_invalid_parameters(self, kwargs):
        """Test that invalid parameters are precondition violations."""
        with pytest.raises(PreconditionError):
            SquareRootCalculator(**kwargs)


class TestSquareRoot:
    """Test Heron's iteration."""

    def test_bracketing_for_small_integers(self, calculator):
        """Test that sqrt(n) is within 0.002 of the true root for 0..100."""
        for n in range(101):
            assert abs(float(calculator.sqrt(n)) - math.sqrt(n)) < 0.002

    def test_perfect_squares_are_exact(self, calculator):
        """Test that squares of integers have exact roots."""
        for n in range(101):
            assert calculator.sqrt(n * n) == n
            assert calculator.sqrt_of_perfect_square(n * n) == n

    def test_zero(self, calculator):
        """Test that zero maps to zero."""
        assert calculator.sqrt(0) == 0
        assert calculator.sqrt(Decimal("0.000")) == 0

    def test_result_has_requested_scale(self):
        """Test scale and rounding of the result."""
        assert SquareRootCalculator(scale=4).sqrt(2) == Decimal("1.4142")
        assert SquareRootCalculator(scale=3, rounding_mode="UP").sqrt(2) == Decimal("1.415")
        assert SquareRootCalculator(scale=0).sqrt(2) == 1
        assert str(SquareRootCalculator(scale=3).sqrt(4)) == "2.000"

    def test_decimal_input(self):
        """Test a decimal radicand."""
        assert SquareRootCalculator(scale=1).sqrt(Decimal("2.25")) == Decimal("1.5")

    def test_large_value(self, calculator):
        """Test a root with more digits than the default context."""
        assert calculator.sqrt(10 ** 40) == 10 ** 20
        assert calculator.sqrt(12345678987654321 ** 2) == 12345678987654321

    def test_small_value(self):
        """Test a tiny radicand with a matching precision."""
        calc = SquareRootCalculator(precision=Decimal("1E-20"), scale=15)
        assert calc.sqrt(Decimal("1E-20")) == Decimal("1E-10")

    def test_iteration_limit(self):
        """Test that max_iterations bounds the work."""
        # seed 2, one step: (4 + 2) / 4
        assert SquareRootCalculator(max_iterations=1, scale=2).sqrt(2) == Decimal("1.5")

    def test_unnecessary_rounding(self):
        """Test that UNNECESSARY fails on irrational roots."""
        calc = SquareRootCalculator(scale=5, rounding_mode=RoundingMode.UNNECESSARY)
        assert calc.sqrt(0) == 0
        with pytest.raises(PreconditionError):
            calc.sqrt(2)

    @pytest.mark.parametrize("value", [-1, Decimal("-0.5"), "4", None, True, 4.0, Decimal("NaN")])
    def test_invalid_input(self, calculator, value):
        """Test that negatives and non-numbers are rejected."""
        with pytest.raises(PreconditionError):
            calculator.sqrt(value)

    def test_module_function(self):
        """Test the convenience function."""
        assert sqrt(2, scale=3) == Decimal("1.414")
        assert sqrt(Decimal("6.25"), precision="0.0001", scale=2, rounding_mode="DOWN") == Decimal("2.5")

    def test_logs_iterations(self, calculator, caplog):
        """Test that iterations are logged at debug level."""
        caplog.set_level(logging.DEBUG, logger="exactlinalg.sqrt")
        calculator.sqrt(2)
        assert "iteration 1" in caplog.text

    def test_perfect_square_skips_iteration(self, caplog):
        """Test that perfect-square ints bypass Heron's iteration."""
        caplog.set_level(logging.DEBUG, logger="exactlinalg.sqrt")
        calc = SquareRootCalculator(max_iterations=1, scale=2)
        assert calc.sqrt(10 ** 40) == 10 ** 20
        assert str(calc.sqrt(144)) == "12.00"
        assert "perfect square" in caplog.text
        assert "iteration" not in caplog.text

    def test_decimal_perfect_square_iterates(self, calculator, caplog):
        """Test that decimal radicands always use the iteration."""
        caplog.set_level(logging.DEBUG, logger="exactlinalg.sqrt")
        assert calculator.sqrt(Decimal(144)) == 12
        assert "iteration 1" in caplog.text


class TestPerfectSquares:
    """Test the integer fast path."""

    def test_is_perfect_square(self):
        """Test the predicate."""
        assert is_perfect_square(0)
        assert is_perfect_square(16)
        assert not is_perfect_square(15)
        assert not is_perfect_square(-4)

    def test_large_perfect_square(self):
        """Test an arbitrary-precision integer."""
        root = 3 ** 100
        assert sqrt_of_perfect_square(root * root) == root

    @pytest.mark.parametrize("value", [15, -4, Decimal(16), 16.0])
    def test_rejects_non_squares(self, value):
        """Test that non-squares and non-integers are rejected."""
        with pytest.raises(PreconditionError):
            sqrt_of_perfect_square(value)


class TestScientificNotation:
    """Test normalisation to mantissa * 100 ** exponent."""

    def test_large_value(self):
        """Test dividing out powers of 100."""
        notation = scientific_notation_for_sqrt(Decimal("12345"))
        assert notation.mantissa == Decimal("1.2345")
        assert notation.exponent == 2
        assert notation.to_decimal() == Decimal("12345")
        assert notation.seed() == Decimal(200)

    def test_large_mantissa_seed(self):
        """Test the seed for a mantissa of at least 10."""
        notation = scientific_notation_for_sqrt(50)
        assert notation == ScientificNotation(mantissa=Decimal(50), exponent=0)
        assert notation.seed() == Decimal(6)

    def test_small_value(self):
        """Test multiplying in powers of 100."""
        notation = scientific_notation_for_sqrt(Decimal("0.0004"))
        assert notation.mantissa == Decimal(4)
        assert notation.exponent == -2
        assert notation.to_decimal() == Decimal("0.0004")

    def test_zero(self):
        """Test that zero keeps exponent zero."""
        notation = scientific_notation_for_sqrt(0)
        assert notation.mantissa == 0
        assert notation.exponent == 0

    def test_mantissa_range(self):
        """Test that the mantissa lies in [0, 100)."""
        for value in (Decimal("0.01"), Decimal("99.99"), Decimal(100), Decimal("1E+51")):
            notation = scientific_notation_for_sqrt(value)
            assert 0 <= notation.mantissa < 100
            assert notation.to_decimal() == value

    def test_huge_exponents(self):
        """Test that extreme magnitudes are normalised in one step."""
        notation = scientific_notation_for_sqrt(Decimal("4E+2000000"))
        assert notation.mantissa == 4
        assert notation.exponent == 1000000
        notation = scientific_notation_for_sqrt(Decimal("2.5E-2000001"))
        assert notation.mantissa == 25
        assert notation.exponent == -1000001

    def test_negative(self):
        """Test that negative values are rejected."""
        with pytest.raises(PreconditionError):
            scientific_notation_for_sqrt(-1)
