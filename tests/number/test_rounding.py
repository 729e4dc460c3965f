"""Tests for RoundingMode."""

import decimal
from decimal import Decimal

import pytest

from exactlinalg.core.errors import PreconditionError
from exactlinalg.number.rounding import RoundingMode


class TestRoundingModeResolution:
    """Test RoundingMode.of."""

    def test_eight_modes(self):
        """Test that exactly eight modes exist."""
        assert len(RoundingMode) == 8

    @pytest.mark.parametrize("value, expected", [
        (RoundingMode.FLOOR, RoundingMode.FLOOR),
        ("HALF_UP", RoundingMode.HALF_UP),
        ("half_even", RoundingMode.HALF_EVEN),
        (decimal.ROUND_CEILING, RoundingMode.CEILING),
        (0, RoundingMode.UP),
        (4, RoundingMode.HALF_UP),
        (7, RoundingMode.UNNECESSARY),
    ])
    def test_valid_values(self, value, expected):
        """Test members, names, decimal constants and codes."""
        assert RoundingMode.of(value) is expected

    @pytest.mark.parametrize("value", [8, -1, "SIDEWAYS", None, True, 1.0])
    def test_invalid_values(self, value):
        """Test that anything else is a precondition violation."""
        with pytest.raises(PreconditionError):
            RoundingMode.of(value)


class TestSetScale:
    """Test fixing the scale of a decimal."""

    @pytest.mark.parametrize("mode, value, expected", [
        (RoundingMode.UP, "2.341", "2.35"),
        (RoundingMode.DOWN, "-2.349", "-2.34"),
        (RoundingMode.CEILING, "2.341", "2.35"),
        (RoundingMode.FLOOR, "-2.341", "-2.35"),
        (RoundingMode.HALF_UP, "2.345", "2.35"),
        (RoundingMode.HALF_DOWN, "2.345", "2.34"),
        (RoundingMode.HALF_EVEN, "2.345", "2.34"),
        (RoundingMode.HALF_EVEN, "2.355", "2.36"),
    ])
    def test_rounding(self, mode, value, expected):
        """Test each rounding rule at scale 2."""
        result = mode.set_scale(Decimal(value), 2)
        assert result == Decimal(expected)
        assert result.as_tuple().exponent == -2

    def test_pads_with_zeros(self):
        """Test that a larger scale appends zeros."""
        assert str(RoundingMode.HALF_UP.set_scale(Decimal(2), 3)) == "2.000"

    def test_unnecessary_when_exact(self):
        """Test that UNNECESSARY accepts values representable at the scale."""
        assert RoundingMode.UNNECESSARY.set_scale(Decimal("2.50"), 1) == Decimal("2.5")

    def test_unnecessary_when_rounding_needed(self):
        """Test that UNNECESSARY refuses to discard digits."""
        with pytest.raises(PreconditionError):
            RoundingMode.UNNECESSARY.set_scale(Decimal("2.55"), 1)

    def test_long_values_are_not_truncated(self):
        """Test that quantizing keeps more than 28 significant digits."""
        value = Decimal("1" * 40 + ".5")
        assert RoundingMode.HALF_UP.set_scale(value, 0) == Decimal("1" * 39 + "2")
