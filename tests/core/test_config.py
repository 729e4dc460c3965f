"""
Configuration tests.

Tests for settings defaults and environment overrides.
"""

from decimal import Decimal

from exactlinalg.core.config import Settings, get_settings
from exactlinalg.number.rounding import RoundingMode
from exactlinalg.sqrt import SquareRootCalculator


def test_defaults():
    """Test default settings"""
    config = Settings(_env_file=None)
    assert config.SQRT_PRECISION == Decimal("1E-10")
    assert config.SQRT_SCALE == 10
    assert config.SQRT_ROUNDING_MODE == "HALF_UP"
    assert config.SQRT_MAX_ITERATIONS == 100
    assert config.WORKING_PRECISION == 34
    assert config.LOG_LEVEL == "WARNING"
    assert config.LOG_FORMAT == "text"
    assert config.LOG_FILE is None


def test_get_settings_is_cached(fresh_settings):
    """Test that get_settings returns one instance"""
    assert get_settings() is get_settings()


def test_environment_override(fresh_settings, monkeypatch):
    """Test that EXACTLINALG_ variables override defaults"""
    monkeypatch.setenv("EXACTLINALG_SQRT_SCALE", "4")
    monkeypatch.setenv("EXACTLINALG_SQRT_PRECISION", "0.001")
    monkeypatch.setenv("EXACTLINALG_SQRT_ROUNDING_MODE", "DOWN")
    get_settings.cache_clear()

    config = get_settings()
    assert config.SQRT_SCALE == 4
    assert config.SQRT_PRECISION == Decimal("0.001")

    calculator = SquareRootCalculator()
    assert calculator.scale == 4
    assert calculator.rounding_mode is RoundingMode.DOWN
    assert calculator.sqrt(2) == Decimal("1.4142")


def test_explicit_arguments_win(fresh_settings, monkeypatch):
    """Test that constructor arguments take precedence over settings"""
    monkeypatch.setenv("EXACTLINALG_SQRT_SCALE", "4")
    get_settings.cache_clear()

    assert SquareRootCalculator(scale=2).scale == 2
