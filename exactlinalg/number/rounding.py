"""
Rounding modes for scale-fixing operations.

The eight standard half-adjustment rules, mapped onto the ``decimal`` module.
"""

from __future__ import annotations

import decimal
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from ..core.errors import PreconditionError

# Unbounded precision: add, subtract, multiply and quantize never round.
EXACT_CONTEXT = decimal.Context(
    prec=decimal.MAX_PREC,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)


class RoundingMode(str, Enum):
    """Rounding rule applied when a decimal result is set to a fixed scale."""

    UP = "UP"
    DOWN = "DOWN"
    CEILING = "CEILING"
    FLOOR = "FLOOR"
    HALF_UP = "HALF_UP"
    HALF_DOWN = "HALF_DOWN"
    HALF_EVEN = "HALF_EVEN"
    UNNECESSARY = "UNNECESSARY"

    @classmethod
    def of(cls, value: Any) -> RoundingMode:
        """
        Resolve a rounding mode from a member, a name, a ``decimal.ROUND_*``
        constant or an ordinal code in ``[0, 7]``.

        Raises:
            PreconditionError: If the value names no valid rounding mode
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise PreconditionError("invalid rounding mode", expected="one of 8 rounding modes", actual=value)
        if isinstance(value, int):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise PreconditionError("invalid rounding mode code", expected="code in [0, 7]", actual=value)
        if isinstance(value, str):
            name = value.upper()
            if name.startswith("ROUND_"):
                name = name[len("ROUND_"):]
            if name in cls.__members__:
                return cls[name]
        raise PreconditionError("invalid rounding mode", expected="one of 8 rounding modes", actual=value)

    @property
    def decimal_rounding(self) -> str:
        """Equivalent ``decimal`` module constant (UNNECESSARY rounds nothing)."""
        return _DECIMAL_ROUNDING[self]

    def set_scale(self, value: Decimal, scale: int) -> Decimal:
        """
        Return ``value`` with exactly ``scale`` fractional digits.

        Raises:
            PreconditionError: For UNNECESSARY when digits would be discarded
        """
        quantum = Decimal(1).scaleb(-scale)
        if self is RoundingMode.UNNECESSARY:
            rounded = value.quantize(quantum, rounding=decimal.ROUND_DOWN, context=EXACT_CONTEXT)
            if rounded != value:
                raise PreconditionError(
                    "rounding necessary", expected=f"value representable at scale {scale}", actual=value
                )
            return rounded
        return value.quantize(quantum, rounding=self.decimal_rounding, context=EXACT_CONTEXT)


_DECIMAL_ROUNDING = {
    RoundingMode.UP: decimal.ROUND_UP,
    RoundingMode.DOWN: decimal.ROUND_DOWN,
    RoundingMode.CEILING: decimal.ROUND_CEILING,
    RoundingMode.FLOOR: decimal.ROUND_FLOOR,
    RoundingMode.HALF_UP: decimal.ROUND_HALF_UP,
    RoundingMode.HALF_DOWN: decimal.ROUND_HALF_DOWN,
    RoundingMode.HALF_EVEN: decimal.ROUND_HALF_EVEN,
    RoundingMode.UNNECESSARY: decimal.ROUND_DOWN,
}


def check_context(context: Any) -> Optional[decimal.Context]:
    """
    Validate an optional ``decimal.Context`` that bounds decimal arithmetic.

    None means exact arithmetic through :data:`EXACT_CONTEXT`.

    Raises:
        PreconditionError: If the value is neither None nor a Context
    """
    if context is not None and not isinstance(context, decimal.Context):
        raise PreconditionError("invalid context", expected="decimal.Context or None", actual=type(context).__name__)
    return context
