"""Decimal arithmetic and formatting shared by the pricing and API modules."""

from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Union

# Number of decimal places kept by every division.
DIVISION_PLACES = 20

# Wide enough that addition, subtraction and multiplication of reserve-sized
# values stay exact; only division rounds.
ARITHMETIC_CONTEXT = Context(prec=200, rounding=ROUND_HALF_UP)

_DIVISION_QUANTUM = Decimal(1).scaleb(-DIVISION_PLACES)

# Exponent bounds outside of which strings use exponential notation.
EXPONENTIAL_AT_LOW = -7
EXPONENTIAL_AT_HIGH = 21

# Strings for quotients with a zero denominator
INFINITY = "Infinity"
NAN = "NaN"

DecimalLike = Union[Decimal, int, str, float]


def to_decimal(value: DecimalLike) -> Decimal:
    """Convert a number or numeric string to a Decimal.

    Floats go through their shortest repr so ``0.1`` becomes ``Decimal("0.1")``.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, Decimal):
        result = value
    else:
        if isinstance(value, float):
            value = repr(value)
        try:
            result = Decimal(value)
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"Invalid decimal value: {value!r}") from e

    if not result.is_finite():
        raise ValueError(f"Decimal value must be finite, got {value!r}")
    return result


def divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide and round the quotient to DIVISION_PLACES, half up.

    Raises:
        ZeroDivisionError: If denominator is zero
    """
    if denominator == 0:
        raise ZeroDivisionError("division by zero")
    quotient = ARITHMETIC_CONTEXT.divide(numerator, denominator)
    return quotient.quantize(_DIVISION_QUANTUM, context=ARITHMETIC_CONTEXT)


def format_decimal(value: Decimal) -> str:
    """Format a Decimal as the shortest plain or exponential string.

    Trailing zeros are dropped. Values whose exponent is at or beyond the
    EXPONENTIAL_AT bounds are written as ``1.5e+21`` / ``1e-7``.
    """
    if value.is_zero():
        return "0"

    normalized = value.normalize(ARITHMETIC_CONTEXT)
    exponent = normalized.adjusted()
    if EXPONENTIAL_AT_LOW < exponent < EXPONENTIAL_AT_HIGH:
        return format(normalized, "f")

    sign, digits, _ = normalized.as_tuple()
    coefficient = "".join(str(d) for d in digits)
    if len(coefficient) > 1:
        coefficient = f"{coefficient[0]}.{coefficient[1:]}"
    exp_sign = "+" if exponent >= 0 else "-"
    return f"{'-' if sign else ''}{coefficient}e{exp_sign}{abs(exponent)}"


def is_zero(value: Decimal) -> bool:
    """Check if a decimal quantity is zero."""
    return value.is_zero()


def format_quotient(numerator: Decimal, denominator: Decimal) -> str:
    """Divide and format, writing a zero denominator out as a special value.

    ``x / 0`` gives ``"Infinity"`` (``"-Infinity"`` for negative ``x``) and
    ``0 / 0`` gives ``"NaN"``.
    """
    if denominator.is_zero():
        if numerator.is_zero():
            return NAN
        return f"-{INFINITY}" if numerator < 0 else INFINITY
    return format_decimal(divide(numerator, denominator))
