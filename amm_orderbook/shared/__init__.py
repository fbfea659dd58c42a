"""Shared utilities used across the pricing, API and server modules."""

from .price import (
    ARITHMETIC_CONTEXT,
    DIVISION_PLACES,
    DecimalLike,
    INFINITY,
    NAN,
    divide,
    format_decimal,
    format_quotient,
    is_zero,
    to_decimal,
)

__all__ = [
    "ARITHMETIC_CONTEXT",
    "DIVISION_PLACES",
    "DecimalLike",
    "INFINITY",
    "NAN",
    "divide",
    "format_decimal",
    "format_quotient",
    "is_zero",
    "to_decimal",
]
