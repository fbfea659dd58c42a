"""Approximate order book derived from constant-product pair reserves.

The curve is walked outward from the current price in equal increments of one
reserve. Each level reports the increment and the average price of filling
everything up to that depth.
"""

from dataclasses import dataclass, field
from decimal import Decimal, localcontext

from ..shared.price import (
    ARITHMETIC_CONTEXT,
    NAN,
    DecimalLike,
    divide,
    format_decimal,
    format_quotient,
    is_zero,
    to_decimal,
)
from .swap import get_amount_out

DEFAULT_NUM_SEGMENTS = 20

# (amount, price) as decimal strings
Level = tuple[str, str]


@dataclass
class OrderBook:
    """Bid and ask levels ordered by increasing depth."""

    bids: list[Level] = field(default_factory=list)
    asks: list[Level] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.bids and not self.asks

    def to_dict(self) -> dict:
        return {
            "bids": [list(level) for level in self.bids],
            "asks": [list(level) for level in self.asks],
        }


def _validate_num_segments(num_segments: int) -> None:
    if isinstance(num_segments, bool) or not isinstance(num_segments, int):
        raise ValueError(f"num_segments must be an integer, got {num_segments!r}")
    if num_segments < 1:
        raise ValueError(f"num_segments must be at least 1, got {num_segments}")


def compute_bids(
    base_reserves: Decimal,
    quote_reserves: Decimal,
    num_segments: int,
) -> list[Level]:
    """Walk the curve selling base for quote in ``num_segments`` steps.

    Every step restarts from the pool's current reserves: the state before
    step ``i`` is the quote for ``(i - 1) * increment``, not the state left by
    step ``i - 1``. The first step starts from the untouched reserves.

    An increment that rounds to zero makes every price ``0 / 0``, written
    as ``"NaN"``.

    Returns:
        ``num_segments`` levels of ``(increment, amount_out / amount_in)``
    """
    _validate_num_segments(num_segments)

    levels: list[Level] = []
    with localcontext(ARITHMETIC_CONTEXT):
        increment = divide(base_reserves, Decimal(num_segments))
        increment_str = format_decimal(increment)

        for i in range(1, num_segments + 1):
            amount_in = increment * i
            if i == 1:
                reserves_in, reserves_out = base_reserves, quote_reserves
            else:
                before = get_amount_out(
                    amount_in - increment, base_reserves, quote_reserves
                )
                reserves_in = before.reserves_in_after
                reserves_out = before.reserves_out_after

            amount_out = get_amount_out(increment, reserves_in, reserves_out).amount_out
            levels.append((increment_str, format_quotient(amount_out, amount_in)))

    return levels


def invert_price(price: str) -> str:
    """Return ``1 / price`` for a decimal price string.

    A ``"0"`` price inverts to ``"Infinity"`` and ``"Infinity"`` back to
    ``"0"``; ``"NaN"`` stays ``"NaN"``.
    """
    value = Decimal(price)
    if value.is_nan():
        return NAN
    if value.is_infinite():
        return "0"
    return format_quotient(Decimal(1), value)


def compute_order_book(
    base_reserves: DecimalLike,
    quote_reserves: DecimalLike,
    num_segments: int = DEFAULT_NUM_SEGMENTS,
) -> OrderBook:
    """Build bids and asks for a pair, both priced in quote per base.

    Bids sell base into the pool. Asks sell quote into the pool and have
    their prices inverted so both sides share the same unit. A pair with an
    empty reserve has no curve and yields an empty book.

    Args:
        base_reserves: Pool balance of the base token
        quote_reserves: Pool balance of the quote token
        num_segments: Levels per side

    Raises:
        ValueError: If a reserve is negative or not a number, or
            num_segments < 1
    """
    base = to_decimal(base_reserves)
    quote = to_decimal(quote_reserves)
    _validate_num_segments(num_segments)
    if base < 0 or quote < 0:
        raise ValueError(f"Reserves must be non-negative, got {base} and {quote}")

    if is_zero(base) or is_zero(quote):
        return OrderBook()

    bids = compute_bids(base, quote, num_segments)
    asks = [
        (amount, invert_price(price))
        for amount, price in compute_bids(quote, base, num_segments)
    ]
    return OrderBook(bids=bids, asks=asks)
