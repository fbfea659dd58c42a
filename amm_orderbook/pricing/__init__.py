"""Constant-product pricing and order-book approximation."""

from .swap import FEE, FEE_MULTIPLIER, SwapQuote, get_amount_out
from .orderbook import (
    DEFAULT_NUM_SEGMENTS,
    Level,
    OrderBook,
    compute_bids,
    compute_order_book,
    invert_price,
)

__all__ = [
    "FEE",
    "FEE_MULTIPLIER",
    "SwapQuote",
    "get_amount_out",
    "DEFAULT_NUM_SEGMENTS",
    "Level",
    "OrderBook",
    "compute_bids",
    "compute_order_book",
    "invert_price",
]
