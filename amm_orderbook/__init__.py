"""AMM order book - approximate order books for constant-product pairs.

This package provides three main modules:
- `pricing`: Constant-product swap quotes and order-book derivation
- `api`: Pair validation and the subgraph reserve client
- `server`: aiohttp application exposing /api/v2/orderbook

Example:
    from amm_orderbook import compute_order_book

    book = compute_order_book("1000000", "2000000", num_segments=4)
    print(book.bids[0])
"""

__version__ = "0.1.0"

# ============================================================================
# MODULE IMPORTS
# ============================================================================

from . import api
from . import pricing
from . import server
from . import shared

# ============================================================================
# CONVENIENCE RE-EXPORTS
# ============================================================================

from .pricing import (
    DEFAULT_NUM_SEGMENTS,
    FEE,
    Level,
    OrderBook,
    SwapQuote,
    compute_bids,
    compute_order_book,
    get_amount_out,
)

from .api import (
    ApiError,
    InvalidParameterError,
    OrderbookSnapshot,
    PairReserves,
    RetryConfig,
    SubgraphReserveClient,
    parse_pair_id,
)

from .config import ServiceConfig
from .server import create_app
from .utils import keccak256, to_checksum_address

__all__ = [
    "__version__",
    # Modules
    "api",
    "pricing",
    "server",
    "shared",
    # Pricing
    "DEFAULT_NUM_SEGMENTS",
    "FEE",
    "Level",
    "OrderBook",
    "SwapQuote",
    "compute_bids",
    "compute_order_book",
    "get_amount_out",
    # API
    "ApiError",
    "InvalidParameterError",
    "OrderbookSnapshot",
    "PairReserves",
    "RetryConfig",
    "SubgraphReserveClient",
    "parse_pair_id",
    # Service
    "ServiceConfig",
    "create_app",
    # Utilities
    "keccak256",
    "to_checksum_address",
]
