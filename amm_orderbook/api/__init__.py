"""Pair validation and reserve source client.

Example:
    ```python
    from amm_orderbook.api import SubgraphReserveClient, parse_pair_id

    token_a, token_b = parse_pair_id(pair)
    async with SubgraphReserveClient() as client:
        reserve_a, reserve_b = await client.fetch_reserves(token_a, token_b)
    ```
"""

from .client import (
    DEFAULT_SUBGRAPH_URL,
    DEFAULT_TIMEOUT_SECS,
    PAIR_RESERVES_QUERY,
    SubgraphReserveClient,
)

from .error import (
    ApiError,
    HttpError,
    NotFoundError,
    PairNotFoundError,
    BadRequestError,
    RateLimitedError,
    ServerError,
    DeserializeError,
    InvalidParameterError,
    InvalidPairError,
    InvalidAddressError,
    UnexpectedStatusError,
    extract_error_message,
)

from .validation import INVALID_PAIR_MESSAGE, parse_pair_id, validate_address

from .retry import RetryConfig

from .types import ErrorBody, OrderbookSnapshot, PairReserves

__all__ = [
    # Client
    "SubgraphReserveClient",
    "DEFAULT_SUBGRAPH_URL",
    "DEFAULT_TIMEOUT_SECS",
    "PAIR_RESERVES_QUERY",
    # Errors
    "ApiError",
    "HttpError",
    "NotFoundError",
    "PairNotFoundError",
    "BadRequestError",
    "RateLimitedError",
    "ServerError",
    "DeserializeError",
    "InvalidParameterError",
    "InvalidPairError",
    "InvalidAddressError",
    "UnexpectedStatusError",
    "extract_error_message",
    # Validation
    "INVALID_PAIR_MESSAGE",
    "parse_pair_id",
    "validate_address",
    # Retry
    "RetryConfig",
    # Types
    "ErrorBody",
    "OrderbookSnapshot",
    "PairReserves",
]
