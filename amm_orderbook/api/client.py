"""Subgraph client that supplies pair reserves to the order-book service."""

import asyncio
import json
import logging
from decimal import Decimal
from typing import Any, Optional

import aiohttp

from .error import (
    ApiError,
    HttpError,
    NotFoundError,
    BadRequestError,
    RateLimitedError,
    ServerError,
    DeserializeError,
    PairNotFoundError,
    UnexpectedStatusError,
    extract_error_message,
)
from .validation import validate_address
from .retry import RetryConfig, is_retryable, calculate_delay
from .types import PairReserves
from ..utils import sort_tokens

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECS = 30

DEFAULT_SUBGRAPH_URL = "https://api.thegraph.com/subgraphs/name/uniswap/uniswap-v2"

PAIR_RESERVES_QUERY = """
query pairReserves($token0: String!, $token1: String!) {
  pairs(where: { token0: $token0, token1: $token1 }) {
    reserve0
    reserve1
  }
}
"""


class SubgraphReserveClient:
    """Fetches pair reserves from a Uniswap V2 style subgraph.

    Each lookup is a single GraphQL POST. Reserves come back as decimal
    strings already scaled by token decimals.

    Example:
        ```python
        async with SubgraphReserveClient(DEFAULT_SUBGRAPH_URL) as client:
            reserve_a, reserve_b = await client.fetch_reserves(weth, dai)
        ```
    """

    def __init__(
        self,
        subgraph_url: str = DEFAULT_SUBGRAPH_URL,
        timeout: int = DEFAULT_TIMEOUT_SECS,
        headers: Optional[dict[str, str]] = None,
        retry_config: Optional[RetryConfig] = None,
    ):
        """Create a new client for the given subgraph endpoint.

        Args:
            subgraph_url: GraphQL endpoint of the subgraph
            timeout: Request timeout in seconds
            headers: Optional additional headers for all requests
            retry_config: Optional retry configuration for failed requests
        """
        self._subgraph_url = subgraph_url
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if headers:
            self._headers.update(headers)
        self._session: Optional[aiohttp.ClientSession] = None
        self._retry_config = retry_config or RetryConfig.default()

    @property
    def subgraph_url(self) -> str:
        """Get the subgraph URL."""
        return self._subgraph_url

    async def __aenter__(self) -> "SubgraphReserveClient":
        """Enter async context manager."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers=self._headers,
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    def _map_status_error(self, status: int, message: str) -> ApiError:
        """Map HTTP status code to ApiError."""
        if status == 400:
            return BadRequestError(message)
        elif status == 404:
            return NotFoundError(message)
        elif status == 429:
            return RateLimitedError(message)
        elif status >= 500:
            return ServerError(message)
        else:
            return UnexpectedStatusError(status, message)

    async def _handle_response(self, response: aiohttp.ClientResponse) -> dict:
        """Handle HTTP response and map errors."""
        if 200 <= response.status < 300:
            try:
                data = await response.json(content_type=None)
            except (ValueError, json.JSONDecodeError) as e:
                raise DeserializeError(f"Failed to deserialize response: {e}")
            if not isinstance(data, dict):
                raise DeserializeError("Response body is not a JSON object")
            return data

        error_text = await response.text()
        try:
            error_msg = extract_error_message(json.loads(error_text))
        except ValueError:
            error_msg = None
        error_msg = error_msg or error_text or "Unknown error"

        raise self._map_status_error(response.status, error_msg)

    async def _request_with_retry(self, payload: dict[str, Any]) -> dict:
        """POST a payload to the subgraph with retry logic.

        Raises:
            ApiError: If all attempts fail
        """
        session = await self._ensure_session()

        for attempt in range(self._retry_config.max_retries + 1):
            try:
                try:
                    async with session.post(self._subgraph_url, json=payload) as response:
                        return await self._handle_response(response)
                except aiohttp.ClientError as e:
                    raise HttpError(str(e) or type(e).__name__) from e
                except asyncio.TimeoutError as e:
                    raise HttpError("request timed out") from e
            except ApiError as e:
                if not is_retryable(e) or attempt >= self._retry_config.max_retries:
                    raise

                delay = calculate_delay(attempt, self._retry_config)
                logger.warning(
                    f"Subgraph request failed ({e}), retrying in {delay:.2f}s "
                    f"(attempt {attempt + 1})"
                )
                await asyncio.sleep(delay)

        raise RuntimeError("Unexpected retry loop exit")

    async def query(self, query: str, variables: Optional[dict[str, Any]] = None) -> dict:
        """Run a GraphQL query and return its ``data`` object.

        Raises:
            ServerError: If the response carries GraphQL errors
            DeserializeError: If the response has no data object
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        body = await self._request_with_retry(payload)

        if body.get("errors"):
            raise ServerError(extract_error_message(body) or "GraphQL error")

        data = body.get("data")
        if not isinstance(data, dict):
            raise DeserializeError("Missing data in GraphQL response")
        return data

    # =========================================================================
    # Reserve lookups
    # =========================================================================

    async def get_pair_reserves(self, token_a: str, token_b: str) -> PairReserves:
        """Get the reserves of the pair holding ``token_a`` and ``token_b``.

        Args:
            token_a: Address of the first token
            token_b: Address of the second token

        Returns:
            PairReserves with reserves in the same order as the arguments

        Raises:
            InvalidParameterError: If either address is invalid
            PairNotFoundError: If the subgraph has no such pair
            ApiError: If the request fails
        """
        token_a = validate_address(token_a, "token_a")
        token_b = validate_address(token_b, "token_b")
        token0, token1 = sort_tokens(token_a, token_b)

        logger.debug(f"Querying reserves for {token0}/{token1}")
        data = await self.query(
            PAIR_RESERVES_QUERY,
            {"token0": token0.lower(), "token1": token1.lower()},
        )

        pairs = data.get("pairs")
        if not isinstance(pairs, list):
            raise DeserializeError("Missing pairs in GraphQL response")
        if not pairs:
            raise PairNotFoundError(token_a, token_b)

        return PairReserves.from_dict(pairs[0], token_a, token_b)

    async def fetch_reserves(self, token_a: str, token_b: str) -> tuple[Decimal, Decimal]:
        """Get ``(reserve_a, reserve_b)`` for the pair of two tokens."""
        reserves = await self.get_pair_reserves(token_a, token_b)
        return reserves.reserve_a, reserves.reserve_b
