"""aiohttp application serving approximate order books for V2 pairs."""

import logging
import time
from typing import Callable, Optional

from aiohttp import web

from ..api.error import ApiError, InvalidParameterError
from ..api.types import OrderbookSnapshot
from ..api.validation import parse_pair_id
from ..config import ServiceConfig
from ..pricing import compute_order_book
from .responses import bad_request_response, ok_response, server_error_response

logger = logging.getLogger(__name__)

ORDERBOOK_ROUTE = "/api/v2/orderbook"
HEALTH_ROUTE = "/health"


class OrderbookHandler:
    """Request handlers bound to a reserve source.

    ``reserve_source`` is any object with an awaitable
    ``fetch_reserves(token_a, token_b) -> (Decimal, Decimal)``, such as
    SubgraphReserveClient.
    """

    def __init__(
        self,
        reserve_source,
        config: Optional[ServiceConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._source = reserve_source
        self._config = config or ServiceConfig()
        self._clock = clock

    async def get_orderbook(self, request: web.Request) -> web.Response:
        """GET /api/v2/orderbook?pair=<tokenA>_<tokenB>

        Validation failures return 400 before any reserve lookup. Reserve
        source failures and reserves the pricing rejects return 500 with the
        error text.
        """
        try:
            token_a, token_b = parse_pair_id(request.query.get("pair", ""))
        except InvalidParameterError as e:
            return bad_request_response(e.message)

        try:
            reserve_a, reserve_b = await self._source.fetch_reserves(token_a, token_b)
        except ApiError as e:
            logger.warning(f"Reserve lookup failed for {token_a}_{token_b}: {e}")
            return server_error_response(e)

        timestamp = int(self._clock() * 1000)
        try:
            book = compute_order_book(reserve_a, reserve_b, self._config.num_segments)
        except (ValueError, ArithmeticError) as e:
            logger.warning(
                f"Pricing failed for {token_a}_{token_b} "
                f"with reserves ({reserve_a}, {reserve_b}): {e}"
            )
            return server_error_response(e)

        snapshot = OrderbookSnapshot.from_order_book(timestamp, book)
        return ok_response(snapshot.to_dict(), self._config.cache_max_age)

    async def health(self, request: web.Request) -> web.Response:
        return web.json_response({"status": "ok"})

    async def close(self, app: web.Application) -> None:
        """Release the reserve source on application cleanup."""
        close = getattr(self._source, "close", None)
        if close is not None:
            await close()
        logger.info("Order book service stopped")


def create_app(
    reserve_source,
    config: Optional[ServiceConfig] = None,
    clock: Callable[[], float] = time.time,
) -> web.Application:
    """Create the web application.

    Args:
        reserve_source: Object providing ``fetch_reserves``
        config: Service settings, defaults when omitted
        clock: Seconds-since-epoch source for response timestamps
    """
    handler = OrderbookHandler(reserve_source, config, clock)

    app = web.Application()
    app.router.add_get(ORDERBOOK_ROUTE, handler.get_orderbook)
    app.router.add_get(HEALTH_ROUTE, handler.health)
    app.on_cleanup.append(handler.close)
    return app
