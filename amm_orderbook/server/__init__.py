"""HTTP layer for the order-book service."""

from .app import HEALTH_ROUTE, ORDERBOOK_ROUTE, OrderbookHandler, create_app
from .responses import bad_request_response, ok_response, server_error_response

__all__ = [
    "HEALTH_ROUTE",
    "ORDERBOOK_ROUTE",
    "OrderbookHandler",
    "create_app",
    "bad_request_response",
    "ok_response",
    "server_error_response",
]
