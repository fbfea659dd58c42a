"""Types for reserve lookups and the order-book response."""

from dataclasses import dataclass, field
from decimal import Decimal

from ..pricing import Level, OrderBook
from ..shared.price import to_decimal
from .error import DeserializeError


@dataclass(frozen=True)
class PairReserves:
    """Reserves of a pair, oriented to the caller's token order."""

    token_a: str
    token_b: str
    reserve_a: Decimal
    reserve_b: Decimal

    @classmethod
    def from_dict(cls, data: dict, token_a: str, token_b: str) -> "PairReserves":
        """Create from a subgraph ``pairs`` entry.

        ``reserve0`` belongs to whichever token sorts first; the result is
        flipped when ``token_a`` is token1.
        """
        try:
            reserve0 = to_decimal(data["reserve0"])
            reserve1 = to_decimal(data["reserve1"])
        except KeyError as e:
            raise DeserializeError(f"Missing required field in pair: {e}")
        except ValueError as e:
            raise DeserializeError(f"Invalid reserve value: {e}")

        if token_a.lower() <= token_b.lower():
            reserve_a, reserve_b = reserve0, reserve1
        else:
            reserve_a, reserve_b = reserve1, reserve0
        return cls(
            token_a=token_a,
            token_b=token_b,
            reserve_a=reserve_a,
            reserve_b=reserve_b,
        )


@dataclass
class OrderbookSnapshot:
    """Response body for GET /api/v2/orderbook."""

    timestamp: int
    bids: list[Level] = field(default_factory=list)
    asks: list[Level] = field(default_factory=list)

    @classmethod
    def from_order_book(cls, timestamp: int, book: OrderBook) -> "OrderbookSnapshot":
        return cls(timestamp=timestamp, bids=book.bids, asks=book.asks)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "bids": [list(level) for level in self.bids],
            "asks": [list(level) for level in self.asks],
        }


@dataclass
class ErrorBody:
    """JSON error body returned by the service."""

    error_code: int
    message: str

    def to_dict(self) -> dict:
        return {"errorCode": self.error_code, "message": self.message}
