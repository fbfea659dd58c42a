"""Tests for the order-book HTTP service."""

from contextlib import asynccontextmanager
from decimal import Decimal

import pytest
from aiohttp import test_utils

from amm_orderbook.api import (
    INVALID_PAIR_MESSAGE,
    HttpError,
    PairNotFoundError,
    ServerError,
)
from amm_orderbook.config import ServiceConfig
from amm_orderbook.pricing import compute_order_book
from amm_orderbook.server import HEALTH_ROUTE, ORDERBOOK_ROUTE, create_app

WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
DAI = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
FIXED_TIME = 1700000000.5


@asynccontextmanager
async def serve(source, config=None):
    app = create_app(source, config, clock=lambda: FIXED_TIME)
    async with test_utils.TestClient(test_utils.TestServer(app)) as client:
        yield client


class TestGetOrderbook:
    @pytest.mark.asyncio
    async def test_returns_order_book(self, make_source):
        source = make_source(reserves=(Decimal(1000000), Decimal(2000000)))
        async with serve(source) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": f"{WETH}_{DAI}"})
            data = await response.json()

        assert response.status == 200
        assert data["timestamp"] == 1700000000500
        assert len(data["bids"]) == 20
        assert len(data["asks"]) == 20

    @pytest.mark.asyncio
    async def test_levels_match_pricing(self, make_source):
        source = make_source(reserves=(Decimal(1000000), Decimal(2000000)))
        config = ServiceConfig(num_segments=4)
        async with serve(source, config) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": f"{WETH}_{DAI}"})
            data = await response.json()

        book = compute_order_book(Decimal(1000000), Decimal(2000000), 4)
        assert data["bids"] == [list(level) for level in book.bids]
        assert data["asks"] == [list(level) for level in book.asks]
        assert data["bids"][0][0] == "250000"

    @pytest.mark.asyncio
    async def test_cache_header(self, make_source):
        source = make_source(reserves=(Decimal(10), Decimal(20)))
        async with serve(source) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": f"{WETH}_{DAI}"})

        assert response.headers["Cache-Control"] == "max-age=0, s-maxage=900"

    @pytest.mark.asyncio
    async def test_configured_cache_age(self, make_source):
        source = make_source(reserves=(Decimal(10), Decimal(20)))
        async with serve(source, ServiceConfig(cache_max_age=60)) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": f"{WETH}_{DAI}"})

        assert response.headers["Cache-Control"] == "max-age=0, s-maxage=60"

    @pytest.mark.asyncio
    async def test_source_receives_checksummed_addresses(self, make_source):
        source = make_source(reserves=(Decimal(10), Decimal(20)))
        async with serve(source) as client:
            await client.get(ORDERBOOK_ROUTE, params={"pair": f"{WETH.lower()}_{DAI.lower()}"})

        assert source.calls == [(WETH, DAI)]

    @pytest.mark.asyncio
    async def test_zero_reserves_give_empty_book(self, make_source):
        source = make_source(reserves=(Decimal(0), Decimal(500)))
        async with serve(source) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": f"{WETH}_{DAI}"})
            data = await response.json()

        assert response.status == 200
        assert data == {"timestamp": 1700000000500, "bids": [], "asks": []}


class TestValidationErrors:
    @pytest.mark.asyncio
    async def test_malformed_pair(self, make_source):
        source = make_source(reserves=(Decimal(1), Decimal(1)))
        async with serve(source) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": "not-an-address"})
            data = await response.json()

        assert response.status == 400
        assert data == {"errorCode": 400, "message": INVALID_PAIR_MESSAGE}
        assert source.calls == []

    @pytest.mark.asyncio
    async def test_missing_pair(self, make_source):
        source = make_source(reserves=(Decimal(1), Decimal(1)))
        async with serve(source) as client:
            response = await client.get(ORDERBOOK_ROUTE)

        assert response.status == 400
        assert source.calls == []

    @pytest.mark.asyncio
    async def test_bad_checksum(self, make_source):
        source = make_source(reserves=(Decimal(1), Decimal(1)))
        bad = WETH[:2] + WETH[2].lower() + WETH[3:]
        async with serve(source) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": f"{bad}_{DAI}"})
            data = await response.json()

        assert response.status == 400
        assert "checksum" in data["message"]
        assert source.calls == []


class TestUpstreamErrors:
    @pytest.mark.asyncio
    async def test_server_error(self, make_source):
        source = make_source(error=ServerError("indexer unavailable"))
        async with serve(source) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": f"{WETH}_{DAI}"})
            data = await response.json()

        assert response.status == 500
        assert data["errorCode"] == 500
        assert "indexer unavailable" in data["message"]

    @pytest.mark.asyncio
    async def test_pair_not_found(self, make_source):
        source = make_source(error=PairNotFoundError(WETH, DAI))
        async with serve(source) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": f"{WETH}_{DAI}"})

        assert response.status == 500

    @pytest.mark.asyncio
    async def test_network_error(self, make_source):
        source = make_source(error=HttpError("connection reset"))
        async with serve(source) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": f"{WETH}_{DAI}"})
            data = await response.json()

        assert response.status == 500
        assert "connection reset" in data["message"]


class TestPricingErrors:
    @pytest.mark.asyncio
    async def test_negative_reserve_is_json_500(self, make_source):
        source = make_source(reserves=(Decimal(-1), Decimal(1)))
        async with serve(source) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": f"{WETH}_{DAI}"})
            data = await response.json()

        assert response.status == 500
        assert response.content_type == "application/json"
        assert data["errorCode"] == 500
        assert "non-negative" in data["message"]

    @pytest.mark.asyncio
    async def test_non_numeric_reserve_is_json_500(self, make_source):
        source = make_source(reserves=("lots", Decimal(1)))
        async with serve(source) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": f"{WETH}_{DAI}"})
            data = await response.json()

        assert response.status == 500
        assert data["errorCode"] == 500

    @pytest.mark.asyncio
    async def test_extreme_ratio_still_prices(self, make_source):
        source = make_source(reserves=(Decimal("1e-10"), Decimal("1e30")))
        async with serve(source) as client:
            response = await client.get(ORDERBOOK_ROUTE, params={"pair": f"{WETH}_{DAI}"})
            data = await response.json()

        assert response.status == 200
        assert len(data["bids"]) == 20
        assert [price for _, price in data["asks"]] == ["Infinity"] * 20


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_health(self, make_source):
        async with serve(make_source()) as client:
            response = await client.get(HEALTH_ROUTE)
            data = await response.json()

        assert response.status == 200
        assert data == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_source_closed_on_cleanup(self, make_source):
        source = make_source()
        async with serve(source):
            assert not source.closed

        assert source.closed
