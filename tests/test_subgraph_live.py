"""Integration tests against a live Uniswap V2 subgraph.

Skipped unless SUBGRAPH_TESTS is set. Point SUBGRAPH_URL at a reachable
endpoint (hosted services usually need an API key in the URL).
"""

import os
from decimal import Decimal

import pytest

from amm_orderbook.api import DEFAULT_SUBGRAPH_URL, SubgraphReserveClient
from amm_orderbook.pricing import compute_order_book

SUBGRAPH_URL = os.environ.get("SUBGRAPH_URL", DEFAULT_SUBGRAPH_URL)

WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
DAI = "0x6B175474E89094C44Da98b954EedeAC495271d0F"


@pytest.mark.subgraph
@pytest.mark.asyncio
async def test_weth_dai_reserves():
    async with SubgraphReserveClient(SUBGRAPH_URL) as client:
        reserve_weth, reserve_dai = await client.fetch_reserves(WETH, DAI)

    assert reserve_weth > 0
    assert reserve_dai > 0
    # DAI per WETH has been far above 1 for the pair's whole life
    assert reserve_dai / reserve_weth > Decimal(1)


@pytest.mark.subgraph
@pytest.mark.asyncio
async def test_weth_dai_order_book():
    async with SubgraphReserveClient(SUBGRAPH_URL) as client:
        reserve_weth, reserve_dai = await client.fetch_reserves(WETH, DAI)

    book = compute_order_book(reserve_weth, reserve_dai)
    assert len(book.bids) == 20
    assert Decimal(book.bids[0][1]) < Decimal(book.asks[0][1])
