"""Run the order-book service: ``python -m amm_orderbook``."""

import logging

from aiohttp import web

from .api import RetryConfig, SubgraphReserveClient
from .config import ServiceConfig
from .server import create_app

logger = logging.getLogger("amm_orderbook")


def main() -> None:
    config = ServiceConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    client = SubgraphReserveClient(
        config.subgraph_url,
        timeout=config.timeout,
        retry_config=RetryConfig.with_retries(config.max_retries),
    )
    app = create_app(client, config)

    logger.info(
        f"Serving order books on {config.host}:{config.port} "
        f"from {config.subgraph_url} ({config.num_segments} levels per side)"
    )
    web.run_app(app, host=config.host, port=config.port, print=None)


if __name__ == "__main__":
    main()
