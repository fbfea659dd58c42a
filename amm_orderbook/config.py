"""Service configuration read from environment variables."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .api.client import DEFAULT_SUBGRAPH_URL, DEFAULT_TIMEOUT_SECS
from .pricing import DEFAULT_NUM_SEGMENTS

ENV_PREFIX = "ORDERBOOK_"

# Responses are point-in-time snapshots; shared caches may hold them 15 minutes
DEFAULT_CACHE_MAX_AGE = 60 * 15


@dataclass
class ServiceConfig:
    """Settings for the order-book HTTP service."""

    subgraph_url: str = DEFAULT_SUBGRAPH_URL
    host: str = "0.0.0.0"
    port: int = 8080
    num_segments: int = DEFAULT_NUM_SEGMENTS
    cache_max_age: int = DEFAULT_CACHE_MAX_AGE
    timeout: int = DEFAULT_TIMEOUT_SECS
    max_retries: int = 0
    log_level: str = "INFO"

    def __post_init__(self):
        if self.num_segments < 1:
            raise ValueError(f"num_segments must be at least 1, got {self.num_segments}")
        if self.cache_max_age < 0:
            raise ValueError(f"cache_max_age must be non-negative, got {self.cache_max_age}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be non-negative, got {self.max_retries}")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ServiceConfig":
        """Build a config from ``ORDERBOOK_*`` variables, falling back to defaults.

        Raises:
            ValueError: If a numeric variable is not an integer or out of range
        """
        if env is None:
            env = os.environ

        def get_int(name: str, default: int) -> int:
            raw = env.get(ENV_PREFIX + name)
            if raw is None or raw.strip() == "":
                return default
            try:
                return int(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}")

        return cls(
            subgraph_url=env.get(ENV_PREFIX + "SUBGRAPH_URL", DEFAULT_SUBGRAPH_URL),
            host=env.get(ENV_PREFIX + "HOST", "0.0.0.0"),
            port=get_int("PORT", 8080),
            num_segments=get_int("NUM_SEGMENTS", DEFAULT_NUM_SEGMENTS),
            cache_max_age=get_int("CACHE_MAX_AGE", DEFAULT_CACHE_MAX_AGE),
            timeout=get_int("TIMEOUT", DEFAULT_TIMEOUT_SECS),
            max_retries=get_int("MAX_RETRIES", 0),
            log_level=env.get(ENV_PREFIX + "LOG_LEVEL", "INFO").upper(),
        )
