"""Retry policy for reserve lookups against the subgraph."""

import asyncio
import random
from dataclasses import dataclass, replace

from .error import (
    ServerError,
    RateLimitedError,
    HttpError,
)


@dataclass(frozen=True)
class RetryConfig:
    """Exponential backoff settings. ``max_retries=0`` disables retries."""

    max_retries: int = 0
    base_delay_ms: int = 100
    max_delay_ms: int = 10000

    @classmethod
    def default(cls) -> "RetryConfig":
        """Create default config (retry disabled)."""
        return cls()

    @classmethod
    def with_retries(cls, max_retries: int) -> "RetryConfig":
        """Create config with specified retry count."""
        return cls(max_retries=max_retries)

    @property
    def enabled(self) -> bool:
        return self.max_retries > 0

    def with_base_delay_ms(self, delay: int) -> "RetryConfig":
        """Copy with a different base delay."""
        return replace(self, base_delay_ms=delay)

    def with_max_delay_ms(self, delay: int) -> "RetryConfig":
        """Copy with a different delay cap."""
        return replace(self, max_delay_ms=delay)


def is_retryable(error: Exception) -> bool:
    """Check if an error is transient and worth another attempt."""
    if isinstance(error, (ServerError, RateLimitedError, HttpError)):
        return True
    return isinstance(error, asyncio.TimeoutError)


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """Calculate delay in seconds with exponential backoff and jitter."""
    delay_ms = min(config.base_delay_ms * (2**attempt), config.max_delay_ms)

    # 75-100% of the capped delay
    delay_ms = int(delay_ms * random.uniform(0.75, 1.0))

    return float(delay_ms) / 1000.0
