"""Retry utilities for transient Firebase API failures.

This module provides exponential backoff with jitter for the
project-management client. It includes:
- RetryConfig: Backoff parameters and retryable status codes
- calculate_backoff_delay: Exponential backoff with jitter calculation
- retry_async: Run an async callable with automatic retry
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import httpx

T = TypeVar("T")


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for transient error handling.

    Attributes:
        max_retries: Maximum retry attempts (0 disables retries)
        base_delay_seconds: Initial delay
        max_delay_seconds: Cap on delay
        jitter_factor: Random jitter as a fraction of the delay
        retryable_status_codes: HTTP status codes that trigger a retry
    """

    max_retries: int = 3
    base_delay_seconds: float = 1.0
    max_delay_seconds: float = 30.0
    jitter_factor: float = 0.5
    retryable_status_codes: tuple[int, ...] = (429, 500, 502, 503, 504)

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.max_retries > 0 and self.base_delay_seconds <= 0:
            raise ValueError("base_delay_seconds must be > 0 when max_retries > 0")
        if self.jitter_factor < 0 or self.jitter_factor > 1:
            raise ValueError("jitter_factor must be in [0, 1]")
        if self.max_delay_seconds < self.base_delay_seconds:
            raise ValueError("max_delay_seconds must be >= base_delay_seconds")


def calculate_backoff_delay(attempt: int, config: RetryConfig) -> float:
    """Calculate delay with exponential backoff and jitter.

    Formula: min(base * 2^attempt + jitter, max_delay)

    Args:
        attempt: Current attempt number (0-indexed)
        config: Retry configuration

    Returns:
        Delay in seconds
    """
    exponential_delay = config.base_delay_seconds * (2**attempt)
    jitter = random.uniform(0, config.jitter_factor * exponential_delay)
    delay: float = min(exponential_delay + jitter, config.max_delay_seconds)
    return delay


def is_retryable_error(error: Exception, config: RetryConfig) -> bool:
    """Check if an error should trigger a retry.

    Transport-level failures (connection resets, timeouts) and responses
    with a retryable status code are retried. Everything else is not.
    """
    if isinstance(error, httpx.TransportError):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in config.retryable_status_codes
    return False


async def retry_async(
    func: Callable[[], Awaitable[T]],
    config: RetryConfig,
    on_retry: Callable[[int, float, Exception], None] | None = None,
) -> T:
    """Await ``func()`` and retry transient failures with backoff.

    Args:
        func: Zero-argument callable returning a fresh awaitable per attempt
        config: Retry configuration
        on_retry: Optional callback receiving (attempt_number, delay, exception)

    Returns:
        The result of the first successful attempt

    Raises:
        Exception: The last error once retries are exhausted, or any
            non-retryable error immediately
    """
    attempt = 0
    while True:
        try:
            return await func()
        except Exception as e:
            if not is_retryable_error(e, config) or attempt >= config.max_retries:
                raise
            delay = calculate_backoff_delay(attempt, config)
            attempt += 1
            if on_retry:
                on_retry(attempt, delay, e)
            await asyncio.sleep(delay)


__all__ = [
    "RetryConfig",
    "calculate_backoff_delay",
    "is_retryable_error",
    "retry_async",
]
