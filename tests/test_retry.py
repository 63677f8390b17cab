"""Tests for fireconf.utils.retry module."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from fireconf.utils.retry import (
    RetryConfig,
    calculate_backoff_delay,
    is_retryable_error,
    retry_async,
)


def make_status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://firebase.googleapis.com/v1beta1/projects")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(f"HTTP {status_code}", request=request, response=response)


class TestRetryConfig:
    """Tests for RetryConfig validation."""

    def test_defaults(self):
        config = RetryConfig()
        assert config.max_retries == 3
        assert 429 in config.retryable_status_codes

    def test_negative_retries_rejected(self):
        with pytest.raises(ValueError, match="max_retries"):
            RetryConfig(max_retries=-1)

    def test_zero_base_delay_rejected_when_retrying(self):
        with pytest.raises(ValueError, match="base_delay_seconds"):
            RetryConfig(max_retries=2, base_delay_seconds=0)

    def test_jitter_out_of_range(self):
        with pytest.raises(ValueError, match="jitter_factor"):
            RetryConfig(jitter_factor=1.5)

    def test_max_delay_below_base(self):
        with pytest.raises(ValueError, match="max_delay_seconds"):
            RetryConfig(base_delay_seconds=10, max_delay_seconds=5)


class TestCalculateBackoffDelay:
    def test_exponential_without_jitter(self):
        config = RetryConfig(base_delay_seconds=1.0, jitter_factor=0.0, max_delay_seconds=100)

        assert calculate_backoff_delay(0, config) == 1.0
        assert calculate_backoff_delay(1, config) == 2.0
        assert calculate_backoff_delay(3, config) == 8.0

    def test_capped_at_max_delay(self):
        config = RetryConfig(base_delay_seconds=1.0, jitter_factor=0.0, max_delay_seconds=5.0)
        assert calculate_backoff_delay(10, config) == 5.0

    def test_jitter_bounds(self):
        config = RetryConfig(base_delay_seconds=2.0, jitter_factor=0.5, max_delay_seconds=100)
        for _ in range(20):
            delay = calculate_backoff_delay(0, config)
            assert 2.0 <= delay <= 3.0


class TestIsRetryableError:
    config = RetryConfig()

    @pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
    def test_retryable_status(self, status):
        assert is_retryable_error(make_status_error(status), self.config) is True

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409])
    def test_client_errors_not_retried(self, status):
        assert is_retryable_error(make_status_error(status), self.config) is False

    def test_transport_errors_retried(self):
        assert is_retryable_error(httpx.ConnectError("refused"), self.config) is True

    def test_other_exceptions_not_retried(self):
        assert is_retryable_error(ValueError("nope"), self.config) is False


class TestRetryAsync:
    """Tests for retry_async."""

    @pytest.fixture(autouse=True)
    def no_sleep(self):
        with patch("fireconf.utils.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            yield mock_sleep

    async def test_returns_first_success(self):
        func = AsyncMock(return_value="ok")

        result = await retry_async(func, RetryConfig())

        assert result == "ok"
        assert func.await_count == 1

    async def test_retries_transient_failures(self, no_sleep):
        func = AsyncMock(side_effect=[make_status_error(503), make_status_error(429), "ok"])
        retries = []

        result = await retry_async(
            func, RetryConfig(max_retries=3), on_retry=lambda n, d, e: retries.append(n)
        )

        assert result == "ok"
        assert func.await_count == 3
        assert retries == [1, 2]
        assert no_sleep.await_count == 2

    async def test_gives_up_after_max_retries(self):
        error = make_status_error(500)
        func = AsyncMock(side_effect=error)

        with pytest.raises(httpx.HTTPStatusError):
            await retry_async(func, RetryConfig(max_retries=2))

        assert func.await_count == 3

    async def test_non_retryable_raised_immediately(self):
        func = AsyncMock(side_effect=make_status_error(404))

        with pytest.raises(httpx.HTTPStatusError):
            await retry_async(func, RetryConfig(max_retries=5))

        assert func.await_count == 1

    async def test_zero_retries(self):
        func = AsyncMock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(httpx.ConnectError):
            await retry_async(func, RetryConfig(max_retries=0))

        assert func.await_count == 1
