"""Tests for retry classification and backoff in the yfinance client."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest
from requests.exceptions import HTTPError

from stock_insight.data import yfinance_client
from stock_insight.data.yfinance_client import (
    YFinanceRetryError,
    _calculate_backoff,
    _retry_budget,
    _retry_with_backoff,
)


def _http_error(status_code: int) -> HTTPError:
    return HTTPError(response=MagicMock(status_code=status_code))


class TestRetryBudget:
    """Tests for _retry_budget."""

    @pytest.mark.parametrize("status_code", [429, 500, 503])
    def test_transient_http(self, status_code: int) -> None:
        assert _retry_budget(_http_error(status_code)) == yfinance_client.settings.max_retries

    def test_invalid_crumb_retried_once(self) -> None:
        assert _retry_budget(_http_error(401)) == 1
        assert _retry_budget(RuntimeError("Invalid Crumb")) == 1

    @pytest.mark.parametrize(
        "message",
        ["Connection reset by peer", "Read timeout", "Too Many Requests. Rate limited"],
    )
    def test_transient_messages(self, message: str) -> None:
        assert _retry_budget(RuntimeError(message)) > 0

    @pytest.mark.parametrize(
        "error",
        [_http_error(404), ValueError("Invalid symbol: ZZZZ"), KeyError("regularMarketPrice")],
    )
    def test_permanent(self, error: Exception) -> None:
        assert _retry_budget(error) == 0


class TestBackoff:
    """Tests for _calculate_backoff."""

    @pytest.mark.parametrize("attempt,expected", [(0, 1.0), (1, 2.0), (2, 4.0)])
    def test_exponential_without_jitter(self, attempt: int, expected: float) -> None:
        with patch("stock_insight.data.yfinance_client.random.random", return_value=0.5):
            assert _calculate_backoff(attempt) == expected

    def test_capped(self) -> None:
        with patch("stock_insight.data.yfinance_client.random.random", return_value=1.0):
            assert _calculate_backoff(10) == yfinance_client.settings.max_delay


class TestRetryWithBackoff:
    """Tests for _retry_with_backoff."""

    def test_recovers_from_transient_errors(self) -> None:
        calls = {"n": 0}

        def flaky() -> int:
            calls["n"] += 1
            if calls["n"] < 3:
                raise ConnectionError("connection reset")
            return 42

        with patch("stock_insight.data.yfinance_client._calculate_backoff", return_value=0.0):
            result = asyncio.run(_retry_with_backoff("flaky()", flaky))

        assert result.result == 42
        assert result.attempts == 3
        assert result.total_backoff_seconds == 0.0

    def test_permanent_error_not_retried(self) -> None:
        calls = {"n": 0}

        def bad() -> None:
            calls["n"] += 1
            raise ValueError("Invalid symbol: ZZZZ")

        with pytest.raises(ValueError, match="Invalid symbol"):
            asyncio.run(_retry_with_backoff("bad()", bad))
        assert calls["n"] == 1

    def test_budget_exhausted(self) -> None:
        def throttled() -> None:
            raise RuntimeError("Too Many Requests")

        with patch("stock_insight.data.yfinance_client._calculate_backoff", return_value=0.0):
            with pytest.raises(YFinanceRetryError) as exc_info:
                asyncio.run(_retry_with_backoff("throttled()", throttled))

        attempts = yfinance_client.settings.max_retries + 1
        assert str(exc_info.value).startswith(f"Failed after {attempts} attempts")
        assert isinstance(exc_info.value.last_error, RuntimeError)
