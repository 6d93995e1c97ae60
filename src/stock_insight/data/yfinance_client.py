"""Async yfinance client: bounded concurrency, retry with backoff, shutdown guard."""

import asyncio
import logging
import os
import random
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

import pandas as pd
import pytz
import yfinance as yf
from requests.exceptions import HTTPError

from stock_insight.utils.ohlcv import standardize_ohlcv
from stock_insight.utils.validators import FetchParams

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ClientSettings:
    """Concurrency and retry knobs, read once from the environment."""

    max_workers: int = 4
    max_retries: int = 3
    base_delay: float = 1.0  # seconds
    max_delay: float = 30.0  # seconds

    @classmethod
    def from_env(cls) -> "ClientSettings":
        return cls(
            max_workers=int(os.environ.get("YF_MAX_WORKERS", cls.max_workers)),
            max_retries=int(os.environ.get("YF_MAX_RETRIES", cls.max_retries)),
            base_delay=float(os.environ.get("YF_BASE_DELAY", cls.base_delay)),
            max_delay=float(os.environ.get("YF_MAX_DELAY", cls.max_delay)),
        )


settings = ClientSettings.from_env()

_executor = ThreadPoolExecutor(max_workers=settings.max_workers)
_fetch_semaphore = asyncio.Semaphore(settings.max_workers)
shutdown_event = asyncio.Event()

# Substrings of transient failures that yfinance surfaces as plain exceptions
_TRANSIENT_MARKERS = ("rate limit", "too many requests", "connection", "timeout", "temporary")

# Keys present on any real quote; unknown tickers come back without them
_QUOTE_MARKERS = ("quoteType", "regularMarketPrice", "currentPrice", "shortName")

# (minutes since midnight Eastern, state before that minute)
_SESSION_BOUNDARIES = (
    (4 * 60, "closed"),
    (9 * 60 + 30, "pre_market"),
    (16 * 60, "regular"),
    (20 * 60, "after_hours"),
)


class ServerShuttingDownError(Exception):
    """Raised when server is shutting down."""


class YFinanceRetryError(Exception):
    """Raised when yfinance fails after all retries."""

    def __init__(self, message: str, last_error: Exception | None = None):
        super().__init__(message)
        self.last_error = last_error


@dataclass
class RetryResult:
    """Outcome of a retried call with its attempt accounting."""

    result: Any
    attempts: int
    total_backoff_seconds: float


def _ensure_running() -> None:
    if shutdown_event.is_set():
        raise ServerShuttingDownError("Server is shutting down")


def _retry_budget(error: Exception) -> int:
    """
    Number of retries an error deserves: 0 for permanent failures.

    An invalid crumb (401) gets a single retry, throttling and server
    errors get the configured budget.
    """
    response = getattr(error, "response", None)
    if isinstance(error, HTTPError) and response is not None:
        if response.status_code == 401:
            return 1
        if response.status_code == 429 or 500 <= response.status_code < 600:
            return settings.max_retries

    message = str(error).lower()
    if "401" in message or "invalid crumb" in message:
        return 1
    if any(marker in message for marker in _TRANSIENT_MARKERS):
        return settings.max_retries
    return 0


def _calculate_backoff(attempt: int) -> float:
    """Exponential delay with +/-25% jitter, capped at settings.max_delay."""
    delay = settings.base_delay * (2**attempt)
    jitter = delay * 0.25 * (2 * random.random() - 1)
    return min(delay + jitter, settings.max_delay)


async def _retry_with_backoff(operation_name: str, sync_func: Callable[[], T]) -> RetryResult:
    """
    Run a blocking call on the executor, retrying transient failures.

    Raises:
        YFinanceRetryError: If the retry budget is exhausted
        ServerShuttingDownError: If server is shutting down
    """
    total_backoff = 0.0
    attempt = 0
    loop = asyncio.get_running_loop()

    while True:
        _ensure_running()
        try:
            result = await loop.run_in_executor(_executor, sync_func)
        except Exception as e:
            budget = min(settings.max_retries, _retry_budget(e))
            if budget == 0:
                raise
            if attempt >= budget:
                logger.warning(
                    f"{operation_name}: giving up after {attempt + 1} attempts "
                    f"(limit={budget + 1}). Last error: {e}"
                )
                raise YFinanceRetryError(
                    f"Failed after {attempt + 1} attempts: {e}",
                    last_error=e,
                ) from e

            delay = _calculate_backoff(attempt)
            total_backoff += delay
            logger.info(
                f"{operation_name}: attempt {attempt + 1} failed ({e}), "
                f"retrying in {delay:.1f}s"
            )
            await asyncio.sleep(delay)
            attempt += 1
            continue

        return RetryResult(
            result=result,
            attempts=attempt + 1,
            total_backoff_seconds=round(total_backoff, 2),
        )


async def _run_bounded(operation_name: str, sync_func: Callable[[], T]) -> T:
    """Shutdown check, concurrency slot and retry around one blocking yfinance call."""
    _ensure_running()
    async with _fetch_semaphore:
        retry_result = await _retry_with_backoff(operation_name, sync_func)
    if retry_result.attempts > 1:
        logger.debug(
            f"{operation_name}: succeeded on attempt {retry_result.attempts} "
            f"after {retry_result.total_backoff_seconds}s backoff"
        )
    return retry_result.result


def _load_info(symbol: str) -> dict[str, Any]:
    info = yf.Ticker(symbol).info
    if not info or all(info.get(key) is None for key in _QUOTE_MARKERS):
        raise ValueError(f"Invalid symbol: {symbol}")
    return info


# In-flight fetch_info tasks keyed by symbol
_info_singleflight: dict[str, "asyncio.Task[dict[str, Any]]"] = {}
_info_singleflight_lock = asyncio.Lock()


async def fetch_info(symbol: str) -> dict[str, Any]:
    """
    Fetch the Ticker.info payload (quote, profile, fundamentals, analyst fields).

    Concurrent calls for the same symbol share one request.

    Raises:
        ServerShuttingDownError: If server is shutting down
        YFinanceRetryError: If all retries exhausted for retryable errors
        ValueError: If symbol is invalid
    """
    _ensure_running()
    key = symbol.upper().strip()

    async with _info_singleflight_lock:
        task = _info_singleflight.get(key)
        owner = task is None
        if owner:
            task = asyncio.create_task(_run_bounded(f"fetch_info({key})", lambda: _load_info(key)))
            _info_singleflight[key] = task
        else:
            logger.debug(f"fetch_info({key}): joining in-flight request")

    try:
        # A cancelled joiner must not cancel the owner's request
        return await (task if owner else asyncio.shield(task))
    finally:
        async with _info_singleflight_lock:
            if _info_singleflight.get(key) is task:
                del _info_singleflight[key]


async def _fetch_ticker_attribute(symbol: str, attribute: str) -> Any:
    """Read one lazily-loaded Ticker property; each access is a network call."""
    key = symbol.upper().strip()
    return await _run_bounded(
        f"{attribute}({key})",
        lambda: getattr(yf.Ticker(key), attribute),
    )


async def fetch_recommendations_summary(symbol: str) -> pd.DataFrame | None:
    """Analyst rating counts per period (columns: period, strongBuy, buy, hold, sell, strongSell)."""
    return await _fetch_ticker_attribute(symbol, "recommendations_summary")


async def fetch_insider_transactions(symbol: str) -> pd.DataFrame | None:
    """Form 4 insider transactions as reported by Yahoo."""
    return await _fetch_ticker_attribute(symbol, "insider_transactions")


async def fetch_income_statement(symbol: str) -> pd.DataFrame | None:
    """Annual income statement, line items as rows and fiscal years as columns."""
    return await _fetch_ticker_attribute(symbol, "income_stmt")


async def fetch_history(params: FetchParams) -> pd.DataFrame:
    """
    Download OHLCV bars for the given parameters.

    Returns:
        Standardized DataFrame (date, open, high, low, close, volume)

    Raises:
        ServerShuttingDownError: If server is shutting down
        YFinanceRetryError: If all retries exhausted for retryable errors
        ValueError: If no data returned
    """

    def _download() -> pd.DataFrame:
        df = yf.download(**params.to_yf_kwargs())
        if df is None or df.empty:
            raise ValueError(f"No data returned for {params.symbol}")
        return standardize_ohlcv(df)

    return await _run_bounded(f"fetch_history({params.symbol})", _download)


def get_market_state(tz: str = "America/New_York") -> dict[str, str]:
    """
    Market session from the wall clock alone; holidays are not known.

    Returns:
        Dict with state, method, and checked_at timestamp
    """
    now = datetime.now(pytz.timezone(tz))
    minutes = now.hour * 60 + now.minute

    state = "closed"
    if now.weekday() < 5:
        state = next(
            (name for boundary, name in _SESSION_BOUNDARIES if minutes < boundary),
            "closed",
        )

    return {
        "state": state,
        "method": "clock_only_no_holidays",
        "checked_at": now.isoformat(),
    }


async def shutdown_executor() -> None:
    """Refuse new fetches and drop queued ones."""
    shutdown_event.set()
    _executor.shutdown(wait=False, cancel_futures=True)
