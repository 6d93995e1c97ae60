"""Data layer for fetching and caching stock data."""

from stock_insight.data.cache import PriceCache, price_cache
from stock_insight.data.market_data import (
    build_analyst_data,
    build_financial_metrics,
    build_insider_transactions,
    interest_coverage_from_income_statement,
)
from stock_insight.data.yfinance_client import (
    RetryResult,
    ServerShuttingDownError,
    YFinanceRetryError,
    fetch_history,
    fetch_income_statement,
    fetch_info,
    fetch_insider_transactions,
    fetch_recommendations_summary,
    get_market_state,
    shutdown_executor,
)

__all__ = [
    # Cache
    "PriceCache",
    "price_cache",
    # Payload mapping
    "build_analyst_data",
    "build_financial_metrics",
    "build_insider_transactions",
    "interest_coverage_from_income_statement",
    # yfinance
    "RetryResult",
    "ServerShuttingDownError",
    "YFinanceRetryError",
    "fetch_history",
    "fetch_income_statement",
    "fetch_info",
    "fetch_insider_transactions",
    "fetch_recommendations_summary",
    "get_market_state",
    "shutdown_executor",
]
