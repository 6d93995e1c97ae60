"""Stock info tool."""

from time import perf_counter
from typing import Any

from stock_insight.data.yfinance_client import fetch_info
from stock_insight.utils.provenance import (
    build_error_response,
    build_meta,
    build_provenance,
    utc_timestamp,
)
from stock_insight.utils.text import format_large_number, sanitize_text
from stock_insight.utils.validators import normalize_symbol


async def get_stock_info(symbol: str) -> dict[str, Any]:
    """
    Get basic quote and company information.

    Args:
        symbol: Stock ticker symbol

    Returns:
        Dict with name, sector, industry, price, change, change percent, market cap
    """
    start_time = perf_counter()

    try:
        normalized_symbol = normalize_symbol(symbol)
    except ValueError as e:
        return build_error_response(
            error_type="invalid_symbol",
            message=str(e),
            symbol=symbol,
        )

    try:
        info = await fetch_info(normalized_symbol)
    except ValueError as e:
        return build_error_response(
            error_type="invalid_symbol",
            message=str(e),
            symbol=normalized_symbol,
        )
    except Exception as e:
        return build_error_response(
            error_type="data_unavailable",
            message=f"Failed to fetch data: {e}",
            symbol=normalized_symbol,
        )

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("get_stock_info", duration_ms),
        "data_provenance": {
            "quote": build_provenance(source="yfinance", as_of=utc_timestamp()),
        },
        **summarize_info(normalized_symbol, info),
    }


def summarize_info(symbol: str, info: dict[str, Any]) -> dict[str, Any]:
    """Quote fields shared by get_stock_info and compare_stocks."""
    price = _safe_float(info.get("currentPrice") or info.get("regularMarketPrice"))
    previous_close = _safe_float(
        info.get("previousClose") or info.get("regularMarketPreviousClose")
    )

    change = None
    change_percent = None
    if price is not None and previous_close:
        change = round(price - previous_close, 2)
        change_percent = round(change / previous_close * 100, 2)

    market_cap = _safe_float(info.get("marketCap"))

    return {
        "symbol": symbol,
        "name": sanitize_text(info.get("longName") or info.get("shortName")),
        "sector": sanitize_text(info.get("sector")) or "Unknown",
        "industry": sanitize_text(info.get("industry")) or "Unknown",
        "exchange": info.get("exchange"),
        "currency": info.get("currency", "USD"),
        "price": price,
        "previous_close": previous_close,
        "change": change,
        "change_percent": change_percent,
        "market_cap": int(market_cap) if market_cap is not None else None,
        "market_cap_display": format_large_number(market_cap),
    }


def _safe_float(value: Any) -> float | None:
    """Convert to float or return None."""
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None
