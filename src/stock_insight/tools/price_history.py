"""Price history tool."""

from time import perf_counter
from typing import Any

import pandas as pd

from stock_insight.data.cache import price_cache
from stock_insight.data.yfinance_client import fetch_history, get_market_state
from stock_insight.utils.ohlcv import df_to_rows, summarize_prices
from stock_insight.utils.provenance import (
    build_error_response,
    build_meta,
    build_provenance,
    utc_timestamp,
)
from stock_insight.utils.validators import FetchParams

PREVIEW_ROWS = 5


async def get_price_history(
    symbol: str,
    period: str = "1y",
    interval: str = "1d",
    adjusted: bool = True,
    include_preview: bool = True,
) -> dict[str, Any]:
    """
    Fetch price history and return summary + Resource URI.

    Args:
        symbol: Stock ticker symbol
        period: Time period (1mo, 3mo, 6mo, 1y, 2y, 5y, ytd, max)
        interval: Bar interval (1d, 5d, 1wk, 1mo, 3mo)
        adjusted: Whether to use adjusted prices (default: True)
        include_preview: Include last 5 bars in response (default: True)

    Returns:
        Dict with summary, preview (optional), and resource_uri
    """
    start_time = perf_counter()

    try:
        params = FetchParams(
            symbol=symbol,
            period=period,
            interval=interval,
            adjusted=adjusted,
        )
    except ValueError as e:
        return build_error_response(
            error_type="invalid_parameters",
            message=str(e),
            symbol=symbol,
        )

    try:
        df = await fetch_history(params)
    except ValueError as e:
        return build_error_response(
            error_type="invalid_symbol",
            message=str(e),
            symbol=params.symbol,
        )
    except Exception as e:
        return build_error_response(
            error_type="data_unavailable",
            message=f"Failed to fetch data: {e}",
            symbol=params.symbol,
        )

    uri = price_cache.store(params, df)
    duration_ms = (perf_counter() - start_time) * 1000

    response: dict[str, Any] = {
        "meta": build_meta("get_price_history", duration_ms),
        "data_provenance": {"price": _price_provenance(params, df)},
        "symbol": params.symbol,
        "period": params.period,
        "interval": params.interval,
        "adjusted": adjusted,
        "summary": summarize_prices(df),
        "resource_uri": uri,
        "resource_rows": len(df),
    }

    if include_preview:
        response["preview"] = df_to_rows(df.tail(PREVIEW_ROWS))

    return response


def _price_provenance(params: FetchParams, df: pd.DataFrame) -> dict[str, Any]:
    """Where the bars came from, how they were adjusted and the session they end in."""
    market_state = get_market_state(params.tz)
    return build_provenance(
        source="yfinance",
        as_of=utc_timestamp(),
        bar_timezone=params.tz,
        price_adjustment="auto_adjust_true" if params.adjusted else "auto_adjust_false",
        market_state=market_state["state"],
        market_state_method=market_state["method"],
        last_bar_date=df["date"].iloc[-1] if len(df) > 0 else None,
    )
