"""Financial metrics tool."""

import asyncio
from dataclasses import fields
from time import perf_counter
from typing import Any

from stock_insight.data.market_data import build_financial_metrics
from stock_insight.data.yfinance_client import fetch_income_statement, fetch_info
from stock_insight.scoring.models import FinancialMetrics
from stock_insight.tools.inputs import fetch_optional
from stock_insight.utils.provenance import (
    build_data_quality,
    build_error_response,
    build_meta,
    build_provenance,
    utc_timestamp,
)
from stock_insight.utils.validators import normalize_symbol


async def get_financial_metrics(symbol: str) -> dict[str, Any]:
    """
    Get valuation, profitability, health, growth and cash flow metrics.

    Missing metrics are reported as 0 and listed under data_quality.

    Args:
        symbol: Stock ticker symbol

    Returns:
        Dict with metrics and data_quality
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

    warnings: list[str] = []
    try:
        info, income_statement = await asyncio.gather(
            fetch_info(normalized_symbol),
            fetch_optional("income_statement", fetch_income_statement(normalized_symbol), warnings),
        )
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

    metrics = build_financial_metrics(info, income_statement)
    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("get_financial_metrics", duration_ms),
        "data_provenance": {
            "fundamentals": build_provenance(
                source="yfinance",
                as_of=utc_timestamp(),
                warnings=warnings,
            ),
        },
        "symbol": normalized_symbol,
        "metrics": metrics.to_dict(),
        "data_quality": build_data_quality(
            metrics.missing_fields(),
            len(fields(FinancialMetrics)),
        ),
    }
