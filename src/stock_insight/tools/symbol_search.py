"""Symbol search tool."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from time import perf_counter
from typing import Any

from yfinance import Search

from stock_insight.utils.provenance import (
    build_error_response,
    build_meta,
    build_provenance,
    utc_timestamp,
)
from stock_insight.utils.text import sanitize_text

logger = logging.getLogger(__name__)

# US exchange codes as reported by Yahoo search
US_EXCHANGES = {"NYSE", "NASDAQ", "NMS", "NYQ", "NGM", "PCX", "AMEX", "BTS", "NCM", "ASE"}

MAX_LIMIT = 25

_executor = ThreadPoolExecutor(max_workers=2)


async def search_symbol(query: str, limit: int = 10) -> dict[str, Any]:
    """
    Search US-listed symbols by company name or ticker.

    Args:
        query: Search query (company name or ticker)
        limit: Maximum number of results (default: 10, max: 25)

    Returns:
        Dict with search results and exact match info
    """
    start_time = perf_counter()

    query = (query or "").strip()
    if not query:
        return build_error_response(
            error_type="invalid_parameters",
            message="query cannot be empty",
        )
    limit = max(1, min(limit, MAX_LIMIT))

    def _search() -> list[dict[str, Any]]:
        results = []
        for quote in Search(query).quotes:
            exchange = quote.get("exchange", "")
            if exchange not in US_EXCHANGES:
                continue
            results.append(
                {
                    "symbol": quote.get("symbol"),
                    "name": sanitize_text(quote.get("shortname") or quote.get("longname")),
                    "exchange": exchange,
                    "type": "etf" if quote.get("quoteType") == "ETF" else "equity",
                }
            )
            if len(results) >= limit:
                break
        return results

    try:
        loop = asyncio.get_running_loop()
        results = await loop.run_in_executor(_executor, _search)
    except Exception as e:
        logger.warning(f"search_symbol({query!r}) failed: {e}")
        return build_error_response(
            error_type="data_unavailable",
            message=f"Search failed: {e}",
        )

    # First result is not always the exact ticker
    normalized_query = query.upper()
    exact_match = next(
        (r["symbol"] for r in results if r["symbol"] == normalized_query),
        None,
    )

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("search_symbol", duration_ms),
        "data_provenance": {
            "search": build_provenance(
                source="yfinance",
                as_of=utc_timestamp(),
                query=query,
            ),
        },
        "results": results,
        "exact_match": exact_match,
    }
