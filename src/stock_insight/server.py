"""Stock Insight MCP Server using FastMCP."""

import asyncio
import json
import logging
import os

from fastmcp import FastMCP

from stock_insight import SCHEMA_VERSION, SERVER_VERSION, tools
from stock_insight.data.cache import price_cache
from stock_insight.data.yfinance_client import shutdown_executor
from stock_insight.prompts.templates import get_prompt
from stock_insight.utils.validators import FetchParams

# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, log_level, logging.INFO))
logger = logging.getLogger(__name__)

# Create FastMCP server instance
mcp = FastMCP(
    name="stock-insight",
    instructions=get_prompt("stock_analyst", {})["messages"][0]["content"],
)


# ============================================================================
# TOOLS
# ============================================================================


@mcp.tool
async def search_symbol(query: str, limit: int = 10) -> str:
    """
    Search for US-listed stock symbols by company name or ticker.

    Args:
        query: Search query (company name or ticker symbol)
        limit: Maximum number of results (default: 10)

    Returns:
        JSON with search results and exact match info
    """
    result = await tools.search_symbol(query=query, limit=limit)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_stock_info(symbol: str) -> str:
    """
    Get current price and basic company information.

    Args:
        symbol: Stock ticker symbol (e.g., AAPL, GOOGL, MSFT)

    Returns:
        JSON with name, sector, industry, price, change, change percent and market cap
    """
    result = await tools.get_stock_info(symbol=symbol)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_financial_metrics(symbol: str) -> str:
    """
    Get financial metrics: valuation ratios, profitability, financial health,
    growth rates and cash flow.

    Growth and margin values are fractions (0.20 = 20%). Metrics that are
    unavailable are reported as 0 and listed in data_quality.missing_fields.

    Args:
        symbol: Stock ticker symbol

    Returns:
        JSON with metrics and data_quality
    """
    result = await tools.get_financial_metrics(symbol=symbol)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def calculate_investment_score(
    symbol: str,
    sentiment_score: float | None = None,
    sentiment_label: str | None = None,
    sentiment_article_count: int | None = None,
    sentiment_source: str | None = None,
) -> str:
    """
    Calculate a 0-100 investment score with a detailed, explained breakdown.

    Components: financial health (30), valuation (25), growth (25),
    sentiment (20). Rating: BUY >= 78, HOLD >= 58, SELL below 58.
    Every factor carries its value, points, reason, implications, source
    and severity (ok / warning / critical).

    News sentiment is optional. Pass it only if you have already assessed
    recent news; otherwise news is scored as neutral.

    Args:
        symbol: Stock ticker symbol
        sentiment_score: News sentiment from -1 (very negative) to 1 (very positive)
        sentiment_label: Short label, e.g. "positive" (optional)
        sentiment_article_count: Number of articles assessed (optional)
        sentiment_source: Where the sentiment came from (optional)

    Returns:
        JSON with total, rating, breakdown, summary, bull_case, bear_case,
        verdict and data_quality
    """
    result = await tools.calculate_investment_score(
        symbol=symbol,
        sentiment_score=sentiment_score,
        sentiment_label=sentiment_label,
        sentiment_article_count=sentiment_article_count,
        sentiment_source=sentiment_source,
    )
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_price_history(
    symbol: str,
    period: str = "1y",
    interval: str = "1d",
    adjusted: bool = True,
    include_preview: bool = True,
) -> str:
    """
    Fetch historical price data with summary statistics.

    Args:
        symbol: Stock ticker symbol
        period: Time period - 1mo, 3mo, 6mo, 1y, 2y, 5y, ytd, max
        interval: Bar interval - 1d, 5d, 1wk, 1mo, 3mo
        adjusted: Use split/dividend adjusted prices (default: true)
        include_preview: Include last 5 bars in response (default: true)

    Returns:
        JSON with price summary, preview bars, and resource URI for full data
    """
    result = await tools.get_price_history(
        symbol=symbol,
        period=period,
        interval=interval,
        adjusted=adjusted,
        include_preview=include_preview,
    )
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def compare_stocks(symbols: list[str]) -> str:
    """
    Compare 2-4 stocks side by side: price, metrics, analyst consensus and
    investment score, ranked by total score.

    Args:
        symbols: Stock ticker symbols, e.g. ["AAPL", "MSFT", "GOOGL"]

    Returns:
        JSON with per-stock data, ranking and any symbols that failed to load
    """
    result = await tools.compare_stocks(symbols=symbols)
    return json.dumps(result, indent=2, default=str)


# ============================================================================
# RESOURCES
# ============================================================================


@mcp.resource("price://{symbol}/{period}/{interval}/{adjusted}")
def get_cached_price_data(symbol: str, period: str, interval: str, adjusted: str) -> str:
    """
    Get cached price data as CSV.

    Must call get_price_history first to populate the cache.

    Args:
        symbol: Stock ticker symbol
        period: Time period
        interval: Bar interval
        adjusted: 'adjusted' or 'unadjusted'

    Returns:
        CSV data with date,open,high,low,close,volume columns
    """
    try:
        is_adjusted = adjusted.lower() == "adjusted"
        params = FetchParams(
            symbol=symbol,
            period=period,
            interval=interval,
            adjusted=is_adjusted,
        )
    except ValueError as e:
        return f"Error: {e}"

    csv_text = price_cache.get_csv(params.to_uri())
    if csv_text is None:
        adj_str = "adjusted=true" if is_adjusted else "adjusted=false"
        return (
            f"Resource not cached. Call get_price_history('{symbol}', '{period}', "
            f"'{interval}', {adj_str}) first."
        )
    return csv_text


# ============================================================================
# PROMPTS
# ============================================================================


@mcp.prompt
def stock_analyst() -> str:
    """Analyst instructions: explain the why behind every number and cite sources."""
    return get_prompt("stock_analyst", {})["messages"][0]["content"]


@mcp.prompt
def score_breakdown(symbol: str) -> str:
    """Walk through the investment score of a stock component by component."""
    result = get_prompt("score_breakdown", {"symbol": symbol})
    if result:
        return result["messages"][0]["content"]
    return f"Explain the investment score of {symbol} using calculate_investment_score."


@mcp.prompt
def compare(symbols: str) -> str:
    """Head-to-head comparison of 2-4 stocks (comma-separated symbols)."""
    result = get_prompt("compare", {"symbols": symbols})
    if result:
        return result["messages"][0]["content"]
    return f"Compare {symbols} using compare_stocks."


# ============================================================================
# ENTRY POINT
# ============================================================================


def main() -> None:
    """Run the MCP server."""
    logger.info(f"Starting Stock Insight MCP Server v{SERVER_VERSION} (schema v{SCHEMA_VERSION})")
    try:
        mcp.run()
    finally:
        asyncio.run(shutdown_executor())
        price_cache.close()
        logger.info("Stock Insight MCP Server stopped")


if __name__ == "__main__":
    main()
