"""Side-by-side comparison of 2-4 stocks."""

import asyncio
from time import perf_counter
from typing import Any

from stock_insight.scoring.config import ScoringConfig
from stock_insight.scoring.engine import calculate_score
from stock_insight.tools.inputs import ScoringInputs, gather_scoring_inputs
from stock_insight.tools.stock_info import summarize_info
from stock_insight.utils.provenance import (
    build_error_response,
    build_meta,
    build_provenance,
    utc_timestamp,
)
from stock_insight.utils.validators import validate_compare_symbols

# Per symbol; each symbol makes four yfinance calls
TIMEOUT_SECONDS = 20.0


async def compare_stocks(
    symbols: list[str],
    config: ScoringConfig | None = None,
) -> dict[str, Any]:
    """
    Compare 2-4 stocks: quote, metrics, analyst consensus and investment score.

    Symbols that fail to load are reported under `failures`; the rest are
    still compared. News sentiment is not used, so every symbol gets the
    same neutral news points.

    Args:
        symbols: Ticker symbols (2-4 distinct)
        config: Scoring parameters (default: from environment)

    Returns:
        Dict with per-symbol results and a ranking by total score
    """
    start_time = perf_counter()

    try:
        normalized = validate_compare_symbols(symbols)
        config = config or ScoringConfig.from_env()
    except ValueError as e:
        return build_error_response(
            error_type="invalid_parameters",
            message=str(e),
        )

    async def run_with_timeout(symbol: str) -> tuple[str, ScoringInputs | Exception]:
        try:
            inputs = await asyncio.wait_for(
                gather_scoring_inputs(symbol), timeout=TIMEOUT_SECONDS
            )
            return (symbol, inputs)
        except TimeoutError:
            return (symbol, TimeoutError(f"exceeded {TIMEOUT_SECONDS}s"))
        except Exception as e:
            return (symbol, e)

    results = await asyncio.gather(*[run_with_timeout(s) for s in normalized])

    stocks: list[dict[str, Any]] = []
    failures: list[dict[str, Any]] = []
    warnings: list[str] = []

    for symbol, result in results:
        if isinstance(result, Exception):
            failures.append(
                {
                    "symbol": symbol,
                    "error": type(result).__name__,
                    "message": str(result),
                }
            )
            continue

        score = calculate_score(
            symbol,
            result.metrics,
            result.analyst_data,
            insiders=result.insiders,
            config=config,
        )
        warnings.extend(f"{symbol}:{w}" for w in result.warnings)
        stocks.append(
            {
                **summarize_info(symbol, result.info),
                "metrics": result.metrics.to_dict(),
                "analyst": result.analyst_data.to_dict(),
                "score": {
                    "total": score.total,
                    "rating": score.rating.value,
                    "components": {
                        name: component.score
                        for name, component in score.breakdown.components().items()
                    },
                    "summary": score.summary,
                    "verdict": score.verdict,
                },
            }
        )

    if not stocks:
        return build_error_response(
            error_type="data_unavailable",
            message="Failed to fetch data for all symbols: "
            + "; ".join(f"{f['symbol']}: {f['message']}" for f in failures),
        )

    ranking = [
        s["symbol"]
        for s in sorted(stocks, key=lambda s: s["score"]["total"], reverse=True)
    ]
    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("compare_stocks", duration_ms),
        "data_provenance": {
            "fundamentals": build_provenance(
                source="yfinance",
                as_of=utc_timestamp(),
                warnings=warnings,
            ),
        },
        "symbols": normalized,
        "stocks": stocks,
        "ranking": ranking,
        "failures": failures,
    }
