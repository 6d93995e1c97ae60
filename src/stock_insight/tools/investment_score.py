"""Investment score tool."""

import logging
from dataclasses import fields
from time import perf_counter
from typing import Any

from stock_insight.scoring.config import ScoringConfig
from stock_insight.scoring.engine import calculate_score
from stock_insight.scoring.models import FinancialMetrics, SentimentAnalysis
from stock_insight.tools.inputs import gather_scoring_inputs
from stock_insight.utils.provenance import (
    build_data_quality,
    build_error_response,
    build_meta,
    build_provenance,
    utc_timestamp,
)
from stock_insight.utils.validators import normalize_symbol

logger = logging.getLogger(__name__)


def build_sentiment(
    score: float | None,
    label: str | None = None,
    article_count: int | None = None,
    source: str | None = None,
) -> SentimentAnalysis | None:
    """
    Build a SentimentAnalysis from caller-supplied values.

    Returns None when no score is given, which scores news at the neutral value.

    Raises:
        ValueError: If score is outside -1..1 or article_count is negative
    """
    if score is None:
        return None
    if not -1.0 <= score <= 1.0:
        raise ValueError(f"sentiment_score must be within -1 and 1, got {score}")
    if article_count is not None and article_count < 0:
        raise ValueError(f"sentiment_article_count must be >= 0, got {article_count}")

    if not label:
        if score > 0.2:
            label = "positive"
        elif score < -0.2:
            label = "negative"
        else:
            label = "neutral"

    return SentimentAnalysis(
        score=score,
        label=label,
        article_count=article_count or 0,
        source=source or "caller supplied",
    )


async def calculate_investment_score(
    symbol: str,
    sentiment_score: float | None = None,
    sentiment_label: str | None = None,
    sentiment_article_count: int | None = None,
    sentiment_source: str | None = None,
    config: ScoringConfig | None = None,
) -> dict[str, Any]:
    """
    Score a stock 0-100 with an explained breakdown.

    Fetches fundamentals, analyst consensus, insider activity and the income
    statement concurrently. News sentiment is only used when supplied.

    Args:
        symbol: Stock ticker symbol
        sentiment_score: Pre-computed news sentiment, -1 to 1 (optional)
        sentiment_label: Label for the sentiment (optional)
        sentiment_article_count: Articles behind the sentiment (optional)
        sentiment_source: Where the sentiment came from (optional)
        config: Scoring parameters (default: from environment)

    Returns:
        Dict with the score breakdown, data_quality and provenance
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
        sentiment = build_sentiment(
            sentiment_score,
            sentiment_label,
            sentiment_article_count,
            sentiment_source,
        )
        config = config or ScoringConfig.from_env()
    except ValueError as e:
        return build_error_response(
            error_type="invalid_parameters",
            message=str(e),
            symbol=normalized_symbol,
        )

    try:
        inputs = await gather_scoring_inputs(normalized_symbol)
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

    result = calculate_score(
        normalized_symbol,
        inputs.metrics,
        inputs.analyst_data,
        sentiment=sentiment,
        insiders=inputs.insiders,
        config=config,
    )
    data_quality = build_data_quality(
        inputs.metrics.missing_fields(),
        len(fields(FinancialMetrics)),
    )
    if data_quality["low_quality"]:
        logger.info(
            f"calculate_investment_score({normalized_symbol}): "
            f"{len(data_quality['missing_fields'])} metrics missing"
        )

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("calculate_investment_score", duration_ms),
        "data_provenance": {
            "fundamentals": build_provenance(
                source="yfinance",
                as_of=utc_timestamp(),
                warnings=inputs.warnings,
            ),
            "sentiment": build_provenance(
                source=sentiment.source if sentiment else "none",
                supplied=sentiment is not None,
            ),
        },
        **result.to_dict(),
        "data_quality": data_quality,
        "sector_average_pe": config.sector_average_pe,
    }
