"""Investment score aggregator."""

import logging
from collections.abc import Sequence

from stock_insight.scoring.config import DEFAULT_CONFIG, ScoringConfig
from stock_insight.scoring.financial_health import score_financial_health
from stock_insight.scoring.growth import score_growth
from stock_insight.scoring.models import (
    Absent,
    AnalystData,
    FinancialMetrics,
    InsiderTransaction,
    InvestmentScore,
    Present,
    Rating,
    ScoreBreakdown,
    SentimentAnalysis,
    as_optional,
)
from stock_insight.scoring.narrative import (
    generate_bear_case,
    generate_bull_case,
    generate_summary,
    generate_verdict,
)
from stock_insight.scoring.sentiment import score_sentiment
from stock_insight.scoring.valuation import score_valuation

logger = logging.getLogger(__name__)

MAX_TOTAL_SCORE = 100

# Rating cut points on the 0-100 total
BUY_THRESHOLD = 78
HOLD_THRESHOLD = 58


def rate_total(total: int) -> Rating:
    """Map a 0-100 total to its rating tier."""
    if total >= BUY_THRESHOLD:
        return Rating.BUY
    if total >= HOLD_THRESHOLD:
        return Rating.HOLD
    return Rating.SELL


def calculate_score(
    symbol: str,
    metrics: FinancialMetrics,
    analyst_data: AnalystData,
    sentiment: SentimentAnalysis | Present[SentimentAnalysis] | Absent | None = None,
    insiders: Sequence[InsiderTransaction] | Present[Sequence[InsiderTransaction]] | Absent | None = None,
    config: ScoringConfig | None = None,
) -> InvestmentScore:
    """
    Calculate the 0-100 investment score with a full explained breakdown.

    Pure and synchronous: no I/O, no shared state. Safe to call concurrently.

    Args:
        symbol: Stock ticker symbol (used in the verdict text)
        metrics: Financial metrics snapshot
        analyst_data: Analyst consensus and price targets
        sentiment: Optional news sentiment (raw, Present/Absent, or None)
        insiders: Optional insider transactions (raw list, Present/Absent, or None)
        config: Scoring parameters (default: ScoringConfig())

    Returns:
        Immutable InvestmentScore
    """
    config = config or DEFAULT_CONFIG

    financial_health = score_financial_health(metrics)
    valuation = score_valuation(metrics, config)
    growth = score_growth(metrics)
    sentiment_score = score_sentiment(
        analyst_data,
        as_optional(sentiment),
        as_optional(insiders),
        config,
    )

    breakdown = ScoreBreakdown(
        financial_health=financial_health,
        valuation=valuation,
        growth=growth,
        sentiment=sentiment_score,
    )
    total = sum(c.score for c in breakdown.components().values())
    rating = rate_total(total)

    result = InvestmentScore(
        symbol=symbol,
        total=total,
        max_score=MAX_TOTAL_SCORE,
        rating=rating,
        breakdown=breakdown,
        summary=generate_summary(financial_health, valuation, growth, sentiment_score),
        bull_case=generate_bull_case(financial_health, valuation, growth, sentiment_score),
        bear_case=generate_bear_case(financial_health, valuation, growth, sentiment_score),
        verdict=generate_verdict(symbol, rating),
    )

    _validate_score_invariants(result)
    logger.debug(
        f"calculate_score({symbol}): total={total} rating={rating.value} "
        f"health={financial_health.score} valuation={valuation.score} "
        f"growth={growth.score} sentiment={sentiment_score.score}"
    )
    return result


def _validate_score_invariants(result: InvestmentScore) -> None:
    """
    Check sum and bound invariants of a finished score.

    Invariants enforced:
    1. Each component score equals the sum of its explanation points
    2. Each component score lies within 0..max_score
    3. total equals the sum of component scores and lies within 0..100

    Logs warnings for violations rather than raising (production-safe).
    """
    violations: list[str] = []
    components = result.breakdown.components()

    for name, component in components.items():
        points = sum(e.points for e in component.explanations)
        if points != component.score:
            violations.append(f"{name}.score={component.score} but sum(points)={points}")
        if not 0 <= component.score <= component.max_score:
            violations.append(
                f"{name}.score={component.score} outside 0..{component.max_score}"
            )

    component_sum = sum(c.score for c in components.values())
    if component_sum != result.total:
        violations.append(f"total={result.total} but sum(components)={component_sum}")
    if not 0 <= result.total <= result.max_score:
        violations.append(f"total={result.total} outside 0..{result.max_score}")

    for v in violations:
        logger.warning(f"Score invariant violation ({result.symbol}): {v}")
