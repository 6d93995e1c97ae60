"""
Market sentiment scoring (20 points).

Three sub-factors:
  analyst consensus (10) - always present
  news sentiment     (7) - optional, neutral fallback when absent
  insider trading    (3) - optional, neutral fallback when absent

A missing optional source earns the configured neutral points, not zero.
"""

from collections.abc import Sequence

from stock_insight.scoring.config import DEFAULT_CONFIG, ScoringConfig
from stock_insight.scoring.models import (
    Absent,
    AnalystData,
    ComponentScore,
    InsiderTransaction,
    MetricExplanation,
    Present,
    SentimentAnalysis,
    Severity,
)
from stock_insight.utils.text import format_millions, format_signed

MAX_SCORE = 20

NEWS_MAX_POINTS = 7
INSIDER_MAX_POINTS = 3

# Net insider dollar flow thresholds
STRONG_NET_BUYING = 1_000_000
HEAVY_NET_SELLING = -5_000_000


def score_sentiment(
    analyst_data: AnalystData,
    sentiment: Present[SentimentAnalysis] | Absent,
    insiders: Present[Sequence[InsiderTransaction]] | Absent,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> ComponentScore:
    """
    Score analyst consensus, news sentiment and insider activity.

    Args:
        analyst_data: Analyst consensus and price targets
        sentiment: Present(SentimentAnalysis) or Absent
        insiders: Present(transactions) or Absent
        config: Scoring parameters (neutral fallback points)

    Returns:
        ComponentScore out of 20
    """
    explanations = [
        _score_analyst_consensus(analyst_data),
        _score_news_sentiment(sentiment, config),
        _score_insider_trading(insiders, config),
    ]
    total = sum(e.points for e in explanations)

    if total >= 15:
        label = "Positive market mood"
    elif total >= 10:
        label = "Mixed sentiment"
    else:
        label = "Negative sentiment"

    return ComponentScore.from_explanations(
        explanations,
        max_score=MAX_SCORE,
        summary=f"Sentiment score: {total}/{MAX_SCORE}. {label}.",
    )


def analyst_upside_pct(analyst_data: AnalystData) -> float | None:
    """Percent move from current price to the average target, None without a price."""
    target = analyst_data.price_target
    if not target.current > 0:
        return None
    return (target.average - target.current) / target.current * 100


def _score_analyst_consensus(analyst_data: AnalystData) -> MetricExplanation:
    pct = analyst_data.percentage

    if pct >= 70:
        points, severity = 10, Severity.OK
        reason = (
            f'Strong consensus - {pct:g}% of {analyst_data.count} analysts rate "Buy". '
            "High conviction."
        )
    elif pct >= 50:
        points, severity = 7, Severity.OK
        reason = f"Positive lean - majority ({pct:g}%) recommend buying."
    elif pct >= 30:
        points, severity = 4, Severity.WARNING
        reason = "Mixed views - no clear consensus among analysts. Do your own research."
    else:
        points, severity = 2, Severity.CRITICAL
        reason = "Bearish - most analysts cautious or negative. Concerns about outlook."

    upside = analyst_upside_pct(analyst_data)
    if upside is None:
        implications = "Upside to target price unavailable - no current price reference."
    else:
        implications = f"Analysts see {format_signed(upside, 1, always_sign=upside >= 0)}% upside to target price."

    return MetricExplanation(
        metric="Analyst Consensus",
        value=f"{pct:g}% Buy",
        points=points,
        max_points=10,
        reason=reason,
        severity=severity,
        context={
            "reference_values": [
                {"label": "Average Price Target", "value": analyst_data.price_target.average},
                {"label": "Current Price", "value": analyst_data.price_target.current},
            ],
        },
        implications=implications,
        source="Yahoo Finance - Analyst Ratings",
    )


def _score_news_sentiment(
    sentiment: Present[SentimentAnalysis] | Absent,
    config: ScoringConfig,
) -> MetricExplanation:
    if isinstance(sentiment, Absent):
        return MetricExplanation(
            metric="News Sentiment",
            value="N/A",
            points=config.neutral_news_points,
            max_points=NEWS_MAX_POINTS,
            reason="Sentiment data not available",
            severity=Severity.OK,
            implications="Unable to analyze recent news sentiment.",
            source="N/A",
        )

    data = sentiment.value
    score = data.score

    if score >= 0.5:
        points, severity = 7, Severity.OK
        reason = f"Very positive news cycle - {data.label}. Strong market buzz."
    elif score >= 0.2:
        points, severity = 5, Severity.OK
        reason = f"Positive sentiment - {data.article_count} recent articles mostly favorable."
    elif score >= -0.2:
        points, severity = 3, Severity.OK
        reason = "Neutral sentiment - balanced news coverage, no major themes."
    elif score >= -0.5:
        points, severity = 2, Severity.WARNING
        reason = "Negative sentiment - concerns in media coverage."
    else:
        points, severity = 0, Severity.CRITICAL
        reason = "Very negative - bad news dominating headlines."

    return MetricExplanation(
        metric="News Sentiment",
        value=format_signed(score, 2, always_sign=score > 0),
        points=points,
        max_points=NEWS_MAX_POINTS,
        reason=reason,
        severity=severity,
        implications=f"Sentiment analysis of {data.article_count} recent articles.",
        source=data.source,
    )


def _score_insider_trading(
    insiders: Present[Sequence[InsiderTransaction]] | Absent,
    config: ScoringConfig,
) -> MetricExplanation:
    if isinstance(insiders, Absent) or not insiders.value:
        return MetricExplanation(
            metric="Insider Trading",
            value="No data",
            points=config.neutral_insider_points,
            max_points=INSIDER_MAX_POINTS,
            reason="No recent insider transactions available",
            severity=Severity.OK,
            implications="Unable to assess insider sentiment.",
            source="Yahoo Finance",
        )

    transactions = insiders.value
    buys = [tx for tx in transactions if tx.type.lower() == "buy"]
    sells = [tx for tx in transactions if tx.type.lower() == "sell"]
    net_amount = sum(tx.amount for tx in buys) - sum(tx.amount for tx in sells)

    if net_amount > STRONG_NET_BUYING and len(buys) > len(sells):
        points, severity = 3, Severity.OK
        reason = f"Net insider buying of ${format_millions(net_amount)}. Bullish signal."
    elif net_amount >= 0:
        points, severity = 2, Severity.OK
        reason = "Neutral - balanced insider activity."
    elif net_amount > HEAVY_NET_SELLING:
        points, severity = 1, Severity.WARNING
        reason = "Modest insider selling - could be routine diversification."
    else:
        points, severity = 0, Severity.CRITICAL
        reason = f"Heavy insider selling of ${format_millions(abs(net_amount))}. Concerning signal."

    return MetricExplanation(
        metric="Insider Trading",
        value=f"${format_millions(net_amount)} net",
        points=points,
        max_points=INSIDER_MAX_POINTS,
        reason=reason,
        severity=severity,
        implications=f"{len(buys)} buys, {len(sells)} sells in last 90 days.",
        source="SEC Form 4 Filings via Yahoo Finance",
    )
