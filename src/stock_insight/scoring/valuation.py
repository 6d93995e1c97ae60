"""Valuation scoring (25 points)."""

from stock_insight.scoring.config import DEFAULT_CONFIG, ScoringConfig
from stock_insight.scoring.models import (
    ComponentScore,
    FinancialMetrics,
    MetricExplanation,
    Severity,
)

MAX_SCORE = 25
SOURCE = "Yahoo Finance"


def score_valuation(
    metrics: FinancialMetrics,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> ComponentScore:
    """
    Score P/E against the configured sector average, and PEG.

    Args:
        metrics: Financial metrics snapshot
        config: Scoring parameters (sector average P/E)

    Returns:
        ComponentScore out of 25
    """
    pe = _score_pe_ratio(metrics.pe_ratio, config.sector_average_pe)
    peg = _score_peg_ratio(metrics.peg_ratio)

    total = pe.points + peg.points
    label = "Premium valuation" if pe.points < 8 else "Reasonable pricing"

    return ComponentScore.from_explanations(
        [pe, peg],
        max_score=MAX_SCORE,
        summary=f"Valuation score: {total}/{MAX_SCORE}. {label}.",
    )


def _score_pe_ratio(pe_ratio: float, sector_avg: float) -> MetricExplanation:
    premium_pct = (pe_ratio / sector_avg - 1) * 100

    if pe_ratio <= 0:
        points, severity = 0, Severity.CRITICAL
        reason = "Unprofitable - negative or zero earnings. Cannot assign value using P/E."
    elif pe_ratio < sector_avg * 0.7:
        points, severity = 15, Severity.OK
        reason = (
            f"Undervalued - P/E is {abs(premium_pct):.0f}% below the sector average of "
            f"{sector_avg:g}. Potential bargain if quality is good."
        )
    elif pe_ratio < sector_avg:
        points, severity = 12, Severity.OK
        reason = (
            f"Fair value - P/E is {abs(premium_pct):.0f}% below the sector average of "
            f"{sector_avg:g}. Reasonable entry point."
        )
    elif pe_ratio < sector_avg * 1.3:
        points, severity = 8, Severity.WARNING
        reason = (
            f"Slight premium - paying {premium_pct:.0f}% more than sector average. "
            "Growth must justify this."
        )
    elif pe_ratio < sector_avg * 2:
        points, severity = 4, Severity.WARNING
        reason = (
            f"Significant premium - P/E is {premium_pct:.0f}% above sector. "
            "High expectations priced in."
        )
    else:
        points, severity = 1, Severity.CRITICAL
        reason = (
            f"Very expensive - P/E is {premium_pct:.0f}% above sector. Implies massive "
            "growth expectations or potential bubble."
        )

    return MetricExplanation(
        metric="P/E Ratio",
        value=f"{pe_ratio:.1f}",
        points=points,
        max_points=15,
        reason=reason,
        severity=severity,
        context={"sector_average": sector_avg},
        implications=f"You're paying ${pe_ratio:.2f} for every $1 of annual earnings.",
        source=SOURCE,
    )


def _score_peg_ratio(peg_ratio: float) -> MetricExplanation:
    if peg_ratio <= 0:
        points, severity = 0, Severity.WARNING
        reason = "Cannot calculate PEG - negative growth or P/E."
    elif peg_ratio < 1.0:
        points, severity = 10, Severity.OK
        reason = "Excellent - growth justifies or exceeds the P/E premium. Strong value."
    elif peg_ratio < 1.5:
        points, severity = 7, Severity.OK
        reason = "Good - P/E is reasonable given growth rate. Fair valuation."
    elif peg_ratio < 2.0:
        points, severity = 4, Severity.WARNING
        reason = "Somewhat expensive - paying a premium even accounting for growth."
    else:
        points, severity = 1, Severity.CRITICAL
        reason = "Overvalued - P/E way too high relative to growth expectations."

    return MetricExplanation(
        metric="PEG Ratio",
        value=f"{peg_ratio:.2f}",
        points=points,
        max_points=10,
        reason=reason,
        severity=severity,
        implications="P/E divided by growth rate. Under 1.5 suggests growth justifies premium.",
        source=SOURCE,
    )
