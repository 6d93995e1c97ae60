"""Growth scoring (25 points)."""

from stock_insight.scoring.models import (
    ComponentScore,
    FinancialMetrics,
    MetricExplanation,
    Severity,
)

MAX_SCORE = 25


def score_growth(metrics: FinancialMetrics) -> ComponentScore:
    """Score revenue growth, EPS growth and profit margin."""
    explanations = [
        _score_revenue_growth(metrics.revenue_growth * 100),
        _score_eps_growth(metrics.eps_growth * 100),
        _score_profit_margin(metrics.profit_margin * 100),
    ]
    total = sum(e.points for e in explanations)

    if total >= 20:
        label = "Strong momentum"
    elif total >= 15:
        label = "Moderate growth"
    else:
        label = "Weak growth"

    return ComponentScore.from_explanations(
        explanations,
        max_score=MAX_SCORE,
        summary=f"Growth score: {total}/{MAX_SCORE}. {label}.",
    )


def _score_revenue_growth(pct: float) -> MetricExplanation:
    if pct >= 20:
        points, severity = 10, Severity.OK
        reason = f"Exceptional growth - expanding {pct:.1f}% YoY. Strong market demand."
    elif pct >= 12:
        points, severity = 7, Severity.OK
        reason = "Good growth - above typical market growth. Gaining market share."
    elif pct >= 5:
        points, severity = 4, Severity.OK
        reason = "Moderate growth - keeping pace with economy but not exceptional."
    elif pct >= 0:
        points, severity = 2, Severity.WARNING
        reason = "Slow growth - barely growing. Market may be saturated."
    else:
        points, severity = 0, Severity.CRITICAL
        reason = "Revenue declining - losing market share or facing headwinds."

    return MetricExplanation(
        metric="Revenue Growth",
        value=f"{pct:.1f}% YoY",
        points=points,
        max_points=10,
        reason=reason,
        severity=severity,
        implications="Revenue growth drives stock appreciation. Higher growth = higher valuations.",
        source="Yahoo Finance - Income Statement",
    )


def _score_eps_growth(pct: float) -> MetricExplanation:
    if pct >= 25:
        points, severity = 10, Severity.OK
        reason = f"Outstanding - earnings growing {pct:.1f}% YoY. Expanding profitability."
    elif pct >= 15:
        points, severity = 7, Severity.OK
        reason = "Strong growth - earnings growing faster than typical. Good operational efficiency."
    elif pct >= 8:
        points, severity = 4, Severity.OK
        reason = "Moderate growth - steady but not spectacular. Keeping up with market."
    elif pct >= 0:
        points, severity = 2, Severity.WARNING
        reason = "Weak growth - earnings barely growing. Margin pressure possible."
    else:
        points, severity = 0, Severity.CRITICAL
        reason = "Earnings declining - profitability under pressure. Red flag."

    return MetricExplanation(
        metric="EPS Growth",
        value=f"{pct:.1f}% YoY",
        points=points,
        max_points=10,
        reason=reason,
        severity=severity,
        implications="Earnings growth drives stock prices. Faster than revenue = improving margins.",
        source="Yahoo Finance",
    )


def _score_profit_margin(pct: float) -> MetricExplanation:
    if pct >= 25:
        points, severity = 5, Severity.OK
        reason = f"Exceptional margins - keeping {pct:.1f}% of revenue. Strong pricing power."
    elif pct >= 15:
        points, severity = 4, Severity.OK
        reason = "Good margins - healthy profitability. Efficient operations."
    elif pct >= 8:
        points, severity = 3, Severity.OK
        reason = "Average margins - competitive but not standout."
    elif pct >= 0:
        points, severity = 1, Severity.WARNING
        reason = "Thin margins - little room for error. Cost pressure concerns."
    else:
        points, severity = 0, Severity.CRITICAL
        reason = "Unprofitable - losing money on sales."

    return MetricExplanation(
        metric="Profit Margin",
        value=f"{pct:.1f}%",
        points=points,
        max_points=5,
        reason=reason,
        severity=severity,
        implications="Higher margins = better business quality and pricing power.",
        source="Yahoo Finance",
    )
