"""Financial health scoring (30 points)."""

from stock_insight.scoring.models import (
    ComponentScore,
    FinancialMetrics,
    MetricExplanation,
    Severity,
)

MAX_SCORE = 30
BALANCE_SHEET_SOURCE = "Yahoo Finance - Balance Sheet"
INCOME_STATEMENT_SOURCE = "Yahoo Finance - Income Statement"


def score_financial_health(metrics: FinancialMetrics) -> ComponentScore:
    """
    Score liquidity, leverage and debt service.

    Args:
        metrics: Financial metrics snapshot

    Returns:
        ComponentScore out of 30 with one explanation per factor
    """
    explanations = [
        _score_current_ratio(metrics.current_ratio),
        _score_debt_to_equity(metrics.debt_to_equity),
        _score_interest_coverage(metrics.interest_coverage),
    ]
    total = sum(e.points for e in explanations)
    return ComponentScore.from_explanations(
        explanations,
        max_score=MAX_SCORE,
        summary=_health_summary(total),
    )


def _score_current_ratio(current_ratio: float) -> MetricExplanation:
    if current_ratio >= 2.0:
        points, severity = 10, Severity.OK
        reason = (
            f"Excellent liquidity - can cover short-term obligations "
            f"{current_ratio:.1f}x over. Healthy buffer for operations."
        )
    elif current_ratio >= 1.5:
        points, severity = 7, Severity.OK
        reason = "Good liquidity - comfortable coverage of obligations. Sector average is typically 1.5."
    elif current_ratio >= 1.0:
        points, severity = 4, Severity.OK
        reason = "Adequate liquidity - can cover obligations but with little buffer. Monitor closely."
    else:
        points, severity = 1, Severity.WARNING
        reason = "Weak liquidity - may struggle with short-term obligations. Risk of cash flow issues."

    return MetricExplanation(
        metric="Current Ratio",
        value=f"{current_ratio:.2f}",
        points=points,
        max_points=10,
        reason=reason,
        severity=severity,
        implications="Measures ability to pay short-term debts. Higher is safer.",
        source=BALANCE_SHEET_SOURCE,
    )


def _score_debt_to_equity(debt_to_equity: float) -> MetricExplanation:
    # Inverted ladder: less leverage earns more points
    if debt_to_equity <= 0.5:
        points, severity = 10, Severity.OK
        reason = (
            "Very conservative capital structure. Low financial risk. "
            "Company relies more on equity than debt."
        )
    elif debt_to_equity <= 1.0:
        points, severity = 7, Severity.OK
        reason = "Moderate debt load, below typical threshold of 1.0. Balanced approach to financing."
    elif debt_to_equity <= 2.0:
        points, severity = 4, Severity.WARNING
        reason = "Higher debt levels. Company is leveraged, which amplifies both gains and risks."
    else:
        points, severity = 1, Severity.CRITICAL
        reason = "Very high debt load. Significant financial risk, especially if rates rise or earnings fall."

    return MetricExplanation(
        metric="Debt-to-Equity",
        value=f"{debt_to_equity:.2f}",
        points=points,
        max_points=10,
        reason=reason,
        severity=severity,
        implications="Lower ratios indicate less financial risk and more stability.",
        source=BALANCE_SHEET_SOURCE,
    )


def _score_interest_coverage(coverage: float) -> MetricExplanation:
    if coverage >= 8.0:
        points, severity = 10, Severity.OK
        reason = f"Excellent - earnings cover interest {coverage:.1f}x over. Very safe debt position."
    elif coverage >= 5.0:
        points, severity = 7, Severity.OK
        reason = "Good coverage - company can comfortably service debt obligations."
    elif coverage >= 2.5:
        points, severity = 4, Severity.WARNING
        reason = "Adequate but thin coverage. Rising rates or falling earnings could cause stress."
    elif coverage > 0:
        points, severity = 1, Severity.CRITICAL
        reason = "Weak coverage - barely covering interest. High risk of financial distress."
    else:
        points, severity = 0, Severity.CRITICAL
        reason = "Cannot cover interest payments. Serious financial trouble."

    return MetricExplanation(
        metric="Interest Coverage",
        value=f"{coverage:.1f}x",
        points=points,
        max_points=10,
        reason=reason,
        severity=severity,
        implications="Measures ability to pay interest on debt. Below 2.5x is concerning.",
        source=INCOME_STATEMENT_SOURCE,
    )


def _health_summary(score: int) -> str:
    if score >= 24:
        return (
            f"Strong financial foundation ({score}/{MAX_SCORE}). Balance sheet is "
            "healthy with good liquidity and manageable debt."
        )
    if score >= 18:
        return f"Adequate financial health ({score}/{MAX_SCORE}). Some areas of concern but overall stable."
    return f"Weak financial position ({score}/{MAX_SCORE}). Monitor closely for signs of distress."
