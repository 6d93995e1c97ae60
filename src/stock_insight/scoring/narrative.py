"""
Narrative text over already-scored categories.

Each generator reads only the four ComponentScores. The thresholds here are
independent of the scoring ladders and of the rating cut points.
"""

from stock_insight.scoring.models import ComponentScore, Rating

# (strength if score >= , weakness if score < ) per category
SUMMARY_THRESHOLDS = {
    "financial_health": (24, 18),
    "valuation": (20, 12),
    "growth": (20, 12),
    "sentiment": (15, 10),
}

BULL_THRESHOLDS = {
    "growth": 15,
    "valuation": 18,
    "sentiment": 12,
    "financial_health": 20,
}

BEAR_THRESHOLDS = {
    "growth": 12,
    "valuation": 12,
    "sentiment": 10,
    "financial_health": 18,
}

NO_SUMMARY_FACTORS = "Balanced profile with no standout strengths or weaknesses identified."
NO_BULL_FACTORS = "Limited bullish factors identified."
NO_BEAR_FACTORS = "Limited bearish factors identified."


def generate_summary(
    health: ComponentScore,
    valuation: ComponentScore,
    growth: ComponentScore,
    sentiment: ComponentScore,
) -> str:
    """One sentence listing strengths, then weaknesses joined with 'but'."""
    strengths: list[str] = []
    weaknesses: list[str] = []

    checks = (
        ("financial_health", health, "strong financials", "weak balance sheet"),
        ("valuation", valuation, "attractive valuation", "stretched valuation"),
        ("growth", growth, "accelerating growth", "weak growth"),
        ("sentiment", sentiment, "positive sentiment", "negative sentiment"),
    )
    for key, component, strength, weakness in checks:
        strong_at, weak_below = SUMMARY_THRESHOLDS[key]
        if component.score >= strong_at:
            strengths.append(strength)
        elif component.score < weak_below:
            weaknesses.append(weakness)

    if strengths and weaknesses:
        sentence = f"{', '.join(strengths)} but {', '.join(weaknesses)}"
    elif strengths or weaknesses:
        sentence = ", ".join(strengths or weaknesses)
    else:
        return NO_SUMMARY_FACTORS

    return sentence[0].upper() + sentence[1:] + "."


def generate_bull_case(
    health: ComponentScore,
    valuation: ComponentScore,
    growth: ComponentScore,
    sentiment: ComponentScore,
) -> str:
    points: list[str] = []

    if growth.score >= BULL_THRESHOLDS["growth"]:
        points.append("Strong growth momentum could continue")
    if valuation.score >= BULL_THRESHOLDS["valuation"]:
        points.append("Valuation attractive relative to fundamentals")
    if sentiment.score >= BULL_THRESHOLDS["sentiment"]:
        points.append("Positive market sentiment and analyst support")
    if health.score >= BULL_THRESHOLDS["financial_health"]:
        points.append("Solid balance sheet provides stability")

    return ". ".join(points) + "." if points else NO_BULL_FACTORS


def generate_bear_case(
    health: ComponentScore,
    valuation: ComponentScore,
    growth: ComponentScore,
    sentiment: ComponentScore,
) -> str:
    points: list[str] = []

    if growth.score < BEAR_THRESHOLDS["growth"]:
        points.append("Growth slowing or stagnant")
    if valuation.score < BEAR_THRESHOLDS["valuation"]:
        points.append("Premium valuation leaves little room for error")
    if sentiment.score < BEAR_THRESHOLDS["sentiment"]:
        points.append("Negative sentiment could pressure stock")
    if health.score < BEAR_THRESHOLDS["financial_health"]:
        points.append("Financial health concerns increase risk")

    return ". ".join(points) + "." if points else NO_BEAR_FACTORS


def generate_verdict(symbol: str, rating: Rating) -> str:
    if rating is Rating.BUY:
        return (
            f"{rating.value}. Strong fundamentals and attractive setup. "
            f"Consider {symbol} for portfolio allocation."
        )
    if rating is Rating.HOLD:
        return (
            f"{rating.value}. Mixed signals - good company but wait for better "
            "entry point or clearer catalyst."
        )
    return f"{rating.value}. Too many red flags. Better opportunities elsewhere."
