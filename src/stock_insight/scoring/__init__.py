"""Deterministic investment scoring engine."""

from stock_insight.scoring.config import DEFAULT_CONFIG, ScoringConfig
from stock_insight.scoring.engine import calculate_score, rate_total
from stock_insight.scoring.models import (
    ABSENT,
    Absent,
    AnalystData,
    ComponentScore,
    FinancialMetrics,
    InsiderTransaction,
    InvestmentScore,
    MetricExplanation,
    Present,
    PriceTarget,
    Rating,
    ScoreBreakdown,
    SentimentAnalysis,
    Severity,
    as_optional,
)

__all__ = [
    # Config
    "DEFAULT_CONFIG",
    "ScoringConfig",
    # Engine
    "calculate_score",
    "rate_total",
    # Models
    "ABSENT",
    "Absent",
    "AnalystData",
    "ComponentScore",
    "FinancialMetrics",
    "InsiderTransaction",
    "InvestmentScore",
    "MetricExplanation",
    "Present",
    "PriceTarget",
    "Rating",
    "ScoreBreakdown",
    "SentimentAnalysis",
    "Severity",
    "as_optional",
]
