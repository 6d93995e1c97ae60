"""Input snapshots and result types for the investment score."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Severity(str, Enum):
    """How an explanation should be flagged when rendered."""

    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


class Rating(str, Enum):
    """Overall rating tier derived from the total score."""

    BUY = "BUY"
    HOLD = "HOLD"
    SELL = "SELL"


@dataclass(frozen=True)
class FinancialMetrics:
    """
    Point-in-time financial metrics for one symbol.

    Zero doubles as the "unavailable" sentinel. Growth and margin fields
    are fractions (0.20 == 20%).
    """

    # Valuation
    pe_ratio: float = 0.0
    peg_ratio: float = 0.0
    price_to_book: float = 0.0
    price_to_sales: float = 0.0

    # Profitability
    profit_margin: float = 0.0
    operating_margin: float = 0.0
    return_on_equity: float = 0.0
    return_on_assets: float = 0.0

    # Financial health
    current_ratio: float = 0.0
    quick_ratio: float = 0.0
    debt_to_equity: float = 0.0
    interest_coverage: float = 0.0

    # Growth
    revenue_growth: float = 0.0
    earnings_growth: float = 0.0
    eps_growth: float = 0.0

    # Cash flow
    free_cash_flow: float = 0.0
    operating_cash_flow: float = 0.0
    capex: float = 0.0

    def missing_fields(self) -> list[str]:
        """Names of fields holding the zero sentinel."""
        return [f.name for f in fields(self) if getattr(self, f.name) == 0]

    def to_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class PriceTarget:
    high: float = 0.0
    average: float = 0.0
    low: float = 0.0
    current: float = 0.0


@dataclass(frozen=True)
class AnalystData:
    """Analyst consensus. `percentage` is the share of Buy ratings, 0-100."""

    rating: str = "Hold"
    count: int = 0
    percentage: float = 0.0
    price_target: PriceTarget = field(default_factory=PriceTarget)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rating": self.rating,
            "count": self.count,
            "percentage": self.percentage,
            "price_target": {
                "high": self.price_target.high,
                "average": self.price_target.average,
                "low": self.price_target.low,
                "current": self.price_target.current,
            },
        }


@dataclass(frozen=True)
class SentimentAnalysis:
    """Pre-computed news sentiment. `score` ranges from -1 to +1."""

    score: float
    label: str
    article_count: int
    source: str
    confidence: float | None = None
    themes_positive: tuple[str, ...] = ()
    themes_negative: tuple[str, ...] = ()


@dataclass(frozen=True)
class InsiderTransaction:
    type: str  # "buy" | "sell"
    amount: float
    shares: float = 0.0
    date: str = ""
    name: str = ""
    position: str = ""


@dataclass(frozen=True)
class Present(Generic[T]):
    """An optional input that was supplied."""

    value: T


@dataclass(frozen=True)
class Absent:
    """An optional input that was not supplied."""

    reason: str = "not supplied"


ABSENT = Absent()


def as_optional(value: Any) -> "Present[Any] | Absent":
    """
    Wrap a raw optional input.

    None and empty sequences become Absent; already-wrapped values pass
    through unchanged.
    """
    if isinstance(value, (Present, Absent)):
        return value
    if value is None:
        return ABSENT
    if isinstance(value, (list, tuple)):
        if not value:
            return Absent("empty")
        return Present(tuple(value))
    return Present(value)


@dataclass(frozen=True)
class MetricExplanation:
    """Why one factor earned the points it did."""

    metric: str
    value: str
    points: int
    max_points: int
    reason: str
    implications: str
    source: str
    severity: Severity = Severity.OK
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "metric": self.metric,
            "value": self.value,
            "points": self.points,
            "max_points": self.max_points,
            "reason": self.reason,
            "severity": self.severity.value,
            "implications": self.implications,
            "source": self.source,
        }
        if self.context is not None:
            result["context"] = self.context
        return result


@dataclass(frozen=True)
class ComponentScore:
    score: int
    max_score: int
    explanations: tuple[MetricExplanation, ...]
    summary: str

    @classmethod
    def from_explanations(
        cls,
        explanations: list[MetricExplanation],
        max_score: int,
        summary: str,
    ) -> "ComponentScore":
        """Build a component whose score is the sum of its explanation points."""
        return cls(
            score=sum(e.points for e in explanations),
            max_score=max_score,
            explanations=tuple(explanations),
            summary=summary,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "max_score": self.max_score,
            "explanations": [e.to_dict() for e in self.explanations],
            "summary": self.summary,
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    financial_health: ComponentScore
    valuation: ComponentScore
    growth: ComponentScore
    sentiment: ComponentScore

    def components(self) -> dict[str, ComponentScore]:
        return {
            "financial_health": self.financial_health,
            "valuation": self.valuation,
            "growth": self.growth,
            "sentiment": self.sentiment,
        }


@dataclass(frozen=True)
class InvestmentScore:
    symbol: str
    total: int
    max_score: int
    rating: Rating
    breakdown: ScoreBreakdown
    summary: str
    bull_case: str
    bear_case: str
    verdict: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "total": self.total,
            "max_score": self.max_score,
            "rating": self.rating.value,
            "breakdown": {
                name: component.to_dict()
                for name, component in self.breakdown.components().items()
            },
            "summary": self.summary,
            "bull_case": self.bull_case,
            "bear_case": self.bear_case,
            "verdict": self.verdict,
        }
