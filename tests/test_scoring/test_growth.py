"""Tests for growth scoring."""

import pytest

from stock_insight.scoring.growth import score_growth
from stock_insight.scoring.models import FinancialMetrics, Severity


class TestRevenueGrowth:
    """Tests for the revenue growth ladder."""

    @pytest.mark.parametrize(
        "growth,points",
        [(0.25, 10), (0.15, 7), (0.07, 4), (0.01, 2), (0.0, 2), (-0.05, 0)],
    )
    def test_bands(self, growth: float, points: int) -> None:
        """Test fractions are scored as percentages."""
        e = score_growth(FinancialMetrics(revenue_growth=growth)).explanations[0]
        assert e.metric == "Revenue Growth"
        assert e.points == points

    def test_value_is_percent(self) -> None:
        """Test value is rendered as a YoY percentage."""
        e = score_growth(FinancialMetrics(revenue_growth=0.253)).explanations[0]
        assert e.value == "25.3% YoY"
        assert "25.3% YoY" in e.reason

    def test_decline_is_critical(self) -> None:
        """Test shrinking revenue is flagged critical."""
        e = score_growth(FinancialMetrics(revenue_growth=-0.1)).explanations[0]
        assert e.severity is Severity.CRITICAL


class TestEpsGrowth:
    """Tests for the EPS growth ladder."""

    @pytest.mark.parametrize(
        "growth,points",
        [(0.30, 10), (0.20, 7), (0.10, 4), (0.05, 2), (-0.01, 0)],
    )
    def test_bands(self, growth: float, points: int) -> None:
        """Test each tier."""
        e = score_growth(FinancialMetrics(eps_growth=growth)).explanations[1]
        assert e.metric == "EPS Growth"
        assert e.points == points


class TestProfitMargin:
    """Tests for the profit margin ladder."""

    @pytest.mark.parametrize(
        "margin,points",
        [(0.28, 5), (0.20, 4), (0.10, 3), (0.03, 1), (-0.02, 0)],
    )
    def test_bands(self, margin: float, points: int) -> None:
        """Test each tier."""
        e = score_growth(FinancialMetrics(profit_margin=margin)).explanations[2]
        assert e.metric == "Profit Margin"
        assert e.points == points
        assert e.max_points == 5

    def test_monotonic(self) -> None:
        """Test higher margin never earns fewer points."""
        margins = [-0.5, -0.01, 0.0, 0.05, 0.08, 0.12, 0.15, 0.2, 0.25, 0.6]
        points = [
            score_growth(FinancialMetrics(profit_margin=m)).explanations[2].points
            for m in margins
        ]
        assert points == sorted(points)


class TestScoreGrowth:
    """Tests for the growth component."""

    def test_worked_example_full_marks(self) -> None:
        """Test revenue 25%, EPS 30%, margin 28% scores 25."""
        component = score_growth(
            FinancialMetrics(revenue_growth=0.25, eps_growth=0.30, profit_margin=0.28)
        )
        assert component.score == 25
        assert component.summary == "Growth score: 25/25. Strong momentum."

    def test_moderate_summary(self) -> None:
        """Test 15-19 reads as moderate."""
        component = score_growth(
            FinancialMetrics(revenue_growth=0.15, eps_growth=0.20, profit_margin=0.10)
        )
        assert component.score == 17
        assert component.summary == "Growth score: 17/25. Moderate growth."

    def test_weak_summary(self) -> None:
        """Test below 15 reads as weak."""
        component = score_growth(FinancialMetrics())
        assert component.score == 2 + 2 + 1
        assert component.summary == "Growth score: 5/25. Weak growth."
