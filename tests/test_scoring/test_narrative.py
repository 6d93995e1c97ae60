"""Tests for summary, bull case, bear case and verdict text."""

from stock_insight.scoring.models import ComponentScore, Rating
from stock_insight.scoring.narrative import (
    NO_BEAR_FACTORS,
    NO_BULL_FACTORS,
    NO_SUMMARY_FACTORS,
    generate_bear_case,
    generate_bull_case,
    generate_summary,
    generate_verdict,
)


def _component(score: int, max_score: int) -> ComponentScore:
    return ComponentScore(score=score, max_score=max_score, explanations=(), summary="")


def _scores(health: int, valuation: int, growth: int, sentiment: int) -> tuple:
    return (
        _component(health, 30),
        _component(valuation, 25),
        _component(growth, 25),
        _component(sentiment, 20),
    )


class TestGenerateSummary:
    """Tests for generate_summary."""

    def test_all_strengths(self) -> None:
        summary = generate_summary(*_scores(30, 25, 25, 20))
        assert summary == (
            "Strong financials, attractive valuation, accelerating growth, positive sentiment."
        )

    def test_all_weaknesses(self) -> None:
        summary = generate_summary(*_scores(5, 5, 5, 5))
        assert summary == (
            "Weak balance sheet, stretched valuation, weak growth, negative sentiment."
        )

    def test_strengths_but_weaknesses(self) -> None:
        """Test strengths come first, joined to weaknesses with 'but'."""
        summary = generate_summary(*_scores(28, 8, 22, 12))
        assert summary == "Strong financials, accelerating growth but stretched valuation."

    def test_middle_scores_fallback(self) -> None:
        """Test no strengths and no weaknesses returns the fallback."""
        assert generate_summary(*_scores(20, 15, 15, 12)) == NO_SUMMARY_FACTORS


class TestGenerateBullCase:
    """Tests for generate_bull_case."""

    def test_all_four_conditions(self) -> None:
        bull = generate_bull_case(*_scores(30, 25, 25, 20))
        assert bull == (
            "Strong growth momentum could continue. "
            "Valuation attractive relative to fundamentals. "
            "Positive market sentiment and analyst support. "
            "Solid balance sheet provides stability."
        )

    def test_thresholds_inclusive(self) -> None:
        """Test bull thresholds 20/18/15/12 are inclusive."""
        bull = generate_bull_case(*_scores(20, 18, 15, 12))
        assert bull.count(". ") == 3

    def test_fallback(self) -> None:
        assert generate_bull_case(*_scores(19, 17, 14, 11)) == NO_BULL_FACTORS


class TestGenerateBearCase:
    """Tests for generate_bear_case."""

    def test_all_four_conditions(self) -> None:
        bear = generate_bear_case(*_scores(0, 0, 0, 0))
        assert bear == (
            "Growth slowing or stagnant. "
            "Premium valuation leaves little room for error. "
            "Negative sentiment could pressure stock. "
            "Financial health concerns increase risk."
        )

    def test_thresholds_exclusive(self) -> None:
        """Test scores at 18/12/12/10 are not bearish."""
        assert generate_bear_case(*_scores(18, 12, 12, 10)) == NO_BEAR_FACTORS

    def test_single_condition(self) -> None:
        bear = generate_bear_case(*_scores(25, 20, 20, 9))
        assert bear == "Negative sentiment could pressure stock."


class TestGenerateVerdict:
    """Tests for generate_verdict."""

    def test_buy_names_symbol(self) -> None:
        verdict = generate_verdict("NVDA", Rating.BUY)
        assert verdict.startswith("BUY.")
        assert "Consider NVDA for portfolio allocation." in verdict

    def test_hold(self) -> None:
        assert generate_verdict("NVDA", Rating.HOLD).startswith("HOLD. Mixed signals")

    def test_sell(self) -> None:
        assert generate_verdict("NVDA", Rating.SELL) == (
            "SELL. Too many red flags. Better opportunities elsewhere."
        )
