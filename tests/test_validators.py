"""Tests for validators and FetchParams."""

import pytest

from stock_insight.utils.validators import (
    VALID_INTERVALS,
    VALID_PERIODS,
    FetchParams,
    normalize_symbol,
    validate_compare_symbols,
)


class TestNormalizeSymbol:
    """Tests for normalize_symbol."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("aapl", "AAPL"), ("  nvda ", "NVDA"), ("brk-b", "BRK-B"), ("^gspc", "^GSPC"), ("rds.a", "RDS.A")],
    )
    def test_valid(self, raw: str, expected: str) -> None:
        assert normalize_symbol(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "AA PL", "AAPL;DROP", "$TSLA", "A" * 20])
    def test_invalid(self, raw: str) -> None:
        with pytest.raises(ValueError, match="Invalid symbol"):
            normalize_symbol(raw)


class TestValidateCompareSymbols:
    """Tests for validate_compare_symbols."""

    def test_normalizes_and_preserves_order(self) -> None:
        assert validate_compare_symbols(["msft", "aapl", "GOOGL"]) == ["MSFT", "AAPL", "GOOGL"]

    def test_deduplicates(self) -> None:
        assert validate_compare_symbols(["AAPL", "aapl", "MSFT"]) == ["AAPL", "MSFT"]

    def test_too_few_after_dedup(self) -> None:
        with pytest.raises(ValueError, match="2-4 distinct symbols, got 1"):
            validate_compare_symbols(["AAPL", " aapl "])

    def test_too_many(self) -> None:
        with pytest.raises(ValueError, match="got 5"):
            validate_compare_symbols(["A", "B", "C", "D", "E"])

    def test_invalid_member(self) -> None:
        with pytest.raises(ValueError, match="Invalid symbol"):
            validate_compare_symbols(["AAPL", "not a ticker"])


class TestFetchParams:
    """Tests for FetchParams dataclass."""

    def test_symbol_normalization(self) -> None:
        """Test symbol is uppercased and stripped."""
        params = FetchParams(symbol="  nvda  ", period="1y", interval="1d", adjusted=True)
        assert params.symbol == "NVDA"

    def test_period_and_interval_normalization(self) -> None:
        """Test period and interval are lowercased."""
        params = FetchParams(symbol="AAPL", period="1Y", interval="1D", adjusted=True)
        assert params.period == "1y"
        assert params.interval == "1d"

    def test_invalid_symbol_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid symbol"):
            FetchParams(symbol="bad symbol", period="1y", interval="1d", adjusted=True)

    @pytest.mark.parametrize("period", ["1d", "10y", "invalid"])
    def test_invalid_period_raises(self, period: str) -> None:
        with pytest.raises(ValueError, match="Invalid period"):
            FetchParams(symbol="AAPL", period=period, interval="1d", adjusted=True)

    @pytest.mark.parametrize("interval", ["1m", "1h", "invalid"])
    def test_invalid_interval_raises(self, interval: str) -> None:
        with pytest.raises(ValueError, match="Invalid interval"):
            FetchParams(symbol="AAPL", period="1y", interval=interval, adjusted=True)

    def test_all_valid_periods_and_intervals(self) -> None:
        for period in VALID_PERIODS:
            for interval in VALID_INTERVALS:
                params = FetchParams(symbol="AAPL", period=period, interval=interval, adjusted=True)
                assert (params.period, params.interval) == (period, interval)

    def test_to_yf_kwargs(self) -> None:
        params = FetchParams(symbol="AAPL", period="1y", interval="1d", adjusted=False)
        assert params.to_yf_kwargs() == {
            "tickers": "AAPL",
            "period": "1y",
            "interval": "1d",
            "auto_adjust": False,
            "progress": False,
        }

    def test_immutable(self) -> None:
        params = FetchParams(symbol="AAPL", period="1y", interval="1d", adjusted=True)
        with pytest.raises(AttributeError):
            params.symbol = "NVDA"  # type: ignore[misc]


class TestResourceUri:
    """Tests for the price:// cache key."""

    def test_format(self) -> None:
        params = FetchParams(symbol="aapl", period="6MO", interval="1wk", adjusted=True)
        assert params.to_uri() == "price://AAPL/6mo/1wk/adjusted"

    def test_unadjusted(self) -> None:
        params = FetchParams(symbol="AAPL", period="1y", interval="1d", adjusted=False)
        assert params.to_uri() == "price://AAPL/1y/1d/unadjusted"

    def test_equivalent_inputs_share_uri(self) -> None:
        a = FetchParams(symbol="aapl", period="1Y", interval="1d", adjusted=True)
        b = FetchParams(symbol="  AAPL ", period="1y", interval="1D", adjusted=True)
        assert a.to_uri() == b.to_uri()

    def test_different_params_different_uri(self) -> None:
        uris = {
            FetchParams(symbol="AAPL", period="1y", interval="1d", adjusted=True).to_uri(),
            FetchParams(symbol="NVDA", period="1y", interval="1d", adjusted=True).to_uri(),
            FetchParams(symbol="AAPL", period="6mo", interval="1d", adjusted=True).to_uri(),
            FetchParams(symbol="AAPL", period="1y", interval="1wk", adjusted=True).to_uri(),
            FetchParams(symbol="AAPL", period="1y", interval="1d", adjusted=False).to_uri(),
        }
        assert len(uris) == 5
