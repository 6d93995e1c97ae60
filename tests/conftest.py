"""Pytest configuration and fixtures."""

from datetime import datetime

import pandas as pd
import pytest

from stock_insight.scoring.models import (
    AnalystData,
    FinancialMetrics,
    InsiderTransaction,
    PriceTarget,
    SentimentAnalysis,
)


@pytest.fixture
def sample_ohlcv_df() -> pd.DataFrame:
    """Sample OHLCV DataFrame for testing."""
    return pd.DataFrame(
        {
            "Date": pd.date_range("2024-01-01", periods=10, freq="D"),
            "Open": [100.0, 101.0, 102.0, 101.5, 103.0, 104.0, 103.5, 105.0, 106.0, 105.5],
            "High": [101.0, 102.5, 103.0, 102.5, 104.5, 105.5, 105.0, 106.5, 107.0, 106.5],
            "Low": [99.5, 100.5, 101.0, 100.5, 102.0, 103.0, 102.5, 104.0, 105.0, 104.5],
            "Close": [100.5, 102.0, 101.5, 102.0, 104.0, 103.5, 104.5, 106.0, 105.5, 106.0],
            "Volume": [1000000] * 10,
        }
    ).set_index("Date")


@pytest.fixture
def sample_ohlcv_df_with_adj_close() -> pd.DataFrame:
    """Sample OHLCV DataFrame with Adj Close column."""
    return pd.DataFrame(
        {
            "Date": pd.date_range("2024-01-01", periods=10, freq="D"),
            "Open": [100.0, 101.0, 102.0, 101.5, 103.0, 104.0, 103.5, 105.0, 106.0, 105.5],
            "High": [101.0, 102.5, 103.0, 102.5, 104.5, 105.5, 105.0, 106.5, 107.0, 106.5],
            "Low": [99.5, 100.5, 101.0, 100.5, 102.0, 103.0, 102.5, 104.0, 105.0, 104.5],
            "Close": [100.5, 102.0, 101.5, 102.0, 104.0, 103.5, 104.5, 106.0, 105.5, 106.0],
            "Adj Close": [100.0, 101.5, 101.0, 101.5, 103.5, 103.0, 104.0, 105.5, 105.0, 105.5],
            "Volume": [1000000] * 10,
        }
    ).set_index("Date")


@pytest.fixture
def strong_metrics() -> FinancialMetrics:
    """Metrics that earn the top band on every ladder."""
    return FinancialMetrics(
        pe_ratio=15.0,
        peg_ratio=0.8,
        current_ratio=2.5,
        debt_to_equity=0.2,
        interest_coverage=12.0,
        revenue_growth=0.25,
        eps_growth=0.30,
        profit_margin=0.25,
    )


@pytest.fixture
def weak_metrics() -> FinancialMetrics:
    """Unprofitable, over-leveraged, shrinking."""
    return FinancialMetrics(
        pe_ratio=-5.0,
        peg_ratio=-1.0,
        current_ratio=0.5,
        debt_to_equity=3.0,
        interest_coverage=0.5,
        revenue_growth=-0.10,
        eps_growth=-0.20,
        profit_margin=-0.05,
    )


@pytest.fixture
def bullish_analyst_data() -> AnalystData:
    """80% Buy with a target 30% above the current price."""
    return AnalystData(
        rating="Buy",
        count=40,
        percentage=80.0,
        price_target=PriceTarget(high=160.0, average=130.0, low=110.0, current=100.0),
    )


@pytest.fixture
def neutral_analyst_data() -> AnalystData:
    """45% Buy with the target at the current price."""
    return AnalystData(
        rating="Hold",
        count=20,
        percentage=45.0,
        price_target=PriceTarget(high=110.0, average=100.0, low=90.0, current=100.0),
    )


@pytest.fixture
def positive_sentiment() -> SentimentAnalysis:
    return SentimentAnalysis(score=0.6, label="positive", article_count=25, source="newsapi")


@pytest.fixture
def net_buying_insiders() -> list[InsiderTransaction]:
    """Net insider buying of $1.5M, more buys than sells."""
    return [
        InsiderTransaction(type="buy", amount=1_200_000),
        InsiderTransaction(type="buy", amount=800_000),
        InsiderTransaction(type="sell", amount=500_000),
    ]


@pytest.fixture
def sample_info() -> dict:
    """Representative yfinance Ticker.info payload."""
    return {
        "quoteType": "EQUITY",
        "shortName": "Apple Inc.",
        "longName": "Apple Inc.",
        "sector": "Technology",
        "industry": "Consumer Electronics",
        "exchange": "NMS",
        "currency": "USD",
        "currentPrice": 200.0,
        "regularMarketPrice": 200.0,
        "previousClose": 196.0,
        "marketCap": 3_000_000_000_000,
        "trailingPE": 30.5,
        "trailingPegRatio": 2.1,
        "priceToBook": 45.0,
        "priceToSalesTrailing12Months": 7.8,
        "profitMargins": 0.24,
        "operatingMargins": 0.30,
        "returnOnEquity": 1.5,
        "returnOnAssets": 0.22,
        "currentRatio": 0.95,
        "quickRatio": 0.8,
        "debtToEquity": 145.0,
        "revenueGrowth": 0.06,
        "earningsQuarterlyGrowth": 0.11,
        "earningsGrowth": 0.10,
        "freeCashflow": 100_000_000_000,
        "operatingCashflow": 110_000_000_000,
        "recommendationKey": "buy",
        "numberOfAnalystOpinions": 38,
        "targetHighPrice": 250.0,
        "targetMeanPrice": 220.0,
        "targetLowPrice": 170.0,
    }


@pytest.fixture
def sample_income_statement() -> pd.DataFrame:
    """Annual income statement, newest fiscal year first."""
    return pd.DataFrame(
        {
            pd.Timestamp("2024-09-30"): [120_000_000_000.0, 10_000_000_000.0],
            pd.Timestamp("2023-09-30"): [110_000_000_000.0, 11_000_000_000.0],
        },
        index=["EBIT", "Interest Expense"],
    )


@pytest.fixture
def sample_recommendations() -> pd.DataFrame:
    """Ticker.recommendations_summary frame."""
    return pd.DataFrame(
        {
            "period": ["0m", "-1m", "-2m"],
            "strongBuy": [10, 8, 8],
            "buy": [20, 18, 17],
            "hold": [8, 10, 11],
            "sell": [1, 2, 2],
            "strongSell": [1, 1, 1],
        }
    )


@pytest.fixture
def insider_as_of() -> datetime:
    return datetime(2024, 6, 30)


@pytest.fixture
def sample_insider_frame() -> pd.DataFrame:
    """Ticker.insider_transactions frame spanning more than 90 days."""
    return pd.DataFrame(
        {
            "Shares": [10_000, 5_000, 20_000, 3_000, 1_000],
            "Value": [2_000_000.0, 1_000_000.0, 0.0, 600_000.0, 250_000.0],
            "Text": [
                "Sale at price 200.00 per share.",
                "Purchase at price 200.00 per share.",
                "Stock Award(Grant) at price 0.00 per share.",
                "Sale at price 200.00 per share.",
                "Purchase at price 250.00 per share.",
            ],
            "Insider": ["COOK TIMOTHY D", "LEVINSON ARTHUR D", "O'BRIEN DEIRDRE", "MAESTRI LUCA", "WAGNER SUSAN"],
            "Position": ["Chief Executive Officer", "Director", "Officer", "Chief Financial Officer", "Director"],
            "Transaction": ["", "", "", "", ""],
            "Start Date": pd.to_datetime(
                ["2024-06-15", "2024-05-20", "2024-05-01", "2024-04-10", "2024-01-05"]
            ),
        }
    )
