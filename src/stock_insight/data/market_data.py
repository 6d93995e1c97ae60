"""Convert raw yfinance payloads into scoring inputs."""

import math
from datetime import datetime, timedelta
from typing import Any

import pandas as pd

from stock_insight.scoring.models import (
    AnalystData,
    FinancialMetrics,
    InsiderTransaction,
    PriceTarget,
)

INSIDER_LOOKBACK_DAYS = 90

# recommendationKey -> (rating, assumed % Buy) when no rating counts are available
_RECOMMENDATION_FALLBACK = {
    "strong_buy": ("Buy", 65.0),
    "buy": ("Buy", 65.0),
    "hold": ("Hold", 50.0),
    "underperform": ("Sell", 30.0),
    "sell": ("Sell", 30.0),
    "strong_sell": ("Sell", 30.0),
}

_EBIT_ROWS = ("EBIT", "Operating Income")
_INTEREST_ROWS = ("Interest Expense", "Interest Expense Non Operating")


def _safe_float(value: Any) -> float | None:
    """Convert to float, or None for missing / NaN / non-numeric values."""
    if value is None:
        return None
    try:
        result = float(value)
    except (ValueError, TypeError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def _or_zero(value: Any) -> float:
    result = _safe_float(value)
    return 0.0 if result is None else result


def build_financial_metrics(
    info: dict[str, Any],
    income_statement: pd.DataFrame | None = None,
) -> FinancialMetrics:
    """
    Map a yfinance info dict (plus income statement) to FinancialMetrics.

    Missing values become the zero sentinel.

    Args:
        info: Ticker.info payload
        income_statement: Ticker.income_stmt frame, used for interest coverage

    Returns:
        FinancialMetrics snapshot
    """
    debt_to_equity = _safe_float(info.get("debtToEquity"))
    # yfinance always reports D/E as a percentage (145.2 means 1.452)
    if debt_to_equity is not None:
        debt_to_equity = debt_to_equity / 100

    peg = _safe_float(info.get("pegRatio"))
    if peg is None:
        peg = _safe_float(info.get("trailingPegRatio"))

    eps_growth = _safe_float(info.get("earningsGrowth"))
    earnings_growth = _safe_float(info.get("earningsQuarterlyGrowth"))
    if earnings_growth is None:
        earnings_growth = eps_growth

    operating_cf = _safe_float(info.get("operatingCashflow"))
    free_cf = _safe_float(info.get("freeCashflow"))
    capex = abs(operating_cf - free_cf) if operating_cf is not None and free_cf is not None else 0.0

    return FinancialMetrics(
        pe_ratio=_or_zero(info.get("trailingPE")),
        peg_ratio=_or_zero(peg),
        price_to_book=_or_zero(info.get("priceToBook")),
        price_to_sales=_or_zero(info.get("priceToSalesTrailing12Months")),
        profit_margin=_or_zero(info.get("profitMargins")),
        operating_margin=_or_zero(info.get("operatingMargins")),
        return_on_equity=_or_zero(info.get("returnOnEquity")),
        return_on_assets=_or_zero(info.get("returnOnAssets")),
        current_ratio=_or_zero(info.get("currentRatio")),
        quick_ratio=_or_zero(info.get("quickRatio")),
        debt_to_equity=_or_zero(debt_to_equity),
        interest_coverage=interest_coverage_from_income_statement(income_statement),
        revenue_growth=_or_zero(info.get("revenueGrowth")),
        earnings_growth=_or_zero(earnings_growth),
        eps_growth=_or_zero(eps_growth),
        free_cash_flow=_or_zero(free_cf),
        operating_cash_flow=_or_zero(operating_cf),
        capex=capex,
    )


def _first_row_value(df: pd.DataFrame, row_names: tuple[str, ...], column: Any) -> float | None:
    for name in row_names:
        if name in df.index:
            value = _safe_float(df.at[name, column])
            if value is not None:
                return value
    return None


def interest_coverage_from_income_statement(income_statement: pd.DataFrame | None) -> float:
    """
    EBIT / |interest expense| for the most recent fiscal year.

    Returns 0.0 when either line item is missing or interest expense is zero.
    """
    if income_statement is None or income_statement.empty:
        return 0.0

    latest = max(income_statement.columns)
    ebit = _first_row_value(income_statement, _EBIT_ROWS, latest)
    interest = _first_row_value(income_statement, _INTEREST_ROWS, latest)

    if ebit is None or not interest:
        return 0.0
    return round(ebit / abs(interest), 2)


def build_analyst_data(
    info: dict[str, Any],
    recommendations: pd.DataFrame | None = None,
) -> AnalystData:
    """
    Map analyst fields to AnalystData.

    The Buy percentage comes from the current-period rating counts when
    available, otherwise from the consensus recommendation key.

    Args:
        info: Ticker.info payload
        recommendations: Ticker.recommendations_summary frame

    Returns:
        AnalystData
    """
    key = str(info.get("recommendationKey") or "hold").lower()
    rating, percentage = _RECOMMENDATION_FALLBACK.get(key, ("Hold", 50.0))
    count = int(_or_zero(info.get("numberOfAnalystOpinions")))

    counts = _current_rating_counts(recommendations)
    if counts is not None:
        total = sum(counts.values())
        if total > 0:
            percentage = round((counts["strongBuy"] + counts["buy"]) / total * 100, 1)
            count = total

    current = _or_zero(info.get("currentPrice") or info.get("regularMarketPrice"))
    average = _safe_float(info.get("targetMeanPrice"))

    return AnalystData(
        rating=rating,
        count=count,
        percentage=percentage,
        price_target=PriceTarget(
            high=_or_zero(info.get("targetHighPrice")),
            # No target: report zero upside rather than -100%
            average=current if average is None else average,
            low=_or_zero(info.get("targetLowPrice")),
            current=current,
        ),
    )


def _current_rating_counts(recommendations: pd.DataFrame | None) -> dict[str, int] | None:
    if recommendations is None or recommendations.empty:
        return None

    rows = recommendations
    if "period" in recommendations.columns:
        current = recommendations[recommendations["period"] == "0m"]
        if not current.empty:
            rows = current
    row = rows.iloc[0]

    columns = ("strongBuy", "buy", "hold", "sell", "strongSell")
    if not all(c in row.index for c in columns):
        return None
    return {c: int(_or_zero(row[c])) for c in columns}


def _classify_insider_transaction(text: str) -> str | None:
    lowered = text.lower()
    if "purchase" in lowered or "buy" in lowered:
        return "buy"
    if "sale" in lowered or "sell" in lowered:
        return "sell"
    # Awards, gifts, option exercises
    return None


def build_insider_transactions(
    transactions: pd.DataFrame | None,
    as_of: datetime | None = None,
    lookback_days: int = INSIDER_LOOKBACK_DAYS,
) -> list[InsiderTransaction]:
    """
    Open-market insider buys and sells from the last `lookback_days`.

    Args:
        transactions: Ticker.insider_transactions frame
        as_of: Reference date (default: now)
        lookback_days: Window length in days

    Returns:
        InsiderTransaction list, newest first as reported
    """
    if transactions is None or transactions.empty:
        return []

    cutoff = (as_of or datetime.now()).replace(tzinfo=None) - timedelta(days=lookback_days)
    result: list[InsiderTransaction] = []

    for _, row in transactions.iterrows():
        text = f"{row.get('Transaction') or ''} {row.get('Text') or ''}"
        tx_type = _classify_insider_transaction(text)
        if tx_type is None:
            continue

        start = row.get("Start Date")
        if start is None or pd.isna(start):
            continue
        tx_date = pd.Timestamp(start).to_pydatetime().replace(tzinfo=None)
        if tx_date < cutoff:
            continue

        result.append(
            InsiderTransaction(
                type=tx_type,
                amount=abs(_or_zero(row.get("Value"))),
                shares=abs(_or_zero(row.get("Shares"))),
                date=tx_date.strftime("%Y-%m-%d"),
                name=str(row.get("Insider") or ""),
                position=str(row.get("Position") or ""),
            )
        )

    return result
