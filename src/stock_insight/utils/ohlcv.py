"""OHLCV standardization and summary utilities."""

from typing import Any

import pandas as pd

CANONICAL_COLUMNS = ["date", "open", "high", "low", "close", "volume"]


def standardize_ohlcv(df: pd.DataFrame) -> pd.DataFrame:
    """
    Standardize yfinance OHLCV output to a fixed schema.

    Output columns (always, in this order): date, open, high, low, close, volume.
    Dates are ISO strings; missing columns are filled with NA.

    Args:
        df: Raw DataFrame from yf.download

    Returns:
        Standardized DataFrame
    """
    df = df.copy()

    # yf.download returns (field, ticker) column pairs
    if isinstance(df.columns, pd.MultiIndex):
        df.columns = df.columns.get_level_values(0)

    if "Adj Close" in df.columns:
        df = df.drop(columns=["Adj Close"])

    df.columns = df.columns.str.lower()
    df = df.reset_index()

    date_cols = [c for c in df.columns if c.lower() in ("date", "datetime", "index")]
    if date_cols:
        df = df.rename(columns={date_cols[0]: "date"})

    if "date" in df.columns and pd.api.types.is_datetime64_any_dtype(df["date"]):
        df["date"] = df["date"].dt.strftime("%Y-%m-%d")

    for col in CANONICAL_COLUMNS:
        if col not in df.columns:
            df[col] = pd.NA

    return df[CANONICAL_COLUMNS]


def summarize_prices(df: pd.DataFrame) -> dict[str, Any]:
    """
    Summary statistics for a standardized OHLCV frame.

    Returns:
        Dict with data_points, start/end date and price, period high/low and
        total_return (None when it cannot be computed)
    """
    close = df["close"].dropna()
    start_price = float(close.iloc[0]) if len(close) > 0 else None
    end_price = float(close.iloc[-1]) if len(close) > 0 else None

    total_return: float | None = None
    if len(close) >= 2 and start_price:
        total_return = round((end_price - start_price) / start_price, 4)

    return {
        "data_points": len(df),
        "start_date": df["date"].iloc[0] if len(df) > 0 else None,
        "end_date": df["date"].iloc[-1] if len(df) > 0 else None,
        "start_price": start_price,
        "end_price": end_price,
        "period_high": float(df["high"].max()) if not df["high"].isna().all() else None,
        "period_low": float(df["low"].min()) if not df["low"].isna().all() else None,
        "total_return": total_return,
    }


def df_to_rows(df: pd.DataFrame) -> list[dict]:
    """Convert to list of dicts for inline preview."""
    return df.to_dict("records")


def df_to_csv(df: pd.DataFrame) -> str:
    """Convert to CSV string for cache/resource."""
    return df.to_csv(index=False)
