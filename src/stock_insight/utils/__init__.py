"""Utility modules."""

from stock_insight.utils.ohlcv import df_to_csv, df_to_rows, standardize_ohlcv, summarize_prices
from stock_insight.utils.provenance import (
    build_data_quality,
    build_error_response,
    build_meta,
    build_provenance,
    utc_timestamp,
)
from stock_insight.utils.text import (
    format_large_number,
    format_millions,
    format_signed,
    sanitize_text,
)
from stock_insight.utils.validators import FetchParams, normalize_symbol, validate_compare_symbols

__all__ = [
    "df_to_csv",
    "df_to_rows",
    "standardize_ohlcv",
    "summarize_prices",
    "build_data_quality",
    "build_error_response",
    "build_meta",
    "build_provenance",
    "utc_timestamp",
    "format_large_number",
    "format_millions",
    "format_signed",
    "sanitize_text",
    "FetchParams",
    "normalize_symbol",
    "validate_compare_symbols",
]
