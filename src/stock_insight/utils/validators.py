"""Input validation for tool parameters."""

import re
from dataclasses import dataclass
from typing import Any

# Allowlists for cache key stability
VALID_PERIODS = {"1mo", "3mo", "6mo", "1y", "2y", "5y", "ytd", "max"}
VALID_INTERVALS = {"1d", "5d", "1wk", "1mo", "3mo"}

# Tickers like BRK-B, RDS.A, ^GSPC
_SYMBOL_PATTERN = re.compile(r"^\^?[A-Z0-9][A-Z0-9.\-=]{0,14}$")

MIN_COMPARE_SYMBOLS = 2
MAX_COMPARE_SYMBOLS = 4


def normalize_symbol(symbol: str) -> str:
    """
    Uppercase and strip a ticker, rejecting anything that cannot be one.

    Raises:
        ValueError: If the symbol is empty or contains invalid characters
    """
    normalized = symbol.upper().strip()
    if not _SYMBOL_PATTERN.match(normalized):
        raise ValueError(f"Invalid symbol '{symbol}'")
    return normalized


def validate_compare_symbols(symbols: list[str]) -> list[str]:
    """
    Normalize and de-duplicate a comparison set, preserving order.

    Raises:
        ValueError: If fewer than 2 or more than 4 distinct symbols remain
    """
    normalized: list[str] = []
    for symbol in symbols:
        s = normalize_symbol(symbol)
        if s not in normalized:
            normalized.append(s)

    if not MIN_COMPARE_SYMBOLS <= len(normalized) <= MAX_COMPARE_SYMBOLS:
        raise ValueError(
            f"compare_stocks needs {MIN_COMPARE_SYMBOLS}-{MAX_COMPARE_SYMBOLS} distinct "
            f"symbols, got {len(normalized)}"
        )
    return normalized


@dataclass(frozen=True)
class FetchParams:
    """Immutable price history fetch parameters. Used for cache key + fetch."""

    symbol: str
    period: str
    interval: str
    adjusted: bool
    tz: str = "America/New_York"

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbol", normalize_symbol(self.symbol))

        period = self.period.lower().strip()
        interval = self.interval.lower().strip()

        if period not in VALID_PERIODS:
            raise ValueError(f"Invalid period '{self.period}'. Must be one of: {sorted(VALID_PERIODS)}")
        if interval not in VALID_INTERVALS:
            raise ValueError(
                f"Invalid interval '{self.interval}'. Must be one of: {sorted(VALID_INTERVALS)}"
            )

        object.__setattr__(self, "period", period)
        object.__setattr__(self, "interval", interval)

    def to_uri(self) -> str:
        """Canonical URI for caching."""
        adj = "adjusted" if self.adjusted else "unadjusted"
        return f"price://{self.symbol}/{self.period}/{self.interval}/{adj}"

    def to_yf_kwargs(self) -> dict[str, Any]:
        """Kwargs for yf.download()."""
        return {
            "tickers": self.symbol,
            "period": self.period,
            "interval": self.interval,
            "auto_adjust": self.adjusted,
            "progress": False,
        }
