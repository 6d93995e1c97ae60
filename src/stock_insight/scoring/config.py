"""Tunable scoring parameters."""

import math
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    """
    Parameters the scoring ladders read instead of hard-coding.

    Attributes:
        sector_average_pe: Reference P/E the valuation ladder is scaled against
        neutral_news_points: Points awarded when no news sentiment is supplied
        neutral_insider_points: Points awarded when no insider activity is supplied
    """

    sector_average_pe: float = 22.0
    neutral_news_points: int = 3
    neutral_insider_points: int = 2

    def __post_init__(self) -> None:
        if not math.isfinite(self.sector_average_pe) or self.sector_average_pe <= 0:
            raise ValueError(
                f"sector_average_pe must be a positive finite number, got {self.sector_average_pe}"
            )
        if not 0 <= self.neutral_news_points <= 7:
            raise ValueError(
                f"neutral_news_points must be within 0-7, got {self.neutral_news_points}"
            )
        if not 0 <= self.neutral_insider_points <= 3:
            raise ValueError(
                f"neutral_insider_points must be within 0-3, got {self.neutral_insider_points}"
            )

    @classmethod
    def from_env(cls) -> "ScoringConfig":
        """Build config from SECTOR_AVERAGE_PE / NEUTRAL_*_POINTS env vars."""
        return cls(
            sector_average_pe=float(os.environ.get("SECTOR_AVERAGE_PE", "22.0")),
            neutral_news_points=int(os.environ.get("NEUTRAL_NEWS_POINTS", "3")),
            neutral_insider_points=int(os.environ.get("NEUTRAL_INSIDER_POINTS", "2")),
        )


DEFAULT_CONFIG = ScoringConfig()
