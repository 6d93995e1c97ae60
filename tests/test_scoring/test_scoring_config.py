"""Tests for ScoringConfig."""

import os
from unittest.mock import patch

import pytest

from stock_insight.scoring.config import DEFAULT_CONFIG, ScoringConfig


class TestScoringConfig:
    """Tests for ScoringConfig validation and env loading."""

    def test_defaults(self) -> None:
        assert DEFAULT_CONFIG.sector_average_pe == 22.0
        assert DEFAULT_CONFIG.neutral_news_points == 3
        assert DEFAULT_CONFIG.neutral_insider_points == 2

    @pytest.mark.parametrize("pe", [0.0, -10.0])
    def test_rejects_non_positive_sector_pe(self, pe: float) -> None:
        with pytest.raises(ValueError, match="sector_average_pe"):
            ScoringConfig(sector_average_pe=pe)

    @pytest.mark.parametrize("pe", [float("nan"), float("inf")])
    def test_rejects_non_finite_sector_pe(self, pe: float) -> None:
        with pytest.raises(ValueError, match="sector_average_pe"):
            ScoringConfig(sector_average_pe=pe)

    def test_from_env_rejects_nan_sector_pe(self) -> None:
        with patch.dict(os.environ, {"SECTOR_AVERAGE_PE": "nan"}):
            with pytest.raises(ValueError, match="sector_average_pe"):
                ScoringConfig.from_env()

    def test_rejects_news_points_above_max(self) -> None:
        with pytest.raises(ValueError, match="neutral_news_points"):
            ScoringConfig(neutral_news_points=8)

    def test_rejects_insider_points_above_max(self) -> None:
        with pytest.raises(ValueError, match="neutral_insider_points"):
            ScoringConfig(neutral_insider_points=4)

    def test_from_env(self) -> None:
        env = {
            "SECTOR_AVERAGE_PE": "30",
            "NEUTRAL_NEWS_POINTS": "4",
            "NEUTRAL_INSIDER_POINTS": "1",
        }
        with patch.dict(os.environ, env):
            config = ScoringConfig.from_env()
        assert config == ScoringConfig(
            sector_average_pe=30.0,
            neutral_news_points=4,
            neutral_insider_points=1,
        )

    def test_from_env_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert ScoringConfig.from_env() == DEFAULT_CONFIG
