"""Tests for clock-based market state."""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
import pytz

from stock_insight.data.yfinance_client import get_market_state

EASTERN = pytz.timezone("America/New_York")


class TestMarketState:
    """Tests for get_market_state."""

    def test_method_and_timestamp(self) -> None:
        state = get_market_state()
        assert state["method"] == "clock_only_no_holidays"
        assert "checked_at" in state

    @pytest.mark.parametrize(
        "moment,expected",
        [
            (datetime(2024, 1, 6, 10, 0), "closed"),  # Saturday
            (datetime(2024, 1, 7, 14, 0), "closed"),  # Sunday
            (datetime(2024, 1, 8, 3, 0), "closed"),
            (datetime(2024, 1, 8, 7, 0), "pre_market"),
            (datetime(2024, 1, 8, 9, 29), "pre_market"),
            (datetime(2024, 1, 8, 9, 30), "regular"),
            (datetime(2024, 1, 8, 15, 59), "regular"),
            (datetime(2024, 1, 8, 16, 0), "after_hours"),
            (datetime(2024, 1, 8, 20, 0), "closed"),
        ],
    )
    @patch("stock_insight.data.yfinance_client.datetime")
    def test_state_by_clock(
        self,
        mock_datetime: MagicMock,
        moment: datetime,
        expected: str,
    ) -> None:
        mock_datetime.now.return_value = EASTERN.localize(moment)
        assert get_market_state()["state"] == expected
