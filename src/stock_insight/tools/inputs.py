"""Concurrent fetch of everything the investment score needs for one symbol."""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Any

from stock_insight.data.market_data import (
    build_analyst_data,
    build_financial_metrics,
    build_insider_transactions,
)
from stock_insight.data.yfinance_client import (
    ServerShuttingDownError,
    fetch_income_statement,
    fetch_info,
    fetch_insider_transactions,
    fetch_recommendations_summary,
)
from stock_insight.scoring.models import AnalystData, FinancialMetrics, InsiderTransaction

logger = logging.getLogger(__name__)


@dataclass
class ScoringInputs:
    """Mapped inputs plus the raw info payload and any degradation warnings."""

    symbol: str
    info: dict[str, Any]
    metrics: FinancialMetrics
    analyst_data: AnalystData
    insiders: list[InsiderTransaction] | None
    warnings: list[str] = field(default_factory=list)


async def fetch_optional(label: str, awaitable: Awaitable[Any], warnings: list[str]) -> Any:
    """
    Await a secondary fetch, turning failure into None plus a warning.

    ServerShuttingDownError still propagates.
    """
    try:
        return await awaitable
    except ServerShuttingDownError:
        raise
    except Exception as e:
        logger.warning(f"{label} unavailable, using neutral fallback: {e}")
        warnings.append(f"{label}_unavailable")
        return None


async def gather_scoring_inputs(symbol: str) -> ScoringInputs:
    """
    Fetch info, recommendation summary, insider transactions and income
    statement concurrently and map them to scoring inputs.

    Only the info fetch is required; the others degrade to neutral values.

    Args:
        symbol: Normalized ticker symbol

    Returns:
        ScoringInputs

    Raises:
        ValueError: If the symbol is unknown
        YFinanceRetryError: If the info fetch exhausts its retries
        ServerShuttingDownError: If server is shutting down
    """
    warnings: list[str] = []

    info, recommendations, insider_frame, income_statement = await asyncio.gather(
        fetch_info(symbol),
        fetch_optional("recommendations", fetch_recommendations_summary(symbol), warnings),
        fetch_optional("insider_transactions", fetch_insider_transactions(symbol), warnings),
        fetch_optional("income_statement", fetch_income_statement(symbol), warnings),
    )

    insiders = build_insider_transactions(insider_frame) if insider_frame is not None else None

    return ScoringInputs(
        symbol=symbol,
        info=info,
        metrics=build_financial_metrics(info, income_statement),
        analyst_data=build_analyst_data(info, recommendations),
        insiders=insiders,
        warnings=warnings,
    )
