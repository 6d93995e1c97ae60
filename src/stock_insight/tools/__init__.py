"""Stock analysis tools."""

from stock_insight.tools.compare import compare_stocks
from stock_insight.tools.financial_metrics import get_financial_metrics
from stock_insight.tools.investment_score import calculate_investment_score
from stock_insight.tools.price_history import get_price_history
from stock_insight.tools.stock_info import get_stock_info
from stock_insight.tools.symbol_search import search_symbol

__all__ = [
    "calculate_investment_score",
    "compare_stocks",
    "get_financial_metrics",
    "get_price_history",
    "get_stock_info",
    "search_symbol",
]
