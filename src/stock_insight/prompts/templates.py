"""Prompt templates for explained stock analysis."""

from typing import Any

# Prompt definitions
PROMPTS = {
    "stock_analyst": {
        "description": "Analyst instructions: explain the why behind every number, cite sources",
        "arguments": [],
    },
    "score_breakdown": {
        "description": "Walk through the investment score of one stock component by component",
        "arguments": [{"name": "symbol", "required": True}],
    },
    "compare": {
        "description": "Head-to-head comparison of 2-4 stocks",
        "arguments": [{"name": "symbols", "required": True}],
    },
}

STOCK_ANALYST_INSTRUCTIONS = """You are a financial analyst helping users understand stocks.

DATA SOURCES:
- Quotes, company profile, financial metrics, analyst consensus and insider
  activity: Yahoo Finance (via yfinance)
- Investment score: calculated by this server from those inputs

DATA QUALITY NOTICE:
Every score and metrics response carries a data_quality block. When
data_quality.low_quality is true, open your answer with a short notice that
some financial metrics are unavailable or reported as zero, that they were
scored as zero, and name the missing metrics.

Explain the WHY behind every number. For each metric you show, say:
1. What it is, in plain English
2. Why it has this value (calculation or context)
3. What it means for investors
4. How it compares to the benchmark used (sector average P/E, rating thresholds)
5. Where the figure came from (the explanation's source field)

Guidelines:
- Cite data sources explicitly ("Yahoo Finance shows...")
- If data is missing or zero, say so and explain what it means
- Show the points each factor earned out of its maximum
- Give both the bull case and the bear case
- Never give definitive buy/sell advice; the rating is a model output
- Explanations flagged severity=critical are the main risks; lead with them

Structure answers as:
1. Data quality notice (if applicable)
2. Direct answer to the question
3. Supporting metrics with explanations
4. Bull and bear cases
5. What to watch going forward"""


def list_prompts() -> list[dict[str, Any]]:
    """List available prompts."""
    return [
        {
            "name": name,
            "description": info["description"],
            "arguments": info["arguments"],
        }
        for name, info in PROMPTS.items()
    ]


def get_prompt(name: str, arguments: dict[str, str]) -> dict[str, Any] | None:
    """
    Get a prompt by name with arguments filled in.

    Returns dict with 'messages' key for MCP GetPromptResult.
    """
    if name not in PROMPTS:
        return None

    if name == "stock_analyst":
        content = STOCK_ANALYST_INSTRUCTIONS

    elif name == "score_breakdown":
        symbol = arguments.get("symbol", "").upper().strip()
        content = f"""Explain the investment score of {symbol}.

Execute these tools:
1. get_stock_info("{symbol}")
2. calculate_investment_score("{symbol}")

Then present:
- The total score out of 100, the rating (BUY >= 78, HOLD >= 58, SELL below)
  and the verdict
- One section per component (financial health /30, valuation /25,
  growth /25, sentiment /20) listing every explanation with its value,
  points out of max_points, reason and implications
- Critical and warning explanations called out first within each section
- The summary, bull case and bear case verbatim
- A data quality notice if data_quality.low_quality is true"""

    else:
        raw = arguments.get("symbols", "")
        symbols = [s.strip().upper() for s in raw.replace(" ", ",").split(",") if s.strip()]
        symbol_list = ", ".join(f'"{s}"' for s in symbols)
        content = f"""Compare {", ".join(symbols)} head to head.

Execute compare_stocks([{symbol_list}]).

Then present:
- A table with price, market cap, P/E, revenue growth, profit margin,
  debt-to-equity, analyst % Buy and total score for each stock
- The ranking by total score and which component drives each gap
- Strengths and risks of each stock in one or two sentences
- Any symbol listed under failures and why it is missing
- A data quality notice for any stock whose metrics are mostly zero"""

    return {"messages": [{"role": "user", "content": content}]}
