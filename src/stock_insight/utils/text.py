"""Text sanitization and number formatting for tool output."""

import re


def sanitize_text(text: str | None, max_length: int = 500) -> str | None:
    """
    Sanitize untrusted text fields from upstream data providers.

    Removes control characters and truncates to max_length.

    Args:
        text: Text to sanitize (may be None)
        max_length: Maximum length before truncation

    Returns:
        Sanitized text or None if input was None
    """
    if text is None:
        return None

    text = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", text)

    if len(text) > max_length:
        text = text[:max_length] + "..."

    return text.strip()


def format_signed(value: float, decimals: int = 1, always_sign: bool = False) -> str:
    """
    Format a number to fixed decimals, optionally forcing a leading '+'.

    Args:
        value: Number to format
        decimals: Digits after the decimal point
        always_sign: Prefix non-negative values with '+'

    Returns:
        Formatted string, e.g. "+12.5" or "-0.30"
    """
    formatted = f"{value:.{decimals}f}"
    if always_sign and not formatted.startswith("-"):
        return "+" + formatted
    return formatted


def format_millions(amount: float, decimals: int = 1) -> str:
    """Dollar amount in millions, e.g. 1_250_000 -> '1.3M'."""
    return f"{amount / 1_000_000:.{decimals}f}M"


def format_large_number(value: float | None) -> str | None:
    """Compact human-readable magnitude: 2.95T, 410.2B, 35.1M."""
    if value is None:
        return None
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K")):
        if magnitude >= threshold:
            return f"{sign}{magnitude / threshold:.1f}{suffix}"
    return f"{sign}{magnitude:.0f}"
