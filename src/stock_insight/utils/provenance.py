"""Response envelope helpers: meta, provenance, data quality, errors."""

from datetime import datetime, timezone
from typing import Any

from stock_insight import SCHEMA_VERSION, SERVER_VERSION

ERROR_TYPES = {"invalid_symbol", "invalid_parameters", "data_unavailable", "rate_limited"}

# Above this share of zero-valued metrics the score is flagged as low confidence
LOW_QUALITY_MISSING_SHARE = 0.3


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with a trailing Z."""
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


def build_meta(tool: str, duration_ms: float | None = None) -> dict[str, Any]:
    """
    Build standard metadata block for responses.

    Args:
        tool: Name of the tool producing this response
        duration_ms: Execution time in milliseconds (optional)

    Returns:
        Metadata dict with version info
    """
    meta: dict[str, Any] = {
        "server_version": SERVER_VERSION,
        "schema_version": SCHEMA_VERSION,
        "tool": tool,
    }
    if duration_ms is not None:
        meta["duration_ms"] = round(duration_ms, 1)
    return meta


def build_provenance(
    source: str,
    as_of: datetime | str | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Build data provenance block for a single data source.

    Args:
        source: Data source name (e.g., "yfinance")
        as_of: Timestamp of data freshness
        **kwargs: Additional provenance fields

    Returns:
        Provenance dict; always carries a warnings list
    """
    prov: dict[str, Any] = {"source": source}

    if isinstance(as_of, datetime):
        prov["as_of"] = as_of.isoformat()
    elif as_of is not None:
        prov["as_of"] = as_of

    prov.update(kwargs)
    prov.setdefault("warnings", [])
    return prov


def build_data_quality(missing_fields: list[str], total_fields: int) -> dict[str, Any]:
    """
    Describe metric coverage so the caller can surface a caveat.

    Zero is scored literally, so a high missing share means the score leans
    on placeholder values rather than reported figures.

    Args:
        missing_fields: Names of metrics holding the zero sentinel
        total_fields: Number of metrics in the snapshot

    Returns:
        Dict with missing fields, missing share and a notice when coverage is low
    """
    missing_share = len(missing_fields) / total_fields if total_fields else 0.0
    quality: dict[str, Any] = {
        "missing_fields": missing_fields,
        "missing_share": round(missing_share, 2),
        "low_quality": missing_share > LOW_QUALITY_MISSING_SHARE,
        "notice": None,
    }
    if quality["low_quality"]:
        quality["notice"] = (
            f"{len(missing_fields)} of {total_fields} financial metrics are unavailable "
            "or reported as zero. They were scored as zero; treat the result with caution."
        )
    return quality


def build_error_response(
    error_type: str,
    message: str,
    symbol: str | None = None,
    retry_after_seconds: int | None = None,
) -> dict[str, Any]:
    """
    Build standardized error response.

    Args:
        error_type: One of ERROR_TYPES
        message: Human-readable error message
        symbol: Symbol that caused the error (if applicable)
        retry_after_seconds: Seconds to wait before retry (for rate limiting)

    Returns:
        Error response dict
    """
    response: dict[str, Any] = {
        "error": True,
        "error_type": error_type,
        "message": message,
        "meta": build_meta("error"),
    }

    if symbol is not None:
        response["symbol"] = symbol

    if retry_after_seconds is not None:
        response["retry_after_seconds"] = retry_after_seconds

    return response
