"""Process-lifetime cache for price history CSV."""

import gzip
import hashlib
import logging
import os
import shutil
import tempfile
from typing import Any

import diskcache
import pandas as pd

from stock_insight.utils.ohlcv import df_to_csv
from stock_insight.utils.provenance import utc_timestamp
from stock_insight.utils.validators import FetchParams

logger = logging.getLogger(__name__)


class PriceCache:
    """
    Cache stores exact CSV text for O(1) deterministic serving.

    Resources only serve cached data and never fetch live. The backing
    directory is private to this process and removed by close().
    """

    def __init__(self, cache_dir: str | None = None, default_ttl: int | None = None):
        self._owns_dir = cache_dir is None
        if cache_dir is None:
            cache_dir = tempfile.mkdtemp(prefix="stock-insight-prices-")
        self.cache_dir = cache_dir
        self.cache: diskcache.Cache = diskcache.Cache(cache_dir)
        if default_ttl is None:
            default_ttl = int(os.environ.get("CACHE_TTL", "300"))  # 5 minutes
        self._default_ttl = default_ttl

    def store(
        self,
        params: FetchParams,
        df: pd.DataFrame,
        ttl: int | None = None,
    ) -> str:
        """
        Store gzipped CSV + metadata, return canonical URI.

        Args:
            params: Fetch parameters (used to generate URI)
            df: Standardized DataFrame to cache
            ttl: Cache TTL in seconds (default: CACHE_TTL)

        Returns:
            Canonical URI for the cached data
        """
        uri = params.to_uri()

        csv_bytes = df_to_csv(df).encode("utf-8")
        csv_gz = gzip.compress(csv_bytes)

        entry: dict[str, Any] = {
            "csv_gz": csv_gz,
            "rows": len(df),
            "size_bytes": len(csv_bytes),
            "hash": hashlib.sha256(csv_bytes).hexdigest()[:16],
            "stored_at": utc_timestamp(),
        }

        expire = ttl if ttl is not None else self._default_ttl
        self.cache.set(uri, entry, expire=expire)
        return uri

    def get_csv(self, uri: str) -> str | None:
        """
        Get decompressed CSV text by URI.

        Returns:
            CSV text or None if not cached (or expired)
        """
        entry = self.cache.get(uri)
        if not entry:
            return None
        return gzip.decompress(entry["csv_gz"]).decode("utf-8")

    def get_metadata(self, uri: str) -> dict[str, Any] | None:
        """Cache metadata without decompressing data."""
        entry = self.cache.get(uri)
        if not entry:
            return None
        return {key: entry[key] for key in ("rows", "size_bytes", "hash", "stored_at")}

    def exists(self, uri: str) -> bool:
        return uri in self.cache

    def clear(self) -> None:
        self.cache.clear()

    def close(self) -> None:
        """Close the cache and delete its directory if this instance created it."""
        self.cache.close()
        if self._owns_dir:
            shutil.rmtree(self.cache_dir, ignore_errors=True)
            logger.debug(f"Removed price cache directory {self.cache_dir}")


# Global instance
price_cache = PriceCache()
