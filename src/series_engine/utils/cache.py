"""
cache.py – Key/value cache capability with per-entry TTL.

The fact store receives a ``Cache`` explicitly instead of reaching for a
global. ``DiskCache`` is the production implementation (diskcache, shared
across processes and sessions); any object with the same two methods works,
which is how tests substitute an in-memory fake.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

import diskcache

logger = logging.getLogger(__name__)


class Cache(Protocol):
    """Minimal cache contract consumed by the fact store."""

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when absent or expired."""
        ...

    def put(self, key: str, value: Any, ttl: int | None) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds (None = no expiry)."""
        ...


class DiskCache:
    """
    Disk-backed ``Cache`` for raw company facts and ticker maps.

    Uses `diskcache.Cache` behind the scenes; expiry is enforced by diskcache
    on read.

    Parameters
    ----------
    cache_dir:
        Root directory for cache data.
    size_limit_gb:
        Maximum cache size in gigabytes.
    """

    def __init__(self, cache_dir: Path, size_limit_gb: float = 2.0) -> None:
        self._cache = diskcache.Cache(
            str(cache_dir),
            size_limit=int(size_limit_gb * 1024 ** 3),
        )

    def get(self, key: str) -> Any | None:
        return self._cache.get(key)

    def put(self, key: str, value: Any, ttl: int | None) -> None:
        self._cache.set(key, value, expire=ttl)
        logger.debug("Cached key=%s ttl=%s", key, ttl)

    def close(self) -> None:
        """Close the underlying cache file handles."""
        self._cache.close()

    def __enter__(self) -> "DiskCache":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
