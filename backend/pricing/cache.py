"""
Search result cache.

Paid search lookups are cached for 30 days, keyed by engine and query
text. The cache sits behind a small key/value interface so the JSON file
used in production can be swapped for an in-memory map in tests.

The JSON file is a single document mapping key -> {"data", "timestamp"}.
It is read in full on every get and rewritten in full on every put.
Within one backend instance puts are serialized and each rewrite replaces
the file atomically. Separate processes (or backend instances) sharing the
file are not coordinated: the last full snapshot written wins.
"""

import asyncio
import json
import logging
import os
import tempfile
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from backend.pricing.graph.config import CACHE_TTL_MS


logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached search payload and when it was fetched."""

    key: str
    payload: Dict[str, Any]
    fetched_at_ms: float


class CacheBackend(ABC):
    """Key/value storage for cache entries."""

    @abstractmethod
    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the entry for `key`, or None."""

    @abstractmethod
    def put(self, key: str, entry: CacheEntry) -> None:
        """Store `entry` under `key`, replacing any existing entry."""


class InMemoryCacheBackend(CacheBackend):
    """Dict-backed cache storage."""

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def put(self, key: str, entry: CacheEntry) -> None:
        self._entries[key] = entry

    def __len__(self) -> int:
        return len(self._entries)


class JsonFileCacheBackend(CacheBackend):
    """
    Cache storage in a single JSON file.

    A missing or unreadable file behaves as an empty cache. Write failures
    are logged and never raised.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self._lock = threading.Lock()

    def read_document(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"[cache] Unreadable cache file {self.path}: {e}")
            return {}
        return document if isinstance(document, dict) else {}

    def write_document(self, document: Dict[str, Any]) -> None:
        """Atomically replace the file so readers never see a partial document."""
        tmp_path = None
        try:
            os.makedirs(self.path.parent, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            logger.error(f"[cache] Failed to write cache file {self.path}: {e}")
        finally:
            if tmp_path is not None:
                try:
                    os.remove(tmp_path)
                except OSError as e:
                    logger.warning(f"[cache] Failed to remove temp file {tmp_path}: {e}")

    def get(self, key: str) -> Optional[CacheEntry]:
        record = self.read_document().get(key)
        if not isinstance(record, dict) or "timestamp" not in record:
            return None
        return CacheEntry(
            key=key,
            payload=record.get("data"),
            fetched_at_ms=record["timestamp"],
        )

    def put(self, key: str, entry: CacheEntry) -> None:
        # Puts run on executor threads; the read-modify-write must not interleave
        with self._lock:
            document = self.read_document()
            document[key] = {"data": entry.payload, "timestamp": entry.fetched_at_ms}
            self.write_document(document)


def _now_ms() -> float:
    return time.time() * 1000


class SearchCache:
    """
    Time-boxed cache of search payloads keyed by (engine, query).

    Entries older than the TTL are ignored, not deleted; the next
    successful lookup overwrites them.
    """

    def __init__(
        self,
        backend: CacheBackend,
        ttl_ms: int = CACHE_TTL_MS,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.backend = backend
        self.ttl_ms = ttl_ms
        self._clock = clock or _now_ms

    @staticmethod
    def make_key(engine: str, query: str) -> str:
        # Exact concatenation: callers must pass identical query strings
        return f"{engine}_{query}"

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.fetched_at_ms < self.ttl_ms

    async def get(self, engine: str, query: str) -> Optional[Dict[str, Any]]:
        """
        Return the cached payload for (engine, query) if it is still fresh.

        Args:
            engine: Search engine identifier (e.g. "google_hotels")
            query: Literal query text

        Returns:
            The cached payload, or None on a miss or a stale entry
        """
        key = self.make_key(engine, query)
        loop = asyncio.get_running_loop()
        entry = await loop.run_in_executor(None, self.backend.get, key)
        if entry is None:
            return None
        if not self.is_fresh(entry):
            logger.debug(f"[cache] Stale entry ignored | key={key}")
            return None
        return entry.payload

    async def put(self, engine: str, query: str, payload: Dict[str, Any]) -> None:
        """Store `payload` under (engine, query) stamped with the current time."""
        key = self.make_key(engine, query)
        entry = CacheEntry(key=key, payload=payload, fetched_at_ms=self._clock())
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.backend.put, key, entry)
