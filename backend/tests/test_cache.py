"""
Tests for the search result cache.

Covers the TTL boundary, the JSON file backend's failure handling and
its last-writer-wins behavior under interleaved writes.
"""

import asyncio
import json

import pytest

from backend.pricing.cache import (
    CacheEntry,
    InMemoryCacheBackend,
    JsonFileCacheBackend,
    SearchCache,
)
from backend.pricing.graph.config import CACHE_TTL_MS


NOW_MS = 1_700_000_000_000


# ============================================================================
# Test Fixtures
# ============================================================================


def _make_cache(backend=None, now_ms=NOW_MS):
    """Create a SearchCache with a fixed clock."""
    return SearchCache(backend or InMemoryCacheBackend(), clock=lambda: now_ms)


def _seed(backend, engine, query, payload, fetched_at_ms):
    key = SearchCache.make_key(engine, query)
    backend.put(key, CacheEntry(key=key, payload=payload, fetched_at_ms=fetched_at_ms))


# ============================================================================
# TestSearchCache
# ============================================================================


class TestSearchCache:
    """Tests for SearchCache key and TTL handling."""

    def test_key_is_engine_and_query(self):
        assert SearchCache.make_key("google_hotels", "best hotels in Kandy") == (
            "google_hotels_best hotels in Kandy"
        )

    def test_ttl_is_thirty_days(self):
        assert CACHE_TTL_MS == 2_592_000_000

    def test_put_then_get(self):
        cache = _make_cache()

        async def run():
            await cache.put("google", "Sigiriya ticket price", {"answer_box": {"price": "$30"}})
            return await cache.get("google", "Sigiriya ticket price")

        assert asyncio.run(run()) == {"answer_box": {"price": "$30"}}

    def test_miss_returns_none(self):
        cache = _make_cache()
        assert asyncio.run(cache.get("google", "unknown")) is None

    def test_entry_just_inside_ttl_is_fresh(self):
        backend = InMemoryCacheBackend()
        _seed(backend, "google", "q", {"v": 1}, NOW_MS - CACHE_TTL_MS + 1)
        cache = _make_cache(backend)

        assert asyncio.run(cache.get("google", "q")) == {"v": 1}

    def test_entry_just_outside_ttl_is_stale(self):
        backend = InMemoryCacheBackend()
        _seed(backend, "google", "q", {"v": 1}, NOW_MS - CACHE_TTL_MS - 1)
        cache = _make_cache(backend)

        assert asyncio.run(cache.get("google", "q")) is None

    def test_entry_exactly_at_ttl_is_stale(self):
        backend = InMemoryCacheBackend()
        _seed(backend, "google", "q", {"v": 1}, NOW_MS - CACHE_TTL_MS)
        cache = _make_cache(backend)

        assert asyncio.run(cache.get("google", "q")) is None

    def test_stale_entry_is_not_deleted(self):
        backend = InMemoryCacheBackend()
        _seed(backend, "google", "q", {"v": 1}, NOW_MS - CACHE_TTL_MS - 1)
        cache = _make_cache(backend)

        asyncio.run(cache.get("google", "q"))
        assert len(backend) == 1

    def test_put_overwrites_and_restamps(self):
        backend = InMemoryCacheBackend()
        _seed(backend, "google", "q", {"v": 1}, NOW_MS - CACHE_TTL_MS - 1)
        cache = _make_cache(backend)

        asyncio.run(cache.put("google", "q", {"v": 2}))

        entry = backend.get("google_q")
        assert entry.payload == {"v": 2}
        assert entry.fetched_at_ms == NOW_MS


# ============================================================================
# TestJsonFileCacheBackend
# ============================================================================


class TestJsonFileCacheBackend:
    """Tests for the single-file JSON cache storage."""

    def test_missing_file_is_empty(self, tmp_path):
        backend = JsonFileCacheBackend(str(tmp_path / "cache.json"))
        assert backend.get("google_q") is None
        assert backend.read_document() == {}

    def test_corrupt_file_is_empty(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("{not json", encoding="utf-8")
        backend = JsonFileCacheBackend(str(path))

        assert backend.get("google_q") is None

    def test_non_object_document_is_empty(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        backend = JsonFileCacheBackend(str(path))

        assert backend.read_document() == {}

    def test_on_disk_format(self, tmp_path):
        path = tmp_path / "cache.json"
        backend = JsonFileCacheBackend(str(path))
        backend.put("google_q", CacheEntry(key="google_q", payload={"v": 1}, fetched_at_ms=123))

        document = json.loads(path.read_text(encoding="utf-8"))
        assert document == {"google_q": {"data": {"v": 1}, "timestamp": 123}}

    def test_entries_survive_a_new_instance(self, tmp_path):
        path = str(tmp_path / "cache.json")
        JsonFileCacheBackend(path).put(
            "google_q", CacheEntry(key="google_q", payload={"v": 1}, fetched_at_ms=123)
        )

        entry = JsonFileCacheBackend(path).get("google_q")
        assert entry.payload == {"v": 1}
        assert entry.fetched_at_ms == 123

    def test_put_keeps_other_keys(self, tmp_path):
        backend = JsonFileCacheBackend(str(tmp_path / "cache.json"))
        backend.put("a", CacheEntry(key="a", payload={"v": "a"}, fetched_at_ms=1))
        backend.put("b", CacheEntry(key="b", payload={"v": "b"}, fetched_at_ms=2))

        assert set(backend.read_document()) == {"a", "b"}

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "cache.json"
        backend = JsonFileCacheBackend(str(path))
        backend.put("a", CacheEntry(key="a", payload={}, fetched_at_ms=1))

        assert path.exists()

    def test_unwritable_file_does_not_raise(self, tmp_path, caplog):
        # A directory cannot be opened as a file
        backend = JsonFileCacheBackend(str(tmp_path))

        backend.put("a", CacheEntry(key="a", payload={}, fetched_at_ms=1))

        assert backend.get("a") is None
        assert "Failed to write cache file" in caplog.text

    def test_interleaved_writers_last_one_wins(self, tmp_path):
        path = str(tmp_path / "cache.json")
        first = JsonFileCacheBackend(path)
        second = JsonFileCacheBackend(path)

        # Both writers read the same snapshot before either writes
        first_doc = first.read_document()
        second_doc = second.read_document()

        first_doc["google_a"] = {"data": {"v": "a"}, "timestamp": 1}
        first.write_document(first_doc)
        second_doc["google_b"] = {"data": {"v": "b"}, "timestamp": 2}
        second.write_document(second_doc)

        document = JsonFileCacheBackend(path).read_document()
        assert "google_b" in document
        assert "google_a" not in document

    def test_concurrent_puts_keep_existing_entries(self, tmp_path):
        path = tmp_path / "cache.json"
        backend = JsonFileCacheBackend(str(path))
        backend.write_document(
            {f"google_seed {i}": {"data": {"i": i}, "timestamp": NOW_MS} for i in range(300)}
        )
        cache = _make_cache(backend)

        async def run():
            await asyncio.gather(
                *(cache.put("google", f"burst {i}", {"i": i}) for i in range(40))
            )

        asyncio.run(run())

        document = json.loads(path.read_text(encoding="utf-8"))
        assert len(document) == 340
        assert all(f"google_seed {i}" in document for i in range(300))
        assert all(f"google_burst {i}" in document for i in range(40))

    def test_reads_during_concurrent_puts_never_see_partial_file(self, tmp_path):
        backend = JsonFileCacheBackend(str(tmp_path / "cache.json"))
        backend.put("google_seed", CacheEntry(key="google_seed", payload={"v": 1}, fetched_at_ms=NOW_MS))
        cache = _make_cache(backend)

        async def run():
            puts = [cache.put("google", f"burst {i}", {"i": i}) for i in range(30)]
            reads = [cache.get("google", "seed") for _ in range(30)]
            return await asyncio.gather(*puts, *reads)

        results = asyncio.run(run())

        assert results[30:] == [{"v": 1}] * 30

    def test_failed_write_leaves_no_temp_files(self, tmp_path):
        target = tmp_path / "cache.json"
        target.mkdir()
        backend = JsonFileCacheBackend(str(target))

        backend.put("a", CacheEntry(key="a", payload={}, fetched_at_ms=1))

        assert [p.name for p in tmp_path.iterdir()] == ["cache.json"]

    def test_search_cache_over_json_file(self, tmp_path):
        cache = _make_cache(JsonFileCacheBackend(str(tmp_path / "cache.json")))

        async def run():
            await cache.put("google_hotels", "best hotels in Ella", {"properties": []})
            return await cache.get("google_hotels", "best hotels in Ella")

        assert asyncio.run(run()) == {"properties": []}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
