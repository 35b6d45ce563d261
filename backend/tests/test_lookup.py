"""
Tests for the cached price lookup and the SerpAPI client wrapper.

No network: the provider is replaced by a recording callable.
"""

import asyncio
import threading

import pytest

from backend.pricing.cache import CacheEntry, InMemoryCacheBackend, SearchCache
from backend.pricing.errors import PriceLookupError
from backend.pricing.graph.config import CACHE_TTL_MS
from backend.pricing.lookup import PriceLookup
from backend.shared.search import client


# ============================================================================
# Test Fixtures
# ============================================================================


class RecordingSearch:
    """Fake provider returning queued responses and recording params."""

    def __init__(self, *responses):
        self.responses = list(responses) or [{"search_metadata": {"status": "Success"}}]
        self.calls = []

    def __call__(self, params):
        self.calls.append(dict(params))
        response = self.responses[min(len(self.calls), len(self.responses)) - 1]
        if isinstance(response, Exception):
            raise response
        return response


def _make_lookup(search_fn, api_key="test-key", backend=None, now_ms=1_700_000_000_000):
    cache = SearchCache(backend or InMemoryCacheBackend(), clock=lambda: now_ms)
    return PriceLookup(cache, api_key=api_key, search_fn=search_fn)


# ============================================================================
# TestPriceLookup
# ============================================================================


class TestPriceLookup:
    """Tests for PriceLookup.fetch."""

    def test_provider_params(self):
        search = RecordingSearch({"properties": []})
        lookup = _make_lookup(search)

        asyncio.run(lookup.fetch("google_hotels", "best hotels in Kandy", {"adults": "2"}))

        assert search.calls == [
            {
                "engine": "google_hotels",
                "q": "best hotels in Kandy",
                "adults": "2",
                "api_key": "test-key",
            }
        ]

    def test_cache_hit_skips_provider(self):
        search = RecordingSearch({"answer_box": {"price": "$10"}})
        lookup = _make_lookup(search)

        async def run():
            first = await lookup.fetch("google", "Temple of the Tooth ticket price")
            second = await lookup.fetch("google", "Temple of the Tooth ticket price")
            return first, second

        first, second = asyncio.run(run())

        assert len(search.calls) == 1
        assert first == second == {"answer_box": {"price": "$10"}}

    def test_cache_hit_ignores_extra_params(self):
        search = RecordingSearch({"properties": [{"name": "A"}]})
        lookup = _make_lookup(search)

        async def run():
            await lookup.fetch("google_hotels", "best hotels in Ella", {"check_in_date": "2025-01-01"})
            return await lookup.fetch(
                "google_hotels", "best hotels in Ella", {"check_in_date": "2025-06-01"}
            )

        result = asyncio.run(run())

        assert len(search.calls) == 1
        assert result == {"properties": [{"name": "A"}]}

    def test_stale_entry_goes_live(self):
        now = 1_700_000_000_000
        backend = InMemoryCacheBackend()
        key = SearchCache.make_key("google", "q")
        backend.put(key, CacheEntry(key=key, payload={"old": True}, fetched_at_ms=now - CACHE_TTL_MS - 1))
        search = RecordingSearch({"new": True})
        lookup = _make_lookup(search, backend=backend, now_ms=now)

        result = asyncio.run(lookup.fetch("google", "q"))

        assert result == {"new": True}
        assert len(search.calls) == 1
        assert backend.get(key).fetched_at_ms == now

    def test_provider_error_raises_and_is_not_cached(self):
        search = RecordingSearch({"error": "Invalid API key."}, {"answer_box": {"price": "$5"}})
        lookup = _make_lookup(search)

        with pytest.raises(PriceLookupError, match="Invalid API key"):
            asyncio.run(lookup.fetch("google", "q"))

        assert asyncio.run(lookup.fetch("google", "q")) == {"answer_box": {"price": "$5"}}
        assert len(search.calls) == 2

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("SERPAPI_API_KEY", raising=False)
        search = RecordingSearch()
        lookup = _make_lookup(search, api_key=None)

        with pytest.raises(PriceLookupError, match="No API Key Provided"):
            asyncio.run(lookup.fetch("google", "q"))

        assert search.calls == []

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("SERPAPI_API_KEY", "env-key")
        search = RecordingSearch()
        lookup = _make_lookup(search, api_key=None)

        asyncio.run(lookup.fetch("google", "q"))

        assert search.calls[0]["api_key"] == "env-key"

    def test_cache_hit_needs_no_api_key(self, monkeypatch):
        monkeypatch.delenv("SERPAPI_API_KEY", raising=False)
        backend = InMemoryCacheBackend()
        key = SearchCache.make_key("google", "q")
        backend.put(key, CacheEntry(key=key, payload={"cached": True}, fetched_at_ms=1_700_000_000_000))
        lookup = _make_lookup(RecordingSearch(), api_key=None, backend=backend)

        assert asyncio.run(lookup.fetch("google", "q")) == {"cached": True}

    def test_connection_error_becomes_lookup_error(self):
        lookup = _make_lookup(RecordingSearch(ConnectionError("connection reset")))

        with pytest.raises(PriceLookupError, match="unreachable"):
            asyncio.run(lookup.fetch("google", "q"))

    def test_malformed_response(self):
        lookup = _make_lookup(RecordingSearch("<html>"))

        with pytest.raises(PriceLookupError, match="malformed"):
            asyncio.run(lookup.fetch("google", "q"))

    def test_concurrent_misses_are_not_coalesced(self):
        # Neither call returns until both have reached the provider
        arrived = threading.Barrier(2, timeout=5)
        search = RecordingSearch({"answer_box": {"price": "$10"}})

        def gated_search(params):
            result = search(params)
            arrived.wait()
            return result

        lookup = _make_lookup(gated_search)

        async def run():
            return await asyncio.gather(
                lookup.fetch("google", "Sigiriya ticket price"),
                lookup.fetch("google", "Sigiriya ticket price"),
            )

        first, second = asyncio.run(run())

        assert len(search.calls) == 2
        assert first == second == {"answer_box": {"price": "$10"}}


# ============================================================================
# TestSearchClient
# ============================================================================


class TestSearchClient:
    """Tests for the retrying SerpAPI client."""

    def test_retries_connection_errors(self, monkeypatch):
        fake = RecordingSearch(ConnectionError("reset"), ConnectionError("reset"), {"ok": True})
        monkeypatch.setattr(client, "_google_search", fake)
        search = client.make_search_fn(max_attempts=3, min_wait=0, max_wait=0)

        assert search({"engine": "google", "q": "q"}) == {"ok": True}
        assert len(fake.calls) == 3

    def test_gives_up_after_max_attempts(self, monkeypatch):
        fake = RecordingSearch(TimeoutError("timed out"))
        monkeypatch.setattr(client, "_google_search", fake)
        search = client.make_search_fn(max_attempts=2, min_wait=0, max_wait=0)

        with pytest.raises(TimeoutError):
            search({"engine": "google", "q": "q"})
        assert len(fake.calls) == 2

    def test_provider_error_body_not_retried(self, monkeypatch):
        fake = RecordingSearch({"error": "Google hasn't returned any results"})
        monkeypatch.setattr(client, "_google_search", fake)
        search = client.make_search_fn(max_attempts=3, min_wait=0, max_wait=0)

        assert search({"engine": "google", "q": "q"}) == {
            "error": "Google hasn't returned any results"
        }
        assert len(fake.calls) == 1

    def test_get_api_key(self, monkeypatch):
        monkeypatch.setenv("SERPAPI_API_KEY", "abc")
        assert client.get_api_key() == "abc"

        monkeypatch.setenv("SERPAPI_API_KEY", "")
        assert client.get_api_key() is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
