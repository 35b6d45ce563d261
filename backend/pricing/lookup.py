"""
External price lookup.

Every live price comes from SerpAPI through `PriceLookup.fetch`, which
consults the search cache first and only calls the provider on a miss.

The cache key is engine + query text only. Extra parameters such as
check-in dates or party size are not part of the key, so a hotel search
for the same query on different dates is served from the cache.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from backend.pricing.cache import SearchCache
from backend.pricing.errors import PriceLookupError
from backend.shared.search.client import SearchFn, get_api_key, run_search


logger = logging.getLogger(__name__)


class PriceLookup:
    """
    Cached wrapper around the search provider.

    Concurrent lookups for the same uncached key are not coalesced; each
    one calls the provider.
    """

    def __init__(
        self,
        cache: SearchCache,
        api_key: Optional[str] = None,
        search_fn: Optional[SearchFn] = None,
    ):
        """
        Args:
            cache: Search cache consulted before every provider call
            api_key: SerpAPI key. If not provided, SERPAPI_API_KEY is read
                at call time.
            search_fn: Callable executing a SerpAPI request. Defaults to
                the retrying GoogleSearch client.
        """
        self.cache = cache
        self._api_key = api_key
        self._search_fn = search_fn or run_search

    def _resolve_api_key(self) -> Optional[str]:
        return self._api_key or get_api_key()

    async def fetch(
        self,
        engine: str,
        query: str,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Look up a search result, from the cache when possible.

        Args:
            engine: SerpAPI engine (e.g. "google_hotels", "google")
            query: Query text, also used as the cache key
            extra_params: Additional provider parameters (not part of the key)

        Returns:
            The raw provider response

        Raises:
            PriceLookupError: If no API key is configured, or the provider
                reports an error. Errors are never cached.
        """
        cached = await self.cache.get(engine, query)
        if cached is not None:
            logger.debug(f"[lookup] Cache hit | engine={engine}, q={query!r}")
            return cached

        api_key = self._resolve_api_key()
        if not api_key:
            raise PriceLookupError("No API Key Provided")

        params = {"engine": engine, "q": query, **(extra_params or {}), "api_key": api_key}

        logger.info(f"[lookup] Cache miss, calling provider | engine={engine}, q={query!r}")
        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(None, self._search_fn, params)
        except OSError as e:
            raise PriceLookupError(f"Search provider unreachable: {e}") from e

        if not isinstance(result, dict):
            raise PriceLookupError("Search provider returned a malformed response")
        if result.get("error"):
            raise PriceLookupError(str(result["error"]))

        await self.cache.put(engine, query, result)
        return result
