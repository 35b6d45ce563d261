"""
SerpAPI search client with retry logic.

Wraps the synchronous `GoogleSearch` client from google-search-results.
Connection-level failures are retried with tenacity; provider-reported
errors come back inside the response and are left to the caller.
"""

import os
from typing import Any, Callable, Dict, Optional

from serpapi import GoogleSearch
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
from dotenv import load_dotenv
load_dotenv()


SearchFn = Callable[[Dict[str, Any]], Dict[str, Any]]


def get_api_key() -> Optional[str]:
    """
    Returns the SerpAPI key from the SERPAPI_API_KEY environment variable.

    Read on every call so a missing key only fails the lookups that
    actually need the network.
    """
    return os.environ.get("SERPAPI_API_KEY") or None


def _google_search(params: Dict[str, Any]) -> Dict[str, Any]:
    return GoogleSearch(params).get_dict()


def make_search_fn(
    max_attempts: int = 3,
    min_wait: int = 2,
    max_wait: int = 10,
) -> SearchFn:
    """
    Build a SerpAPI search callable with automatic retries.

    `requests` exceptions derive from OSError, so dropped connections and
    timeouts are retried. An `error` field in the JSON body is not an
    exception here and is returned as-is.

    Args:
        max_attempts: Total attempts per call
        min_wait: Minimum backoff in seconds
        max_wait: Maximum backoff in seconds

    Returns:
        Callable taking a full SerpAPI params dict (including `engine`,
        `q` and `api_key`) and returning the decoded JSON response.
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type((OSError,)),
        reraise=True,
    )(_google_search)


# Default client used when no search callable is injected
run_search: SearchFn = make_search_fn()
