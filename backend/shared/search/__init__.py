"""Search provider client utilities."""

from backend.shared.search.client import get_api_key, make_search_fn, run_search

__all__ = ["get_api_key", "make_search_fn", "run_search"]
