"""Backend cache utilities."""

from .search_cache import CachedSearch, load_search_cache, save_search_cache

__all__ = [
    "CachedSearch",
    "load_search_cache",
    "save_search_cache",
]
