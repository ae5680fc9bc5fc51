"""Result cache."""

from .result_cache import CacheStats, ResultCache

__all__ = [
    "CacheStats",
    "ResultCache",
]
