"""uafacets Utilities."""

from .constants import OTHER, SPIDER, UNKNOWN
from .version import join_version

__all__ = [
    'OTHER',
    'SPIDER',
    'UNKNOWN',
    'join_version',
]
