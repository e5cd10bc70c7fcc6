"""Utilities package"""

from .hash_utils import generate_cache_key
from .text_utils import normalize_query, parse_positive_int

__all__ = [
    "generate_cache_key",
    "normalize_query",
    "parse_positive_int",
]
