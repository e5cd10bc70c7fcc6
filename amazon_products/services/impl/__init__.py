"""Services implementation package."""

from .cache_service import CacheService, create_cache_service

__all__ = ["CacheService", "create_cache_service"]
