"""저장소 서비스 - export only."""

from .impl import CacheService, create_cache_service

__all__ = ["CacheService", "create_cache_service"]
