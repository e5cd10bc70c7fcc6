"""캐시 저장소 인터페이스 및 팩토리"""
from typing import Optional, Protocol

from amazon_products.core.config import Settings, settings as default_settings
from amazon_products.schemas.product_schema import CacheEntry


class CacheService(Protocol):
    """문서 저장소 어댑터가 구현해야 하는 인터페이스

    - get: 키에 해당하는 문서 조회 (없으면 None, 장애 시 CacheException)
    - set: 문서 전체 교체, updated_at 은 저장소 시계로 기록
    - delete: 문서 삭제 (존재했으면 True)
    - health_check: 저장소 응답 여부
    """

    backend_name: str

    async def get(self, cache_key: str) -> Optional[CacheEntry]: ...

    async def set(self, cache_key: str, entry: CacheEntry) -> None: ...

    async def delete(self, cache_key: str) -> bool: ...

    async def health_check(self) -> bool: ...

    async def close(self) -> None: ...


def create_cache_service(config: Optional[Settings] = None) -> CacheService:
    """설정된 백엔드(firestore | redis)로 캐시 서비스 생성"""
    config = config or default_settings

    if config.cache_backend == "redis":
        from amazon_products.services.impl.redis_cache_service import RedisCacheService
        return RedisCacheService(redis_url=config.redis_url, key_prefix=config.redis_key_prefix)

    from amazon_products.services.impl.firestore_cache_service import FirestoreCacheService
    return FirestoreCacheService(config=config)
