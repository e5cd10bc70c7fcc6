"""Cache Adapter - 저장소 장애를 엔진에 전파하지 않는 어댑터

CacheService(Firestore/Redis)를 SearchOrchestrator가 기대하는 인터페이스로 변환합니다.
읽기 실패는 캐시 미스로, 쓰기 실패는 로그로만 처리합니다.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from amazon_products.core.config import Settings, settings
from amazon_products.core.logging import logger, sanitize_for_log
from amazon_products.schemas.product_schema import CacheEntry
from amazon_products.services.impl.cache_service import CacheService, create_cache_service


DEFAULT_STALENESS_WINDOW = timedelta(hours=24)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_entry_fresh(
    entry: Optional[CacheEntry],
    now: datetime,
    window: timedelta = DEFAULT_STALENESS_WINDOW,
) -> bool:
    """캐시 항목 사용 가능 여부

    - 항목이 없거나 updated_at 이 없으면 stale
    - 경과 시간이 window 이상이면 stale (정확히 24시간도 stale)
    - naive datetime 은 UTC 로 간주
    """
    if entry is None or entry.updated_at is None:
        return False
    age = _as_utc(now) - _as_utc(entry.updated_at)
    return age < window


class CacheAdapter:
    """Cache 서비스 어댑터

    모든 예외는 로깅되고 삼켜집니다 (캐시 장애가 검색을 막으면 안 됨).
    저장소 클라이언트는 첫 사용 시 생성하며, 생성 실패도 저장소 장애로 취급합니다.
    """

    def __init__(
        self,
        cache_service: Optional[CacheService] = None,
        config: Optional[Settings] = None,
    ):
        """
        Args:
            cache_service: CacheService 구현체 (없으면 설정 기반으로 첫 사용 시 생성)
            config: 설정 (생성 시 사용)
        """
        self.config = config or settings
        self._cache_service = cache_service

    @property
    def cache_service(self) -> CacheService:
        """저장소 서비스 (생성 실패 시 예외 전파, 다음 호출에서 재시도)"""
        if self._cache_service is None:
            self._cache_service = create_cache_service(self.config)
        return self._cache_service

    async def get(self, cache_key: str) -> Optional[CacheEntry]:
        """캐시 조회

        Returns:
            CacheEntry or None (미스 또는 저장소 장애)
        """
        if not cache_key or not isinstance(cache_key, str):
            logger.warning(f"Invalid key for cache.get: {cache_key!r}")
            return None
        try:
            return await self.cache_service.get(cache_key)
        except Exception as e:
            logger.warning(f"Cache lookup failed, treating as miss: {type(e).__name__}: {e}")
            return None

    async def set(self, cache_key: str, entry: CacheEntry) -> bool:
        """캐시 저장

        Returns:
            저장 성공 여부 (실패는 로그로만 남김)
        """
        if not cache_key or not isinstance(cache_key, str):
            logger.warning(f"Invalid key for cache.set: {cache_key!r}")
            return False
        try:
            await self.cache_service.set(cache_key, entry)
            return True
        except Exception as e:
            logger.error(
                f"Cache write failed: key='{sanitize_for_log(cache_key)}', error={type(e).__name__}: {e}"
            )
            return False

    async def delete(self, cache_key: str) -> bool:
        """캐시 삭제 (유지보수용, 예외는 그대로 전파)"""
        return await self.cache_service.delete(cache_key)

    async def health_check(self) -> bool:
        try:
            return await self.cache_service.health_check()
        except Exception as e:
            logger.warning(f"Cache health check raised: {type(e).__name__}: {e}")
            return False

    @property
    def backend_name(self) -> str:
        if self._cache_service is None:
            return self.config.cache_backend
        return getattr(self._cache_service, "backend_name", "unknown")

    async def close(self) -> None:
        if self._cache_service is None:
            return
        try:
            await self._cache_service.close()
        except Exception as e:
            logger.warning(f"Cache close failed: {type(e).__name__}: {e}")
