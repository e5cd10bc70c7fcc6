"""Redis 캐시 서비스 - 캐시 문서 저장만 담당"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError
from redis.asyncio import Redis

from amazon_products.core.config import settings
from amazon_products.core.exceptions import (
    CacheConnectionException,
    CacheSerializationException,
)
from amazon_products.core.logging import logger, sanitize_for_log
from amazon_products.schemas.product_schema import CacheEntry


class RedisCacheService:
    """Redis 캐시 관리 서비스

    항목은 TTL 없이 저장되고 신선도는 엔진이 updatedAt 으로 판단합니다.
    """

    backend_name = "redis"

    def __init__(
        self,
        redis_url: Optional[str] = None,
        key_prefix: Optional[str] = None,
        client: Optional[Redis] = None,
    ):
        """Redis 클라이언트 초기화"""
        self.key_prefix = key_prefix or settings.redis_key_prefix
        if client is not None:
            self.redis_client = client
            return
        try:
            self.redis_client = Redis.from_url(
                redis_url or settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
        except Exception as e:
            logger.error(f"Failed to create Redis client: {e}")
            raise CacheConnectionException(
                reason="Redis client creation failed",
                details={"error": str(e)},
            )

    def _key(self, cache_key: str) -> str:
        return f"{self.key_prefix}:{cache_key}"

    async def _server_time(self) -> datetime:
        """Redis 서버 시계 (TIME) 를 UTC datetime 으로"""
        seconds, microseconds = await self.redis_client.time()
        return datetime.fromtimestamp(int(seconds) + int(microseconds) / 1_000_000, tz=timezone.utc)

    async def get(self, cache_key: str) -> Optional[CacheEntry]:
        """
        캐시 문서 조회

        Args:
            cache_key: 캐시 키

        Returns:
            CacheEntry 또는 None
        """
        key = self._key(cache_key)
        try:
            cached_data = await self.redis_client.get(key)
        except Exception as e:
            logger.error(f"Cache read error: {e}")
            raise CacheConnectionException(
                reason="Cache read failed",
                error_code="CACHE_READ_FAILED",
                details={"key": key, "error": str(e)},
            )

        if not cached_data:
            logger.info(f"Cache miss for key: {sanitize_for_log(key)}")
            return None

        try:
            entry = CacheEntry.model_validate_json(cached_data)
        except ValidationError as e:
            logger.error(f"Failed to deserialize cache: key='{sanitize_for_log(key)}', errors={e.error_count()}")
            raise CacheSerializationException(
                operation="deserialize",
                reason=str(e),
                details={"key": key},
            )

        logger.info(f"Cache hit for key: {sanitize_for_log(key)}")
        return entry

    async def set(self, cache_key: str, entry: CacheEntry) -> None:
        """
        캐시 문서 저장 (전체 교체)

        Args:
            cache_key: 캐시 키
            entry: 저장할 문서
        """
        key = self._key(cache_key)
        try:
            stamped = entry.model_copy(update={"updated_at": await self._server_time()})
            try:
                cached_value = stamped.model_dump_json(by_alias=True)
            except (TypeError, ValueError) as e:
                raise CacheSerializationException(operation="serialize", reason=str(e))

            await self.redis_client.set(key, cached_value)
            logger.info(f"Cache set for key: {sanitize_for_log(key)}, products: {len(entry.products)}")

        except CacheSerializationException:
            raise
        except Exception as e:
            logger.error(f"Cache write error: {e}")
            raise CacheConnectionException(
                reason="Failed to write cache",
                error_code="CACHE_WRITE_FAILED",
                details={"key": key, "error": str(e)},
            )

    async def delete(self, cache_key: str) -> bool:
        """
        캐시 삭제

        Returns:
            삭제된 항목이 있었는지 여부
        """
        key = self._key(cache_key)
        try:
            result = await self.redis_client.delete(key)
        except Exception as e:
            logger.error(f"Cache delete error: {e}")
            raise CacheConnectionException(
                reason="Failed to delete cache",
                error_code="CACHE_DELETE_FAILED",
                details={"key": key, "error": str(e)},
            )
        logger.info(f"Cache deleted for key: {sanitize_for_log(key)}")
        return result > 0

    async def health_check(self) -> bool:
        """Redis 연결 상태 확인"""
        try:
            await self.redis_client.ping()
            return True
        except Exception as e:
            logger.warning(f"Redis health check failed: {type(e).__name__}: {e}")
            return False

    async def close(self) -> None:
        await self.redis_client.aclose()
