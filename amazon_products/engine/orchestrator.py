"""Search Orchestrator - Cache-or-Fetch

1. 캐시 키 계산
2. 캐시 조회 (실패 시 미스로 간주)
3. 24시간 이내 항목이면 그대로 반환
4. 아니면 Amazon PAAPI 호출 후 캐시에 비동기 저장 (fire-and-forget)
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List, Optional, Set

from amazon_products.core.config import settings
from amazon_products.core.exceptions import InternalStateException
from amazon_products.core.logging import logger, sanitize_for_log
from amazon_products.schemas.product_schema import AmazonProduct, CacheEntry

from .cache_adapter import is_entry_fresh
from .query import SearchQuery
from .result import SearchResult


# BackgroundTasks.add_task 와 같은 시그니처: schedule(func, *args)
WriteScheduler = Callable[..., Any]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SearchOrchestrator:
    """캐시 우선 검색 오케스트레이터

    같은 키에 대한 동시 콜드 요청은 각자 제공자를 호출하고 각자 저장합니다.
    저장은 문서 전체 교체이므로 마지막 쓰기가 남습니다.
    """

    def __init__(
        self,
        cache_service,
        provider,
        staleness_window: Optional[timedelta] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            cache_service: 캐시 어댑터 (async get/set, 예외를 삼킴)
            provider: 검색 제공자 (async search(query, item_count))
            staleness_window: 캐시 유효 시간 (기본 24시간)
            clock: 현재 시각 함수 (테스트용)
        """
        if not cache_service:
            raise ValueError("cache_service must not be None")
        if not provider:
            raise ValueError("provider must not be None")

        self.cache = cache_service
        self.provider = provider
        self.staleness_window = staleness_window or timedelta(hours=settings.cache_ttl_hours)
        self.clock = clock or utc_now
        self._pending_writes: Set[asyncio.Task] = set()

    async def resolve(
        self,
        query: SearchQuery,
        schedule_write: Optional[WriteScheduler] = None,
    ) -> SearchResult:
        """캐시 또는 제공자에서 상품 목록 확보

        Args:
            query: 검증된 검색 요청
            schedule_write: 캐시 쓰기 예약 함수 (없으면 detached task 사용)

        Returns:
            SearchResult

        Raises:
            InternalStateException: 검증되지 않은 query
            ProviderException: 캐시 미스 상태에서 제공자 호출 실패
        """
        self._ensure_valid(query)
        cache_key = query.cache_key

        result = await self._try_cache(query, cache_key)
        if result is not None:
            logger.info(f"Search completed from cache: key='{sanitize_for_log(cache_key)}'")
            return result

        products = await self._fetch_from_provider(query)

        entry = CacheEntry(
            keyword=query.raw_query,
            normalized_keyword=query.normalized_query,
            item_count=query.item_count,
            updated_at=self.clock(),
            products=products,
        )
        self._schedule_cache_write(cache_key, entry, schedule_write)

        logger.info(
            f"Search completed from provider: key='{sanitize_for_log(cache_key)}', products={len(products)}"
        )
        return SearchResult.from_provider(products, cache_key)

    @staticmethod
    def _ensure_valid(query: Any) -> None:
        if not isinstance(query, SearchQuery):
            raise InternalStateException(f"expected SearchQuery, got {type(query).__name__}")
        if not query.normalized_query or not query.raw_query:
            raise InternalStateException("query must be validated before resolve()")
        if not 1 <= query.item_count <= settings.item_count_max:
            raise InternalStateException(
                f"item_count out of range: {query.item_count}",
                details={"item_count": query.item_count},
            )

    async def _try_cache(self, query: SearchQuery, cache_key: str) -> Optional[SearchResult]:
        """Cache 조회 시도

        Returns:
            캐시 히트 시 결과, 미스/stale 시 None
        """
        entry = await self.cache.get(cache_key)
        if entry is None:
            logger.debug(f"Cache miss: key='{sanitize_for_log(cache_key)}'")
            return None

        if not is_entry_fresh(entry, self.clock(), self.staleness_window):
            logger.info(f"Cache stale: key='{sanitize_for_log(cache_key)}', updated_at={entry.updated_at}")
            return None

        return SearchResult.cache_hit(entry.products, cache_key)

    async def _fetch_from_provider(self, query: SearchQuery) -> List[AmazonProduct]:
        """제공자 호출 (실패는 그대로 전파, stale 캐시로 대체하지 않음)"""
        try:
            return await self.provider.search(query.raw_query, query.item_count)
        except Exception as e:
            logger.error(
                f"Provider search failed: query='{sanitize_for_log(query.raw_query)}', "
                f"error={type(e).__name__}"
            )
            raise

    def _schedule_cache_write(
        self,
        cache_key: str,
        entry: CacheEntry,
        schedule_write: Optional[WriteScheduler],
    ) -> None:
        """응답과 분리된 캐시 쓰기 예약"""
        if schedule_write is not None:
            schedule_write(self._save_to_cache, cache_key, entry)
            return

        task = asyncio.create_task(self._save_to_cache(cache_key, entry))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _save_to_cache(self, cache_key: str, entry: CacheEntry) -> None:
        """결과를 캐시에 저장

        Raises:
            None: 실패는 로그로만 남김
        """
        try:
            saved = await self.cache.set(cache_key, entry)
            if saved is False:
                logger.warning(f"Cache write not persisted: key='{sanitize_for_log(cache_key)}'")
        except Exception as e:
            logger.error(f"Failed to save to cache: {type(e).__name__}: {e}")

    @property
    def pending_writes(self) -> int:
        return len(self._pending_writes)

    async def wait_for_pending_writes(self) -> None:
        """진행 중인 detached 캐시 쓰기 완료 대기 (종료/테스트용)"""
        if self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)
