"""Engine Layer - Cache-or-Fetch 검색 엔진

- SearchQuery / validate_search_params: 요청 검증 및 정규화
- CacheAdapter / is_entry_fresh: 캐시 조회와 신선도 판단
- SearchOrchestrator: 캐시 또는 제공자에서 결과 확보
- SearchResult / SearchSource: 표준 결과 포맷
"""

from .cache_adapter import DEFAULT_STALENESS_WINDOW, CacheAdapter, is_entry_fresh
from .orchestrator import SearchOrchestrator
from .query import SearchQuery, normalize_item_count, validate_search_params
from .result import SearchResult, SearchSource

__all__ = [
    "SearchOrchestrator",
    "CacheAdapter",
    "is_entry_fresh",
    "DEFAULT_STALENESS_WINDOW",
    "SearchQuery",
    "validate_search_params",
    "normalize_item_count",
    "SearchResult",
    "SearchSource",
]
