"""Search Result - Standardized Result Format

캐시/제공자 어느 경로에서 왔든 같은 형태로 반환합니다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from amazon_products.schemas.product_schema import AmazonProduct


class SearchSource(str, Enum):
    """결과 출처"""

    CACHE = "cache"
    PROVIDER = "provider"


@dataclass
class SearchResult:
    """검색 결과 표준 포맷

    Attributes:
        products: 상품 목록 (순서 유지)
        source: 결과 출처
        cache_key: 조회/저장에 사용한 캐시 키
    """

    products: List[AmazonProduct] = field(default_factory=list)
    source: SearchSource = SearchSource.PROVIDER
    cache_key: str = ""

    @property
    def from_cache(self) -> bool:
        return self.source == SearchSource.CACHE

    @classmethod
    def cache_hit(cls, products: List[AmazonProduct], cache_key: str) -> "SearchResult":
        """캐시 히트 결과 생성"""
        return cls(products=list(products), source=SearchSource.CACHE, cache_key=cache_key)

    @classmethod
    def from_provider(cls, products: List[AmazonProduct], cache_key: str) -> "SearchResult":
        """제공자 호출 결과 생성"""
        return cls(products=list(products), source=SearchSource.PROVIDER, cache_key=cache_key)
