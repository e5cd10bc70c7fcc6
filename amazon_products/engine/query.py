"""Search Query - 요청 파라미터 검증 및 정규화

query 는 필수 검색 의도이므로 없으면 실패하고,
itemCount 는 조정 가능한 값이므로 잘못된 값은 조용히 보정합니다.
"""

from dataclasses import dataclass
from typing import Optional

from amazon_products.core.config import settings
from amazon_products.core.exceptions import MissingQueryException
from amazon_products.utils.hash_utils import generate_cache_key
from amazon_products.utils.text_utils import normalize_query, parse_positive_int


@dataclass(frozen=True)
class SearchQuery:
    """검증이 끝난 검색 요청

    Attributes:
        raw_query: 호출자가 보낸 검색어 (앞뒤 공백 제거)
        normalized_query: 캐시 키용 소문자 검색어
        item_count: 1 ~ item_count_max 범위의 상품 수
    """

    raw_query: str
    normalized_query: str
    item_count: int

    @property
    def cache_key(self) -> str:
        return generate_cache_key(self.normalized_query, self.item_count)


def normalize_item_count(
    raw_item_count: Optional[str],
    default: Optional[int] = None,
    maximum: Optional[int] = None,
) -> int:
    """itemCount 보정

    - 없음 / 숫자 아님 / 1 미만 -> default (10)
    - maximum (50) 초과 -> maximum
    - 그 외 -> 그대로
    """
    default = default if default is not None else settings.item_count_default
    maximum = maximum if maximum is not None else settings.item_count_max

    parsed = parse_positive_int(raw_item_count)
    if parsed is None:
        return min(default, maximum)
    return min(parsed, maximum)


def validate_search_params(
    raw_query: Optional[str],
    raw_item_count: Optional[str] = None,
) -> SearchQuery:
    """HTTP 파라미터를 SearchQuery로 변환

    Args:
        raw_query: query 파라미터 (None 가능)
        raw_item_count: itemCount 파라미터 (None 가능)

    Returns:
        SearchQuery

    Raises:
        MissingQueryException: query가 없거나 공백뿐인 경우
    """
    if raw_query is None or not str(raw_query).strip():
        raise MissingQueryException()

    trimmed = str(raw_query).strip()
    return SearchQuery(
        raw_query=trimmed,
        normalized_query=normalize_query(trimmed),
        item_count=normalize_item_count(raw_item_count),
    )
