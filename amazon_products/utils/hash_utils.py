"""캐시 키 유틸리티"""


def generate_cache_key(normalized_query: str, item_count: int) -> str:
    """
    정규화된 검색어와 상품 수로 캐시 키 생성

    같은 (검색어, 상품 수) 쌍은 항상 같은 키가 되고,
    상품 수가 다르면 같은 검색어라도 다른 항목이 됩니다.

    Args:
        normalized_query: 정규화된 검색어
        item_count: 요청 상품 수

    Returns:
        캐시 키 (예: "notebook_10")
    """
    return f"{normalized_query}_{item_count}"
