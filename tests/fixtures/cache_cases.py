"""캐시 케이스 자산

저장소에 들어있는 문서 형태(camelCase) 그대로 보관합니다.
updatedAt 은 테스트에서 현재 시각 기준으로 채웁니다.
"""

CACHE_CASES = {
    "notebook_10": {
        "keyword": "Notebook",
        "normalizedKeyword": "notebook",
        "itemCount": 10,
        "products": [
            {"asin": "B0CACHED01", "title": "Notebook em cache", "price": 2500.0},
            {"asin": "B0CACHED02", "title": "Notebook em cache 2"},
        ],
    },
    "incomplete_document": {
        "keyword": "Fone Bluetooth",
        "products": [{"asin": "B0LEGACY01", "title": "Fone"}],
    },
}
