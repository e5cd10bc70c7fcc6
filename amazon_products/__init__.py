"""Amazon 상품 검색 캐시 API"""

__version__ = "1.0.0"
