"""Pydantic 스키마 - export only."""

from .product_schema import (
    AmazonProduct,
    CacheDeleteResponse,
    CacheEntry,
    CacheHealthResponse,
    ErrorResponse,
    HealthResponse,
    SearchMetadata,
    SearchResponse,
)

__all__ = [
    "AmazonProduct",
    "CacheEntry",
    "SearchMetadata",
    "SearchResponse",
    "ErrorResponse",
    "HealthResponse",
    "CacheHealthResponse",
    "CacheDeleteResponse",
]
