"""Pydantic 스키마 정의

외부(HTTP/저장소)로 나가는 필드명은 camelCase 별칭을 사용합니다.
"""
from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class AmazonProduct(BaseModel):
    """정규화된 Amazon 상품 (모든 필드는 항상 존재, 값이 없으면 null/기본값)"""

    model_config = ConfigDict(populate_by_name=True)

    asin: str = Field(..., min_length=1, description="Amazon 상품 식별자")
    url: Optional[str] = Field(None, description="상품 상세 페이지 URL")
    title: str = Field("Título não disponível", description="상품명")
    image: Optional[str] = Field(None, description="대표 이미지 URL (Medium)")
    price: Optional[float] = Field(None, description="가격")
    price_formatted: Optional[str] = Field(None, alias="priceFormatted", description="표시용 가격")
    currency: str = Field("BRL", description="통화")
    saving_basis: Optional[float] = Field(None, alias="savingBasis", description="할인 전 가격")
    saving_basis_formatted: Optional[str] = Field(None, alias="savingBasisFormatted", description="표시용 할인 전 가격")
    is_prime_eligible: bool = Field(False, alias="isPrimeEligible", description="Prime 전용 여부")
    availability: str = Field("Unknown", description="재고 상태")
    brand: Optional[str] = Field(None, description="브랜드")
    manufacturer: Optional[str] = Field(None, description="제조사")
    model: Optional[str] = Field(None, description="모델 번호")


class CacheEntry(BaseModel):
    """캐시 문서 (캐시 키 하나당 하나, 항상 통째로 덮어씀)"""

    model_config = ConfigDict(populate_by_name=True)

    keyword: str = Field(..., description="원본 검색어 (표시용)")
    normalized_keyword: str = Field(..., alias="normalizedKeyword", description="정규화된 검색어")
    item_count: int = Field(..., ge=1, alias="itemCount", description="요청 상품 수")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt", description="저장 시각 (저장소 시계)")
    products: List[AmazonProduct] = Field(default_factory=list, description="상품 목록 (순서 유지)")


class SearchMetadata(BaseModel):
    """검색 응답 메타데이터"""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    normalized_query: str = Field(..., alias="normalizedQuery")
    item_count: int = Field(..., alias="itemCount")
    total_results: int = Field(..., ge=0, alias="totalResults")
    source: Literal["cache", "provider"]
    cache_key: str = Field(..., alias="cacheKey")
    elapsed_ms: float = Field(..., ge=0, alias="elapsedMs")
    timestamp: datetime


class SearchResponse(BaseModel):
    """상품 검색 응답"""
    products: List[AmazonProduct]
    metadata: SearchMetadata


class ErrorResponse(BaseModel):
    """에러 응답"""
    error: str = Field(..., description="에러 코드")
    message: str = Field(..., description="사용자 메시지")
    details: Optional[Any] = Field(None, description="상세 정보 (production 에서는 제외)")


class HealthResponse(BaseModel):
    """프로세스 헬스 체크 응답"""
    status: str
    timestamp: datetime
    uptime: float = Field(..., ge=0, description="프로세스 가동 시간 (초)")
    version: str
    environment: str


class CacheHealthResponse(BaseModel):
    """캐시 저장소 헬스 체크 응답"""
    status: Literal["ok", "error"]
    cache: Literal["up", "down"]
    backend: str
    timestamp: datetime


class CacheDeleteResponse(BaseModel):
    """캐시 삭제 응답 (비-production 전용)"""

    model_config = ConfigDict(populate_by_name=True)

    deleted: bool
    cache_key: str = Field(..., alias="cacheKey")
    message: str
