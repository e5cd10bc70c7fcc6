"""Amazon Products Routes

HTTP Layer 는 요청 검증 후 Engine Layer 로 위임하고,
결과/예외를 HTTP 상태 코드와 JSON 본문으로 변환합니다.
"""

import time
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from fastapi.responses import JSONResponse

from amazon_products.core.config import settings
from amazon_products.core.exceptions import (
    AmazonProductsException,
    ProviderException,
    ValidationException,
)
from amazon_products.core.logging import logger, sanitize_for_log
from amazon_products.engine import CacheAdapter, SearchOrchestrator, validate_search_params
from amazon_products.providers import AmazonSearchProvider
from amazon_products.schemas.product_schema import (
    CacheDeleteResponse,
    CacheHealthResponse,
    ErrorResponse,
    SearchMetadata,
    SearchResponse,
)

router = APIRouter(prefix="/amazon-products", tags=["amazon-products"])

# production 에서는 등록하지 않는 유지보수용 라우터
maintenance_router = APIRouter(prefix="/amazon-products", tags=["maintenance"])

PROVIDER_UNAVAILABLE_MESSAGE = "Service temporarily unavailable"
INTERNAL_ERROR_MESSAGE = "Failed to fetch products"

# 싱글톤 서비스
_cache_adapter: Optional[CacheAdapter] = None
_provider: Optional[AmazonSearchProvider] = None
_orchestrator: Optional[SearchOrchestrator] = None


def get_cache_adapter() -> CacheAdapter:
    """CacheAdapter 싱글톤"""
    global _cache_adapter
    if _cache_adapter is None:
        _cache_adapter = CacheAdapter()
    return _cache_adapter


def get_provider() -> AmazonSearchProvider:
    """AmazonSearchProvider 싱글톤"""
    global _provider
    if _provider is None:
        _provider = AmazonSearchProvider()
    return _provider


def get_orchestrator(
    cache_adapter: CacheAdapter = Depends(get_cache_adapter),
    provider: AmazonSearchProvider = Depends(get_provider),
) -> SearchOrchestrator:
    """SearchOrchestrator 싱글톤"""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = SearchOrchestrator(cache_service=cache_adapter, provider=provider)
    return _orchestrator


async def shutdown_services() -> None:
    """진행 중인 캐시 쓰기를 마치고 저장소 연결 종료"""
    global _cache_adapter, _provider, _orchestrator
    if _orchestrator is not None:
        await _orchestrator.wait_for_pending_writes()
    if _cache_adapter is not None:
        await _cache_adapter.close()
    _cache_adapter = None
    _provider = None
    _orchestrator = None


def error_response(
    status_code: int,
    error: str,
    message: str,
    exc: Optional[BaseException] = None,
) -> JSONResponse:
    """에러 JSON 응답 (상세 정보는 production 이 아닐 때만 포함)"""
    details: Any = None
    if exc is not None and not settings.is_production:
        if isinstance(exc, AmazonProductsException):
            details = {"error_code": exc.error_code, "message": exc.message, **exc.details}
        else:
            details = {"error": type(exc).__name__, "message": str(exc)}

    body = ErrorResponse(error=error, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def search_products(
    background_tasks: BackgroundTasks,
    query: Optional[str] = Query(None, description="검색어 (필수)"),
    item_count: Optional[str] = Query(None, alias="itemCount", description="상품 수 (1~50, 기본 10)"),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """Amazon 상품 검색 (24시간 캐시)

    Flow:
        1. 파라미터 검증 (query 필수, itemCount 보정)
        2. Engine 에 위임 (Cache → Amazon PAAPI)
        3. 캐시 쓰기는 응답 이후 백그라운드로 실행
        4. 결과를 HTTP Response 로 변환
    """
    started = time.perf_counter()

    try:
        search_query = validate_search_params(query, item_count)
    except ValidationException as e:
        logger.warning(f"[API] Input validation failed: {e.error_code}")
        return error_response(400, e.error_code, e.message)

    logger.info(
        f"[API] Search request: query='{sanitize_for_log(search_query.raw_query)}', "
        f"item_count={search_query.item_count}"
    )

    try:
        result = await orchestrator.resolve(search_query, schedule_write=background_tasks.add_task)
    except ProviderException as e:
        logger.error(f"[API] Provider failure: {e}")
        if not settings.is_production:
            logger.debug(f"[API] Provider failure details: {e.details}")
        return error_response(503, "PROVIDER_UNAVAILABLE", PROVIDER_UNAVAILABLE_MESSAGE, e)
    except Exception as e:
        logger.error(f"[API] Search failed: query='{sanitize_for_log(search_query.raw_query)}'", exc_info=True)
        return error_response(500, "INTERNAL_ERROR", INTERNAL_ERROR_MESSAGE, e)

    elapsed_ms = (time.perf_counter() - started) * 1000
    return SearchResponse(
        products=result.products,
        metadata=SearchMetadata(
            query=search_query.raw_query,
            normalized_query=search_query.normalized_query,
            item_count=search_query.item_count,
            total_results=len(result.products),
            source=result.source.value,
            cache_key=result.cache_key,
            elapsed_ms=round(elapsed_ms, 2),
            timestamp=datetime.now(timezone.utc),
        ),
    )


@router.get(
    "/health",
    response_model=CacheHealthResponse,
    responses={503: {"model": CacheHealthResponse}},
)
async def cache_health(cache_adapter: CacheAdapter = Depends(get_cache_adapter)):
    """캐시 저장소 연결 확인 (실패 시 503)"""
    healthy = await cache_adapter.health_check()
    body = CacheHealthResponse(
        status="ok" if healthy else "error",
        cache="up" if healthy else "down",
        backend=cache_adapter.backend_name,
        timestamp=datetime.now(timezone.utc),
    )
    if not healthy:
        logger.warning(f"[API] Cache store unreachable: backend={body.backend}")
        return JSONResponse(status_code=503, content=body.model_dump(mode="json"))
    return body


@maintenance_router.delete(
    "/cache/{query:path}",
    response_model=CacheDeleteResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def delete_cache_entry(
    query: str,
    item_count: Optional[str] = Query(None, alias="itemCount"),
    cache_adapter: CacheAdapter = Depends(get_cache_adapter),
):
    """캐시 항목 삭제 (production 에서는 등록되지 않음)

    검색과 같은 규칙으로 캐시 키를 계산합니다.
    """
    try:
        search_query = validate_search_params(query, item_count)
    except ValidationException as e:
        return error_response(400, e.error_code, e.message)

    cache_key = search_query.cache_key
    try:
        deleted = await cache_adapter.delete(cache_key)
    except Exception as e:
        logger.error(f"[API] Cache delete failed: key='{sanitize_for_log(cache_key)}', error={e}")
        return error_response(500, "CACHE_DELETE_FAILED", "Failed to delete cache entry", e)

    return CacheDeleteResponse(
        deleted=deleted,
        cache_key=cache_key,
        message="Cache entry deleted" if deleted else "Cache entry not found",
    )
