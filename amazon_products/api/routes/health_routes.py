"""프로세스 헬스 체크 엔드포인트"""
import time
from datetime import datetime, timezone

from fastapi import APIRouter

from amazon_products import __version__
from amazon_products.core.config import settings
from amazon_products.schemas.product_schema import HealthResponse

router = APIRouter(tags=["health"])

PROCESS_STARTED_AT = time.monotonic()


def get_uptime_seconds() -> float:
    """프로세스 가동 시간 (초)"""
    return round(time.monotonic() - PROCESS_STARTED_AT, 3)


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    헬스 체크 엔드포인트

    외부 의존성과 무관하게 항상 200 을 반환합니다.
    캐시 저장소 상태는 /amazon-products/health 에서 확인합니다.
    """
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        uptime=get_uptime_seconds(),
        version=__version__,
        environment=settings.environment,
    )
