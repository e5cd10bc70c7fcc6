"""API 엔드포인트 패키지 - export only."""

from .routes import (
    get_cache_adapter,
    get_orchestrator,
    get_provider,
    health_router,
    maintenance_router,
    product_router,
    shutdown_services,
)

__all__ = [
    "health_router",
    "product_router",
    "maintenance_router",
    "get_cache_adapter",
    "get_provider",
    "get_orchestrator",
    "shutdown_services",
]
