"""API routes package."""

from .health_routes import router as health_router
from .product_routes import (
    get_cache_adapter,
    get_orchestrator,
    get_provider,
    maintenance_router,
    router as product_router,
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
