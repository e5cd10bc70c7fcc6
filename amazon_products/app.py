"""FastAPI 앱 팩토리"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from amazon_products import __version__
from amazon_products.core.config import Settings, settings as default_settings
from amazon_products.core.logging import logger
from amazon_products.api import (
    get_cache_adapter,
    health_router,
    maintenance_router,
    product_router,
    shutdown_services,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기"""
    config: Settings = app.state.config
    logger.info(f"Starting application (environment={config.environment})...")

    if config.environment != "test":
        # 자격 증명이 없으면 시작하지 않음
        config.validate_credentials()

    if config.is_development:
        try:
            healthy = await get_cache_adapter().health_check()
        except Exception as e:
            logger.warning(f"Cache store initialization failed: {type(e).__name__}: {e}")
            healthy = False
        if healthy:
            logger.info(f"Cache store reachable: backend={config.cache_backend}")
        else:
            logger.warning(f"Cache store unreachable at startup: backend={config.cache_backend}")

    logger.info("Application started")
    yield
    logger.info("Shutting down application...")
    await shutdown_services()
    logger.info("Application stopped")


def _register_error_handlers(app: FastAPI, config: Settings) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={
                    "error": "NOT_FOUND",
                    "message": "Endpoint not found",
                    "path": request.url.path,
                    "method": request.method,
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "HTTP_ERROR", "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error: {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": str(exc) if config.is_development else "Something went wrong",
            },
        )


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    FastAPI 앱 생성 (Factory Pattern)

    Args:
        config: 설정 (없으면 환경 변수 기반 전역 설정)

    Returns:
        FastAPI 앱 인스턴스
    """
    config = config or default_settings

    app = FastAPI(
        title=config.api_title,
        description=config.api_description,
        version=__version__,
        lifespan=lifespan,
        docs_url=None if config.is_production else "/docs",
        redoc_url=None if config.is_production else "/redoc",
    )
    app.state.config = config

    # CORS: Origin 헤더가 없는 요청은 미들웨어를 그대로 통과
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app, config)

    # 라우터 등록
    app.include_router(health_router)
    app.include_router(product_router)
    if not config.is_production:
        app.include_router(maintenance_router)

    return app


def main() -> None:
    """uvicorn 으로 서버 실행 (SIGINT/SIGTERM 시 graceful shutdown)"""
    import uvicorn

    logger.info(f"Amazon Products API listening on port {default_settings.port}")
    uvicorn.run(
        "amazon_products.app:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.is_development,
    )


# 앱 인스턴스 생성 (uvicorn이 로드할 수 있도록)
app = create_app()


if __name__ == "__main__":
    main()
