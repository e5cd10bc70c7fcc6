"""로깅 설정 (Security Enhanced)

- production: 최소 포맷, DEBUG 요청은 INFO 로 올림
- 그 외: 함수명/라인 포함 상세 포맷
"""
import logging
import sys
from typing import Optional

from amazon_products.core.config import Settings, settings


LOGGER_NAME = "amazon_products"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PRODUCTION_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
VERBOSE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"

# SDK 내부 로그는 WARNING 이상만
NOISY_LOGGERS = ("google", "urllib3", "amazon_paapi")

SENSITIVE_MARKERS = ("password", "token", "secret", "private_key", "private key", "access_key")


def _resolve_level(config: Settings) -> int:
    level_name = config.log_level.upper()
    if config.is_production and level_name == "DEBUG":
        level_name = "INFO"
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """애플리케이션 로거 구성 (핸들러는 한 번만 추가)"""
    config = config or settings
    level = _resolve_level(config)

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(level)

    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        app_logger.addHandler(handler)

    for handler in app_logger.handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(
            fmt=PRODUCTION_FORMAT if config.is_production else VERBOSE_FORMAT,
            datefmt=DATE_FORMAT,
        ))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return app_logger


logger = setup_logging()


def sanitize_for_log(value: str, max_length: int = 100) -> str:
    """민감 정보 제거 후 로깅용 문자열 반환

    줄바꿈은 공백으로 바꿔 한 줄로 남깁니다.

    Args:
        value: 로깅할 문자열 (보통 사용자 검색어)
        max_length: 최대 길이

    Returns:
        마스킹/절단된 문자열
    """
    if not value:
        return "[empty]"

    result = " ".join(str(value).splitlines())
    if any(marker in result.lower() for marker in SENSITIVE_MARKERS):
        return "***"

    if len(result) > max_length:
        result = result[:max_length] + "..."
    return result
