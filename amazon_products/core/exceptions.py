"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class AmazonProductsException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 설정 관련 예외
class ConfigurationException(AmazonProductsException):
    """환경 변수/자격 증명 누락 또는 형식 오류"""
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "CONFIGURATION_ERROR", details)


# 유효성 검증 관련 예외
class ValidationException(AmazonProductsException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, error_code: str = "VALIDATION_ERROR", details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, error_code,
                        details or {"field": field, "reason": reason})


class MissingQueryException(ValidationException):
    """검색어 누락 (빈 문자열/공백 포함)"""
    def __init__(self, details: Optional[dict[str, Any]] = None):
        super().__init__("query", "query parameter is required", "MISSING_QUERY", details)


# 외부 검색 제공자(Amazon PAAPI) 관련 예외
class ProviderException(AmazonProductsException):
    """검색 제공자 호출 실패 (네트워크, 인증, 할당량)"""
    def __init__(self, message: str, error_code: str = "PROVIDER_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "PROVIDER_ERROR", details)


class ProviderRateLimitException(ProviderException):
    """호출 한도 초과"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Provider rate limit exceeded: {reason}"
        super().__init__(message, "PROVIDER_RATE_LIMITED", details or {"reason": reason})


class ProviderAuthException(ProviderException):
    """자격 증명/파트너 태그 오류"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Provider rejected credentials: {reason}"
        super().__init__(message, "PROVIDER_AUTH_FAILED", details or {"reason": reason})


# 캐시 관련 예외
class CacheException(AmazonProductsException):
    """캐시 관련 예외"""
    def __init__(self, message: str, error_code: str = "CACHE_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CACHE_ERROR", details)


class CacheConnectionException(CacheException):
    """캐시 저장소 연결/입출력 실패"""
    def __init__(self, reason: str, error_code: str = "CACHE_CONN_FAILED", details: Optional[dict[str, Any]] = None):
        message = f"Cache store unavailable: {reason}"
        super().__init__(message, error_code, details or {"reason": reason})


class CacheSerializationException(CacheException):
    """캐시 직렬화/역직렬화 오류"""
    def __init__(self, operation: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Cache {operation} failed: {reason}"
        super().__init__(message, "CACHE_SERIALIZATION_ERROR",
                        details or {"operation": operation, "reason": reason})


# 내부 상태 예외
class InternalStateException(AmazonProductsException):
    """검증되지 않은 입력이 엔진에 전달된 경우"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__(f"Internal state error: {reason}", "INTERNAL_STATE_ERROR", details)
