"""설정 관리 - 환경 변수 로드 및 검증"""
import re
from typing import List, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

from amazon_products.core.exceptions import ConfigurationException


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 실행 환경 (development | production | test)
    environment: Literal["development", "production", "test"] = "development"

    # 서버
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS 허용 origin (로컬 + 공식 도메인)
    url_local: str = ""
    url_oficial: str = ""

    # Amazon Product Advertising API
    amazon_access_key: str = ""
    amazon_secret_key: str = ""
    amazon_partner_tag: str = ""
    amazon_country: str = "BR"
    amazon_search_index: str = "All"
    amazon_merchant: str = "Amazon"

    # 캐시 저장소
    cache_backend: Literal["firestore", "redis"] = "firestore"
    cache_ttl_hours: int = 24

    # Firestore (firebase service account)
    firebase_project_id: str = ""
    firebase_client_email: str = ""
    firebase_private_key: str = ""
    firestore_collection: str = "amazonAds"

    # Redis
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "amazon:cache"

    # 검색 파라미터 정책
    item_count_default: int = 10
    item_count_max: int = 50

    # API
    api_title: str = "Amazon Products API"
    api_description: str = "Amazon PAAPI 검색 결과를 24시간 동안 캐시합니다."

    # 로깅
    log_level: str = "INFO"

    @field_validator("cache_ttl_hours")
    @classmethod
    def validate_cache_ttl_hours(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache_ttl_hours must be positive")
        return v

    @field_validator("item_count_default", "item_count_max")
    @classmethod
    def validate_item_counts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("item counts must be >= 1")
        return v

    @field_validator("firebase_client_email")
    @classmethod
    def validate_firebase_client_email(cls, v: str) -> str:
        if v and not EMAIL_PATTERN.match(v):
            raise ValueError("firebase_client_email must be a valid email address")
        return v

    @field_validator("firebase_private_key")
    @classmethod
    def validate_firebase_private_key(cls, v: str) -> str:
        if not v:
            return v
        # .env 에서는 줄바꿈이 리터럴 "\n" 으로 들어옴
        v = v.replace("\\n", "\n")
        if "BEGIN PRIVATE KEY" not in v or "END PRIVATE KEY" not in v:
            raise ValueError("firebase_private_key must be a PEM private key")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def cors_origins_list(self) -> List[str]:
        """CORS 허용 origin 목록 (빈 값 제외)"""
        return [origin.strip() for origin in (self.url_local, self.url_oficial) if origin and origin.strip()]

    def missing_credentials(self) -> List[str]:
        """선택된 백엔드 기준으로 누락된 환경 변수 이름 목록"""
        required = {
            "AMAZON_ACCESS_KEY": self.amazon_access_key,
            "AMAZON_SECRET_KEY": self.amazon_secret_key,
            "AMAZON_PARTNER_TAG": self.amazon_partner_tag,
        }
        if self.cache_backend == "firestore":
            required.update({
                "FIREBASE_PROJECT_ID": self.firebase_project_id,
                "FIREBASE_CLIENT_EMAIL": self.firebase_client_email,
                "FIREBASE_PRIVATE_KEY": self.firebase_private_key,
            })
        else:
            required["REDIS_URL"] = self.redis_url
        return [name for name, value in required.items() if not value]

    def validate_credentials(self) -> None:
        """시작 시 필수 자격 증명 검증

        Raises:
            ConfigurationException: 누락된 환경 변수가 있는 경우
        """
        missing = self.missing_credentials()
        if missing:
            raise ConfigurationException(
                f"Missing environment variables: {', '.join(missing)}",
                details={"missing": missing},
            )

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
