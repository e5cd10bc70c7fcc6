"""Firestore 캐시 서비스 - 캐시 키 하나당 문서 하나"""
import inspect
from typing import Any, Optional
from urllib.parse import quote

from google.cloud import firestore
from google.oauth2 import service_account
from pydantic import ValidationError

from amazon_products.core.config import Settings, settings as default_settings
from amazon_products.core.exceptions import (
    CacheConnectionException,
    CacheSerializationException,
)
from amazon_products.core.logging import logger, sanitize_for_log
from amazon_products.schemas.product_schema import CacheEntry


GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
HEALTH_CHECK_COLLECTION = "_health_check"


def to_document_id(cache_key: str) -> str:
    """캐시 키를 Firestore 문서 ID로 변환 ('/' 는 ID에 쓸 수 없음)"""
    return quote(cache_key, safe=" ")


class FirestoreCacheService:
    """Firestore 문서 저장소

    updatedAt 은 SERVER_TIMESTAMP 로 저장되어 Firestore 시계를 따릅니다.
    """

    backend_name = "firestore"

    def __init__(
        self,
        config: Optional[Settings] = None,
        client: Optional[Any] = None,
        collection: Optional[str] = None,
    ):
        config = config or default_settings
        self.collection_name = collection or config.firestore_collection
        self.client = client if client is not None else self._create_client(config)

    @staticmethod
    def _create_client(config: Settings) -> firestore.AsyncClient:
        """서비스 계정 자격 증명으로 AsyncClient 생성"""
        try:
            credentials = service_account.Credentials.from_service_account_info({
                "type": "service_account",
                "project_id": config.firebase_project_id,
                "client_email": config.firebase_client_email,
                "private_key": config.firebase_private_key,
                "token_uri": GOOGLE_TOKEN_URI,
            })
            client = firestore.AsyncClient(
                project=config.firebase_project_id,
                credentials=credentials,
            )
            logger.info(f"Firestore client initialized: project={config.firebase_project_id}")
            return client
        except Exception as e:
            logger.error(f"Failed to initialize Firestore client: {e}")
            raise CacheConnectionException(
                reason="Firestore client initialization failed",
                details={"error": str(e)},
            )

    def _document(self, cache_key: str):
        return self.client.collection(self.collection_name).document(to_document_id(cache_key))

    async def get(self, cache_key: str) -> Optional[CacheEntry]:
        """
        캐시 문서 조회

        Args:
            cache_key: 캐시 키

        Returns:
            CacheEntry 또는 None
        """
        try:
            snapshot = await self._document(cache_key).get()
        except Exception as e:
            logger.error(f"Firestore read error: {e}")
            raise CacheConnectionException(
                reason="Cache read failed",
                error_code="CACHE_READ_FAILED",
                details={"key": cache_key, "error": str(e)},
            )

        if not snapshot.exists:
            logger.info(f"Cache miss for key: {sanitize_for_log(cache_key)}")
            return None

        try:
            entry = CacheEntry.model_validate(snapshot.to_dict() or {})
        except ValidationError as e:
            logger.error(f"Failed to deserialize cache document: key='{sanitize_for_log(cache_key)}', errors={e.error_count()}")
            raise CacheSerializationException(
                operation="deserialize",
                reason=str(e),
                details={"key": cache_key},
            )

        logger.info(f"Cache hit for key: {sanitize_for_log(cache_key)}")
        return entry

    async def set(self, cache_key: str, entry: CacheEntry) -> None:
        """캐시 문서 저장 (전체 교체)"""
        data = entry.model_dump(by_alias=True)
        data["updatedAt"] = firestore.SERVER_TIMESTAMP

        try:
            await self._document(cache_key).set(data)
        except Exception as e:
            logger.error(f"Firestore write error: {e}")
            raise CacheConnectionException(
                reason="Failed to write cache",
                error_code="CACHE_WRITE_FAILED",
                details={"key": cache_key, "error": str(e)},
            )
        logger.info(f"Cache set for key: {sanitize_for_log(cache_key)}, products: {len(entry.products)}")

    async def delete(self, cache_key: str) -> bool:
        """
        캐시 문서 삭제

        Returns:
            삭제 전에 문서가 존재했는지 여부
        """
        document = self._document(cache_key)
        try:
            snapshot = await document.get()
            await document.delete()
        except Exception as e:
            logger.error(f"Firestore delete error: {e}")
            raise CacheConnectionException(
                reason="Failed to delete cache",
                error_code="CACHE_DELETE_FAILED",
                details={"key": cache_key, "error": str(e)},
            )
        logger.info(f"Cache deleted for key: {sanitize_for_log(cache_key)}")
        return bool(snapshot.exists)

    async def health_check(self) -> bool:
        """Firestore 연결 상태 확인 (컬렉션 1건 조회)"""
        try:
            async for _ in self.client.collection(HEALTH_CHECK_COLLECTION).limit(1).stream():
                break
            return True
        except Exception as e:
            logger.warning(f"Firestore health check failed: {type(e).__name__}: {e}")
            return False

    async def close(self) -> None:
        result = self.client.close()
        if inspect.isawaitable(result):
            await result
