"""Amazon Product Advertising API (PAAPI 5) 검색 제공자

SDK 는 동기식이므로 worker thread 에서 실행합니다.
SDK 에러는 모두 ProviderException 계열로 변환됩니다.
"""

import asyncio
import math
from typing import Any, List, Optional

from amazon_paapi import AmazonApi
from amazon_paapi.errors import (
    AssociateValidationError,
    InvalidPartnerTag,
    ItemsNotFound,
    TooManyRequests,
)

from amazon_products.core.config import Settings, settings as default_settings
from amazon_products.core.exceptions import (
    ConfigurationException,
    ProviderAuthException,
    ProviderException,
    ProviderRateLimitException,
)
from amazon_products.core.logging import logger, sanitize_for_log
from amazon_products.schemas.product_schema import AmazonProduct


# PAAPI SearchItems 는 한 페이지에 최대 10개, 최대 10페이지
PAAPI_MAX_PAGE_SIZE = 10
PAAPI_MAX_PAGES = 10


def _dig(obj: Any, *path: Any) -> Any:
    """SDK 모델/딕셔너리에서 중첩 값 꺼내기 (중간에 없으면 None)"""
    current = obj
    for step in path:
        if current is None:
            return None
        if isinstance(step, int):
            if not isinstance(current, (list, tuple)) or len(current) <= step:
                return None
            current = current[step]
        elif isinstance(current, dict):
            current = current.get(step)
        else:
            current = getattr(current, step, None)
    return current


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number or None


def format_amazon_item(item: Any) -> Optional[AmazonProduct]:
    """PAAPI 응답 아이템을 AmazonProduct 로 변환

    asin 이 없는 아이템은 None 을 반환합니다 (결과에서 제외).
    """
    if item is None:
        return None

    asin = _dig(item, "asin")
    if not asin:
        return None

    listing = _dig(item, "offers", "listings", 0)

    return AmazonProduct(
        asin=asin,
        url=_dig(item, "detail_page_url") or None,
        title=_dig(item, "item_info", "title", "display_value") or "Título não disponível",
        image=_dig(item, "images", "primary", "medium", "url") or None,
        price=_to_float(_dig(listing, "price", "amount")),
        price_formatted=_dig(listing, "price", "display_amount") or None,
        currency=_dig(listing, "price", "currency") or "BRL",
        saving_basis=_to_float(_dig(listing, "saving_basis", "amount")),
        saving_basis_formatted=_dig(listing, "saving_basis", "display_amount") or None,
        is_prime_eligible=bool(_dig(listing, "program_eligibility", "is_prime_exclusive") or False),
        availability=_dig(listing, "availability", "type") or "Unknown",
        brand=_dig(item, "item_info", "by_line_info", "brand", "display_value") or None,
        manufacturer=_dig(item, "item_info", "by_line_info", "manufacturer", "display_value") or None,
        model=_dig(item, "item_info", "manufacture_info", "model", "display_value") or None,
    )


def format_amazon_items(items: Optional[List[Any]]) -> List[AmazonProduct]:
    """아이템 목록 변환 (순서 유지, asin 없는 아이템 제외)"""
    products: List[AmazonProduct] = []
    for item in items or []:
        product = format_amazon_item(item)
        if product is not None:
            products.append(product)
    return products


class AmazonSearchProvider:
    """Amazon PAAPI 검색 어댑터

    search(query, item_count) 만 노출합니다.
    """

    def __init__(self, config: Optional[Settings] = None, client: Optional[Any] = None):
        self.config = config or default_settings
        self._client = client

    def _get_client(self) -> Any:
        """AmazonApi 클라이언트 (첫 호출 시 생성)"""
        if self._client is not None:
            return self._client

        missing = [
            name
            for name, value in (
                ("AMAZON_ACCESS_KEY", self.config.amazon_access_key),
                ("AMAZON_SECRET_KEY", self.config.amazon_secret_key),
                ("AMAZON_PARTNER_TAG", self.config.amazon_partner_tag),
            )
            if not value
        ]
        if missing:
            raise ConfigurationException(
                f"Missing Amazon credentials: {', '.join(missing)}",
                details={"missing": missing},
            )

        self._client = AmazonApi(
            self.config.amazon_access_key,
            self.config.amazon_secret_key,
            self.config.amazon_partner_tag,
            self.config.amazon_country,
        )
        return self._client

    def _search_sync(self, query: str, item_count: int) -> List[Any]:
        """SearchItems 호출 (item_count 가 10 을 넘으면 여러 페이지 요청)"""
        client = self._get_client()
        page_size = min(item_count, PAAPI_MAX_PAGE_SIZE)
        pages = min(math.ceil(item_count / page_size), PAAPI_MAX_PAGES)

        items: List[Any] = []
        for page in range(1, pages + 1):
            try:
                result = client.search_items(
                    keywords=query,
                    item_count=page_size,
                    item_page=page,
                    search_index=self.config.amazon_search_index,
                    merchant=self.config.amazon_merchant,
                )
            except ItemsNotFound:
                break

            page_items = list(_dig(result, "items") or [])
            items.extend(page_items)
            if len(page_items) < page_size:
                break

        return items[:item_count]

    async def search(self, query: str, item_count: int) -> List[AmazonProduct]:
        """
        Amazon 상품 검색

        Args:
            query: 검색어 (원본, 앞뒤 공백 제거됨)
            item_count: 요청 상품 수

        Returns:
            AmazonProduct 목록 (검색 결과가 없으면 빈 목록)

        Raises:
            ProviderException: SDK 호출 실패 (네트워크, 인증, 할당량)
        """
        keywords = str(query).strip()
        logger.info(f"Searching Amazon: query='{sanitize_for_log(keywords)}', item_count={item_count}")

        try:
            raw_items = await asyncio.to_thread(self._search_sync, keywords, item_count)
        except ConfigurationException as e:
            raise ProviderException(
                "Amazon provider is not configured",
                error_code="PROVIDER_NOT_CONFIGURED",
                details={"reason": e.message},
            ) from e
        except TooManyRequests as e:
            raise ProviderRateLimitException(str(e), details={"query": keywords}) from e
        except (InvalidPartnerTag, AssociateValidationError) as e:
            raise ProviderAuthException(str(e), details={"query": keywords}) from e
        except Exception as e:
            raise ProviderException(
                f"Amazon search failed: {e}",
                details={"query": keywords, "item_count": item_count, "error": type(e).__name__},
            ) from e

        products = format_amazon_items(raw_items)
        if not products:
            logger.warning(f"No products found for: '{sanitize_for_log(keywords)}'")
        else:
            logger.info(f"{len(products)} product(s) found for: '{sanitize_for_log(keywords)}'")
        return products

    async def test_connection(self) -> bool:
        """PAAPI 연결 확인 (검색 1건)"""
        try:
            await self.search("test", 1)
            logger.info("Amazon PAAPI connection established")
            return True
        except ProviderException as e:
            logger.error(f"Amazon PAAPI connection failed: {e}")
            return False
