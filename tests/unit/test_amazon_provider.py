"""Amazon PAAPI 제공자 테스트 (SDK 클라이언트는 MagicMock)"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from amazon_paapi.errors import InvalidPartnerTag, ItemsNotFound, TooManyRequests

from amazon_products.core.config import Settings
from amazon_products.core.exceptions import (
    ProviderAuthException,
    ProviderException,
    ProviderRateLimitException,
)
from amazon_products.providers import AmazonSearchProvider, format_amazon_item, format_amazon_items
from tests.fixtures import PAAPI_ITEMS, PRODUCT_FIELDS


def paapi_item(asin: str) -> dict:
    return {"asin": asin, "item_info": {"title": {"display_value": f"Item {asin}"}}}


def make_client(*pages) -> MagicMock:
    """페이지별 결과를 순서대로 돌려주는 SDK 클라이언트"""
    client = MagicMock()
    client.search_items.side_effect = [SimpleNamespace(items=list(page)) for page in pages]
    return client


class TestFormatAmazonItem:
    def test_full_item(self):
        product = format_amazon_item(PAAPI_ITEMS["notebook_full"])

        assert product.asin == "B0C1NTBK01"
        assert product.url == "https://www.amazon.com.br/dp/B0C1NTBK01"
        assert product.title == "Notebook Lenovo IdeaPad 3 15.6"
        assert product.image == "https://m.media-amazon.com/images/I/notebook.jpg"
        assert product.price == 3299.9
        assert product.price_formatted == "R$ 3.299,90"
        assert product.currency == "BRL"
        assert product.saving_basis == 3999.0
        assert product.saving_basis_formatted == "R$ 3.999,00"
        assert product.is_prime_eligible is True
        assert product.availability == "Now"
        assert product.brand == "Lenovo"
        assert product.manufacturer == "Lenovo Brasil"
        assert product.model == "82MF0001BR"

    def test_minimal_item_gets_defaults(self):
        product = format_amazon_item(PAAPI_ITEMS["phone_minimal"])

        assert product.title == "Título não disponível"
        assert product.currency == "BRL"
        assert product.availability == "Unknown"
        assert product.is_prime_eligible is False
        assert product.price is None
        assert product.image is None
        assert product.brand is None

    def test_every_field_present_in_output(self):
        data = format_amazon_item(PAAPI_ITEMS["phone_minimal"]).model_dump(by_alias=True)
        assert sorted(data) == sorted(PRODUCT_FIELDS)

    def test_sdk_objects_are_supported(self):
        item = SimpleNamespace(
            asin="B0OBJECT01",
            detail_page_url=None,
            item_info=SimpleNamespace(title=SimpleNamespace(display_value="Objeto")),
            offers=None,
        )
        product = format_amazon_item(item)
        assert product.title == "Objeto"
        assert product.price is None

    def test_item_without_asin_is_dropped(self):
        assert format_amazon_item(PAAPI_ITEMS["missing_asin"]) is None
        assert format_amazon_item(None) is None

    def test_order_preserved_and_invalid_dropped(self):
        items = [PAAPI_ITEMS["notebook_full"], PAAPI_ITEMS["missing_asin"], PAAPI_ITEMS["phone_minimal"]]
        assert [p.asin for p in format_amazon_items(items)] == ["B0C1NTBK01", "B0C2PHONE2"]
        assert format_amazon_items(None) == []


class TestAmazonSearchProvider:
    @pytest.mark.asyncio
    async def test_single_page_request(self):
        client = make_client([paapi_item("B0000000A1"), paapi_item("B0000000A2")])
        provider = AmazonSearchProvider(config=Settings(), client=client)

        products = await provider.search(" notebook ", 5)

        assert [p.asin for p in products] == ["B0000000A1", "B0000000A2"]
        kwargs = client.search_items.call_args.kwargs
        assert kwargs["keywords"] == "notebook"
        assert kwargs["item_count"] == 5
        assert kwargs["item_page"] == 1
        assert kwargs["search_index"] == "All"
        assert kwargs["merchant"] == "Amazon"

    @pytest.mark.asyncio
    async def test_paginates_beyond_ten_items(self):
        pages = [[paapi_item(f"B0PAGE{p}{i:03d}") for i in range(10)] for p in range(1, 4)]
        client = make_client(*pages)
        provider = AmazonSearchProvider(config=Settings(), client=client)

        products = await provider.search("cabo usb", 25)

        assert len(products) == 25
        assert client.search_items.call_count == 3
        assert [c.kwargs["item_page"] for c in client.search_items.call_args_list] == [1, 2, 3]
        assert products[0].asin == "B0PAGE1000"
        assert products[-1].asin == "B0PAGE3004"

    @pytest.mark.asyncio
    async def test_stops_on_short_page(self):
        client = make_client([paapi_item(f"B0SHORT{i:03d}") for i in range(4)])
        provider = AmazonSearchProvider(config=Settings(), client=client)

        products = await provider.search("raro", 30)

        assert len(products) == 4
        assert client.search_items.call_count == 1

    @pytest.mark.asyncio
    async def test_items_not_found_is_empty_result(self):
        client = MagicMock()
        client.search_items.side_effect = ItemsNotFound("No items found")
        provider = AmazonSearchProvider(config=Settings(), client=client)

        assert await provider.search("xyzzy", 10) == []

    @pytest.mark.asyncio
    async def test_rate_limit_error(self):
        client = MagicMock()
        client.search_items.side_effect = TooManyRequests("quota exceeded")
        provider = AmazonSearchProvider(config=Settings(), client=client)

        with pytest.raises(ProviderRateLimitException) as exc_info:
            await provider.search("phone", 5)
        assert exc_info.value.error_code == "PROVIDER_RATE_LIMITED"

    @pytest.mark.asyncio
    async def test_auth_error(self):
        client = MagicMock()
        client.search_items.side_effect = InvalidPartnerTag("bad tag")
        provider = AmazonSearchProvider(config=Settings(), client=client)

        with pytest.raises(ProviderAuthException):
            await provider.search("phone", 5)

    @pytest.mark.asyncio
    async def test_unexpected_error_wrapped(self):
        client = MagicMock()
        client.search_items.side_effect = ConnectionError("network down")
        provider = AmazonSearchProvider(config=Settings(), client=client)

        with pytest.raises(ProviderException) as exc_info:
            await provider.search("phone", 5)
        assert exc_info.value.error_code == "PROVIDER_ERROR"
        assert exc_info.value.details["error"] == "ConnectionError"
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        config = Settings(amazon_access_key="", amazon_secret_key="", amazon_partner_tag="")
        provider = AmazonSearchProvider(config=config)

        with pytest.raises(ProviderException) as exc_info:
            await provider.search("phone", 5)
        assert exc_info.value.error_code == "PROVIDER_NOT_CONFIGURED"

    @pytest.mark.asyncio
    async def test_connection_check(self):
        ok = AmazonSearchProvider(config=Settings(), client=make_client([paapi_item("B0TEST0001")]))
        assert await ok.test_connection() is True

        broken_client = MagicMock()
        broken_client.search_items.side_effect = TooManyRequests("quota exceeded")
        broken = AmazonSearchProvider(config=Settings(), client=broken_client)
        assert await broken.test_connection() is False
