"""외부 검색 제공자"""

from .amazon_paapi import AmazonSearchProvider, format_amazon_item, format_amazon_items

__all__ = ["AmazonSearchProvider", "format_amazon_item", "format_amazon_items"]
