# storefront/catalog/deep_link.py

"""Shareable product URLs and their resolution back to a product."""

from urllib.parse import parse_qs, quote, urlparse

from storefront.config.settings import Settings
from storefront.models.product import Product


def build_share_url(base_url: str, product_id: str) -> str:
    """Build ``<origin>/?product=<id>`` for *product_id*.

    Exactly one trailing slash is stripped from *base_url* so the result
    never contains ``//?product=``.
    """
    base = base_url[:-1] if base_url.endswith("/") else base_url
    encoded_id = quote(product_id, safe="-_.~")
    return f"{base}/?{Settings.SHARE_QUERY_PARAM}={encoded_id}"


def parse_product_id(url: str | None) -> str:
    """Read the ``product`` query parameter from a URL or a bare query.

    Returns ``""`` when there is no query string or no non-empty value.
    """
    if not url:
        return ""

    if url.startswith("?"):
        query = url[1:]
    elif "://" in url or url.startswith("/"):
        query = urlparse(url).query
    else:
        query = url

    values = parse_qs(query).get(Settings.SHARE_QUERY_PARAM, [])
    for value in values:
        if value.strip():
            return value.strip()
    return ""


def find_product(
    products: list[Product], product_id: str | None
) -> Product | None:
    """Look up *product_id* case-insensitively."""
    if not product_id:
        return None
    wanted = product_id.lower()
    for product in products:
        if product.id.lower() == wanted:
            return product
    return None
