# storefront/catalog/sorter.py

"""Ordering of the visible product list."""

from storefront.catalog.ratings import average_rating
from storefront.models.product import Product, SortMode


def sort_products(
    products: list[Product], mode: SortMode | str | None
) -> list[Product]:
    """Return *products* ordered by *mode*.

    ``SortMode.NONE`` and unrecognised values keep the fetch order.
    Brand comparisons are ordinal; unrated products count as ``0``.
    Ties keep their relative order (``sorted`` is stable).
    """
    sort_mode = SortMode.parse(mode)

    if sort_mode is SortMode.BRAND_AZ:
        return sorted(products, key=lambda p: p.brand)
    if sort_mode is SortMode.BRAND_ZA:
        return sorted(products, key=lambda p: p.brand, reverse=True)
    if sort_mode is SortMode.RATING_HIGH_LOW:
        return sorted(products, key=average_rating, reverse=True)
    if sort_mode is SortMode.RATING_LOW_HIGH:
        return sorted(products, key=average_rating)
    return list(products)
