# storefront/catalog/product_filter.py

"""Product-type, brand and minimum-rating filtering."""

import logging

from storefront.catalog.ratings import average_rating
from storefront.models.product import Product, ProductType

logger = logging.getLogger("storefront.filters")


class ProductFilter:
    """Narrow a product list by the dropdown filters of the catalog page."""

    @staticmethod
    def filter_by_type(
        products: list[Product], type_text: str | None
    ) -> list[Product]:
        """Keep products of the given type.

        An empty or unparseable *type_text* (including ``Undefined``)
        leaves the list untouched.
        """
        wanted = ProductType.parse(type_text)
        if wanted is None or wanted is ProductType.UNDEFINED:
            return list(products)
        return [p for p in products if p.product_type is wanted]

    @staticmethod
    def filter_by_brand(
        products: list[Product], brand: str | None
    ) -> list[Product]:
        """Keep products whose brand equals *brand* exactly."""
        if not brand:
            return list(products)
        return [p for p in products if p.brand == brand]

    @staticmethod
    def filter_by_min_rating(
        products: list[Product], min_rating: int
    ) -> list[Product]:
        """Keep rated products whose average reaches *min_rating*.

        ``0`` disables the filter. For any threshold of 1 or more a product
        nobody has voted on never qualifies.
        """
        if min_rating <= 0:
            return list(products)
        return [
            p
            for p in products
            if p.ratings and average_rating(p) >= min_rating
        ]

    @staticmethod
    def apply(
        products: list[Product],
        type_text: str | None = "",
        brand: str | None = "",
        min_rating: int = 0,
    ) -> list[Product]:
        """Run the type, brand and rating filters in sequence."""
        kept = ProductFilter.filter_by_type(products, type_text)
        kept = ProductFilter.filter_by_brand(kept, brand)
        kept = ProductFilter.filter_by_min_rating(kept, min_rating)

        excluded = len(products) - len(kept)
        if excluded:
            logger.debug(
                "Filters (type=%r, brand=%r, min_rating=%d) excluded %d products",
                type_text,
                brand,
                min_rating,
                excluded,
            )
        return kept

    @staticmethod
    def available_product_types(
        products: list[Product],
    ) -> list[ProductType]:
        """Distinct types present in *products*, ``UNDEFINED`` excluded."""
        seen: list[ProductType] = []
        for product in products:
            ptype = product.product_type
            if ptype is ProductType.UNDEFINED or ptype in seen:
                continue
            seen.append(ptype)
        return seen

    @staticmethod
    def available_brands(products: list[Product]) -> list[str]:
        """Distinct brands present in *products*, sorted ordinally."""
        return sorted({p.brand for p in products if p.brand})
