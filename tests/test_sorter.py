# tests/test_sorter.py

"""Tests for sort_products."""

import unittest

from storefront.catalog.sorter import sort_products
from storefront.models.product import Product, SortMode


def _make_product(
    product_id: str, brand: str, ratings: list[int] | None = None
) -> Product:
    """Create a minimal Product for sort tests."""
    return Product(id=product_id, brand=brand, ratings=list(ratings or []))


class TestSortProducts(unittest.TestCase):
    """sort_products ordering rules."""

    def setUp(self) -> None:
        self.products = [
            _make_product("1", "Logitech", [3]),
            _make_product("2", "Dell", [5, 4, 5]),
            _make_product("3", "Razer"),
            _make_product("4", "HyperX", [4, 4]),
        ]

    def _ids(self, products: list[Product]) -> list[str]:
        return [p.id for p in products]

    def test_none_keeps_fetch_order(self) -> None:
        for mode in (SortMode.NONE, "", None, "PriceLowHigh"):
            with self.subTest(mode=mode):
                self.assertEqual(
                    self._ids(sort_products(self.products, mode)),
                    ["1", "2", "3", "4"],
                )

    def test_brand_az(self) -> None:
        self.assertEqual(
            self._ids(sort_products(self.products, SortMode.BRAND_AZ)),
            ["2", "4", "1", "3"],
        )

    def test_brand_za_from_string(self) -> None:
        self.assertEqual(
            self._ids(sort_products(self.products, "BrandZA")),
            ["3", "1", "4", "2"],
        )

    def test_rating_high_low_unrated_last(self) -> None:
        result = sort_products(self.products, SortMode.RATING_HIGH_LOW)
        self.assertEqual(self._ids(result), ["2", "4", "1", "3"])

    def test_rating_low_high_unrated_first(self) -> None:
        result = sort_products(self.products, SortMode.RATING_LOW_HIGH)
        self.assertEqual(self._ids(result), ["3", "1", "4", "2"])

    def test_rating_ties_keep_original_order(self) -> None:
        products = [
            _make_product("a", "X"),
            _make_product("b", "Y", []),
            _make_product("c", "Z", [4]),
        ]
        result = sort_products(products, SortMode.RATING_LOW_HIGH)
        self.assertEqual(self._ids(result), ["a", "b", "c"])

    def test_input_not_mutated(self) -> None:
        sort_products(self.products, SortMode.BRAND_AZ)
        self.assertEqual(self._ids(self.products), ["1", "2", "3", "4"])


if __name__ == "__main__":
    unittest.main()
