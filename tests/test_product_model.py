# tests/test_product_model.py

"""Tests for the Product dataclass and the catalog enums."""

import unittest
from datetime import datetime

from storefront.models.product import (
    Comment,
    Product,
    ProductType,
    SearchField,
    SortMode,
)


class TestProductFromDict(unittest.TestCase):
    """Product.from_dict normalisation."""

    def test_all_fields(self) -> None:
        """All fields are read from the PascalCase layout."""
        product = Product.from_dict(
            {
                "Id": "abc-123",
                "Brand": "Razer",
                "ProductName": "Blade",
                "ProductType": "Laptop",
                "ProductDescription": "Fast",
                "Url": "https://example.com/p",
                "Image": "/assets/p.png",
                "Ratings": [5, 4],
                "CommentList": [
                    {"Comment": "Nice", "CreatedAt": "2024-01-15T10:30:00"}
                ],
            }
        )
        self.assertEqual(product.id, "abc-123")
        self.assertEqual(product.brand, "Razer")
        self.assertIs(product.product_type, ProductType.LAPTOP)
        self.assertEqual(product.ratings, [5, 4])
        self.assertEqual(product.comment_list[0].comment, "Nice")
        self.assertEqual(
            product.comment_list[0].created_at,
            datetime(2024, 1, 15, 10, 30),
        )

    def test_nulls_become_empties(self) -> None:
        """Null description, url, ratings and comments load as empties."""
        product = Product.from_dict(
            {
                "Id": "x",
                "ProductDescription": None,
                "Url": None,
                "Ratings": None,
                "CommentList": None,
            }
        )
        self.assertEqual(product.product_description, "")
        self.assertEqual(product.url, "")
        self.assertEqual(product.ratings, [])
        self.assertEqual(product.comment_list, [])
        self.assertFalse(product.has_comments)

    def test_keys_are_case_insensitive(self) -> None:
        """camelCase keys load the same as PascalCase."""
        product = Product.from_dict(
            {"id": "x", "brand": "Dell", "productType": 5}
        )
        self.assertEqual(product.brand, "Dell")
        self.assertIs(product.product_type, ProductType.LAPTOP)

    def test_unknown_type_is_undefined(self) -> None:
        """An unknown product type falls back to UNDEFINED."""
        product = Product.from_dict({"Id": "x", "ProductType": "Toaster"})
        self.assertIs(product.product_type, ProductType.UNDEFINED)

    def test_to_dict_layout(self) -> None:
        """to_dict writes PascalCase keys and the type key."""
        product = Product(
            id="x",
            brand="Meta",
            product_type=ProductType.VR_HEADSETS,
            comment_list=[Comment("Hi", datetime(2024, 6, 15, 10, 30))],
        )
        data = product.to_dict()
        self.assertEqual(data["ProductType"], "VrHeadsets")
        self.assertEqual(data["Ratings"], [])
        self.assertEqual(
            data["CommentList"][0]["CreatedAt"], "2024-06-15T10:30:00"
        )
        self.assertEqual(Product.from_dict(data), product)


class TestProductType(unittest.TestCase):
    """ProductType parsing and display."""

    def test_parse_key_name_and_value(self) -> None:
        self.assertIs(ProductType.parse("Printer3D"), ProductType.PRINTER_3D)
        self.assertIs(ProductType.parse("printer_3d"), ProductType.PRINTER_3D)
        self.assertIs(ProductType.parse("17"), ProductType.VR_HEADSETS)
        self.assertIs(ProductType.parse(11), ProductType.MICE)

    def test_parse_invalid_returns_none(self) -> None:
        for value in ("", "   ", "Toaster", "99", None, 3.5, True):
            with self.subTest(value=value):
                self.assertIsNone(ProductType.parse(value))

    def test_choices_exclude_undefined(self) -> None:
        choices = ProductType.choices()
        self.assertNotIn(ProductType.UNDEFINED, choices)
        self.assertEqual(len(choices), 6)

    def test_display_names(self) -> None:
        self.assertEqual(ProductType.VR_HEADSETS.display_name, "VR Headsets")
        self.assertEqual(ProductType.PRINTER_3D.display_name, "3D Printer")
        self.assertEqual(ProductType.UNDEFINED.display_name, "Undefined")


class TestSearchFieldAndSortMode(unittest.TestCase):
    """SearchField and SortMode parsing."""

    def test_search_field_choices(self) -> None:
        self.assertEqual(
            SearchField.choices(),
            [SearchField.BRAND, SearchField.DESCRIPTION, SearchField.TYPE],
        )

    def test_search_field_parse(self) -> None:
        self.assertIs(SearchField.parse("Description"), SearchField.DESCRIPTION)
        self.assertIs(SearchField.parse("30"), SearchField.TYPE)
        self.assertIs(SearchField.parse("nope"), SearchField.UNDEFINED)

    def test_sort_mode_parse_unknown_is_none(self) -> None:
        self.assertIs(SortMode.parse("BrandAZ"), SortMode.BRAND_AZ)
        self.assertIs(SortMode.parse("PriceLowHigh"), SortMode.NONE)
        self.assertIs(SortMode.parse(None), SortMode.NONE)


if __name__ == "__main__":
    unittest.main()
