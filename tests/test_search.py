# tests/test_search.py

"""Tests for field-scoped search and highlighting."""

import unittest

from storefront.catalog.search import (
    SearchMatcher,
    find_match_span,
    highlight_match,
)
from storefront.models.product import Product, ProductType, SearchField


def _make_product(
    brand: str,
    product_type: ProductType = ProductType.LAPTOP,
    description: str = "",
) -> Product:
    """Create a minimal Product for search tests."""
    return Product(
        id=brand.lower(),
        brand=brand,
        product_type=product_type,
        product_description=description,
    )


def _catalog() -> list[Product]:
    return [
        _make_product("Razer", ProductType.LAPTOP, "Gaming laptop"),
        _make_product("Dell", ProductType.LAPTOP, "Thin and light"),
        _make_product("Logitech", ProductType.KEYBOARD, "Gaming keyboard"),
        _make_product("HyperX", ProductType.HEADSET, ""),
    ]


class TestHighlightMatch(unittest.TestCase):
    """highlight_match marks only the first occurrence."""

    def test_marks_first_occurrence_case_insensitive(self) -> None:
        self.assertEqual(
            highlight_match("TestBrand test", "test"),
            "<mark>Test</mark>Brand test",
        )

    def test_blank_term_returns_text(self) -> None:
        self.assertEqual(highlight_match("Razer", "  "), "Razer")
        self.assertEqual(highlight_match("Razer", None), "Razer")

    def test_no_match_returns_text(self) -> None:
        self.assertEqual(highlight_match("Razer", "dell"), "Razer")

    def test_span(self) -> None:
        self.assertEqual(find_match_span("Logitech", "TECH"), (4, 8))
        self.assertIsNone(find_match_span(None, "x"))


class TestSearchMatcherApply(unittest.TestCase):
    """SearchMatcher.apply filtering."""

    def test_empty_term_is_identity(self) -> None:
        products = _catalog()
        for term in ("", "   ", None):
            with self.subTest(term=term):
                self.assertEqual(
                    SearchMatcher(term, SearchField.BRAND).apply(products),
                    products,
                )

    def test_undefined_field_matches_everything(self) -> None:
        products = _catalog()
        matcher = SearchMatcher("zzz", SearchField.UNDEFINED)
        self.assertEqual(matcher.apply(products), products)

    def test_brand_search_case_insensitive(self) -> None:
        result = SearchMatcher("rAzEr", SearchField.BRAND).apply(_catalog())
        self.assertEqual([p.brand for p in result], ["Razer"])

    def test_description_search(self) -> None:
        result = SearchMatcher("gaming", SearchField.DESCRIPTION).apply(
            _catalog()
        )
        self.assertEqual([p.brand for p in result], ["Razer", "Logitech"])

    def test_description_search_with_null_description(self) -> None:
        """A None description is treated as empty, never raises."""
        product = _make_product("Meta")
        product.product_description = None  # type: ignore[assignment]
        matcher = SearchMatcher("x", SearchField.DESCRIPTION)
        self.assertEqual(matcher.apply([product]), [])

    def test_type_search_returns_two_laptops(self) -> None:
        result = SearchMatcher("Laptop", SearchField.TYPE).apply(_catalog())
        self.assertEqual(len(result), 2)
        self.assertTrue(
            all(p.product_type is ProductType.LAPTOP for p in result)
        )


class TestSearchMatcherHighlight(unittest.TestCase):
    """Highlighting only applies to the selected field."""

    def test_highlight_brand_on_brand_field(self) -> None:
        matcher = SearchMatcher("brand", SearchField.BRAND)
        self.assertEqual(
            matcher.highlight_brand("TestBrand"), "Test<mark>Brand</mark>"
        )

    def test_highlight_brand_on_description_field_unchanged(self) -> None:
        matcher = SearchMatcher("Test", SearchField.DESCRIPTION)
        self.assertEqual(matcher.highlight_brand("TestBrand"), "TestBrand")

    def test_highlight_description(self) -> None:
        matcher = SearchMatcher("light", SearchField.DESCRIPTION)
        self.assertEqual(
            matcher.highlight_description("Thin and light"),
            "Thin and <mark>light</mark>",
        )

    def test_highlight_description_null_is_empty(self) -> None:
        matcher = SearchMatcher("x", SearchField.DESCRIPTION)
        self.assertEqual(matcher.highlight_description(None), "")

    def test_highlight_type_only_on_type_field(self) -> None:
        self.assertEqual(
            SearchMatcher("lap", SearchField.TYPE).highlight_type("Laptop"),
            "<mark>Lap</mark>top",
        )
        self.assertEqual(
            SearchMatcher("lap", SearchField.BRAND).highlight_type("Laptop"),
            "Laptop",
        )

    def test_highlight_span_respects_field(self) -> None:
        matcher = SearchMatcher("raz", SearchField.BRAND)
        self.assertEqual(
            matcher.highlight_span(SearchField.BRAND, "Razer"), (0, 3)
        )
        self.assertIsNone(
            matcher.highlight_span(SearchField.DESCRIPTION, "Razer")
        )


class TestTypeLabel(unittest.TestCase):
    """Type cells show the text the type search matched against."""

    def test_key_shown_while_searching_by_type(self) -> None:
        matcher = SearchMatcher("rHead", SearchField.TYPE)
        label = matcher.type_label(ProductType.VR_HEADSETS)
        self.assertEqual(label, "VrHeadsets")
        self.assertEqual(
            matcher.highlight_span(SearchField.TYPE, label), (1, 6)
        )

    def test_display_name_otherwise(self) -> None:
        for matcher in (
            SearchMatcher("", SearchField.TYPE),
            SearchMatcher("vr", SearchField.BRAND),
        ):
            with self.subTest(field=matcher.search_field):
                self.assertEqual(
                    matcher.type_label(ProductType.VR_HEADSETS),
                    "VR Headsets",
                )


class TestPlaceholder(unittest.TestCase):
    """Placeholder text per field."""

    def test_placeholders(self) -> None:
        expected = {
            SearchField.BRAND: "Search Brands...",
            SearchField.DESCRIPTION: "Search Descriptions...",
            SearchField.TYPE: "Search Types...",
            SearchField.UNDEFINED: "Search...",
        }
        for search_field, text in expected.items():
            with self.subTest(field=search_field):
                self.assertEqual(
                    SearchMatcher("", search_field).placeholder(), text
                )


if __name__ == "__main__":
    unittest.main()
