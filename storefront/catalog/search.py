# storefront/catalog/search.py

"""Field-scoped product search with first-match highlighting."""

import logging

from storefront.models.product import Product, ProductType, SearchField

logger = logging.getLogger("storefront.catalog")

MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"

_PLACEHOLDERS: dict[SearchField, str] = {
    SearchField.BRAND: "Search Brands...",
    SearchField.DESCRIPTION: "Search Descriptions...",
    SearchField.TYPE: "Search Types...",
}


def find_match_span(
    text: str | None, search_term: str | None
) -> tuple[int, int] | None:
    """Locate the first case-insensitive occurrence of *search_term*.

    Returns ``(start, end)`` offsets into *text*, or ``None`` when either
    side is blank or there is no occurrence.
    """
    if not search_term or not search_term.strip():
        return None
    if not text or not text.strip():
        return None

    index = text.lower().find(search_term.lower())
    if index < 0:
        return None
    return index, index + len(search_term)


def highlight_match(text: str | None, search_term: str | None) -> str | None:
    """Wrap the first occurrence of *search_term* in ``<mark>`` tags.

    Only the first occurrence is marked. Text without a match, and blank
    terms, come back unchanged.
    """
    span = find_match_span(text, search_term)
    if span is None or text is None:
        return text
    start, end = span
    return f"{text[:start]}{MARK_OPEN}{text[start:end]}{MARK_CLOSE}{text[end:]}"


class SearchMatcher:
    """Decide which products match the search box and how to mark them."""

    def __init__(
        self,
        search_term: str | None = "",
        search_field: SearchField = SearchField.BRAND,
    ) -> None:
        self.search_term = search_term or ""
        self.search_field = search_field

    @property
    def is_active(self) -> bool:
        """A blank term or ``UNDEFINED`` field disables filtering."""
        return bool(self.search_term.strip()) and (
            self.search_field is not SearchField.UNDEFINED
        )

    def _field_text(self, product: Product) -> str:
        if self.search_field is SearchField.BRAND:
            return product.brand or ""
        if self.search_field is SearchField.DESCRIPTION:
            return product.product_description or ""
        if self.search_field is SearchField.TYPE:
            return product.product_type.key
        return ""

    def matches(self, product: Product) -> bool:
        if not self.is_active:
            return True
        return self.search_term.lower() in self._field_text(product).lower()

    def apply(self, products: list[Product]) -> list[Product]:
        """Return the products matching the current term and field."""
        if not self.is_active:
            return list(products)

        kept = [p for p in products if self.matches(p)]
        logger.debug(
            "Search '%s' on %s kept %d of %d products",
            self.search_term,
            self.search_field.name,
            len(kept),
            len(products),
        )
        return kept

    # ── Highlighting ─────────────────────────────────────

    def _highlight_for(self, field: SearchField, text: str | None) -> str:
        if text is None:
            return ""
        if self.search_field is not field:
            return text
        return highlight_match(text, self.search_term) or ""

    def highlight_brand(self, text: str | None) -> str:
        return self._highlight_for(SearchField.BRAND, text)

    def highlight_description(self, text: str | None) -> str:
        return self._highlight_for(SearchField.DESCRIPTION, text)

    def highlight_type(self, text: str | None) -> str:
        return self._highlight_for(SearchField.TYPE, text)

    def highlight_span(
        self, field: SearchField, text: str | None
    ) -> tuple[int, int] | None:
        """Span to highlight in *text*, honouring the selected field."""
        if self.search_field is not field:
            return None
        return find_match_span(text, self.search_term)

    def type_label(self, product_type: ProductType) -> str:
        """Text for a type cell: the searched key while searching by type.

        Type search matches the PascalCase key, so that is the text a
        highlight span has to line up with.
        """
        if self.search_field is SearchField.TYPE and self.is_active:
            return product_type.key
        return product_type.display_name

    def placeholder(self) -> str:
        return _PLACEHOLDERS.get(self.search_field, "Search...")
