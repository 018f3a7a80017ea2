# storefront/services/product_list.py

"""Product list state and the actions that drive it.

The controller owns the catalog page's session state (search box,
dropdown filters, sort order, open product, share toast) and derives the
visible card list from it on demand: search, then filters, then sort.
Ratings and comments go to the persistence store and are followed by a
full refresh so the page never shows optimistic values.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from storefront.catalog.deep_link import (
    build_share_url,
    find_product,
    parse_product_id,
)
from storefront.catalog.product_filter import ProductFilter
from storefront.catalog.search import SearchMatcher
from storefront.catalog.sorter import sort_products
from storefront.config.settings import Settings
from storefront.models.product import (
    Product,
    ProductType,
    SearchField,
    SortMode,
)
from storefront.services.sanitizer import InputSanitizer
from storefront.storage.product_store import StoreError

logger = logging.getLogger("storefront.product_list")

NO_PRODUCTS_MESSAGE = "No products are found"
LINK_COPIED_MESSAGE = "Link copied to clipboard!"


class ProductRepository(Protocol):
    """Persistence collaborator consumed by the controller."""

    def fetch_all(self) -> list[Product]: ...

    def add_rating(self, product_id: str, rating: int) -> bool: ...

    def add_comment(self, product_id: str, comment_text: str) -> bool: ...


def _default_clipboard(text: str) -> None:
    import pyperclip  # type: ignore[import-untyped]

    pyperclip.copy(text)


@dataclass
class ProductListState:
    """Per-session UI state. Nothing here is persisted."""

    search_term: str = ""
    search_field: SearchField = SearchField.BRAND
    product_type_filter: str = ""
    brand_filter: str = ""
    min_rating: int = 0
    sort_mode: SortMode = SortMode.NONE
    selected_product: Product | None = None
    show_copy_toast: bool = False
    deep_link_id: str = ""

    @property
    def is_modal_open(self) -> bool:
        return self.selected_product is not None


class ProductListController:
    """Compose search, filters and sort over the fetched product list."""

    def __init__(
        self,
        store: ProductRepository,
        base_url: str | None = None,
        clipboard: Callable[[str], Any] | None = None,
        toast_duration: float | None = None,
    ) -> None:
        self.store = store
        self.base_url = base_url or Settings.BASE_URL
        self.clipboard = clipboard or _default_clipboard
        self.toast_duration = (
            Settings.TOAST_DURATION
            if toast_duration is None
            else toast_duration
        )
        self.state = ProductListState()
        self.products: list[Product] = []
        self.last_error: str = ""
        self._first_render_done = False
        self._toast_handle: asyncio.TimerHandle | None = None

    # ── Loading ──────────────────────────────────────────

    async def load(self) -> list[Product]:
        """Fetch the full catalog from the store."""
        self.products = await asyncio.to_thread(self.store.fetch_all)
        logger.info("Loaded %d products", len(self.products))
        return self.products

    async def refresh(self) -> None:
        """Re-fetch and point the open product at its fresh copy."""
        await self.load()
        selected = self.state.selected_product
        if selected is not None:
            fresh = find_product(self.products, selected.id)
            if fresh is not None:
                self.state.selected_product = fresh

    # ── Derived views ────────────────────────────────────

    @property
    def matcher(self) -> SearchMatcher:
        return SearchMatcher(self.state.search_term, self.state.search_field)

    def searched_products(self) -> list[Product]:
        return self.matcher.apply(self.products)

    def visible_products(self) -> list[Product]:
        """Search, filter, then sort the fetched products."""
        state = self.state
        filtered = ProductFilter.apply(
            self.searched_products(),
            state.product_type_filter,
            state.brand_filter,
            state.min_rating,
        )
        return sort_products(filtered, state.sort_mode)

    @property
    def is_empty(self) -> bool:
        return not self.visible_products()

    def available_product_types(self) -> list[ProductType]:
        """Type dropdown choices, cascading from the current search."""
        return ProductFilter.available_product_types(
            self.searched_products()
        )

    def available_brands(self) -> list[str]:
        """Brand dropdown choices, cascading from the current search."""
        return ProductFilter.available_brands(self.searched_products())

    def search_placeholder(self) -> str:
        return self.matcher.placeholder()

    @property
    def show_clear_search(self) -> bool:
        return bool(self.state.search_term.strip())

    # ── Search / filter / sort actions ───────────────────

    def set_search_term(self, term: str | None) -> None:
        self.state.search_term = term or ""

    def set_search_field(self, search_field: SearchField | str) -> None:
        self.state.search_field = SearchField.parse(search_field)

    def set_product_type_filter(self, type_text: str | None) -> None:
        self.state.product_type_filter = type_text or ""

    def set_brand_filter(self, brand: str | None) -> None:
        self.state.brand_filter = brand or ""

    def set_min_rating(self, min_rating: int | str | None) -> None:
        try:
            value = int(min_rating or 0)
        except (TypeError, ValueError):
            value = 0
        self.state.min_rating = max(0, min(value, Settings.MAX_RATING))

    def set_sort_mode(self, mode: SortMode | str | None) -> None:
        self.state.sort_mode = SortMode.parse(mode)

    def clear_search(self) -> None:
        """Reset the search box and field, leaving the filters alone."""
        self.state.search_term = ""
        self.state.search_field = SearchField.BRAND

    def clear_filters(self) -> None:
        """Reset search, every filter and the sort order in one go."""
        self.clear_search()
        self.state.product_type_filter = ""
        self.state.brand_filter = ""
        self.state.min_rating = 0
        self.state.sort_mode = SortMode.NONE

    # ── Modal ────────────────────────────────────────────

    def select_product(self, product_id: str) -> Product | None:
        """Open the detail view for *product_id* (no-op when unknown)."""
        product = find_product(self.products, product_id)
        if product is None:
            logger.debug("select_product: unknown id '%s'", product_id)
            return None
        self.state.selected_product = product
        return product

    def close_modal(self) -> None:
        self.state.selected_product = None
        self.state.deep_link_id = ""

    async def open_product_from_url(self, url: str | None) -> Product | None:
        """Resolve a ``?product=`` deep link, on the first render only."""
        if self._first_render_done:
            return None
        self._first_render_done = True

        product_id = parse_product_id(url)
        if not product_id:
            return None

        if not self.products:
            try:
                await self.load()
            except StoreError:
                logger.error(
                    "Deep link to '%s' skipped, products unavailable",
                    product_id,
                    exc_info=True,
                )
                return None

        product = self.select_product(product_id)
        if product is None:
            logger.info("Deep link to unknown product '%s'", product_id)
            return None

        self.state.deep_link_id = product.id
        logger.info("Opened product '%s' from deep link", product.id)
        return product

    # ── Ratings and comments ─────────────────────────────

    async def submit_rating(self, product_id: str, rating: int) -> bool:
        """Store a 1-5 star vote and refresh the catalog."""
        self.last_error = ""
        if not Settings.MIN_RATING <= rating <= Settings.MAX_RATING:
            logger.warning(
                "Rejected out-of-range rating %d for '%s'",
                rating,
                product_id,
            )
            self.last_error = (
                f"Rating must be between {Settings.MIN_RATING} "
                f"and {Settings.MAX_RATING}"
            )
            return False

        try:
            ok = await asyncio.to_thread(
                self.store.add_rating, product_id, rating
            )
        except Exception:
            logger.error(
                "add_rating raised for '%s'", product_id, exc_info=True
            )
            ok = False

        if not ok:
            self.last_error = "Could not save your rating"
        await self._refresh_quietly()
        return ok

    async def submit_comment(self, product_id: str, text: str | None) -> bool:
        """Store a comment; blank text is ignored without an error."""
        self.last_error = ""
        comment = InputSanitizer.sanitize_comment(text)
        if not comment:
            return False

        if not InputSanitizer.validate_comment_length(
            comment, Settings.COMMENT_MAX_LENGTH
        ):
            self.last_error = (
                f"Comments are limited to {Settings.COMMENT_MAX_LENGTH} "
                "characters"
            )
            return False

        try:
            ok = await asyncio.to_thread(
                self.store.add_comment, product_id, comment
            )
        except Exception:
            logger.error(
                "add_comment raised for '%s'", product_id, exc_info=True
            )
            ok = False

        if not ok:
            self.last_error = "Could not save your comment"
        await self._refresh_quietly()
        return ok

    async def handle_comment_key(
        self, key: str, product_id: str, text: str | None
    ) -> bool:
        """Plain Enter submits the comment; any other key does nothing."""
        if key != "enter":
            return False
        return await self.submit_comment(product_id, text)

    async def _refresh_quietly(self) -> None:
        try:
            await self.refresh()
        except Exception:
            logger.error("Refresh after submission failed", exc_info=True)

    # ── Sharing ──────────────────────────────────────────

    def share_url(self) -> str:
        product = self.state.selected_product
        if product is None:
            return ""
        return build_share_url(self.base_url, product.id)

    async def copy_share_link(self) -> bool:
        """Copy the open product's link and show the toast.

        Does nothing when no product is open. A second copy while the
        toast is showing restarts its timer.
        """
        url = self.share_url()
        if not url:
            return False

        try:
            await asyncio.to_thread(self.clipboard, url)
        except Exception:
            logger.error("Clipboard copy failed", exc_info=True)
            self.last_error = "Could not copy the link"
            return False

        logger.info("Copied share link %s", url)
        self._show_toast()
        return True

    def _show_toast(self) -> None:
        self.state.show_copy_toast = True
        if self._toast_handle is not None:
            self._toast_handle.cancel()
        loop = asyncio.get_running_loop()
        self._toast_handle = loop.call_later(
            self.toast_duration, self._hide_toast
        )

    def _hide_toast(self) -> None:
        self.state.show_copy_toast = False
        self._toast_handle = None
