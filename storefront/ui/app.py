# storefront/ui/app.py

"""Terminal UI for the storefront product catalog."""

import logging
from typing import Any, cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Select,
    Static,
)

from storefront.catalog.ratings import average_rating, vote_count
from storefront.config.settings import Settings
from storefront.models.product import Product, SearchField, SortMode
from storefront.services.product_list import (
    NO_PRODUCTS_MESSAGE,
    ProductListController,
)
from storefront.storage.product_store import JsonProductStore, StoreError
from storefront.ui.product_modal import ProductModal

logger = logging.getLogger("storefront.ui")

HIGHLIGHT_STYLE = "bold black on yellow"

_MIN_RATING_OPTIONS: list[tuple[str, str]] = [
    ("All ratings" if n == 0 else f"{n}+ stars", str(n))
    for n in Settings.MIN_RATING_CHOICES
]


def _select_value(value: object) -> str:
    """Map a Select value to a string, treating the blank entry as ``""``."""
    return value if isinstance(value, str) else ""


def highlighted(text: str, span: tuple[int, int] | None) -> Text:
    """Render *text* with the matched span styled."""
    rendered = Text(text)
    if span is not None:
        rendered.stylize(HIGHLIGHT_STYLE, span[0], span[1])
    return rendered


class StorefrontApp(App[object]):
    """Searchable, filterable and sortable product catalog."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("x", "clear_filters", "Clear Filters"),
        Binding("r", "reload", "Reload"),
        Binding("d", "toggle_theme", "Theme"),
    ]

    def __init__(
        self,
        store: JsonProductStore | None = None,
        start_url: str | None = None,
        controller: ProductListController | None = None,
    ) -> None:
        super().__init__()
        self.settings = Settings()
        self.store = store or JsonProductStore()
        self.controller = controller or ProductListController(self.store)
        self.start_url = start_url

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        yield Header()
        yield Container(
            Static("🛍  Product Catalog", id="title"),

            # Search bar
            Horizontal(
                Select(
                    [(f.label, f.name) for f in SearchField.choices()],
                    value=SearchField.BRAND.name,
                    allow_blank=False,
                    id="search_field_select",
                ),
                Input(
                    placeholder=self.controller.search_placeholder(),
                    id="search_input",
                ),
                Button("✕", id="clear_search_btn"),
                id="search_bar",
            ),

            # Filter / sort bar
            Horizontal(
                Select[str](
                    [],
                    prompt="All types",
                    id="product_type_filter",
                ),
                Select[str]([], prompt="All brands", id="brand_filter"),
                Select(
                    _MIN_RATING_OPTIONS,
                    value="0",
                    allow_blank=False,
                    id="min_rating_filter",
                ),
                Select(
                    [(m.label, m.value) for m in SortMode],
                    value=SortMode.NONE.value,
                    allow_blank=False,
                    id="sort_select",
                ),
                Button("Clear Filters", id="clear_filters_btn"),
                id="filter_bar",
            ),

            Static("Loading...", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            Static(NO_PRODUCTS_MESSAGE, id="no_products"),
            id="main_container",
        )
        yield Footer()

    async def on_mount(self) -> None:
        """Configure the table, load products and resolve a deep link."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.add_columns("Brand", "Type", "Description", "Rating", "Votes")
        self.query_one("#clear_search_btn", Button).display = False

        try:
            await self.controller.load()
        except StoreError as exc:
            logger.error("Failed to load products", exc_info=True)
            self.notify(f"Could not load products: {exc}", severity="error")

        self.refresh_view()

        product = await self.controller.open_product_from_url(self.start_url)
        if product is not None:
            self.open_modal()

    # ── Rendering ────────────────────────────────────────

    def refresh_view(self) -> None:
        """Re-derive the visible list and update every widget."""
        self._refresh_filter_options()
        self.populate_table()

        controller = self.controller
        self.query_one("#search_input", Input).placeholder = (
            controller.search_placeholder()
        )
        self.query_one("#clear_search_btn", Button).display = (
            controller.show_clear_search
        )

    def _refresh_filter_options(self) -> None:
        """Rebuild the type and brand dropdowns from the searched products."""
        state = self.controller.state

        type_select = cast(
            Select[str], self.query_one("#product_type_filter", Select)
        )
        type_options = [
            (t.display_name, t.key)
            for t in self.controller.available_product_types()
        ]
        with type_select.prevent(Select.Changed):
            type_select.set_options(type_options)
            if state.product_type_filter in {v for _, v in type_options}:
                type_select.value = state.product_type_filter

        brand_select = cast(
            Select[str], self.query_one("#brand_filter", Select)
        )
        brands = self.controller.available_brands()
        with brand_select.prevent(Select.Changed):
            brand_select.set_options([(b, b) for b in brands])
            if state.brand_filter in brands:
                brand_select.value = state.brand_filter

    def populate_table(self) -> None:
        """Fill the DataTable with the visible products."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.clear()

        matcher = self.controller.matcher
        visible = self.controller.visible_products()
        for p in visible:
            type_text = matcher.type_label(p.product_type)
            table.add_row(
                highlighted(
                    p.brand, matcher.highlight_span(SearchField.BRAND, p.brand)
                ),
                highlighted(
                    type_text,
                    matcher.highlight_span(SearchField.TYPE, type_text),
                ),
                highlighted(
                    p.product_description[:60],
                    matcher.highlight_span(
                        SearchField.DESCRIPTION, p.product_description[:60]
                    ),
                ),
                self._rating_cell(p),
                str(vote_count(p)),
                key=p.id,
            )

        empty = not visible
        table.display = not empty
        self.query_one("#no_products", Static).display = empty
        self.query_one("#status", Static).update(
            f"Showing {len(visible)} of {len(self.controller.products)} products"
        )

    @staticmethod
    def _rating_cell(product: Product) -> str:
        if not product.ratings:
            return "—"
        return f"⭐ {average_rating(product):.1f}"

    # ── Events ───────────────────────────────────────────

    def on_input_changed(self, event: Input.Changed) -> None:
        """Re-filter as the search term changes."""
        if event.input.id == "search_input":
            self.controller.set_search_term(event.value)
            self.refresh_view()

    def on_select_changed(self, event: Select.Changed) -> None:
        """Route dropdown changes to the controller."""
        value = _select_value(event.value)
        select_id = event.select.id
        if select_id == "search_field_select":
            self.controller.set_search_field(value)
        elif select_id == "product_type_filter":
            self.controller.set_product_type_filter(value)
        elif select_id == "brand_filter":
            self.controller.set_brand_filter(value)
        elif select_id == "min_rating_filter":
            self.controller.set_min_rating(value)
        elif select_id == "sort_select":
            self.controller.set_sort_mode(value)
        else:
            return
        self.refresh_view()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        if event.button.id == "clear_search_btn":
            self.controller.clear_search()
            self._sync_search_widgets()
            self.refresh_view()
        elif event.button.id == "clear_filters_btn":
            self.action_clear_filters()

    def on_data_table_row_selected(
        self, event: DataTable.RowSelected
    ) -> None:
        """Open the detail modal for the chosen row."""
        product_id = event.row_key.value
        if product_id and self.controller.select_product(product_id):
            self.open_modal()

    # ── Modal ────────────────────────────────────────────

    def open_modal(self) -> None:
        self.push_screen(
            ProductModal(self.controller), self._on_modal_closed
        )

    def _on_modal_closed(self, _result: Any) -> None:
        self.controller.close_modal()
        self.refresh_view()

    # ── Actions ──────────────────────────────────────────

    def _sync_search_widgets(self) -> None:
        state = self.controller.state
        search_input = self.query_one("#search_input", Input)
        with search_input.prevent(Input.Changed):
            search_input.value = state.search_term
        field_select = cast(
            Select[str], self.query_one("#search_field_select", Select)
        )
        with field_select.prevent(Select.Changed):
            field_select.value = state.search_field.name

    def action_clear_filters(self) -> None:
        """Reset search, filters and sort to their defaults."""
        self.controller.clear_filters()
        self._sync_search_widgets()

        for select_id, value in (
            ("#min_rating_filter", "0"),
            ("#sort_select", SortMode.NONE.value),
        ):
            select = cast(Select[str], self.query_one(select_id, Select))
            with select.prevent(Select.Changed):
                select.value = value
        for select_id in ("#product_type_filter", "#brand_filter"):
            select = cast(Select[str], self.query_one(select_id, Select))
            with select.prevent(Select.Changed):
                select.clear()

        self.refresh_view()

    async def action_reload(self) -> None:
        """Re-read the products file."""
        try:
            await self.controller.refresh()
        except StoreError as exc:
            logger.error("Reload failed", exc_info=True)
            self.notify(f"Reload failed: {exc}", severity="error")
            return
        self.refresh_view()
        self.notify(f"Loaded {len(self.controller.products)} products")

    def action_toggle_theme(self) -> None:
        """Switch between the dark and light themes."""
        self.theme = (
            "textual-light" if self.theme == "textual-dark" else "textual-dark"
        )
