# storefront/ui/product_modal.py

"""Modal detail view: stars, comments and the share link."""

import asyncio
import logging

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static, TextArea

from storefront.catalog.ratings import star_states, vote_label
from storefront.config.settings import Settings
from storefront.models.product import Product
from storefront.services.product_list import (
    LINK_COPIED_MESSAGE,
    ProductListController,
)
from storefront.services.url_validator import UrlValidator

logger = logging.getLogger("storefront.ui")


class CommentInput(TextArea):
    """Comment box where Enter submits and Shift+Enter starts a new line."""

    class Submitted(Message):
        """Posted when the user presses Enter in the comment box."""

        def __init__(self, comment_input: "CommentInput", key: str) -> None:
            super().__init__()
            self.comment_input = comment_input
            self.key = key

    def _on_key(self, event: events.Key) -> None:
        if event.key == "enter":
            event.prevent_default()
            event.stop()
            self.post_message(self.Submitted(self, event.key))
        elif event.key == "shift+enter":
            event.prevent_default()
            event.stop()
            self.insert("\n")


class ProductModal(ModalScreen[None]):
    """Details of the selected product."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("c", "copy_link", "Copy Link"),
    ]

    def __init__(self, controller: ProductListController) -> None:
        super().__init__()
        self.controller = controller
        self._validator: UrlValidator | None = None

    @property
    def product(self) -> Product | None:
        return self.controller.state.selected_product

    def compose(self) -> ComposeResult:
        product = self.product
        title = f"{product.brand} {product.product_name}".strip() if product else ""
        with Vertical(id="modal_dialog"):
            with Horizontal(id="modal_header"):
                yield Label(Text(title), id="modal_title")
                yield Button("🔗 Share", id="share_btn")
                yield Button("✕", id="close_btn")
            with VerticalScroll(id="modal_body"):
                yield Static(id="modal_image")
                yield Static(id="modal_description")
                with Horizontal(id="modal_link_bar"):
                    yield Static(id="modal_link")
                    yield Button("Check link", id="check_link_btn")
                yield Static(id="comments_list")
            with Horizontal(id="star_bar"):
                for star in range(Settings.MIN_RATING, Settings.MAX_RATING + 1):
                    yield Button("☆", id=f"star_{star}", classes="star")
                yield Label(id="vote_label")
            yield CommentInput(id="comment_input")
            with Horizontal(id="comment_bar"):
                yield Label(id="char_count")
                yield Button("Add Comment", variant="primary", id="comment_btn")

    def on_mount(self) -> None:
        self.query_one("#share_btn", Button).tooltip = "Copy share link"
        self.refresh_details()

    def on_unmount(self) -> None:
        if self._validator is not None:
            self._validator.close()
            self._validator = None

    # ── Rendering ────────────────────────────────────────

    def refresh_details(self) -> None:
        """Redraw the modal from the controller's selected product."""
        product = self.product
        if product is None:
            return

        self.query_one("#modal_image", Static).update(
            Text(f"🖼  {product.image}" if product.image else "")
        )
        self.query_one("#modal_description", Static).update(
            Text(product.product_description)
        )

        has_url = bool(product.url)
        self.query_one("#modal_link", Static).update(
            Text(f"View Product: {product.url}" if has_url else "")
        )
        self.query_one("#modal_link_bar").display = has_url

        for star, checked in enumerate(star_states(product), start=1):
            button = self.query_one(f"#star_{star}", Button)
            button.label = "★" if checked else "☆"
            button.set_class(checked, "checked")
        self.query_one("#vote_label", Label).update(vote_label(product))

        if product.has_comments:
            lines = [
                f"{c.created_at:%x %X}  {c.comment}"
                for c in product.comment_list
            ]
            comments = "\n".join(lines)
        else:
            comments = "No comments yet."
        self.query_one("#comments_list", Static).update(Text(comments))
        self._update_char_count()

    def _update_char_count(self) -> None:
        text = self.query_one("#comment_input", CommentInput).text
        self.query_one("#char_count", Label).update(
            f"{len(text)} / {Settings.COMMENT_MAX_LENGTH}"
        )

    # ── Events ───────────────────────────────────────────

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self._update_char_count()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("star_"):
            await self.rate(int(button_id.removeprefix("star_")))
        elif button_id == "comment_btn":
            await self.submit_comment("enter")
        elif button_id == "share_btn":
            await self.action_copy_link()
        elif button_id == "check_link_btn":
            await self.check_link()
        elif button_id == "close_btn":
            self.action_close()

    async def on_comment_input_submitted(
        self, event: CommentInput.Submitted
    ) -> None:
        await self.submit_comment(event.key)

    # ── Actions ──────────────────────────────────────────

    async def rate(self, value: int) -> None:
        product = self.product
        if product is None:
            return
        ok = await self.controller.submit_rating(product.id, value)
        if not ok:
            self.app.notify(self.controller.last_error, severity="error")
        self.refresh_details()

    async def submit_comment(self, key: str) -> None:
        product = self.product
        if product is None:
            return
        comment_input = self.query_one("#comment_input", CommentInput)
        ok = await self.controller.handle_comment_key(
            key, product.id, comment_input.text
        )
        if ok:
            comment_input.clear()
        elif self.controller.last_error:
            self.app.notify(self.controller.last_error, severity="error")
        self.refresh_details()

    async def check_link(self) -> None:
        product = self.product
        if product is None or not product.url:
            return
        if self._validator is None:
            self._validator = UrlValidator()
        result = await asyncio.to_thread(self._validator.validate, product.url)
        self.app.notify(
            result.message,
            severity="information" if result.is_valid else "warning",
        )

    async def action_copy_link(self) -> None:
        if await self.controller.copy_share_link():
            self.app.notify(
                LINK_COPIED_MESSAGE, timeout=self.controller.toast_duration
            )
        elif self.controller.last_error:
            self.app.notify(self.controller.last_error, severity="error")

    def action_close(self) -> None:
        self.dismiss(None)
