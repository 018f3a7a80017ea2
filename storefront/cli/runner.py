# storefront/cli/runner.py

"""Headless catalog commands, reusing the product list controller."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table
from rich.text import Text

from storefront.catalog.deep_link import build_share_url
from storefront.catalog.ratings import average_rating, vote_label
from storefront.config.settings import Settings
from storefront.models.product import Product, SearchField
from storefront.services.product_list import (
    NO_PRODUCTS_MESSAGE,
    ProductListController,
)
from storefront.services.url_validator import UrlValidator
from storefront.storage.product_store import JsonProductStore, StoreError

logger = logging.getLogger("storefront.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _products_to_dicts(products: list[Product]) -> list[dict[str, object]]:
    """Serialise a product list to plain dicts for JSON output."""
    return [
        {
            "id": p.id,
            "brand": p.brand,
            "product_type": p.product_type.key,
            "description": p.product_description,
            "url": p.url,
            "average_rating": round(average_rating(p), 2),
            "votes": len(p.ratings),
        }
        for p in products
    ]


def _print_table(controller: ProductListController) -> None:
    """Render a Rich table of the visible products to stdout."""
    matcher = controller.matcher
    table = Table(
        title="Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Brand", style="magenta")
    table.add_column("Type")
    table.add_column("Description", max_width=50)
    table.add_column("Rating", justify="center")
    table.add_column("Id", style="dim")

    for idx, p in enumerate(controller.visible_products(), 1):
        brand = Text(p.brand)
        span = matcher.highlight_span(SearchField.BRAND, p.brand)
        if span is not None:
            brand.stylize("bold yellow", *span)
        description = Text(p.product_description)
        span = matcher.highlight_span(
            SearchField.DESCRIPTION, p.product_description
        )
        if span is not None:
            description.stylize("bold yellow", *span)
        type_text = matcher.type_label(p.product_type)
        product_type = Text(type_text)
        span = matcher.highlight_span(SearchField.TYPE, type_text)
        if span is not None:
            product_type.stylize("bold yellow", *span)
        rating = (
            f"{average_rating(p):.1f} ({vote_label(p)})"
            if p.ratings
            else vote_label(p)
        )
        table.add_row(
            str(idx),
            brand,
            product_type,
            description,
            rating,
            p.id,
        )

    Console().print(table)


async def cli_list(
    search: str | None,
    search_field: str,
    product_type: str | None,
    brand: str | None,
    min_rating: int,
    sort_mode: str | None,
    output_format: str,
) -> int:
    """Print the searched, filtered and sorted catalog. Returns an exit code."""
    controller = ProductListController(JsonProductStore())
    try:
        await controller.load()
    except StoreError as exc:
        logger.error("Failed to load products", exc_info=True)
        _err.print(f"[red]{exc}[/red]")
        return 1

    controller.set_search_term(search)
    controller.set_search_field(search_field)
    controller.set_product_type_filter(product_type)
    controller.set_brand_filter(brand)
    controller.set_min_rating(min_rating)
    controller.set_sort_mode(sort_mode)

    visible = controller.visible_products()
    if not visible:
        _err.print(f"[yellow]{NO_PRODUCTS_MESSAGE}.[/yellow]")
        return 1

    _err.print(
        f"[green]✓ {len(visible)} of {len(controller.products)} products[/green]"
    )

    if output_format == "table":
        _print_table(controller)
    else:
        json.dump(
            _products_to_dicts(visible),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0


def run_share(product_id: str) -> int:
    """Print the share URL for a product id."""
    store = JsonProductStore()
    try:
        product = store.get_by_id(product_id)
    except StoreError as exc:
        _err.print(f"[red]{exc}[/red]")
        return 1

    if product is None:
        _err.print(f"[red]Unknown product: {product_id}[/red]")
        return 1

    print(build_share_url(Settings.BASE_URL, product.id))
    return 0


def run_url_check(url: str) -> int:
    """Check that a product link answers with a 2xx status."""
    validator = UrlValidator()
    try:
        result = validator.validate(url)
    finally:
        validator.close()
    status = "[green]✅ OK[/green]" if result.is_valid else "[red]❌ FAIL[/red]"
    code = str(result.status_code) if result.status_code else "—"
    _err.print(f"{status}  {code}  {result.message}")
    return 0 if result.is_valid else 1
