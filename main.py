# main.py

"""Entry point for the storefront catalog (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from storefront.config.logging_config import setup_logging
from storefront.models.product import SearchField, SortMode

logger = logging.getLogger("storefront.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Product catalog with search, filters, ratings and comments.",
        epilog="Run without arguments to launch the interactive TUI.",
    )
    parser.add_argument(
        "search",
        nargs="?",
        default=None,
        help="Search term. Omit (with no other options) to launch the TUI.",
    )
    parser.add_argument(
        "--field",
        choices=[f.name.lower() for f in SearchField.choices()],
        default="brand",
        help="Field the search term applies to (default: brand).",
    )
    parser.add_argument(
        "-t",
        "--type",
        default=None,
        dest="product_type",
        help="Only products of this type (e.g. Laptop, VrHeadsets).",
    )
    parser.add_argument(
        "-b",
        "--brand",
        default=None,
        help="Only products of this exact brand.",
    )
    parser.add_argument(
        "-m",
        "--min-rating",
        type=int,
        choices=range(0, 6),
        default=0,
        dest="min_rating",
        help="Minimum average rating, 0 for no filter.",
    )
    parser.add_argument(
        "--sort",
        choices=[m.value for m in SortMode if m.value],
        default=None,
        dest="sort_mode",
        help="Sort order (default: file order).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        default=False,
        dest="list_only",
        help="Print the catalog without a search term.",
    )
    parser.add_argument(
        "--share",
        default=None,
        metavar="PRODUCT_ID",
        help="Print the shareable URL for a product.",
    )
    parser.add_argument(
        "--check-url",
        default=None,
        dest="check_url",
        metavar="URL",
        help="Check that a product link is reachable.",
    )
    parser.add_argument(
        "--open",
        default=None,
        dest="open_url",
        metavar="URL",
        help="Launch the TUI with a ?product=<id> deep link.",
    )
    return parser


def _run_tui(start_url: str | None) -> None:
    """Launch the interactive Textual TUI."""
    from storefront.ui.app import StorefrontApp

    try:
        app = StorefrontApp(start_url=start_url)
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("storefront TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run a headless catalog listing and exit."""
    from storefront.cli.runner import cli_list

    exit_code = asyncio.run(
        cli_list(
            search=args.search,
            search_field=args.field,
            product_type=args.product_type,
            brand=args.brand,
            min_rating=args.min_rating,
            sort_mode=args.sort_mode,
            output_format=args.output_format,
        )
    )
    sys.exit(exit_code)


def _wants_listing(args: argparse.Namespace) -> bool:
    return bool(
        args.list_only
        or args.search is not None
        or args.product_type
        or args.brand
        or args.min_rating
        or args.sort_mode
    )


def main() -> None:
    """Route to the TUI or to one of the headless commands."""
    log_file = setup_logging()
    logger.info("storefront starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.share:
        from storefront.cli.runner import run_share

        sys.exit(run_share(args.share))
    elif args.check_url:
        from storefront.cli.runner import run_url_check

        sys.exit(run_url_check(args.check_url))
    elif _wants_listing(args):
        _run_cli(args)
    else:
        _run_tui(args.open_url)


if __name__ == "__main__":
    main()
