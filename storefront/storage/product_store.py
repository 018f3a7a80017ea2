# storefront/storage/product_store.py

"""JSON-file persistence for the product catalog."""

import json
import logging
import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

from storefront.config.settings import Settings
from storefront.models.product import Comment, Product

logger = logging.getLogger("storefront.storage")


class StoreError(Exception):
    """Raised when the products file exists but cannot be decoded."""


class JsonProductStore:
    """Read-modify-write CRUD over a single ``products.json`` file.

    There is no locking: two writers racing on the same file can lose an
    update. Mutators return ``False`` when the product is unknown or the
    write fails, and log the reason.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path or Settings.DATA_PATH
        logger.debug("JsonProductStore initialised, path=%s", self.path)

    # ── Reads ────────────────────────────────────────────

    def fetch_all(self) -> list[Product]:
        """Load every product from disk in file order."""
        if not self.path.exists():
            logger.warning("Products file not found: %s", self.path)
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                raw: Any = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StoreError(
                f"Malformed products file {self.path}: {exc}"
            ) from exc

        if not isinstance(raw, list):
            raise StoreError(
                f"Products file {self.path} must hold a JSON array"
            )

        try:
            products = [
                Product.from_dict(item)
                for item in raw
                if isinstance(item, dict)
            ]
        except (TypeError, ValueError) as exc:
            raise StoreError(
                f"Invalid product entry in {self.path}: {exc}"
            ) from exc

        logger.debug("Loaded %d products from %s", len(products), self.path)
        return products

    def get_by_id(self, product_id: str) -> Product | None:
        """Find a product by id, ignoring case."""
        wanted = product_id.lower()
        for product in self.fetch_all():
            if product.id.lower() == wanted:
                return product
        return None

    # ── Mutations ────────────────────────────────────────

    def add_rating(self, product_id: str, rating: int) -> bool:
        """Append *rating* to the product's rating list."""
        try:
            products = self.fetch_all()
            product = self._find(products, product_id)
            if product is None:
                logger.warning(
                    "Rating for unknown product '%s' ignored", product_id
                )
                return False

            product.ratings.append(rating)
            self._save(products)
        except (OSError, StoreError):
            logger.error(
                "Failed to add rating to '%s'", product_id, exc_info=True
            )
            return False

        logger.info("Added rating %d to '%s'", rating, product_id)
        return True

    def add_comment(self, product_id: str, comment_text: str) -> bool:
        """Append a timestamped comment to the product."""
        try:
            products = self.fetch_all()
            product = self._find(products, product_id)
            if product is None:
                logger.warning(
                    "Comment for unknown product '%s' ignored", product_id
                )
                return False

            product.comment_list.append(
                Comment(comment=comment_text, created_at=datetime.now())
            )
            self._save(products)
        except (OSError, StoreError):
            logger.error(
                "Failed to add comment to '%s'", product_id, exc_info=True
            )
            return False

        logger.info("Added comment to '%s'", product_id)
        return True

    def add_product(self, new_product: Product) -> bool:
        """Append a new product; ids must be unique (case-insensitive)."""
        try:
            products = self.fetch_all()
            if self._find(products, new_product.id) is not None:
                logger.warning(
                    "Product id '%s' already exists", new_product.id
                )
                return False

            products.append(new_product)
            self._save(products)
        except (OSError, StoreError):
            logger.error(
                "Failed to add product '%s'", new_product.id, exc_info=True
            )
            return False

        logger.info("Added product '%s'", new_product.id)
        return True

    def update_product(self, updated: Product) -> bool:
        """Replace a product, keeping its ratings when *updated* has none."""
        try:
            products = self.fetch_all()
            index = self._index_of(products, updated.id)
            if index < 0:
                logger.warning(
                    "Update for unknown product '%s' ignored", updated.id
                )
                return False

            if not updated.ratings:
                updated.ratings = list(products[index].ratings)
            products[index] = updated
            self._save(products)
        except (OSError, StoreError):
            logger.error(
                "Failed to update product '%s'", updated.id, exc_info=True
            )
            return False

        logger.info("Updated product '%s'", updated.id)
        return True

    def delete_product(self, product_id: str) -> bool:
        """Remove every product whose id matches, ignoring case."""
        try:
            products = self.fetch_all()
            wanted = product_id.lower()
            kept = [p for p in products if p.id.lower() != wanted]
            if len(kept) == len(products):
                return False
            self._save(kept)
        except (OSError, StoreError):
            logger.error(
                "Failed to delete product '%s'", product_id, exc_info=True
            )
            return False

        logger.info("Deleted product '%s'", product_id)
        return True

    # ── Helpers ──────────────────────────────────────────

    @staticmethod
    def make_safe_id(text: str | None) -> str:
        """Slugify *text* into an id; blank input gets a random hex id."""
        if not text or not text.strip():
            return uuid.uuid4().hex

        slug = text.strip().lower()
        slug = re.sub(r"\s+", "-", slug)
        return re.sub(r"[^a-z0-9\-]", "", slug)

    @staticmethod
    def _index_of(products: list[Product], product_id: str) -> int:
        wanted = product_id.lower()
        for idx, product in enumerate(products):
            if product.id.lower() == wanted:
                return idx
        return -1

    @classmethod
    def _find(
        cls, products: list[Product], product_id: str
    ) -> Product | None:
        idx = cls._index_of(products, product_id)
        return products[idx] if idx >= 0 else None

    def _save(self, products: list[Product]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(
                [p.to_dict() for p in products],
                f,
                ensure_ascii=False,
                indent=2,
            )
        logger.debug("Saved %d products to %s", len(products), self.path)
