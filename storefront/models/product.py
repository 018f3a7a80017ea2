# storefront/models/product.py

"""Product data model for inter-module data flow."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any


class ProductType(IntEnum):
    """Catalog category of a product. ``UNDEFINED`` is never offered as a choice."""

    UNDEFINED = 0
    LAPTOP = 5
    KEYBOARD = 7
    MICE = 11
    HEADSET = 15
    VR_HEADSETS = 17
    PRINTER_3D = 20

    @property
    def key(self) -> str:
        """PascalCase name used in the JSON file and for Type search."""
        return _PRODUCT_TYPE_KEYS[self]

    @property
    def display_name(self) -> str:
        """Human-readable label for dropdowns and cards."""
        return _PRODUCT_TYPE_LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> "ProductType | None":
        """Parse a key, member name or integer value.

        Returns ``None`` when *value* does not name a member.
        """
        if isinstance(value, ProductType):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return None
        if not isinstance(value, str):
            return None

        text = value.strip()
        if not text:
            return None
        if text.lstrip("-").isdigit():
            return cls.parse(int(text))

        lowered = text.lower()
        for member in cls:
            if lowered in (member.key.lower(), member.name.lower()):
                return member
        return None

    @classmethod
    def choices(cls) -> list["ProductType"]:
        """Every selectable type, i.e. all members except ``UNDEFINED``."""
        return [m for m in cls if m is not cls.UNDEFINED]


_PRODUCT_TYPE_KEYS: dict[ProductType, str] = {
    ProductType.UNDEFINED: "Undefined",
    ProductType.LAPTOP: "Laptop",
    ProductType.KEYBOARD: "Keyboard",
    ProductType.MICE: "Mice",
    ProductType.HEADSET: "Headset",
    ProductType.VR_HEADSETS: "VrHeadsets",
    ProductType.PRINTER_3D: "Printer3D",
}

_PRODUCT_TYPE_LABELS: dict[ProductType, str] = {
    ProductType.UNDEFINED: "Undefined",
    ProductType.LAPTOP: "Laptop",
    ProductType.KEYBOARD: "Keyboard",
    ProductType.MICE: "Mice",
    ProductType.HEADSET: "Headset",
    ProductType.VR_HEADSETS: "VR Headsets",
    ProductType.PRINTER_3D: "3D Printer",
}


class SearchField(IntEnum):
    """Product attribute targeted by the search box."""

    UNDEFINED = 0
    BRAND = 10
    DESCRIPTION = 20
    TYPE = 30

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: Any) -> "SearchField":
        """Parse a name or value, falling back to ``UNDEFINED``."""
        if isinstance(value, SearchField):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                return cls.UNDEFINED
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls.parse(int(text))
            return cls.__members__.get(text.upper(), cls.UNDEFINED)
        return cls.UNDEFINED

    @classmethod
    def choices(cls) -> list["SearchField"]:
        return [m for m in cls if m is not cls.UNDEFINED]


class SortMode(str, Enum):
    """Ordering applied to the visible product list."""

    NONE = ""
    BRAND_AZ = "BrandAZ"
    BRAND_ZA = "BrandZA"
    RATING_HIGH_LOW = "RatingHighLow"
    RATING_LOW_HIGH = "RatingLowHigh"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> "SortMode":
        """Map any unrecognised value to ``NONE``."""
        if isinstance(value, SortMode):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        return cls.NONE


_SORT_LABELS: dict[SortMode, str] = {
    SortMode.NONE: "Default",
    SortMode.BRAND_AZ: "Brand (A-Z)",
    SortMode.BRAND_ZA: "Brand (Z-A)",
    SortMode.RATING_HIGH_LOW: "Rating (High-Low)",
    SortMode.RATING_LOW_HIGH: "Rating (Low-High)",
}


def _lower_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Index a JSON object by lowercased key for case-insensitive lookup."""
    return {str(k).lower(): v for k, v in data.items()}


def _parse_timestamp(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str) and raw:
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            pass
    return datetime.min


@dataclass(frozen=True)
class Comment:
    """A single user comment. Immutable once created."""

    comment: str
    created_at: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Comment":
        fields = _lower_keys(data)
        return cls(
            comment=str(fields.get("comment") or ""),
            created_at=_parse_timestamp(fields.get("createdat")),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "Comment": self.comment,
            "CreatedAt": self.created_at.isoformat(),
        }


@dataclass
class Product:
    """A catalog entry. Nullable JSON fields are normalised to empties on load."""

    id: str
    brand: str = ""
    product_type: ProductType = ProductType.UNDEFINED
    product_name: str = ""
    product_description: str = ""
    url: str = ""
    image: str = ""
    ratings: list[int] = field(default_factory=lambda: list[int]())
    comment_list: list[Comment] = field(
        default_factory=lambda: list[Comment]()
    )

    @property
    def has_comments(self) -> bool:
        return bool(self.comment_list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Build a Product from a JSON object, coercing nulls to empties."""
        fields = _lower_keys(data)
        raw_ratings = fields.get("ratings") or []
        raw_comments = fields.get("commentlist") or []
        return cls(
            id=str(fields.get("id") or ""),
            brand=str(fields.get("brand") or ""),
            product_type=(
                ProductType.parse(fields.get("producttype"))
                or ProductType.UNDEFINED
            ),
            product_name=str(fields.get("productname") or ""),
            product_description=str(
                fields.get("productdescription") or ""
            ),
            url=str(fields.get("url") or ""),
            image=str(fields.get("image") or ""),
            ratings=[int(r) for r in raw_ratings],
            comment_list=[
                Comment.from_dict(c)
                for c in raw_comments
                if isinstance(c, dict)
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the PascalCase layout of ``products.json``."""
        return {
            "Id": self.id,
            "Brand": self.brand,
            "ProductName": self.product_name,
            "ProductType": self.product_type.key,
            "ProductDescription": self.product_description,
            "Url": self.url,
            "Image": self.image,
            "Ratings": list(self.ratings),
            "CommentList": [c.to_dict() for c in self.comment_list],
        }
