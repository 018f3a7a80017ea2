# storefront/catalog/ratings.py

"""Average rating, vote count and star state for a product."""

from storefront.config.settings import Settings
from storefront.models.product import Product

FIRST_VOTE_LABEL = "Be the first to vote!"


def vote_count(product: Product) -> int:
    """Number of ratings submitted for *product*."""
    return len(product.ratings or [])


def average_rating(product: Product) -> float:
    """Arithmetic mean of the ratings, or ``0.0`` when nobody has voted."""
    ratings = product.ratings or []
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


def current_rating_stars(product: Product) -> int:
    """Checked stars in the rating widget (average truncated toward zero)."""
    return int(average_rating(product))


def vote_label(product: Product) -> str:
    """Label shown under the star widget."""
    count = vote_count(product)
    if count == 0:
        return FIRST_VOTE_LABEL
    if count == 1:
        return "1 Vote"
    return f"{count} Votes"


def star_states(product: Product) -> list[bool]:
    """Checked flag for each star from 1 to ``Settings.MAX_RATING``."""
    checked = current_rating_stars(product)
    return [
        star <= checked
        for star in range(Settings.MIN_RATING, Settings.MAX_RATING + 1)
    ]
