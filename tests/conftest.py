# tests/conftest.py

"""Shared pytest fixtures for the catalog tests."""

from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def mock_clipboard() -> Generator[MagicMock, None, None]:
    """Keep every test away from the real system clipboard."""
    with patch(
        "storefront.services.product_list._default_clipboard"
    ) as clip:
        yield clip
