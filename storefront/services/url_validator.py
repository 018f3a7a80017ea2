# storefront/services/url_validator.py

"""Reachability check for product links."""

import logging
import time
from dataclasses import dataclass
from urllib.parse import urlparse

from curl_cffi import requests as curl_requests
from curl_cffi.requests.exceptions import RequestException, Timeout

from storefront.config.settings import Settings

logger = logging.getLogger("storefront.url_validator")


@dataclass
class UrlValidationResult:
    """Outcome of a single URL check."""

    is_valid: bool
    status_code: int
    message: str
    latency_ms: float = 0.0


class UrlValidator:
    """Issue a HEAD request and report whether the URL answers 2xx."""

    def __init__(self) -> None:
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    def close(self) -> None:
        """Release the underlying curl session."""
        self.session.close()

    def validate(self, url: str | None) -> UrlValidationResult:
        if not url:
            return UrlValidationResult(False, 0, "URL is required")

        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            return UrlValidationResult(False, 0, "Invalid URL format")
        if parsed.scheme not in ("http", "https"):
            return UrlValidationResult(
                False, 0, "URL must use HTTP or HTTPS"
            )

        start = time.monotonic()
        try:
            resp = self.session.head(
                url,
                headers=self.settings.DEFAULT_HEADERS,
                timeout=self.settings.URL_CHECK_TIMEOUT,
                allow_redirects=True,
            )
        except Timeout:
            logger.warning("URL check timed out: %s", url)
            return UrlValidationResult(False, 0, "Request timed out")
        except RequestException as exc:
            logger.warning("URL check failed for %s: %s", url, exc)
            return UrlValidationResult(False, 0, "Unable to reach URL")

        elapsed_ms = (time.monotonic() - start) * 1000
        is_valid = 200 <= resp.status_code < 300
        message = (
            "URL is valid" if is_valid else "URL returned non-success status"
        )
        logger.info(
            "URL check %s: HTTP %d (%.0fms)",
            url,
            resp.status_code,
            elapsed_ms,
        )
        return UrlValidationResult(
            is_valid, resp.status_code, message, elapsed_ms
        )
