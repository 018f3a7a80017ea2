# tests/test_url_validator.py

"""Tests for the product link reachability check."""

import unittest
from unittest.mock import MagicMock, patch

from curl_cffi.requests.exceptions import RequestException, Timeout

from storefront.services.url_validator import UrlValidator


class TestUrlValidator(unittest.TestCase):
    """UrlValidator.validate outcomes with a mocked session."""

    def setUp(self) -> None:
        patcher = patch("storefront.services.url_validator.curl_requests")
        self.mock_requests = patcher.start()
        self.addCleanup(patcher.stop)
        self.session = MagicMock()
        self.mock_requests.Session.return_value = self.session
        self.validator = UrlValidator()

    def _respond(self, status_code: int) -> None:
        mock_resp = MagicMock()
        mock_resp.status_code = status_code
        self.session.head.return_value = mock_resp

    def test_empty_url(self) -> None:
        result = self.validator.validate("")
        self.assertFalse(result.is_valid)
        self.assertEqual(result.message, "URL is required")
        self.session.head.assert_not_called()

    def test_relative_url_invalid_format(self) -> None:
        result = self.validator.validate("/assets/x.png")
        self.assertEqual(result.message, "Invalid URL format")

    def test_non_http_scheme(self) -> None:
        result = self.validator.validate("ftp://example.com/file")
        self.assertEqual(result.message, "URL must use HTTP or HTTPS")

    def test_success_status(self) -> None:
        self._respond(200)
        result = self.validator.validate("https://example.com")
        self.assertTrue(result.is_valid)
        self.assertEqual(result.status_code, 200)
        self.assertEqual(result.message, "URL is valid")
        _args, kwargs = self.session.head.call_args
        self.assertEqual(kwargs["timeout"], self.validator.settings.URL_CHECK_TIMEOUT)

    def test_non_success_status(self) -> None:
        self._respond(404)
        result = self.validator.validate("https://example.com/missing")
        self.assertFalse(result.is_valid)
        self.assertEqual(result.status_code, 404)
        self.assertEqual(result.message, "URL returned non-success status")

    def test_redirect_status_is_not_success(self) -> None:
        self._respond(301)
        self.assertFalse(self.validator.validate("http://example.com").is_valid)

    def test_timeout(self) -> None:
        self.session.head.side_effect = Timeout("slow")
        result = self.validator.validate("https://example.com")
        self.assertFalse(result.is_valid)
        self.assertEqual(result.message, "Request timed out")

    def test_close_releases_session(self) -> None:
        self.validator.close()
        self.session.close.assert_called_once()

    def test_connection_error(self) -> None:
        self.session.head.side_effect = RequestException("refused")
        result = self.validator.validate("https://example.com")
        self.assertEqual(result.message, "Unable to reach URL")
        self.assertEqual(result.status_code, 0)


if __name__ == "__main__":
    unittest.main()
