# storefront/services/sanitizer.py

"""Clean-up and length checks for user-submitted comments."""

import re

_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_JS_PROTOCOL_RE = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"on\w+\s*=", re.IGNORECASE)


class InputSanitizer:
    """Strip script payloads from comment text before it is stored."""

    @staticmethod
    def remove_dangerous_patterns(text: str | None) -> str:
        """Drop ``<script>`` blocks, ``javascript:`` and ``on*=`` handlers."""
        if not text or not text.strip():
            return ""
        cleaned = _SCRIPT_RE.sub("", text)
        cleaned = _JS_PROTOCOL_RE.sub("", cleaned)
        return _EVENT_HANDLER_RE.sub("", cleaned)

    @staticmethod
    def sanitize_comment(text: str | None) -> str:
        """Return the trimmed, pattern-free comment or ``""``."""
        return InputSanitizer.remove_dangerous_patterns(text).strip()

    @staticmethod
    def validate_comment_length(text: str | None, max_length: int) -> bool:
        """True when *text* is non-empty and at most *max_length* chars."""
        if text is None:
            return False
        return 0 < len(text) <= max_length
