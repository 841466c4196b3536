"""Input sanitization for user-submitted text and document identifiers."""

import html
import re
from typing import ClassVar

import nh3


class InputSanitizer:
    """
    Sanitize user inputs before they reach the classifier or Firestore.

    Post bodies and workshop descriptions are rendered by the UI layer, so
    markup is stripped here. Document IDs end up in Firestore REST paths and
    must not contain path separators.
    """

    ALLOWED_TAGS: ClassVar[set[str]] = set()
    IDENTIFIER_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[a-zA-Z0-9_-]{1,128}$")

    @classmethod
    def sanitize_html(cls, value: str) -> str:
        """Remove all HTML tags with nh3 (strict by default).

        Args:
            value: Raw string that may contain HTML.

        Returns:
            Sanitized string safe for HTML display.
        """
        if not value:
            return value
        return nh3.clean(value, tags=cls.ALLOWED_TAGS, attributes={})

    @classmethod
    def sanitize_identifier(cls, value: str) -> str:
        """Validate a document identifier. Allows alphanumeric, underscore, hyphen.

        Raises:
            ValueError: If format is invalid.
        """
        if not value or not cls.IDENTIFIER_PATTERN.match(value):
            raise ValueError("Invalid identifier format")
        return value


def sanitize_text(value: str | None) -> str:
    """Strip markup and surrounding whitespace from free text (None becomes '').

    nh3 escapes &, < and > in the text it keeps; they are unescaped again so
    stored bodies hold what the user typed.
    """
    if not value:
        return ""
    return html.unescape(InputSanitizer.sanitize_html(value)).strip()


def validate_identifier(value: str) -> bool:
    """Return True if value is a safe document identifier."""
    try:
        InputSanitizer.sanitize_identifier(value)
    except ValueError:
        return False
    return True
