"""Shared utilities: datetime, generators, sanitization, text escaping."""

from cowconnect.shared.utils.datetime import (
    ensure_utc,
    start_of_day_utc,
    utc_now,
)
from cowconnect.shared.utils.generators import generate_cuid
from cowconnect.shared.utils.sanitization import (
    InputSanitizer,
    sanitize_text,
    validate_identifier,
)
from cowconnect.shared.utils.text import escape_newlines, unescape_newlines

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "start_of_day_utc",
    "InputSanitizer",
    "sanitize_text",
    "validate_identifier",
    "escape_newlines",
    "unescape_newlines",
]
