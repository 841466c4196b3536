"""Newline escaping for multi-line text stored in Firestore string fields.

Backslashes are doubled before newlines become the two characters ``\\n``,
so ``unescape_newlines(escape_newlines(s)) == s`` for any string.
"""

import re

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def escape_newlines(value: str) -> str:
    """Return value with backslashes doubled and newlines written as ``\\n``."""
    return value.replace("\\", "\\\\").replace("\n", "\\n")


def unescape_newlines(value: str) -> str:
    """Reverse escape_newlines. Unknown escapes keep the escaped character."""

    def _replace(match: re.Match[str]) -> str:
        ch = match.group(1)
        return "\n" if ch == "n" else ch

    return _ESCAPE_RE.sub(_replace, value)
