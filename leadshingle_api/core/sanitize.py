from typing import Any

MAX_FIELD_LENGTH = 3000


def sanitize(value: Any, max_length: int = MAX_FIELD_LENGTH) -> str:
    """Trimmed string form of any value, capped at max_length. None becomes ''."""
    if value is None:
        return ""
    return str(value).strip()[:max_length]


def sanitize_optional(value: Any, max_length: int = MAX_FIELD_LENGTH) -> str:
    """Like sanitize, but falsy values (False, 0, empty) become ''."""
    if not value:
        return ""
    return sanitize(value, max_length)


def one_line(value: str) -> str:
    """Collapse all whitespace runs, newlines included, to single spaces."""
    return " ".join(value.split())


def html_escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )
