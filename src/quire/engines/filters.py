"""Jinja2 filters available to every templating-dialect body."""

import re
import unicodedata
from datetime import date, datetime


def format_date(value: date | datetime | str | None, fmt: str = "%Y-%m-%d") -> str:
    """Format a front matter date for display.

    YAML dates arrive as ``date`` or ``datetime`` objects; strings are
    parsed as ISO 8601 and returned unchanged when they are not.

    Args:
        value: Date value from metadata
        fmt: strftime format

    Returns:
        Formatted date string, empty for None

    Examples:
        >>> format_date(date(2023, 12, 1), "%d %b %Y")
        '01 Dec 2023'
    """
    if value is None:
        return ""

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value

    return value.strftime(fmt)


_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_HYPHEN_RE = re.compile(r"[-\s]+")


def slugify(value: str) -> str:
    """Turn a title into a URL-safe slug.

    Examples:
        >>> slugify("My New Post!")
        'my-new-post'
    """
    text = unicodedata.normalize("NFKD", str(value)).encode("ascii", "ignore").decode("ascii")
    text = _SLUG_STRIP_RE.sub("", text).strip().lower()
    return _SLUG_HYPHEN_RE.sub("-", text).strip("-")
