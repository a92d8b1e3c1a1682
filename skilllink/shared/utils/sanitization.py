"""Input sanitization for user-entered text (chat messages, reflections)."""

import html
from typing import ClassVar

import nh3


class InputSanitizer:
    """
    Strip markup from free text before it is stored.

    Stored text is plain text: tags are removed, and characters such as
    ``&`` and ``<`` are kept as typed rather than stored as HTML entities.
    """

    ALLOWED_TAGS: ClassVar[set[str]] = set()

    @classmethod
    def sanitize_html(cls, value: str) -> str:
        """Remove all HTML tags with nh3 (strict, no tags allowed).

        Args:
            value: Raw string that may contain HTML.

        Returns:
            Plain text with tags removed and entities decoded.
        """
        if not value:
            return value
        return html.unescape(nh3.clean(value, tags=cls.ALLOWED_TAGS, attributes={}))

    @classmethod
    def clean_text(cls, value: str | None) -> str:
        """Trim and strip markup from free text (None is treated as empty)."""
        return cls.sanitize_html((value or "").strip()).strip()


def split_topics(value: str | None) -> list[str]:
    """Split a comma-separated topics field, trimming and dropping empties."""
    if not value:
        return []
    return [t.strip() for t in value.split(",") if t.strip()]
