"""Slug and string helpers shared by the selector, generator and publisher."""

from __future__ import annotations

import re

MAX_SLUG_LENGTH = 60


def generate_slug(title: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Lowercase, collapse non-alphanumeric runs to '-', trim, cap length.

    >>> generate_slug("Best Widget Tools 2025")
    'best-widget-tools-2025'
    """
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    # Truncation can leave a dangling separator
    return slug[:max_length].strip("-")


def name_from_slug(slug: str) -> str:
    """'personal-finance' -> 'Personal Finance'."""
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-") if word)


def clip(text: str, limit: int, ellipsis: str = "...") -> str:
    """Truncate text to at most ``limit`` chars, ending with the ellipsis."""
    if len(text) <= limit:
        return text
    return text[: limit - len(ellipsis)] + ellipsis


def headline(title: str) -> str:
    """The part of a title before the first colon."""
    return title.split(":", 1)[0].strip()


def title_year(title: str, default: int) -> int:
    """First 4-digit year (19xx/20xx) in the title, else ``default``."""
    match = re.search(r"\b(19|20)\d{2}\b", title)
    return int(match.group(0)) if match else default
