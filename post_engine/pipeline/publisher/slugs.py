"""Slug uniqueness and read time.

``resolve_unique_slug`` is the only place a post slug is made unique; every
publishing path goes through it.
"""

from __future__ import annotations

import math
import sqlite3

from post_engine.common.config import SlugPolicy
from post_engine.errors import DuplicateSlugError

from .repository import slug_exists


def resolve_unique_slug(
    conn: sqlite3.Connection,
    base: str,
    policy: SlugPolicy = SlugPolicy.SUFFIX,
) -> str:
    """Return a slug no post uses yet.

    Under ``suffix`` the first free of ``base``, ``base-2``, ``base-3``, ...
    is returned. Under ``reject`` a taken ``base`` raises.

    Raises:
        DuplicateSlugError: ``base`` is taken and the policy is ``reject``.
    """
    if not slug_exists(conn, base):
        return base
    if SlugPolicy(policy) == SlugPolicy.REJECT:
        raise DuplicateSlugError(base)

    n = 2
    while slug_exists(conn, f"{base}-{n}"):
        n += 1
    return f"{base}-{n}"


def read_time(word_count: int, words_per_minute: int = 200) -> int:
    """Estimated minutes to read, never less than one."""
    return max(1, math.ceil(word_count / words_per_minute))
