"""SQL access for the blog schema.

Category, tag and user upserts use ``INSERT ... ON CONFLICT DO NOTHING``
followed by a select, so two concurrent runs resolve to the same row. None of
these functions commit; callers wrap them in ``transaction()``.
"""

from __future__ import annotations

import sqlite3

from post_engine.common.models import Category, Post, Tag, UserRole, row_to_dict
from post_engine.common.text import name_from_slug

DEFAULT_CATEGORIES = [
    ("technology", "Technology", "Latest tech news, reviews, and tutorials"),
    ("lifestyle", "Lifestyle", "Tips for better living and productivity"),
    ("reviews", "Reviews", "In-depth product reviews and comparisons"),
]

DEFAULT_TAGS = ["affiliate", "guide", "comparison", "best-of", "tutorial"]


# === Upserts ===

def upsert_category(
    conn: sqlite3.Connection,
    slug: str,
    name: str | None = None,
    description: str | None = None,
) -> int:
    """Return the id of the category with ``slug``, creating it if absent."""
    conn.execute(
        """INSERT INTO categories (name, slug, description) VALUES (?, ?, ?)
           ON CONFLICT(slug) DO NOTHING""",
        (name or name_from_slug(slug), slug, description),
    )
    row = conn.execute("SELECT id FROM categories WHERE slug = ?", (slug,)).fetchone()
    return row["id"]


def upsert_tag(conn: sqlite3.Connection, slug: str, name: str | None = None) -> int:
    """Return the id of the tag with ``slug``, creating it if absent."""
    conn.execute(
        """INSERT INTO tags (name, slug) VALUES (?, ?)
           ON CONFLICT(slug) DO NOTHING""",
        (name or name_from_slug(slug), slug),
    )
    row = conn.execute("SELECT id FROM tags WHERE slug = ?", (slug,)).fetchone()
    return row["id"]


def upsert_user(
    conn: sqlite3.Connection,
    email: str,
    name: str | None = None,
    role: UserRole = UserRole.EDITOR,
) -> int:
    conn.execute(
        """INSERT INTO users (email, name, role) VALUES (?, ?, ?)
           ON CONFLICT(email) DO NOTHING""",
        (email, name, UserRole(role).value),
    )
    row = conn.execute("SELECT id FROM users WHERE email = ?", (email,)).fetchone()
    return row["id"]


# === Lookups ===

def find_admin(conn: sqlite3.Connection) -> sqlite3.Row | None:
    """The first ADMIN account by id, or None."""
    return conn.execute(
        "SELECT * FROM users WHERE role = 'ADMIN' ORDER BY id LIMIT 1"
    ).fetchone()


def slug_exists(conn: sqlite3.Connection, slug: str) -> bool:
    row = conn.execute("SELECT 1 FROM posts WHERE slug = ?", (slug,)).fetchone()
    return row is not None


def get_post(
    conn: sqlite3.Connection,
    slug: str | None = None,
    post_id: int | None = None,
) -> Post | None:
    """Load a post with its category and tags resolved."""
    if slug is not None:
        row = conn.execute("SELECT * FROM posts WHERE slug = ?", (slug,)).fetchone()
    elif post_id is not None:
        row = conn.execute("SELECT * FROM posts WHERE id = ?", (post_id,)).fetchone()
    else:
        raise ValueError("Either slug or post_id must be provided")
    if row is None:
        return None

    data = row_to_dict(row)
    data["featured"] = bool(data["featured"])
    if data["category_id"] is not None:
        cat = conn.execute(
            "SELECT * FROM categories WHERE id = ?", (data["category_id"],)
        ).fetchone()
        data["category"] = Category(**row_to_dict(cat)) if cat else None
    tag_rows = conn.execute(
        """SELECT t.* FROM tags t
           JOIN post_tags pt ON pt.tag_id = t.id
           WHERE pt.post_id = ? ORDER BY t.id""",
        (data["id"],),
    ).fetchall()
    data["tags"] = [Tag(**row_to_dict(t)) for t in tag_rows]
    return Post(**data)


def count_rows(conn: sqlite3.Connection, table: str) -> int:
    if table not in {"users", "categories", "tags", "posts", "post_tags"}:
        raise ValueError(f"Unknown table: {table}")
    return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


# === Writes ===

def insert_post(
    conn: sqlite3.Connection,
    *,
    title: str,
    slug: str,
    excerpt: str,
    content: str,
    featured_image: str,
    meta_title: str,
    meta_description: str,
    keywords: str,
    read_time: int,
    author_id: int,
    category_id: int | None,
) -> int:
    """Insert a post as DRAFT with no published_at. Returns the new id."""
    cur = conn.execute(
        """INSERT INTO posts
           (title, slug, excerpt, content, featured_image, status,
            meta_title, meta_description, keywords, read_time, featured,
            published_at, author_id, category_id)
           VALUES (?, ?, ?, ?, ?, 'DRAFT', ?, ?, ?, ?, 0, NULL, ?, ?)""",
        (
            title, slug, excerpt, content, featured_image,
            meta_title, meta_description, keywords, read_time,
            author_id, category_id,
        ),
    )
    return cur.lastrowid


def link_tags(conn: sqlite3.Connection, post_id: int, tag_ids: list[int]) -> None:
    conn.executemany(
        """INSERT INTO post_tags (post_id, tag_id) VALUES (?, ?)
           ON CONFLICT(post_id, tag_id) DO NOTHING""",
        [(post_id, tag_id) for tag_id in tag_ids],
    )


def update_post_content(conn: sqlite3.Connection, post_id: int, content: str) -> None:
    conn.execute(
        "UPDATE posts SET content = ?, updated_at = datetime('now') WHERE id = ?",
        (content, post_id),
    )


def seed_defaults(conn: sqlite3.Connection, admin_email: str) -> dict[str, int]:
    """Create the admin account plus starter categories and tags.

    Safe to run repeatedly: existing rows are left as they are.
    """
    upsert_user(conn, admin_email, name="Admin", role=UserRole.ADMIN)
    for slug, name, description in DEFAULT_CATEGORIES:
        upsert_category(conn, slug, name=name, description=description)
    for slug in DEFAULT_TAGS:
        upsert_tag(conn, slug)
    return {table: count_rows(conn, table) for table in ("users", "categories", "tags")}
