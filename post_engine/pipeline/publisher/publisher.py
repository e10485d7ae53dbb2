"""Publisher: inserts an approved, validated draft as a DRAFT post.

All writes for one publish (category, tags, post, post_tags) run in a single
transaction, so a failure leaves no orphan rows behind.

Usage:
    publisher = DraftPublisher()
    result = publisher.publish(draft)
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from post_engine.common.config import Settings, settings as default_settings
from post_engine.common.database import get_connection, transaction
from post_engine.common.logging import setup_logging
from post_engine.errors import PostEngineError, PublisherAccountError
from post_engine.pipeline.draft_generator.document import (
    count_words,
    from_json,
    replace_image_sources,
    to_json,
)
from post_engine.pipeline.draft_generator.models import ArticleDraft

from . import repository
from .models import PublishResult
from .slugs import read_time, resolve_unique_slug

logger = setup_logging(module_name="pipeline.publisher")


class DraftPublisher:
    """Writes drafts to the blog database.

    Args:
        db_path: SQLite path; defaults to the configured database.
        conn: An open connection to reuse (not closed by the publisher).
        settings: Settings providing the slug policy and reading speed.
    """

    def __init__(
        self,
        db_path: str | None = None,
        conn: sqlite3.Connection | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or default_settings
        self.db_path = db_path or self.settings.database.db_path
        self._conn = conn

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        if self._conn is not None:
            yield self._conn
            return
        conn = get_connection(self.db_path)
        try:
            yield conn
        finally:
            conn.close()

    def publish(self, draft: ArticleDraft) -> PublishResult:
        """Insert the draft. Never raises for expected failures."""
        cfg = self.settings.pipeline
        word_count = count_words(draft.content)
        minutes = read_time(word_count, cfg.words_per_minute)

        try:
            with self._connection() as conn, transaction(conn):
                category_id = repository.upsert_category(conn, draft.category_slug)
                tag_ids = [repository.upsert_tag(conn, slug) for slug in draft.tag_slugs]

                admin = repository.find_admin(conn)
                if admin is None:
                    raise PublisherAccountError()

                slug = resolve_unique_slug(conn, draft.slug, cfg.slug_policy)
                post_id = repository.insert_post(
                    conn,
                    title=draft.title,
                    slug=slug,
                    excerpt=draft.excerpt,
                    content=to_json(draft.content),
                    featured_image=draft.featured_image,
                    meta_title=draft.seo.meta_title,
                    meta_description=draft.seo.meta_description,
                    keywords=draft.seo.keywords,
                    read_time=minutes,
                    author_id=admin["id"],
                    category_id=category_id,
                )
                repository.link_tags(conn, post_id, tag_ids)
        except PostEngineError as e:
            logger.error("Publish failed for %s: %s", draft.slug, e.message)
            return PublishResult(success=False, error=e.message)
        except sqlite3.Error as e:
            logger.error("Database error while publishing %s: %s", draft.slug, e)
            return PublishResult(success=False, error=f"Database error: {e}")

        logger.info("Post ID: %s", post_id)
        logger.info("Slug: %s", slug)
        logger.info("Word Count: ~%d (%d min read)", word_count, minutes)
        return PublishResult(
            success=True,
            post_id=post_id,
            post_slug=slug,
            read_time=minutes,
            word_count=word_count,
        )

    def replace_post_images(self, slug: str, updates: dict[str, str]) -> int:
        """Rewrite image sources by alt text in a stored post.

        Returns:
            Number of images changed.

        Raises:
            LookupError: no post has this slug.
        """
        with self._connection() as conn, transaction(conn):
            post = repository.get_post(conn, slug=slug)
            if post is None:
                raise LookupError(f"Post not found: {slug}")
            document = from_json(post.content)
            changed = replace_image_sources(document, updates)
            if changed:
                repository.update_post_content(conn, post.id, to_json(document))
        logger.info("Updated %d image(s) in %s", changed, slug)
        return changed

    def seed(self) -> dict[str, int]:
        """Create the admin account and starter categories/tags."""
        with self._connection() as conn, transaction(conn):
            counts = repository.seed_defaults(conn, self.settings.admin_email)
        logger.info("Seeded defaults: %s", counts)
        return counts


def publish_draft(draft: ArticleDraft, db_path: str | None = None) -> PublishResult:
    """Script entry point: publish one draft through the standard path."""
    return DraftPublisher(db_path=db_path).publish(draft)
