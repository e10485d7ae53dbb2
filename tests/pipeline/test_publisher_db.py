"""Tests for the publisher module against a real SQLite database.

Tests cover:
- DRAFT insertion with category, tags, read time and SEO fields
- Slug suffixing and the reject policy
- Missing admin account and transactional rollback
- Image URL replacement in stored posts (API and CLI)
- Seeding defaults
"""

import json
import sqlite3
from unittest.mock import patch

import pytest

from post_engine.common.config import SlugPolicy
from post_engine.common.database import get_connection
from post_engine.common.models import PostStatus, User, UserRole, row_to_dict
from post_engine.errors import DuplicateSlugError
from post_engine.pipeline.draft_generator.document import doc, image, paragraph
from post_engine.pipeline.draft_generator.models import (
    AffiliateLink,
    ArticleDraft,
    EmbeddedImage,
    SEOMeta,
)
from post_engine.pipeline.publisher import (
    DraftPublisher,
    publish_draft,
    read_time,
    resolve_unique_slug,
)
from post_engine.pipeline.publisher import fix_images, repository


def make_draft(slug="best-widget-tools-2025", words=400, category="productivity",
               tags=("widget-tools", "widget-pro", "widget-comparison")):
    return ArticleDraft(
        title="Best Widget Tools 2025",
        slug=slug,
        excerpt="Discover the best widget tools 2025.",
        content=doc([
            paragraph(" ".join(["word"] * words)),
            image("https://images.example.com/old.jpg", "Widget Pro interface and features"),
        ]),
        featured_image="https://images.example.com/old.jpg",
        seo=SEOMeta(
            meta_title="Best Widget Tools 2025",
            meta_description="Compare widget tools.",
            keywords="widget tools, Widget Pro",
        ),
        category_slug=category,
        tag_slugs=list(tags),
        images=[EmbeddedImage(src="https://images.example.com/old.jpg", alt="Widget Pro")],
        affiliate_links=[AffiliateLink(text="Try Widget Pro", url="https://widgetpro.example.com")],
    )


@pytest.fixture
def publisher(seeded_db, test_settings):
    return DraftPublisher(db_path=seeded_db, settings=test_settings)


def _count(db_path, table):
    conn = get_connection(db_path)
    try:
        return repository.count_rows(conn, table)
    finally:
        conn.close()


def _get_post(db_path, slug):
    conn = get_connection(db_path)
    try:
        return repository.get_post(conn, slug=slug)
    finally:
        conn.close()


# === Helpers ===


class TestReadTime:
    @pytest.mark.parametrize("words, minutes", [(0, 1), (150, 1), (200, 1), (201, 2), (400, 2), (2390, 12)])
    def test_read_time(self, words, minutes):
        assert read_time(words) == minutes


class TestResolveUniqueSlug:
    def _insert(self, conn, slug):
        repository.insert_post(
            conn, title="t", slug=slug, excerpt="", content="{}", featured_image="",
            meta_title="", meta_description="", keywords="", read_time=1,
            author_id=1, category_id=None,
        )

    def test_free_slug_unchanged(self, seeded_db):
        conn = get_connection(seeded_db)
        assert resolve_unique_slug(conn, "fresh") == "fresh"
        conn.close()

    def test_suffix_skips_taken(self, seeded_db):
        conn = get_connection(seeded_db)
        self._insert(conn, "taken")
        self._insert(conn, "taken-2")
        assert resolve_unique_slug(conn, "taken") == "taken-3"
        conn.close()

    def test_reject_raises(self, seeded_db):
        conn = get_connection(seeded_db)
        self._insert(conn, "taken")
        with pytest.raises(DuplicateSlugError):
            resolve_unique_slug(conn, "taken", SlugPolicy.REJECT)
        conn.close()


# === Publishing ===


class TestPublish:
    def test_inserts_draft_post(self, publisher, seeded_db):
        result = publisher.publish(make_draft())
        assert result.success
        assert result.post_slug == "best-widget-tools-2025"
        assert result.word_count == 400
        assert result.read_time == 2

        post = _get_post(seeded_db, "best-widget-tools-2025")
        assert post.id == result.post_id
        assert post.status == PostStatus.DRAFT
        assert post.published_at is None
        assert not post.featured
        assert post.read_time == 2
        assert post.meta_title == "Best Widget Tools 2025"
        assert post.keywords == "widget tools, Widget Pro"
        assert json.loads(post.content)["type"] == "doc"

    def test_creates_category_and_tags(self, publisher, seeded_db):
        result = publisher.publish(make_draft())
        post = _get_post(seeded_db, result.post_slug)
        assert post.category.slug == "productivity"
        assert post.category.name == "Productivity"
        assert [t.slug for t in post.tags] == ["widget-tools", "widget-pro", "widget-comparison"]
        assert post.tags[1].name == "Widget Pro"

    def test_reuses_existing_category(self, publisher, seeded_db):
        before = _count(seeded_db, "categories")
        publisher.publish(make_draft(category="technology"))
        assert _count(seeded_db, "categories") == before

    def test_duplicate_slug_gets_suffix(self, publisher, seeded_db):
        first = publisher.publish(make_draft())
        second = publisher.publish(make_draft())
        assert first.post_slug == "best-widget-tools-2025"
        assert second.post_slug == "best-widget-tools-2025-2"
        assert _count(seeded_db, "posts") == 2
        # Tags are shared, not duplicated
        assert _count(seeded_db, "post_tags") == 6

    def test_duplicate_slug_rejected_rolls_back(self, publisher, seeded_db, test_settings):
        publisher.publish(make_draft())
        test_settings.pipeline.slug_policy = SlugPolicy.REJECT
        result = publisher.publish(make_draft(category="gardening", tags=("brand-new-tag",)))
        assert not result.success
        assert result.error == "Slug already exists: best-widget-tools-2025"
        conn = get_connection(seeded_db)
        assert conn.execute("SELECT 1 FROM categories WHERE slug = 'gardening'").fetchone() is None
        assert conn.execute("SELECT 1 FROM tags WHERE slug = 'brand-new-tag'").fetchone() is None
        conn.close()

    def test_no_admin_account(self, temp_db, test_settings):
        result = DraftPublisher(db_path=temp_db, settings=test_settings).publish(make_draft())
        assert not result.success
        assert result.error == "No publisher account available"
        assert _count(temp_db, "posts") == 0
        assert _count(temp_db, "categories") == 0

    def test_database_error_reported(self, publisher, seeded_db):
        with patch.object(
            repository, "insert_post", side_effect=sqlite3.OperationalError("disk I/O error"),
        ):
            result = publisher.publish(make_draft())
        assert not result.success
        assert result.error == "Database error: disk I/O error"
        assert _count(seeded_db, "post_tags") == 0

    def test_publish_draft_entry_point(self, seeded_db):
        result = publish_draft(make_draft(slug="script-post"), db_path=seeded_db)
        assert result.success
        assert result.post_slug == "script-post"
        assert _get_post(seeded_db, "script-post").status == PostStatus.DRAFT

    def test_shared_connection_left_open(self, seeded_db, test_settings):
        conn = get_connection(seeded_db)
        result = DraftPublisher(conn=conn, settings=test_settings).publish(make_draft())
        assert result.success
        assert conn.execute("SELECT COUNT(*) FROM posts").fetchone()[0] == 1
        conn.close()


# === Seeding ===


class TestSeed:
    def test_seed_defaults(self, temp_db, test_settings):
        counts = DraftPublisher(db_path=temp_db, settings=test_settings).seed()
        assert counts == {"users": 1, "categories": 3, "tags": 5}

    def test_seed_is_idempotent(self, seeded_db, test_settings):
        counts = DraftPublisher(db_path=seeded_db, settings=test_settings).seed()
        assert counts == {"users": 1, "categories": 3, "tags": 5}

    def test_admin_account(self, seeded_db, test_settings):
        conn = get_connection(seeded_db)
        admin = repository.find_admin(conn)
        conn.close()
        user = User(**row_to_dict(admin))
        assert user.email == test_settings.admin_email
        assert user.role == UserRole.ADMIN


# === Image replacement ===


class TestReplaceImages:
    def test_replace_by_alt(self, publisher, seeded_db):
        publisher.publish(make_draft())
        changed = publisher.replace_post_images(
            "best-widget-tools-2025",
            {"Widget Pro interface and features": "https://images.example.com/new.jpg"},
        )
        assert changed == 1
        post = _get_post(seeded_db, "best-widget-tools-2025")
        assert "https://images.example.com/new.jpg" in post.content
        assert "old.jpg" not in post.content

    def test_unknown_alt_changes_nothing(self, publisher):
        publisher.publish(make_draft())
        assert publisher.replace_post_images("best-widget-tools-2025", {"Nope": "x"}) == 0

    def test_missing_post(self, publisher):
        with pytest.raises(LookupError):
            publisher.replace_post_images("no-such-post", {"a": "b"})


class TestFixImagesCLI:
    def test_parse_replacements(self):
        assert fix_images.parse_replacements(["Alt text=https://x/y.jpg?w=1"]) == {
            "Alt text": "https://x/y.jpg?w=1"
        }

    @pytest.mark.parametrize("item", ["no-separator", "=https://x", "alt="])
    def test_parse_replacements_rejects(self, item):
        with pytest.raises(ValueError):
            fix_images.parse_replacements([item])

    def test_main_updates_post(self, publisher, seeded_db, capsys):
        publisher.publish(make_draft())
        fix_images.main([
            "--slug", "best-widget-tools-2025",
            "--replace", "Widget Pro interface and features=https://images.example.com/new.jpg",
            "--db", seeded_db,
        ])
        assert "Image URLs updated: 1" in capsys.readouterr().out

    def test_main_missing_post_exits_1(self, seeded_db):
        with pytest.raises(SystemExit) as exc_info:
            fix_images.main(["--slug", "missing", "--replace", "a=b", "--db", seeded_db])
        assert exc_info.value.code == 1

    def test_main_requires_replacement(self, seeded_db):
        with pytest.raises(SystemExit) as exc_info:
            fix_images.main(["--slug", "missing", "--db", seeded_db])
        assert exc_info.value.code == 2
