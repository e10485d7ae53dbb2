"""Shared test fixtures for the affiliate post engine."""

import sys
from pathlib import Path

import pytest

# Ensure post_engine is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from post_engine.common.config import Settings
from post_engine.common.database import get_connection, init_db
from post_engine.common.http_client import ProbeResult
from post_engine.pipeline.publisher import DraftPublisher
from post_engine.pipeline.topic_selector.models import (
    AffiliateCandidate,
    TopicBrief,
    default_outline,
)
from post_engine.pipeline.topic_selector.pool import PoolTopic, TopicPool


IMAGE_URLS = [f"https://images.example.com/productivity-{i}.jpg" for i in range(1, 6)]

WIDGET_AFFILIATES = [
    AffiliateCandidate(name="Widget Pro", url="https://widgetpro.example.com", commission="20%"),
    AffiliateCandidate(name="Widget Plus", url="https://widgetplus.example.com", commission="$50/signup"),
    AffiliateCandidate(name="Widget Lite", url="https://widgetlite.example.com", commission="N/A"),
]


class FakeProbeClient:
    """Answers HEAD probes from a status map instead of the network.

    URLs listed in ``errors`` behave like a connection failure.
    """

    def __init__(self, statuses=None, default=200, errors=None):
        self.statuses = dict(statuses or {})
        self.default = default
        self.errors = set(errors or [])
        self.calls = []

    def head(self, url, allow_redirects=True):
        self.calls.append(url)
        if url in self.errors:
            return ProbeResult(url=url, error="ConnectionError: connection refused")
        return ProbeResult(url=url, status_code=self.statuses.get(url, self.default))


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Default settings pointing at a temporary database."""
    settings = Settings()
    settings.database.db_path = str(tmp_path / "test_blog.db")
    return settings


@pytest.fixture
def temp_db(test_settings) -> str:
    """Path of an initialized, empty SQLite database."""
    init_db(test_settings.database.db_path)
    return test_settings.database.db_path


@pytest.fixture
def seeded_db(temp_db, test_settings) -> str:
    """Initialized database with the admin account and starter rows."""
    DraftPublisher(db_path=temp_db, settings=test_settings).seed()
    return temp_db


@pytest.fixture
def db_conn(temp_db):
    """Provide an initialized SQLite connection from temp_db."""
    conn = get_connection(temp_db)
    yield conn
    conn.close()


@pytest.fixture
def fake_client() -> FakeProbeClient:
    """Probe client where every URL answers 200."""
    return FakeProbeClient()


@pytest.fixture
def make_client():
    """Factory for probe clients with custom statuses/errors."""
    return FakeProbeClient


@pytest.fixture
def topic_pool() -> TopicPool:
    """Small in-memory pool with one niche and a productivity image set."""
    return TopicPool(
        topics=[
            PoolTopic(
                title="Best Widget Tools 2025",
                category="productivity",
                niche="productivity",
                keywords=["widget tools", "Widget Pro", "widget comparison", "team widgets"],
                affiliates=list(WIDGET_AFFILIATES),
            ),
        ],
        images={"productivity": list(IMAGE_URLS)},
    )


@pytest.fixture
def sample_brief() -> TopicBrief:
    """Three-affiliate brief used across stage tests."""
    return TopicBrief(
        title="Best Widget Tools 2025",
        slug="best-widget-tools-2025",
        category="productivity",
        tags=["widget tools", "Widget Pro", "widget comparison"],
        outline=default_outline(WIDGET_AFFILIATES),
        affiliates=list(WIDGET_AFFILIATES),
        target_keywords=["widget tools", "Widget Pro", "widget comparison", "team widgets"],
        meta_description=(
            "Compare the best widget tools of 2025 side by side. Hands-on reviews, "
            "pricing breakdowns, pros and cons, and clear picks for every budget and team."
        ),
    )


@pytest.fixture
def single_affiliate_brief(sample_brief) -> TopicBrief:
    """The sample brief cut down to one affiliate."""
    affiliates = sample_brief.affiliates[:1]
    return TopicBrief(
        title=sample_brief.title,
        slug=sample_brief.slug,
        category=sample_brief.category,
        tags=list(sample_brief.tags),
        outline=default_outline(affiliates),
        affiliates=affiliates,
        target_keywords=list(sample_brief.target_keywords),
        meta_description=sample_brief.meta_description,
    )
