"""Curated topic pool and per-category image pool.

Both pools are configuration data loaded from YAML (config/topic_pool.yaml by
default). Selection goes through a caller-supplied ``random.Random`` so runs
can be reproduced with a seed.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from post_engine.common.config import PROJECT_ROOT, settings
from post_engine.common.text import generate_slug, title_year

from .models import AffiliateCandidate, TopicBrief, build_meta_description, default_outline

logger = logging.getLogger(__name__)


@dataclass
class PoolTopic:
    """One curated topic inside a niche."""
    title: str
    category: str
    niche: str = ""
    keywords: list[str] = field(default_factory=list)
    affiliates: list[AffiliateCandidate] = field(default_factory=list)

    def to_brief(self, today: date | None = None) -> TopicBrief:
        """Expand the pool entry into a full TopicBrief."""
        year = title_year(self.title, (today or date.today()).year)
        return TopicBrief(
            title=self.title,
            slug=generate_slug(self.title),
            category=self.category,
            tags=list(self.keywords[:3]),
            outline=default_outline(self.affiliates),
            affiliates=list(self.affiliates),
            target_keywords=list(self.keywords),
            meta_description=build_meta_description(self.title, year),
        )


@dataclass
class TopicPool:
    """Topics grouped by niche plus image URLs keyed by category slug."""
    topics: list[PoolTopic] = field(default_factory=list)
    images: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TopicPool:
        topics: list[PoolTopic] = []
        for niche in data.get("niches", []) or []:
            category = niche.get("category", "")
            for entry in niche.get("topics", []) or []:
                topics.append(
                    PoolTopic(
                        title=entry.get("title", ""),
                        category=entry.get("category", category),
                        niche=niche.get("niche", category),
                        keywords=list(entry.get("keywords", [])),
                        affiliates=[
                            AffiliateCandidate(
                                name=a["name"],
                                url=a["url"],
                                commission=str(a.get("commission", "N/A")),
                            )
                            for a in entry.get("affiliates", [])
                        ],
                    )
                )
        images = {
            str(category): list(urls or [])
            for category, urls in (data.get("images", {}) or {}).items()
        }
        return cls(topics=topics, images=images)

    @classmethod
    def from_yaml(cls, path: str | Path | None = None) -> TopicPool:
        """Load the pool from a YAML file.

        Args:
            path: Path to YAML file (absolute or relative to project root).
                Defaults to the configured topic pool path.
        """
        p = Path(path or settings.pipeline.topic_pool_path)
        if not p.is_absolute():
            p = PROJECT_ROOT / p
        with open(p, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        pool = cls.from_dict(data)
        logger.info(
            "Loaded topic pool from %s: %d topics, %d image categories",
            p, len(pool.topics), len(pool.images),
        )
        return pool

    @property
    def niches(self) -> list[str]:
        seen: dict[str, None] = {}
        for topic in self.topics:
            seen.setdefault(topic.niche, None)
        return list(seen)

    def is_empty(self) -> bool:
        return not self.topics

    def pick(self, rng: random.Random) -> PoolTopic | None:
        """Pick a niche, then a topic inside it. None when the pool is empty."""
        if not self.topics:
            return None
        niche = rng.choice(self.niches)
        return rng.choice([t for t in self.topics if t.niche == niche])

    def images_for(self, category: str, fallback: str | None = None) -> list[str]:
        """Image URLs for a category, or the fallback category's when unknown."""
        if category in self.images:
            return list(self.images[category])
        fallback = fallback or settings.pipeline.fallback_image_category
        return list(self.images.get(fallback, []))
