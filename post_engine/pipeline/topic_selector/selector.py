"""Topic Selector: the first pipeline stage.

Picks a TopicBrief from the curated pool, or delegates to an injected
ideation strategy. Never raises for an empty source; the empty placeholder
brief is returned and the orchestrator rejects it.
"""

from __future__ import annotations

import random

from post_engine.common.logging import setup_logging

from .ideation import BaseIdeator
from .models import TopicBrief
from .pool import TopicPool

logger = setup_logging(module_name="pipeline.topic_selector")


class TopicSelector:
    """Selects the topic for one pipeline run.

    Args:
        pool: Curated topic pool. Loaded from the configured YAML file on
            first use when omitted.
        ideator: Optional strategy that replaces pool selection.
        seed: RNG seed for reproducible selection.
    """

    def __init__(
        self,
        pool: TopicPool | None = None,
        ideator: BaseIdeator | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ):
        self._pool = pool
        self.ideator = ideator
        self.rng = rng or random.Random(seed)

    @property
    def pool(self) -> TopicPool:
        if self._pool is None:
            self._pool = TopicPool.from_yaml()
        return self._pool

    def select(self) -> TopicBrief:
        """Return the brief for this run (possibly the empty placeholder)."""
        if self.ideator is not None:
            brief = self.ideator.generate_brief()
            logger.info("Ideator %s proposed: %s", type(self.ideator).__name__, brief.title or "(empty)")
            return brief

        topic = self.pool.pick(self.rng)
        if topic is None:
            logger.warning("Topic pool is empty, returning placeholder brief")
            return TopicBrief()

        brief = topic.to_brief()
        logger.info("Topic: %s", brief.title)
        logger.info("Category: %s", brief.category)
        logger.info("Affiliates: %s", ", ".join(a.name for a in brief.affiliates))
        return brief
