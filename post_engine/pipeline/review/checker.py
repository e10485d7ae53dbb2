"""Review Checker: heuristic quality gates for a draft.

Blocking checks (word count, affiliate links, images) decide ``approved``.
Title and meta description length only add feedback.
"""

from __future__ import annotations

from post_engine.common.config import settings
from post_engine.common.logging import setup_logging
from post_engine.pipeline.draft_generator.document import count_words
from post_engine.pipeline.draft_generator.models import ArticleDraft

from .models import ReviewResult, ReviewThresholds

logger = setup_logging(module_name="pipeline.review")


class ReviewChecker:
    """Scores a draft against configurable thresholds."""

    def __init__(self, thresholds: ReviewThresholds | None = None):
        self.thresholds = thresholds or ReviewThresholds.from_settings(settings.pipeline)

    def review(self, draft: ArticleDraft) -> ReviewResult:
        t = self.thresholds
        word_count = count_words(draft.content)
        link_count = len(draft.affiliate_links)
        image_count = len(draft.images)

        blocking: list[str] = []
        if word_count < t.min_word_count:
            blocking.append(f"Word count too low: {word_count} (minimum {t.min_word_count})")
        if link_count < t.min_affiliate_links:
            blocking.append(
                f"Not enough affiliate links: {link_count} (minimum {t.min_affiliate_links})"
            )
        if image_count < t.min_images:
            blocking.append(f"Not enough images: {image_count} (minimum {t.min_images})")

        feedback = list(blocking)
        lo, hi = t.title_length
        if not lo <= len(draft.title) <= hi:
            feedback.append(f"Title length issue: {len(draft.title)} chars (target {lo}-{hi})")
        lo, hi = t.meta_description_length
        meta_len = len(draft.meta_description)
        if not lo <= meta_len <= hi:
            feedback.append(f"Meta description length: {meta_len} chars (target {lo}-{hi})")

        approved = not blocking
        logger.info(
            "Review %s: %d words, %d links, %d images",
            "approved" if approved else "rejected",
            word_count,
            link_count,
            image_count,
        )
        for item in feedback:
            logger.info("  - %s", item)

        return ReviewResult(
            approved=approved,
            draft=draft,
            word_count=word_count,
            feedback=feedback,
            blocking=blocking,
        )
