"""Data models for the review checker module."""

from __future__ import annotations

from dataclasses import dataclass, field

from post_engine.common.config import PipelineSettings
from post_engine.pipeline.draft_generator.models import ArticleDraft


@dataclass
class ReviewThresholds:
    """Blocking minimums and soft length targets."""
    min_word_count: int = 2000
    min_affiliate_links: int = 3
    min_images: int = 3
    title_length: tuple[int, int] = (50, 70)
    meta_description_length: tuple[int, int] = (140, 165)

    @classmethod
    def from_settings(cls, pipeline: PipelineSettings) -> ReviewThresholds:
        return cls(
            min_word_count=pipeline.min_word_count,
            min_affiliate_links=pipeline.min_affiliate_links,
            min_images=pipeline.min_images,
            title_length=tuple(pipeline.title_length_range),
            meta_description_length=tuple(pipeline.meta_description_range),
        )


@dataclass
class ReviewResult:
    """Outcome of the review stage. The draft is passed through unchanged."""
    approved: bool
    draft: ArticleDraft
    word_count: int = 0
    feedback: list[str] = field(default_factory=list)
    blocking: list[str] = field(default_factory=list)  # subset of feedback
