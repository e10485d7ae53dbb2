"""Data models for the pipeline orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

NOTIFICATION_START = "---NOTIFICATION_START---"
NOTIFICATION_END = "---NOTIFICATION_END---"


class PipelineStage(str, Enum):
    """Stages in run order."""
    SELECT = "select"
    GENERATE = "generate"
    REVIEW = "review"
    VALIDATE = "validate"
    PUBLISH = "publish"
    DONE = "done"


@dataclass
class PipelineResult:
    """Outcome of one pipeline run.

    ``stage`` is the last stage entered: DONE on success, otherwise the
    stage that failed.
    """
    success: bool = False
    stage: PipelineStage = PipelineStage.SELECT
    post_id: int | None = None
    post_slug: str = ""
    title: str = ""
    excerpt: str = ""
    category: str = ""
    word_count: int = 0
    image_count: int = 0
    link_count: int = 0
    status: str = ""
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_notification(self) -> dict[str, Any]:
        """Payload for the scheduler that invoked the run."""
        return {
            "success": self.success,
            "title": self.title,
            "slug": self.post_slug,
            "category": self.category,
            "excerpt": self.excerpt,
            "wordCount": self.word_count,
            "imageCount": self.image_count,
            "linkCount": self.link_count,
            "status": self.status,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
