"""Data models for the publisher module."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PublishResult:
    """Result of inserting a draft post."""
    success: bool
    post_id: int | None = None
    post_slug: str = ""
    read_time: int = 0
    word_count: int = 0
    error: str = ""
