# Publisher: transactional draft insert into the blog database
"""
Publisher module for writing generated drafts to the blog schema.

Every path (pipeline, scripts, maintenance) goes through DraftPublisher so
slug uniqueness and transactional writes are handled in one place.
"""

from .models import PublishResult
from .publisher import DraftPublisher, publish_draft
from .slugs import read_time, resolve_unique_slug

__all__ = [
    "DraftPublisher",
    "PublishResult",
    "publish_draft",
    "read_time",
    "resolve_unique_slug",
]
