"""Data models for the draft generator module."""

from __future__ import annotations

from dataclasses import dataclass, field

from .document import DocNode, doc


@dataclass
class EmbeddedImage:
    """An image node placed in the article body."""
    src: str
    alt: str


@dataclass
class AffiliateLink:
    """An outbound affiliate link placed in the article body."""
    text: str
    url: str


@dataclass
class SEOMeta:
    """Search metadata stored alongside the post."""
    meta_title: str = ""
    meta_description: str = ""
    keywords: str = ""  # comma-separated


@dataclass
class ArticleDraft:
    """A generated article before review, validation and publishing."""
    title: str
    slug: str
    excerpt: str = ""
    content: DocNode = field(default_factory=lambda: doc([]))
    featured_image: str = ""
    seo: SEOMeta = field(default_factory=SEOMeta)
    category_slug: str = ""
    tag_slugs: list[str] = field(default_factory=list)
    images: list[EmbeddedImage] = field(default_factory=list)
    affiliate_links: list[AffiliateLink] = field(default_factory=list)

    @property
    def meta_description(self) -> str:
        return self.seo.meta_description
