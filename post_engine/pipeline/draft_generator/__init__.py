# Draft Generator: TopicBrief to rich-text article
"""
Draft Generator module: expands a TopicBrief into an ArticleDraft.

The article body is a rich-text document tree (see document.py) built from
Jinja2 copy templates, with verified images and one affiliate link per
candidate section.
"""

from .document import DocNode, Mark, count_words, extract_text, from_json, to_json
from .generator import DraftGenerator
from .models import AffiliateLink, ArticleDraft, EmbeddedImage, SEOMeta

__all__ = [
    "AffiliateLink",
    "ArticleDraft",
    "DocNode",
    "DraftGenerator",
    "EmbeddedImage",
    "Mark",
    "SEOMeta",
    "count_words",
    "extract_text",
    "from_json",
    "to_json",
]
