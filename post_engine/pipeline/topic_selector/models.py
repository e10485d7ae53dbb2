"""Data models for the topic selector module."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from post_engine.common.text import generate_slug, headline


@dataclass
class AffiliateCandidate:
    """A partner program the article can link to."""
    name: str
    url: str
    commission: str = "N/A"  # free-form, e.g. "20%" or "$50/signup"

    @property
    def has_commission(self) -> bool:
        return bool(self.commission) and self.commission != "N/A"


RANK_LABELS = ("Best Overall", "Runner Up", "Budget Pick")

COMPARISON_HEADING = "Quick Comparison Overview"
GUIDE_HEADING = "How to Choose the Right Option"
TIPS_HEADING = "Expert Tips for Getting Started"
FAQ_HEADING = "Frequently Asked Questions"
VERDICT_HEADING = "Final Verdict"


def rank_label(index: int) -> str:
    """Label for the affiliate at ``index`` (0-based) in ranking order."""
    return RANK_LABELS[index] if index < len(RANK_LABELS) else "Also Worth a Look"


def default_outline(affiliates: list[AffiliateCandidate]) -> list[str]:
    """H2 headings in article order: comparison, one per affiliate, guide,
    tips, FAQ, verdict."""
    return [
        COMPARISON_HEADING,
        *(f"{i + 1}. {a.name}: {rank_label(i)}" for i, a in enumerate(affiliates)),
        GUIDE_HEADING,
        TIPS_HEADING,
        FAQ_HEADING,
        VERDICT_HEADING,
    ]


@dataclass
class TopicBrief:
    """The input for one article.

    An empty brief (no title, category or slug) is the placeholder returned
    when no topic source produced anything. Downstream stages reject it.
    """
    title: str = ""
    slug: str = ""
    category: str = ""
    tags: list[str] = field(default_factory=list)
    outline: list[str] = field(default_factory=list)
    affiliates: list[AffiliateCandidate] = field(default_factory=list)
    target_keywords: list[str] = field(default_factory=list)
    meta_description: str = ""

    def missing_fields(self) -> list[str]:
        """Names of the required fields that are blank.

        A slug with no letters or digits (``"???"``) slugifies to nothing and
        counts as blank.
        """
        required = (
            ("title", self.title.strip()),
            ("category", self.category.strip()),
            ("slug", generate_slug(self.slug)),
        )
        return [name for name, value in required if not value]

    def is_empty(self) -> bool:
        return bool(self.missing_fields())

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TopicBrief:
        """Build a brief from a loosely-shaped dict (LLM output, JSON files).

        Accepts ``affiliates`` or ``affiliate_opportunities`` and
        ``target_keywords`` or ``keywords``.
        """
        raw_affiliates = data.get("affiliates") or data.get("affiliate_opportunities") or []
        affiliates = [
            AffiliateCandidate(
                name=str(a.get("name", "")),
                url=str(a.get("url", "")),
                commission=str(a.get("commission") or "N/A"),
            )
            for a in raw_affiliates
            if isinstance(a, dict) and a.get("name") and a.get("url")
        ]
        keywords = data.get("target_keywords") or data.get("keywords") or []
        return cls(
            title=str(data.get("title", "")).strip(),
            slug=str(data.get("slug", "")).strip(),
            category=str(data.get("category", "")).strip(),
            tags=[str(t) for t in data.get("tags", [])],
            outline=[str(s) for s in data.get("outline", [])],
            affiliates=affiliates,
            target_keywords=[str(k) for k in keywords],
            meta_description=str(data.get("meta_description", "")).strip(),
        )


def build_meta_description(title: str, year: int) -> str:
    """Search snippet derived from the part of the title before the colon."""
    return (
        f"Compare the {headline(title).lower()}. Expert reviews, pricing "
        f"breakdowns, and recommendations to help you choose. Updated for {year}."
    )
