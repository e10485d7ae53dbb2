"""Draft Generator: expands a TopicBrief into an ArticleDraft.

The article structure is fixed and deterministic for a given brief and image
set: introduction, affiliate disclosure, quick comparison (bullets and a
table), one section per affiliate candidate, decision guide, expert tips,
FAQ and conclusion. Only image order depends on the RNG.

Usage:
    generator = DraftGenerator(seed=42)
    draft = generator.generate(brief)
"""

from __future__ import annotations

import random
from datetime import date

from post_engine.common.config import Settings, settings as default_settings
from post_engine.common.http_client import HTTPClient
from post_engine.common.logging import setup_logging
from post_engine.common.text import clip, generate_slug, headline, title_year
from post_engine.errors import InvalidBriefError
from post_engine.pipeline.topic_selector.models import (
    AffiliateCandidate,
    TopicBrief,
    build_meta_description,
    default_outline,
    rank_label,
)
from post_engine.pipeline.topic_selector.pool import TopicPool

from .document import (
    DocNode,
    blockquote,
    bold,
    bullet_list,
    doc,
    heading,
    horizontal_rule,
    image,
    italic,
    link,
    ordered_list,
    paragraph,
    table,
    text,
)
from .images import select_images
from .models import AffiliateLink, ArticleDraft, EmbeddedImage, SEOMeta
from .templates import (
    FAQ_QUESTIONS,
    PULL_QUOTE,
    render_lines,
    render_paragraphs,
    render_text,
)

logger = setup_logging(module_name="pipeline.draft_generator")

# Decision-guide reasons, by ranking position
_CHOOSE_IF = (
    "you want the most comprehensive feature set",
    "you need a good balance of features and price",
    "you're just starting out or on a tight budget",
)
_STRENGTHS = ("Feature depth", "Balance of price and polish", "Value for money")


def _choose_if(index: int) -> str:
    return _CHOOSE_IF[index] if index < len(_CHOOSE_IF) else "you need a specialized alternative"


def _strength(index: int) -> str:
    return _STRENGTHS[index] if index < len(_STRENGTHS) else "Niche strengths"


def _tag_slugs(brief: TopicBrief) -> list[str]:
    """Slugified brief tags, or the first three keywords when it has none."""
    names = brief.tags or brief.target_keywords[:3]
    slugs = (generate_slug(name) for name in names)
    return list(dict.fromkeys(s for s in slugs if s))


class DraftGenerator:
    """Builds the article document, metadata and asset lists for a brief."""

    def __init__(
        self,
        pool: TopicPool | None = None,
        client: HTTPClient | None = None,
        settings: Settings | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
        today: date | None = None,
    ):
        self._pool = pool
        self._client = client
        self.settings = settings or default_settings
        self.rng = rng or random.Random(seed)
        self.today = today or date.today()

    @property
    def pool(self) -> TopicPool:
        if self._pool is None:
            self._pool = TopicPool.from_yaml(self.settings.pipeline.topic_pool_path)
        return self._pool

    @property
    def client(self) -> HTTPClient:
        if self._client is None:
            self._client = HTTPClient(self.settings.http)
        return self._client

    def generate(self, brief: TopicBrief) -> ArticleDraft:
        """Generate the draft.

        Raises:
            InvalidBriefError: the brief is the empty placeholder.
            InsufficientImagesError: too few reachable images in the pool.
        """
        missing = brief.missing_fields()
        if missing:
            raise InvalidBriefError(missing)

        cfg = self.settings.pipeline
        image_urls = select_images(
            self.pool.images_for(brief.category, cfg.fallback_image_category),
            self.rng,
            self.client,
            count=cfg.image_candidates,
            minimum=cfg.min_images,
        )

        nodes, images, links = self._build_body(brief, image_urls)
        title = brief.title
        topic = headline(title)
        year = title_year(title, self.today.year)
        meta_description = brief.meta_description or build_meta_description(title, year)

        draft = ArticleDraft(
            title=title,
            slug=generate_slug(brief.slug),
            excerpt=(
                f"Discover the {topic.lower()}. We compare features, pricing, and "
                "real-world performance to help you choose the perfect solution "
                "for your needs."
            ),
            content=doc(nodes),
            featured_image=image_urls[0],
            seo=SEOMeta(
                meta_title=clip(title, cfg.meta_title_max),
                meta_description=clip(meta_description, cfg.meta_description_max),
                keywords=", ".join(brief.target_keywords),
            ),
            category_slug=brief.category,
            tag_slugs=_tag_slugs(brief),
            images=images,
            affiliate_links=links,
        )
        logger.info("Slug: %s", draft.slug)
        logger.info("Images: %d", len(draft.images))
        logger.info("Links: %d", len(draft.affiliate_links))
        return draft

    # --- Body ---

    def _outline(self, brief: TopicBrief) -> list[str]:
        expected = len(brief.affiliates) + 5
        if len(brief.outline) == expected:
            return list(brief.outline)
        return default_outline(brief.affiliates)

    def _build_body(
        self,
        brief: TopicBrief,
        image_urls: list[str],
    ) -> tuple[list[DocNode], list[EmbeddedImage], list[AffiliateLink]]:
        affiliates = brief.affiliates
        outline = self._outline(brief)
        comparison_h, section_hs = outline[0], outline[1:1 + len(affiliates)]
        guide_h, tips_h, faq_h, verdict_h = outline[-4:]

        topic = headline(brief.title)
        top = affiliates[0].name if affiliates else "the first option"
        remaining = list(image_urls)
        images: list[EmbeddedImage] = []
        links: list[AffiliateLink] = []
        nodes: list[DocNode] = []

        def place_image(alt: str) -> None:
            if remaining:
                src = remaining.pop(0)
                nodes.append(image(src, alt))
                images.append(EmbeddedImage(src=src, alt=alt))

        # Introduction
        names = ", ".join(a.name for a in affiliates) or topic
        for p in render_paragraphs("intro", topic=topic, count=len(affiliates), names=names):
            nodes.append(paragraph(p))
        nodes.append(paragraph([
            text("Note: ", [italic()]),
            text(render_text("disclosure")),
        ]))
        place_image(topic)

        # Quick comparison
        nodes.append(heading(2, comparison_h))
        nodes.extend(paragraph(p) for p in render_paragraphs("comparison_intro"))
        nodes.append(bullet_list([
            f"{a.name}: Affiliate commission {a.commission}" if a.has_commission
            else f"{a.name}: Direct purchase"
            for a in affiliates
        ]))
        nodes.append(table(
            ["Option", "Our Pick For", "Standout Strength"],
            [[a.name, rank_label(i), _strength(i)] for i, a in enumerate(affiliates)],
        ))
        nodes.extend(paragraph(p) for p in render_paragraphs("comparison_outro"))

        # One section per affiliate
        for i, (affiliate, section_h) in enumerate(zip(affiliates, section_hs)):
            nodes.append(heading(2, section_h))
            place_image(f"{affiliate.name} interface and features")
            nodes.extend(self._affiliate_section(affiliate, i))
            links.append(AffiliateLink(text=f"Try {affiliate.name}", url=affiliate.url))

        # Decision guide
        nodes.append(heading(2, guide_h))
        place_image(f"{topic} decision guide")
        nodes.extend(paragraph(p) for p in render_paragraphs("guide_intro"))
        nodes.append(bullet_list([
            f"Choose {a.name} if {_choose_if(i)}" for i, a in enumerate(affiliates)
        ]))
        nodes.extend(paragraph(p) for p in render_paragraphs("guide_outro"))

        # Expert tips
        nodes.append(heading(2, tips_h))
        place_image(f"{topic} tips")
        nodes.extend(paragraph(p) for p in render_paragraphs("tips_intro"))
        nodes.append(ordered_list(render_lines("tips")))
        nodes.extend(paragraph(p) for p in render_paragraphs("tips_outro"))

        # FAQ
        nodes.append(heading(2, faq_h))
        for question, template in FAQ_QUESTIONS:
            if template == "faq_teams" and len(affiliates) < 2:
                continue
            nodes.append(heading(3, question))
            nodes.extend(paragraph(p) for p in render_paragraphs(template, top=top))

        # Conclusion
        nodes.append(horizontal_rule())
        nodes.append(heading(2, verdict_h))
        nodes.append(paragraph([
            text("After thorough testing and analysis, our top pick is "),
            text(top, [bold()]),
            text(" " + render_text("verdict_tail")),
        ]))
        nodes.extend(paragraph(p) for p in render_paragraphs("verdict"))
        nodes.append(blockquote(PULL_QUOTE))
        nodes.append(paragraph(render_text("closing")))

        return nodes, images, links

    def _affiliate_section(self, affiliate: AffiliateCandidate, rank: int) -> list[DocNode]:
        ctx = {
            "name": affiliate.name,
            "rank": rank,
            "has_commission": affiliate.has_commission,
        }
        nodes = [paragraph(p) for p in render_paragraphs("overview", **ctx)]

        nodes.append(heading(3, "Key Features"))
        nodes.append(bullet_list(render_lines("features", **ctx)))
        nodes.extend(paragraph(p) for p in render_paragraphs("features_outro", **ctx))

        nodes.append(heading(3, "Real-World Performance"))
        nodes.extend(paragraph(p) for p in render_paragraphs("performance", **ctx))

        nodes.append(heading(3, "Pros & Cons"))
        nodes.append(paragraph([text("Pros:", [bold()])]))
        nodes.append(bullet_list(render_lines("pros", **ctx)))
        nodes.append(paragraph([text("Cons:", [bold()])]))
        nodes.append(bullet_list(render_lines("cons", **ctx)))

        nodes.append(heading(3, "Pricing"))
        nodes.extend(paragraph(p) for p in render_paragraphs("pricing", **ctx))

        nodes.append(heading(3, "Who It's For"))
        nodes.extend(paragraph(p) for p in render_paragraphs("who_for", **ctx))

        # Call to action: the only link in the section
        nodes.append(paragraph([
            text("👉 "),
            text(f"Try {affiliate.name}", [link(affiliate.url)]),
        ]))
        return nodes
