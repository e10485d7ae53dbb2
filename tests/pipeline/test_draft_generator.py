"""Tests for the draft generator module.

Tests cover:
- Article structure (sections, one link per affiliate section)
- Image verification, fallback pool and the minimum image count
- SEO metadata clipping, slug and tag derivation
- Empty brief rejection
- Copy templates
"""

import random

import pytest

from post_engine.common.config import Settings
from post_engine.errors import InsufficientImagesError, InvalidBriefError
from post_engine.pipeline.draft_generator import DraftGenerator
from post_engine.pipeline.draft_generator.document import (
    count_words,
    find_images,
    find_links,
    iter_nodes,
    validate_structure,
)
from post_engine.pipeline.draft_generator.images import select_images, shuffled_candidates
from post_engine.pipeline.draft_generator.templates import (
    render_lines,
    render_paragraphs,
    render_text,
)
from post_engine.pipeline.topic_selector.models import TopicBrief


@pytest.fixture
def generator(topic_pool, fake_client):
    return DraftGenerator(pool=topic_pool, client=fake_client, settings=Settings(), seed=42)


def _h2_sections(draft):
    """Split top-level nodes into (heading text, nodes) per H2."""
    sections = []
    for node in draft.content.content:
        if node.type == "heading" and node.attrs["level"] == 2:
            sections.append((node.content[0].text, []))
        elif sections:
            sections[-1][1].append(node)
    return sections


class TestDraftStructure:
    def test_generates_full_article(self, generator, sample_brief):
        draft = generator.generate(sample_brief)
        assert draft.title == "Best Widget Tools 2025"
        assert draft.slug == "best-widget-tools-2025"
        assert draft.category_slug == "productivity"
        assert draft.content.type == "doc"
        assert validate_structure(draft.content) == []
        assert count_words(draft.content) >= 2000

    def test_section_order(self, generator, sample_brief):
        draft = generator.generate(sample_brief)
        headings = [h for h, _ in _h2_sections(draft)]
        assert headings == sample_brief.outline

    def test_one_link_per_affiliate_section(self, generator, sample_brief):
        draft = generator.generate(sample_brief)
        sections = dict(_h2_sections(draft))
        for i, affiliate in enumerate(sample_brief.affiliates):
            nodes = sections[sample_brief.outline[1 + i]]
            links = [link for node in nodes for link in find_links(node)]
            assert links == [(f"Try {affiliate.name}", affiliate.url)]

    def test_affiliate_links_match_document(self, generator, sample_brief):
        draft = generator.generate(sample_brief)
        assert [(l.text, l.url) for l in draft.affiliate_links] == find_links(draft.content)
        for link in draft.affiliate_links:
            assert "utm_" not in link.url

    def test_disclosure_paragraph(self, generator, sample_brief):
        draft = generator.generate(sample_brief)
        disclosure = next(
            node for node in draft.content.content
            if node.type == "paragraph" and node.content[0].text == "Note: "
        )
        assert disclosure.content[0].marks[0].type == "italic"
        assert "affiliate links" in disclosure.content[1].text

    def test_comparison_table(self, generator, sample_brief):
        draft = generator.generate(sample_brief)
        tables = [n for n in iter_nodes(draft.content) if n.type == "table"]
        assert len(tables) == 1
        rows = tables[0].content
        assert rows[0].content[0].type == "tableHeader"
        assert len(rows) == 1 + len(sample_brief.affiliates)

    def test_decision_guide_only_names_real_affiliates(self, generator, single_affiliate_brief):
        draft = generator.generate(single_affiliate_brief)
        sections = dict(_h2_sections(draft))
        guide = sections["How to Choose the Right Option"]
        bullets = [n for n in guide if n.type == "bulletList"][0]
        assert len(bullets.content) == 1
        assert "Widget Pro" in bullets.content[0].content[0].content[0].text
        assert "None" not in bullets.content[0].content[0].content[0].text

    def test_outline_mismatch_falls_back_to_default(self, generator, sample_brief):
        sample_brief.outline = ["Only one heading"]
        draft = generator.generate(sample_brief)
        headings = [h for h, _ in _h2_sections(draft)]
        assert headings[0] == "Quick Comparison Overview"

    def test_deterministic_for_same_seed(self, topic_pool, fake_client, sample_brief):
        a = DraftGenerator(pool=topic_pool, client=fake_client, settings=Settings(), seed=3)
        b = DraftGenerator(pool=topic_pool, client=fake_client, settings=Settings(), seed=3)
        assert a.generate(sample_brief).content == b.generate(sample_brief).content


class TestMetadata:
    def test_seo_fields(self, generator, sample_brief):
        draft = generator.generate(sample_brief)
        assert draft.seo.meta_title == "Best Widget Tools 2025"
        assert draft.seo.meta_description == sample_brief.meta_description
        assert draft.seo.keywords == "widget tools, Widget Pro, widget comparison, team widgets"
        assert draft.excerpt.startswith("Discover the best widget tools 2025.")

    def test_tag_slugs_from_brief_tags(self, generator, sample_brief):
        sample_brief.tags = ["Team Widgets", "Widget Pro", "widget pro"]
        draft = generator.generate(sample_brief)
        assert draft.tag_slugs == ["team-widgets", "widget-pro"]

    def test_tag_slugs_fall_back_to_first_three_keywords(self, generator, sample_brief):
        sample_brief.tags = []
        draft = generator.generate(sample_brief)
        assert draft.tag_slugs == ["widget-tools", "widget-pro", "widget-comparison"]

    def test_slug_is_normalized(self, generator, sample_brief):
        sample_brief.slug = "  Best Widget Tools (2025)! "
        draft = generator.generate(sample_brief)
        assert draft.slug == "best-widget-tools-2025"

    def test_meta_title_and_description_clipped(self, generator, sample_brief):
        sample_brief.title = "An Extremely Long Title About Widget Tools That Goes On and On Forever 2025"
        sample_brief.meta_description = "x" * 200
        draft = generator.generate(sample_brief)
        assert len(draft.seo.meta_title) == 60
        assert draft.seo.meta_title.endswith("...")
        assert len(draft.seo.meta_description) == 160
        assert draft.seo.meta_description.endswith("...")
        assert len(draft.slug) <= 60

    def test_missing_meta_description_is_built(self, generator, sample_brief):
        sample_brief.meta_description = ""
        draft = generator.generate(sample_brief)
        assert draft.seo.meta_description.startswith("Compare the best widget tools 2025.")


class TestImages:
    def test_featured_and_embedded_images(self, generator, sample_brief):
        draft = generator.generate(sample_brief)
        assert len(draft.images) == 4
        assert draft.featured_image == draft.images[0].src
        srcs = [n.attrs["src"] for n in find_images(draft.content)]
        assert srcs == [img.src for img in draft.images]
        assert len(set(srcs)) == len(srcs)

    def test_unreachable_candidates_are_skipped(self, topic_pool, make_client, sample_brief):
        images = topic_pool.images["productivity"]
        # Every candidate but one answers 404
        client = make_client(statuses={url: 404 for url in images[1:]})
        generator = DraftGenerator(pool=topic_pool, client=client, settings=Settings(), seed=1)
        with pytest.raises(InsufficientImagesError) as exc_info:
            generator.generate(sample_brief)
        assert exc_info.value.required == 3

    def test_unknown_category_uses_fallback_pool(self, generator, sample_brief, topic_pool):
        sample_brief.category = "gardening"
        draft = generator.generate(sample_brief)
        assert draft.category_slug == "gardening"
        assert all(img.src in topic_pool.images["productivity"] for img in draft.images)

    def test_select_images_keeps_only_ok(self, make_client):
        urls = ["https://i/1", "https://i/2", "https://i/3", "https://i/4"]
        client = make_client(statuses={"https://i/2": 500}, errors=["https://i/4"])
        valid = select_images(urls, random.Random(0), client, count=4, minimum=2)
        assert sorted(valid) == ["https://i/1", "https://i/3"]

    def test_shuffled_candidates_is_seeded(self):
        urls = [f"https://i/{n}" for n in range(10)]
        first = shuffled_candidates(urls, random.Random(5), 4)
        second = shuffled_candidates(urls, random.Random(5), 4)
        assert first == second
        assert len(first) == 4


class TestBriefValidation:
    def test_empty_brief_raises(self, generator):
        with pytest.raises(InvalidBriefError) as exc_info:
            generator.generate(TopicBrief())
        assert exc_info.value.missing == ["title", "category", "slug"]

    def test_no_probe_for_empty_brief(self, generator, fake_client):
        with pytest.raises(InvalidBriefError):
            generator.generate(TopicBrief(title="Only a title"))
        assert fake_client.calls == []

    def test_unsluggable_slug_raises(self, generator, sample_brief, fake_client):
        sample_brief.slug = "???"
        with pytest.raises(InvalidBriefError) as exc_info:
            generator.generate(sample_brief)
        assert exc_info.value.missing == ["slug"]
        assert fake_client.calls == []


class TestTemplates:
    def test_rank_branches(self):
        top = render_text("overview", name="A", rank=0, has_commission=True)
        budget = render_text("overview", name="A", rank=2, has_commission=True)
        assert "top spot" in top
        assert "cost matters most" in budget

    def test_name_is_template_context(self):
        paragraphs = render_paragraphs("overview", name="Widget Pro", rank=1, has_commission=False)
        assert paragraphs
        assert "Widget Pro" in paragraphs[0]
        assert render_text("pricing", name="Widget Pro", has_commission=False).startswith("Widget Pro offers")

    def test_paragraph_split(self):
        paragraphs = render_paragraphs("intro", topic="Best X", count=3, names="A, B, C")
        assert len(paragraphs) == 3
        assert all("\n" not in p for p in paragraphs)

    def test_list_lines(self):
        assert len(render_lines("tips")) == 5
        assert render_lines("features", name="Widget")[2].startswith("Seamless integrations")
