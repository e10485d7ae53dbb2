"""Ideation strategies that produce a TopicBrief without the curated pool.

Every strategy implements ``generate_brief()``. A strategy that cannot come
up with anything returns the empty placeholder brief instead of raising.

Usage:
    selector = TopicSelector(ideator=LLMIdeator())
    brief = selector.select()
"""

from __future__ import annotations

import json
import logging
import random
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Any

from post_engine.common.config import Settings, get_anthropic_api_key, get_openai_api_key
from post_engine.common.text import generate_slug, title_year

from .models import AffiliateCandidate, TopicBrief, build_meta_description, default_outline
from .prompts import IDEATION_SYSTEM_PROMPT, build_ideation_prompt

logger = logging.getLogger(__name__)


class BaseIdeator(ABC):
    """Strategy interface for topic ideation."""

    @abstractmethod
    def generate_brief(self) -> TopicBrief:
        """Return a TopicBrief, or an empty one when nothing is available."""


def complete_brief(brief: TopicBrief, today: date | None = None) -> TopicBrief:
    """Fill derived fields (slug, tags, outline, meta description) left blank."""
    if brief.title and not brief.slug:
        brief.slug = generate_slug(brief.title)
    if not brief.tags:
        brief.tags = list(brief.target_keywords[:3])
    if not brief.outline:
        brief.outline = default_outline(brief.affiliates)
    if brief.title and not brief.meta_description:
        year = title_year(brief.title, (today or date.today()).year)
        brief.meta_description = build_meta_description(brief.title, year)
    return brief


# ---------------------------------------------------------------------------
# LLM ideation
# ---------------------------------------------------------------------------

class LLMIdeator(BaseIdeator):
    """Asks an LLM (OpenAI or Anthropic) for a topic brief as JSON."""

    def __init__(
        self,
        niches: list[str] | None = None,
        avoid_titles: list[str] | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or Settings.load()
        self.niches = niches or []
        self.avoid_titles = avoid_titles or []

    def generate_brief(self) -> TopicBrief:
        year = date.today().year
        user_prompt = build_ideation_prompt(self.niches, year, self.avoid_titles)
        try:
            response_text = self._call_llm(IDEATION_SYSTEM_PROMPT, user_prompt)
        except Exception as e:
            # Missing API key or any provider/API failure
            logger.error("LLM ideation failed, using placeholder brief: %s", e)
            return TopicBrief()
        brief = self.parse_response(response_text)
        if brief.is_empty():
            logger.warning("LLM ideation returned an unusable brief")
        else:
            logger.info("LLM proposed topic: %s", brief.title)
        return brief

    def parse_response(self, response_text: str) -> TopicBrief:
        """Parse LLM response JSON into a TopicBrief (placeholder on failure)."""
        # May be wrapped in ```json ... ```
        json_str = response_text or ""
        if "```json" in json_str:
            json_str = json_str.split("```json")[1].split("```")[0]
        elif "```" in json_str:
            json_str = json_str.split("```")[1].split("```")[0]

        try:
            data = json.loads(json_str.strip())
        except json.JSONDecodeError:
            logger.warning("Failed to parse LLM response as JSON, using placeholder brief")
            return TopicBrief()
        if not isinstance(data, dict):
            return TopicBrief()

        brief = TopicBrief.from_dict(data)
        if brief.category:
            brief.category = generate_slug(brief.category)
        return complete_brief(brief)

    # --- LLM Integration ---

    def _call_llm(self, system_prompt: str, user_prompt: str) -> str:
        if self.settings.llm.provider == "anthropic":
            return self._call_anthropic(system_prompt, user_prompt)
        return self._call_openai(system_prompt, user_prompt)

    def _call_openai(self, system_prompt: str, user_prompt: str) -> str:
        """Call OpenAI GPT API."""
        import openai

        client = openai.OpenAI(api_key=get_openai_api_key())
        response = client.chat.completions.create(
            model=self.settings.llm.openai_model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.settings.llm.temperature,
            max_tokens=self.settings.llm.max_tokens,
        )
        return response.choices[0].message.content or ""

    def _call_anthropic(self, system_prompt: str, user_prompt: str) -> str:
        """Call Anthropic Claude API."""
        import anthropic

        client = anthropic.Anthropic(api_key=get_anthropic_api_key())
        response = client.messages.create(
            model=self.settings.llm.anthropic_model,
            max_tokens=self.settings.llm.max_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
            temperature=self.settings.llm.temperature,
        )
        return response.content[0].text


# ---------------------------------------------------------------------------
# Product research ideation
# ---------------------------------------------------------------------------

class ResearchIdeator(BaseIdeator):
    """Builds comparison briefs from a product-research output file.

    The file holds ``{"products": [{"name", "url", "category", ...}]}``.
    Categories such as ``"Electronics - Headphones"`` are shortened to the
    part after the last `` - ``. Categories with at least three products
    become ``"Best {Category} {year}: Top 3 Picks Compared"``.
    """

    MIN_PRODUCTS = 3

    def __init__(
        self,
        research_path: str | Path | None = None,
        research_data: dict[str, Any] | None = None,
        rng: random.Random | None = None,
        today: date | None = None,
    ):
        if research_data is None and research_path is None:
            raise ValueError("Either research_path or research_data must be provided")
        self.research_path = Path(research_path) if research_path else None
        self._data = research_data
        self.rng = rng or random.Random()
        self.today = today or date.today()

    def _load(self) -> dict[str, Any]:
        if self._data is None:
            with open(self.research_path, encoding="utf-8") as f:
                self._data = json.load(f)
        return self._data

    def suggest_briefs(self) -> list[TopicBrief]:
        """All comparison briefs the research supports, in category order."""
        by_category: dict[str, list[dict]] = {}
        for product in self._load().get("products", []):
            if product.get("name") and product.get("url"):
                by_category.setdefault(product.get("category", ""), []).append(product)

        briefs = []
        year = self.today.year
        for category, products in by_category.items():
            if len(products) < self.MIN_PRODUCTS:
                continue
            short = category.split(" - ")[-1].strip() or "Products"
            top3 = products[: self.MIN_PRODUCTS]
            affiliates = [
                AffiliateCandidate(
                    name=p["name"][:50],
                    url=p["url"],
                    commission=p.get("commission", "N/A"),
                )
                for p in top3
            ]
            keywords = [f"best {short.lower()}", f"{short.lower()} comparison"]
            keywords += [a.name for a in affiliates]
            brief = TopicBrief(
                title=f"Best {short} {year}: Top {len(top3)} Picks Compared",
                category=generate_slug(short),
                affiliates=affiliates,
                target_keywords=keywords,
            )
            briefs.append(complete_brief(brief, self.today))
        return briefs

    def generate_brief(self) -> TopicBrief:
        briefs = self.suggest_briefs()
        if not briefs:
            logger.warning("No research category has %d+ products", self.MIN_PRODUCTS)
            return TopicBrief()
        return self.rng.choice(briefs)
