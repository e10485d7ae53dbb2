"""Prompts for LLM-based topic ideation.

The model proposes a topic; affiliate URLs it returns are probed later by the
asset validator like any other link.
"""

IDEATION_SYSTEM_PROMPT = """\
You are the editor of an affiliate-marketing blog that publishes in-depth
comparison guides for software and consumer products.

## Rules
1. Pick a topic with clear buyer intent ("best X", "X vs Y", "X review").
2. Only suggest affiliate programs that really exist, with their official URL.
3. Titles are 50-70 characters and include the current year.
4. Meta descriptions are 140-160 characters.
5. Respond with a single JSON object and nothing else.
"""


def build_ideation_prompt(
    niches: list[str],
    year: int,
    avoid_titles: list[str] | None = None,
) -> str:
    """Build the user prompt asking for one topic brief.

    Args:
        niches: Category slugs the blog covers (e.g. "productivity")
        year: Year the article targets
        avoid_titles: Titles already published, to avoid repeats

    Returns:
        Formatted user prompt string
    """
    niche_list = "\n".join(f"- {n}" for n in niches) or "- any"
    avoid_section = ""
    if avoid_titles:
        avoid_section = "\n## Already covered (do not repeat)\n" + "\n".join(
            f"- {t}" for t in avoid_titles
        )

    return f"""\
Propose one article for {year}.

## Niches (use one of these as "category")
{niche_list}
{avoid_section}
## Output format
{{
  "title": "...",
  "category": "category-slug",
  "keywords": ["primary keyword", "secondary keyword", "..."],
  "affiliates": [
    {{"name": "Product", "url": "https://...", "commission": "20%"}}
  ],
  "meta_description": "..."
}}

Return at least three affiliates and five keywords."""
