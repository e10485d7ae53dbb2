"""Replace broken image URLs inside a stored post.

Images are matched by alt text. Each ``--replace`` takes ``ALT=URL``.

Usage:
    python -m post_engine.pipeline.publisher.fix_images \\
        --slug best-ai-tools-productivity-2025 \\
        --replace "AI Generated Art Example=https://images.unsplash.com/photo-1547954575-855750c57bd3?w=1200&q=80"
"""

from __future__ import annotations

import argparse
import sys

from post_engine.common.logging import setup_logging

from .publisher import DraftPublisher

logger = setup_logging(module_name="pipeline.fix_images")


def parse_replacements(items: list[str]) -> dict[str, str]:
    """Turn ``["Alt text=https://..."]`` into ``{"Alt text": "https://..."}``."""
    updates = {}
    for item in items:
        alt, sep, url = item.partition("=")
        if not sep or not alt.strip() or not url.strip():
            raise ValueError(f"Expected ALT=URL, got: {item!r}")
        updates[alt.strip()] = url.strip()
    return updates


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Replace image URLs in a stored post by alt text")
    parser.add_argument("--slug", required=True, help="Slug of the post to update")
    parser.add_argument(
        "--replace",
        action="append",
        default=[],
        metavar="ALT=URL",
        help="Image alt text and its new URL (repeatable)",
    )
    parser.add_argument("--db", default=None, help="SQLite database path (default: settings)")
    args = parser.parse_args(argv)

    try:
        updates = parse_replacements(args.replace)
    except ValueError as e:
        parser.error(str(e))
    if not updates:
        parser.error("at least one --replace is required")

    try:
        changed = DraftPublisher(db_path=args.db).replace_post_images(args.slug, updates)
    except LookupError as e:
        logger.error("%s", e)
        sys.exit(1)

    print(f"Image URLs updated: {changed}")


if __name__ == "__main__":
    main()
