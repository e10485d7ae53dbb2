"""CLI entry point for a scheduled pipeline run.

Prints a progress log, then a JSON notification between marker lines for the
calling scheduler. Exits 0 on success and 1 otherwise.

Usage:
    python -m post_engine.pipeline.main
    python -m post_engine.pipeline.main --seed 42 --topic-pool config/topic_pool.yaml
    python -m post_engine.pipeline.main --init-db
"""

from __future__ import annotations

import argparse
import json
import sys

from post_engine.common.config import settings
from post_engine.common.database import init_db
from post_engine.common.logging import setup_logging
from post_engine.pipeline.publisher import DraftPublisher

from .models import NOTIFICATION_END, NOTIFICATION_START, PipelineResult
from .orchestrator import PipelineOrchestrator

logger = setup_logging(module_name="pipeline.main")


def _print_summary(result: PipelineResult) -> None:
    """Print a human-readable summary of the run."""
    state = "SUCCESS" if result.success else f"FAILED at {result.stage.value}"
    print(f"\n{'=' * 60}")
    print(f"  Affiliate Post Pipeline - {state}")
    print(f"{'=' * 60}")
    if result.title:
        print(f"  Title:     {result.title}")
    if result.post_slug:
        print(f"  Slug:      {result.post_slug}")
        print(f"  Post ID:   {result.post_id}")
    print(f"  Words:     {result.word_count}")
    print(f"  Images:    {result.image_count}")
    print(f"  Links:     {result.link_count}")
    print()

    if result.errors:
        print("  Errors:")
        for err in result.errors:
            print(f"    - {err}")
        print()
    if result.warnings:
        print("  Warnings:")
        for warning in result.warnings:
            print(f"    - {warning}")
        print()


def print_notification(result: PipelineResult) -> None:
    print(NOTIFICATION_START)
    print(json.dumps(result.to_notification(), ensure_ascii=False))
    print(NOTIFICATION_END)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Generate one affiliate article and store it as a DRAFT post",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="RNG seed for topic and image selection (default: random)",
    )
    parser.add_argument(
        "--topic-pool",
        default=None,
        help="Path to the topic pool YAML (default: TOPIC_POOL_PATH or config/topic_pool.yaml)",
    )
    parser.add_argument(
        "--db",
        default=None,
        help="SQLite database path (default: DATABASE_URL or data/blog.db)",
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        default=False,
        help="Create the schema and seed the admin account before running",
    )
    args = parser.parse_args(argv)

    if sys.stdout.encoding and sys.stdout.encoding.lower() != "utf-8":
        sys.stdout.reconfigure(encoding="utf-8")

    logger.info("Starting affiliate post pipeline...")
    try:
        db_path = args.db or settings.database.db_path
        if args.init_db:
            init_db(db_path)
            DraftPublisher(db_path=db_path).seed()

        orchestrator = PipelineOrchestrator.create(
            seed=args.seed,
            topic_pool_path=args.topic_pool,
            db_path=db_path,
        )
        result = orchestrator.run()
    except Exception as e:
        logger.exception("Pipeline could not start")
        result = PipelineResult(success=False, errors=[f"Pipeline error: {e}"])

    _print_summary(result)
    print_notification(result)
    sys.exit(0 if result.success else 1)


if __name__ == "__main__":
    main()
