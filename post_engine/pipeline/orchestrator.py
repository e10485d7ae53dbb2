"""Pipeline Orchestrator: Select, Generate, Review, Validate, Publish.

Stages run strictly in order. Each stage returns a value; the orchestrator
collects errors and warnings and stops at the first hard failure. Unexpected
exceptions are caught here and reported as a failed run.

Usage:
    orchestrator = PipelineOrchestrator.create(seed=42)
    result = orchestrator.run()
"""

from __future__ import annotations

import random
from pathlib import Path

from post_engine.common.config import ReviewPolicy, Settings, settings as default_settings
from post_engine.common.http_client import HTTPClient
from post_engine.common.logging import setup_logging
from post_engine.errors import InvalidBriefError, PostEngineError
from post_engine.pipeline.draft_generator import DraftGenerator
from post_engine.pipeline.publisher import DraftPublisher
from post_engine.pipeline.review import ReviewChecker, ReviewThresholds
from post_engine.pipeline.topic_selector import TopicBrief, TopicPool, TopicSelector
from post_engine.pipeline.validator import AssetValidator

from .models import PipelineResult, PipelineStage

logger = setup_logging(module_name="pipeline.orchestrator")


class PipelineOrchestrator:
    """Runs one article through every stage.

    Stages are injected so tests (or an LLM-backed writer) can replace any
    of them. Missing stages are built from settings.
    """

    def __init__(
        self,
        selector: TopicSelector | None = None,
        generator: DraftGenerator | None = None,
        reviewer: ReviewChecker | None = None,
        validator: AssetValidator | None = None,
        publisher: DraftPublisher | None = None,
        settings: Settings | None = None,
        review_policy: ReviewPolicy | None = None,
    ):
        self.settings = settings or default_settings
        self.selector = selector or TopicSelector()
        self.generator = generator or DraftGenerator(settings=self.settings)
        self.reviewer = reviewer or ReviewChecker(
            ReviewThresholds.from_settings(self.settings.pipeline)
        )
        self.validator = validator or AssetValidator(settings=self.settings)
        self.publisher = publisher or DraftPublisher(settings=self.settings)
        self.review_policy = ReviewPolicy(review_policy or self.settings.pipeline.review_policy)

    @classmethod
    def create(
        cls,
        seed: int | None = None,
        topic_pool_path: str | Path | None = None,
        db_path: str | None = None,
        settings: Settings | None = None,
    ) -> PipelineOrchestrator:
        """Build a pipeline whose stages share one topic pool, RNG and HTTP client."""
        settings = settings or default_settings
        pool = TopicPool.from_yaml(topic_pool_path or settings.pipeline.topic_pool_path)
        rng = random.Random(seed)
        client = HTTPClient(settings.http)
        return cls(
            selector=TopicSelector(pool=pool, rng=rng),
            generator=DraftGenerator(pool=pool, client=client, settings=settings, rng=rng),
            validator=AssetValidator(client=client, settings=settings),
            publisher=DraftPublisher(db_path=db_path, settings=settings),
            settings=settings,
        )

    def run(self, brief: TopicBrief | None = None) -> PipelineResult:
        """Run the pipeline, optionally for a given brief instead of selecting one."""
        result = PipelineResult()
        try:
            self._run(result, brief)
        except Exception as e:
            logger.exception("Pipeline failed at %s", result.stage.value)
            result.success = False
            result.errors.append(f"Pipeline error: {e}")
        return result

    def _run(self, result: PipelineResult, brief: TopicBrief | None) -> None:
        # Step 1: Topic
        result.stage = PipelineStage.SELECT
        logger.info("Step 1: Selecting topic...")
        if brief is None:
            brief = self.selector.select()
        missing = brief.missing_fields()
        if missing:
            result.errors.append(InvalidBriefError(missing).message)
            return
        result.title = brief.title
        result.category = brief.category

        # Step 2: Writing
        result.stage = PipelineStage.GENERATE
        logger.info("Step 2: Generating article...")
        try:
            draft = self.generator.generate(brief)
        except PostEngineError as e:
            result.errors.append(e.message)
            return
        result.excerpt = draft.excerpt
        result.category = draft.category_slug
        result.image_count = len(draft.images)
        result.link_count = len(draft.affiliate_links)

        # Step 3: Review
        result.stage = PipelineStage.REVIEW
        logger.info("Step 3: Reviewing article...")
        review = self.reviewer.review(draft)
        result.word_count = review.word_count
        soft = [f for f in review.feedback if f not in review.blocking]
        if not review.approved and self.review_policy == ReviewPolicy.STRICT:
            result.errors.extend(review.blocking)
            result.warnings.extend(soft)
            return
        result.warnings.extend(review.feedback)
        draft = review.draft

        # Step 4: Validation
        result.stage = PipelineStage.VALIDATE
        logger.info("Step 4: Validating content...")
        validation = self.validator.validate(draft)
        result.errors.extend(validation.errors)
        result.warnings.extend(validation.warnings)
        if not validation.valid:
            return

        # Step 5: Publishing
        result.stage = PipelineStage.PUBLISH
        logger.info("Step 5: Publishing as draft...")
        published = self.publisher.publish(draft)
        if not published.success:
            result.errors.append(published.error or "Publishing failed")
            return

        result.stage = PipelineStage.DONE
        result.success = True
        result.post_id = published.post_id
        result.post_slug = published.post_slug
        result.status = "DRAFT"
        logger.info("Pipeline completed successfully: %s", published.post_slug)
