# Pipeline: topic to published draft
"""
Affiliate post pipeline:
- topic_selector: curated pool or ideation strategy
- draft_generator: rich-text article with images and affiliate links
- review: quality gates
- validator: asset reachability and document structure
- publisher: transactional draft insert
"""

from .models import PipelineResult, PipelineStage
from .orchestrator import PipelineOrchestrator

__all__ = ["PipelineOrchestrator", "PipelineResult", "PipelineStage"]
