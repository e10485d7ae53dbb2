# Topic Selector: curated pool or injected ideation strategy
"""
Topic Selector module: produces the TopicBrief for one pipeline run.

Topics come from the YAML topic pool (seedable random choice) or from an
ideation strategy (LLM, product research).
"""

from .ideation import BaseIdeator, LLMIdeator, ResearchIdeator
from .models import AffiliateCandidate, TopicBrief, default_outline
from .pool import PoolTopic, TopicPool
from .selector import TopicSelector

__all__ = [
    "AffiliateCandidate",
    "BaseIdeator",
    "LLMIdeator",
    "PoolTopic",
    "ResearchIdeator",
    "TopicBrief",
    "TopicPool",
    "TopicSelector",
    "default_outline",
]
