"""Review Checker module: word, link and image gates plus length feedback."""

from .checker import ReviewChecker
from .models import ReviewResult, ReviewThresholds

__all__ = ["ReviewChecker", "ReviewResult", "ReviewThresholds"]
