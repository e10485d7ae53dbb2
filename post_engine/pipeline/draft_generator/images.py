"""Image selection for generated articles.

Candidates come from the category's image pool, shuffled with the caller's
RNG, and are kept only when a HEAD probe succeeds.
"""

from __future__ import annotations

import logging
import random

from post_engine.common.http_client import HTTPClient
from post_engine.errors import InsufficientImagesError

logger = logging.getLogger(__name__)


def shuffled_candidates(urls: list[str], rng: random.Random, count: int) -> list[str]:
    """Shuffle a copy of the pool and take the first ``count`` URLs."""
    candidates = list(dict.fromkeys(urls))
    rng.shuffle(candidates)
    return candidates[:count]


def verify_images(urls: list[str], client: HTTPClient) -> list[str]:
    """Return the URLs whose HEAD probe is 2xx, in the given order."""
    valid = []
    for url in urls:
        result = client.head(url)
        if result.ok:
            valid.append(url)
        else:
            logger.warning(
                "Image rejected: %s (%s)", url, result.error or f"status {result.status_code}"
            )
    return valid


def select_images(
    pool_urls: list[str],
    rng: random.Random,
    client: HTTPClient,
    count: int = 4,
    minimum: int = 3,
) -> list[str]:
    """Pick up to ``count`` reachable images from the pool.

    Raises:
        InsufficientImagesError: fewer than ``minimum`` candidates are reachable.
    """
    valid = verify_images(shuffled_candidates(pool_urls, rng, count), client)
    if len(valid) < minimum:
        raise InsufficientImagesError(found=len(valid), required=minimum)
    return valid
