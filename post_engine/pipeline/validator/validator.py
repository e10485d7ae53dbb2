"""Asset Validator: reachability probes plus a structural document check.

- Embedded and featured images must answer a HEAD probe with 2xx (fatal).
- Affiliate links are probed following redirects; anything other than 2xx or
  403 is a warning, since many affiliate hosts refuse HEAD requests.
- The document tree must be well formed (fatal).
"""

from __future__ import annotations

from post_engine.common.config import Settings, settings as default_settings
from post_engine.common.http_client import HTTPClient, ProbeResult
from post_engine.common.logging import setup_logging
from post_engine.pipeline.draft_generator.document import validate_structure
from post_engine.pipeline.draft_generator.models import ArticleDraft

from .models import ValidationResult

logger = setup_logging(module_name="pipeline.validator")

# Affiliate hosts commonly block HEAD requests with 403
TOLERATED_LINK_STATUSES = {403}


class AssetValidator:
    """Probes every asset referenced by a draft."""

    def __init__(self, client: HTTPClient | None = None, settings: Settings | None = None):
        self.settings = settings or default_settings
        self._client = client
        self._cache: dict[str, ProbeResult] = {}

    @property
    def client(self) -> HTTPClient:
        if self._client is None:
            self._client = HTTPClient(self.settings.http)
        return self._client

    def _probe(self, url: str) -> ProbeResult:
        if url not in self._cache:
            self._cache[url] = self.client.head(url, allow_redirects=True)
        return self._cache[url]

    def validate(self, draft: ArticleDraft) -> ValidationResult:
        self._cache.clear()
        result = ValidationResult()

        for img in draft.images:
            probe = self._probe(img.src)
            if probe.ok:
                logger.info("Image ✓: %s", img.alt)
                continue
            logger.info("Image ✗: %s", img.alt)
            if probe.reached:
                result.errors.append(
                    f"Broken image: {img.alt} - {img.src} (status {probe.status_code})"
                )
            else:
                result.errors.append(f"Image fetch failed: {img.alt} - {img.src}")

        if not draft.featured_image:
            result.errors.append("Missing featured image")
        else:
            probe = self._probe(draft.featured_image)
            if probe.reached and not probe.ok:
                result.errors.append(
                    f"Broken featured image: {draft.featured_image} (status {probe.status_code})"
                )
            elif not probe.reached:
                result.errors.append(f"Featured image fetch failed: {draft.featured_image}")

        for aff in draft.affiliate_links:
            probe = self._probe(aff.url)
            if probe.ok or probe.status_code in TOLERATED_LINK_STATUSES:
                continue
            if probe.reached:
                result.warnings.append(
                    f"Affiliate link may be broken: {aff.text} - {aff.url} (status {probe.status_code})"
                )
            else:
                result.warnings.append(f"Could not verify affiliate link: {aff.text} - {aff.url}")

        result.errors.extend(validate_structure(draft.content))

        logger.info(
            "Validation %s: %d errors, %d warnings",
            "passed" if result.valid else "failed",
            len(result.errors),
            len(result.warnings),
        )
        return result
