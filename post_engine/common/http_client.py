"""HTTP client for reachability probes (HEAD requests).

Wraps a requests.Session with:
- explicit per-request timeout
- random User-Agent rotation
- retries with exponential backoff on connection errors, 5xx and 429
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import requests
from fake_useragent import UserAgent

from .config import HTTPSettings, settings

logger = logging.getLogger(__name__)

_RETRY_STATUSES = {429, 500, 502, 503, 504}


@dataclass
class ProbeResult:
    """Outcome of a single HEAD probe."""
    url: str
    status_code: int | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        """True for a 2xx final status."""
        return self.status_code is not None and 200 <= self.status_code < 300

    @property
    def reached(self) -> bool:
        """True when the server answered at all."""
        return self.status_code is not None


class HTTPClient:
    """Sequential HEAD prober shared by the generator and the validator."""

    def __init__(self, config: HTTPSettings | None = None) -> None:
        self.config = config or settings.http
        self._session = requests.Session()
        self._ua = UserAgent(fallback=self.config.user_agent)

    def _headers(self) -> dict[str, str]:
        agent = self._ua.random if self.config.rotate_user_agent else self.config.user_agent
        return {
            "User-Agent": agent,
            "Accept": "*/*",
        }

    def head(self, url: str, allow_redirects: bool = True) -> ProbeResult:
        """Send a HEAD request and report the final status.

        Never raises for network problems; the error text is returned in
        the ProbeResult instead.
        """
        if not url:
            return ProbeResult(url=url, error="empty URL")

        result = ProbeResult(url=url)
        for attempt in range(self.config.max_retries):
            try:
                resp = self._session.head(
                    url,
                    headers=self._headers(),
                    allow_redirects=allow_redirects,
                    timeout=self.config.request_timeout,
                )
            except requests.RequestException as exc:
                result = ProbeResult(url=url, error=f"{type(exc).__name__}: {exc}")
            else:
                result = ProbeResult(url=url, status_code=resp.status_code)
                if resp.status_code not in _RETRY_STATUSES:
                    return result

            if attempt + 1 < self.config.max_retries:
                wait_time = self.config.backoff_base ** attempt
                logger.warning(
                    "Probe failed (attempt %d/%d) for %s: %s, retrying in %.1fs",
                    attempt + 1,
                    self.config.max_retries,
                    url,
                    result.error or result.status_code,
                    wait_time,
                )
                time.sleep(wait_time)

        return result

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
