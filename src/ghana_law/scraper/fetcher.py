"""Rate-limited HTTP client for GhanaLII (ghalii.org).

 - One process-wide throttle: at least MIN_DELAY_MS between the end of one
   request and the start of the next, whatever thread is asking.
 - Fixed User-Agent identifying the corpus builder; HTML Accept header.
 - Retry with exponential backoff (2s, 4s, 8s) on 429/5xx and on transport
   errors. Other statuses (404, 301, 302...) come back to the caller as-is.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

import requests  # type: ignore[import-untyped]

from ghana_law import config

logger = logging.getLogger(__name__)

HEADERS = {
    'User-Agent': config.USER_AGENT,
    'Accept': 'text/html, application/xhtml+xml, */*',
}


class FetchError(RuntimeError):
    """Raised when a URL could not be fetched within the retry budget."""


@dataclass
class FetchResult:
    status: int
    body: str
    content_type: str


class _Throttle:
    def __init__(self, min_delay_ms: int) -> None:
        self._min_delay = min_delay_ms / 1000.0
        self._last_end: float | None = None
        self._lock = threading.Lock()

    def __enter__(self) -> "_Throttle":
        self._lock.acquire()
        if self._last_end is not None:
            elapsed = time.monotonic() - self._last_end
            if elapsed < self._min_delay:
                time.sleep(self._min_delay - elapsed)
        return self

    def __exit__(self, *exc) -> None:
        self._lock.release()

    def mark(self) -> None:
        self._last_end = time.monotonic()


_THROTTLE = _Throttle(config.MIN_DELAY_MS)


def _is_retryable(status: int) -> bool:
    return status == 429 or status >= 500


def fetch_with_rate_limit(url: str, max_retries: int = config.MAX_RETRIES) -> FetchResult:
    """Fetch a URL politely. Raises FetchError once `max_retries` retries are spent."""
    with _THROTTLE as throttle:
        last_problem = ''
        for attempt in range(max_retries + 1):
            try:
                response = requests.get(
                    url, headers=HEADERS, timeout=config.REQUEST_TIMEOUT, allow_redirects=False
                )
            except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
                throttle.mark()
                last_problem = str(e)
            else:
                throttle.mark()
                if not _is_retryable(response.status_code):
                    return FetchResult(
                        status=response.status_code,
                        body=response.text,
                        content_type=response.headers.get('content-type', ''),
                    )
                last_problem = f"HTTP {response.status_code}"

            if attempt < max_retries:
                backoff = 2 ** (attempt + 1)
                logger.warning(f"{last_problem} for {url}, retrying in {backoff}s (retry {attempt + 1}/{max_retries})")
                time.sleep(backoff)

    raise FetchError(f"Failed to fetch {url} after {max_retries} retries ({last_problem})")


def fetch_act_index(page: int = 0) -> FetchResult:
    """Fetch one page of the /legislation/ listing (paginated with ?page=N)."""
    url = f"{config.BASE_URL}/legislation/" if page == 0 else f"{config.BASE_URL}/legislation/?page={page}"
    return fetch_with_rate_limit(url)


def fetch_act_content(act_url: str) -> FetchResult:
    """Fetch an act page; accepts absolute URLs or AKN paths like /akn/gh/act/2012/843/eng@2012-05-10."""
    url = act_url if act_url.startswith('http') else f"{config.BASE_URL}{act_url}"
    return fetch_with_rate_limit(url)


__all__ = ['FetchError', 'FetchResult', 'fetch_with_rate_limit', 'fetch_act_index', 'fetch_act_content']
