"""Download source documents over HTTP with retries on transient failures."""

from __future__ import annotations

import asyncio
import logging
from typing import Final

import httpx

from book2tei.config import (
    BOOK2TEI_FETCH_BACKOFF_S,
    BOOK2TEI_FETCH_MAX_RETRIES,
    BOOK2TEI_FETCH_TIMEOUT_S,
    BOOK2TEI_USER_AGENT,
)
from book2tei.exceptions import FetchError, SourceNotAvailableError

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5
_ACCEPT: Final[str] = "application/xhtml+xml,text/html;q=0.9,*/*;q=0.5"


async def fetch_with_retries(url: str) -> bytes:
    """Download ``url`` and return the undecoded response body.

    Responses with a status in ``RETRY_STATUS_CODES`` and network errors are
    retried up to ``BOOK2TEI_FETCH_MAX_RETRIES`` times with exponential
    backoff. The body is left undecoded so the markup parser can apply the
    document's own charset declaration.

    Raises:
        SourceNotAvailableError: If the server answers 404.
        FetchError: If the download still fails after all retries.
    """
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(BOOK2TEI_FETCH_TIMEOUT_S),
        headers={"User-Agent": BOOK2TEI_USER_AGENT, "Accept": _ACCEPT},
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    ) as client:
        last_error: Exception | None = None
        for attempt in range(BOOK2TEI_FETCH_MAX_RETRIES + 1):
            if attempt:
                delay = BOOK2TEI_FETCH_BACKOFF_S * (2 ** (attempt - 1))
                logger.debug("Retrying %s in %.2fs (%s)", url, delay, last_error)
                await asyncio.sleep(delay)
            try:
                return await _download(client, url)
            except (httpx.RequestError, httpx.HTTPStatusError, _RetryableStatus) as exc:
                last_error = exc

    raise FetchError(f"Failed to fetch {url}: {last_error}")


class _RetryableStatus(Exception):
    """A response status worth retrying."""


async def _download(client: httpx.AsyncClient, url: str) -> bytes:
    response = await client.get(url)
    if response.status_code == 404:
        raise SourceNotAvailableError(f"Source document not found at {url}")
    if response.status_code in RETRY_STATUS_CODES:
        raise _RetryableStatus(f"HTTP {response.status_code} from {url}")
    response.raise_for_status()
    return response.content
