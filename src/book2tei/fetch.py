"""Load source documents from local files or HTTP(S) URLs, with caching.

Sources are returned as raw bytes so the parser can honour the document's
own encoding declaration.
"""

from __future__ import annotations

import logging
from pathlib import Path

from book2tei.cache_utils import (
    cache_dir_for,
    is_cache_fresh,
    mkdir_async,
    read_bytes_async,
    write_bytes_async,
)
from book2tei.config import BOOK2TEI_CACHE_PATH, BOOK2TEI_CACHE_TTL_SECONDS
from book2tei.exceptions import SourceNotAvailableError
from book2tei.http_utils import fetch_with_retries

logger = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


async def load_source(source: str, *, use_cache: bool = True) -> bytes:
    """Return the markup of ``source``, a local path or an HTTP(S) URL.

    Raises:
        SourceNotAvailableError: If the file does not exist or the URL is 404.
        FetchError: If a network error persists after retries.
    """
    if is_url(source):
        return await fetch_source_html(source, use_cache=use_cache)

    path = Path(source).expanduser()
    if not path.is_file():
        raise SourceNotAvailableError(f"Source file not found: {path}")
    logger.debug("Reading %s", path)
    return await read_bytes_async(path)


async def fetch_source_html(url: str, *, use_cache: bool = True) -> bytes:
    """Fetch a source document and cache it locally."""
    cache_dir = cache_dir_for(url, BOOK2TEI_CACHE_PATH)
    html_path = cache_dir / "source.html"

    if use_cache and is_cache_fresh(html_path, BOOK2TEI_CACHE_TTL_SECONDS):
        logger.debug("Using cached copy of %s", url)
        return await read_bytes_async(html_path)

    logger.info("Downloading %s", url)
    content = await fetch_with_retries(url)

    await mkdir_async(cache_dir, parents=True, exist_ok=True)
    await write_bytes_async(html_path, content)
    return content
