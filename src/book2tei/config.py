"""Environment-driven settings for book2tei.

Every setting is read once at import time from a ``BOOK2TEI_*`` variable and
falls back to the matching ``DEFAULT_*`` value.
"""

from __future__ import annotations

import os
from pathlib import Path

# Downloaded source documents, keyed by URL digest.
DEFAULT_CACHE_DIR = ".book2tei_cache"
# A value <= 0 keeps cached downloads forever.
DEFAULT_CACHE_TTL_SECONDS = 24 * 60 * 60

DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "book2tei/0.1 (TEI conversion of published books)"

# Root logger level for the command line; -v and -vv override it.
DEFAULT_LOG_LEVEL = "WARNING"

BOOK2TEI_CACHE_PATH = Path(os.getenv("BOOK2TEI_CACHE_PATH", DEFAULT_CACHE_DIR)).expanduser().resolve()
BOOK2TEI_CACHE_TTL_SECONDS = int(os.getenv("BOOK2TEI_CACHE_TTL_SECONDS", str(DEFAULT_CACHE_TTL_SECONDS)))

BOOK2TEI_FETCH_TIMEOUT_S = float(os.getenv("BOOK2TEI_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
BOOK2TEI_FETCH_MAX_RETRIES = int(os.getenv("BOOK2TEI_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
BOOK2TEI_FETCH_BACKOFF_S = float(os.getenv("BOOK2TEI_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
BOOK2TEI_USER_AGENT = os.getenv("BOOK2TEI_USER_AGENT", DEFAULT_USER_AGENT)

BOOK2TEI_LOG_LEVEL = os.getenv("BOOK2TEI_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
