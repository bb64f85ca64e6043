"""Cache utilities for managing local file caching."""

from __future__ import annotations

import asyncio
import hashlib
from datetime import datetime, timezone
from pathlib import Path


def is_cache_fresh(path: Path, ttl_seconds: int) -> bool:
    """Check if a cached file is still fresh based on its modification time.

    Args:
        path: Path to the cached file.
        ttl_seconds: Time-to-live in seconds. If <= 0, cache is considered
            fresh indefinitely (cache forever mode).

    Returns:
        True if the cache is fresh and usable, False otherwise.
    """
    if not path.exists():
        return False
    if ttl_seconds <= 0:
        return True
    mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    age_seconds = (datetime.now(timezone.utc) - mtime).total_seconds()
    return age_seconds <= ttl_seconds


def cache_dir_for(url: str, base_path: Path) -> Path:
    """Get the cache directory for a source URL.

    The directory name is a short digest of the URL, so any URL maps to a
    safe and stable file name.

    Args:
        url: The source document URL.
        base_path: The base cache directory path.

    Returns:
        Path to the cache directory for this URL.
    """
    digest = hashlib.sha256(url.strip().encode("utf-8")).hexdigest()[:16]
    return base_path / digest


async def mkdir_async(
    path: Path, parents: bool = False, exist_ok: bool = False
) -> None:
    """Create a directory asynchronously using a thread pool."""
    await asyncio.to_thread(path.mkdir, parents=parents, exist_ok=exist_ok)


async def read_bytes_async(path: Path) -> bytes:
    """Read raw bytes from a file asynchronously using a thread pool."""
    return await asyncio.to_thread(path.read_bytes)


async def write_bytes_async(path: Path, content: bytes) -> None:
    """Write raw bytes to a file asynchronously using a thread pool."""
    await asyncio.to_thread(path.write_bytes, content)
