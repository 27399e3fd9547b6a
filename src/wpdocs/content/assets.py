"""Attachment size lookups.

A lookup maps an attachment URL to its size in bytes, or None when the size
cannot be determined. Lookups never raise.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Sequence

import requests

from ..utils.logging import get_logger

logger = get_logger(__name__)


class AssetSizeLookup(Protocol):
    def size_of(self, url: str) -> Optional[int]:
        ...


class NullSizeLookup:
    """Never resolves a size."""

    def size_of(self, url: str) -> Optional[int]:
        return None


class UploadsDirSizeLookup:
    """Resolve sizes from the uploads directory by swapping the base URL for a path."""

    def __init__(self, base_url: str, uploads_dir: Path | str):
        self.base_url = base_url.rstrip("/")
        self.uploads_dir = Path(uploads_dir)

    def local_path(self, url: str) -> Optional[Path]:
        if not url or not url.startswith(self.base_url + "/"):
            return None
        relative = url[len(self.base_url):].lstrip("/")
        if not relative:
            return None
        candidate = (self.uploads_dir / relative).resolve()
        # Reject ../ escapes out of the uploads directory
        if self.uploads_dir.resolve() not in candidate.parents:
            return None
        return candidate

    def size_of(self, url: str) -> Optional[int]:
        path = self.local_path(url)
        if path is None:
            return None
        try:
            return path.stat().st_size
        except OSError as exc:
            logger.debug(f"No local file for {url}: {exc}")
            return None


class HttpHeadSizeLookup:
    """Resolve sizes from the Content-Length of a HEAD request."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 5):
        self.session = session or requests.Session()
        self.timeout = timeout

    def size_of(self, url: str) -> Optional[int]:
        if not url:
            return None
        try:
            response = self.session.head(url, timeout=self.timeout, allow_redirects=True)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.debug(f"HEAD {url} failed: {exc}")
            return None

        length = response.headers.get("Content-Length")
        try:
            return int(length) if length is not None else None
        except ValueError:
            return None


class ChainedSizeLookup:
    """Try each lookup in turn; the first resolved size wins."""

    def __init__(self, lookups: Sequence[AssetSizeLookup]):
        self.lookups = list(lookups)

    def size_of(self, url: str) -> Optional[int]:
        for lookup in self.lookups:
            size = lookup.size_of(url)
            if size is not None:
                return size
        return None


def build_size_lookup(uploads: Dict[str, Any]) -> AssetSizeLookup:
    """
    Build the lookup described by the ``uploads`` config section.

    Args:
        uploads: Dict with base_url, dir, probe_http, http_timeout_seconds

    Returns:
        A lookup; NullSizeLookup when neither source is configured
    """
    lookups = []
    if uploads.get("dir"):
        lookups.append(UploadsDirSizeLookup(uploads["base_url"], uploads["dir"]))
    if uploads.get("probe_http"):
        lookups.append(HttpHeadSizeLookup(timeout=uploads.get("http_timeout_seconds", 5)))

    if not lookups:
        return NullSizeLookup()
    if len(lookups) == 1:
        return lookups[0]
    return ChainedSizeLookup(lookups)
