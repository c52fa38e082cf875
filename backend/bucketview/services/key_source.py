"""Bucket key listing over the public XML API (GCS / S3 compatible)."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from urllib.parse import quote

import httpx

from bucketview.config import settings

logger = logging.getLogger(__name__)


class KeySourceError(Exception):
    """The bucket listing could not be fetched or parsed."""


def object_url(key: str, bucket_url: str | None = None) -> str:
    """Download URL for ``key``; '/' is kept, everything else percent-encoded."""
    base = (bucket_url or settings.bucket_url).rstrip("/")
    return f"{base}/{quote(key, safe='/')}"


def _local_name(tag: str) -> str:
    # '{http://doc.s3.amazonaws.com/2006-03-01}Key' -> 'Key'
    return tag.rsplit("}", 1)[-1]


def parse_listing(xml_text: str) -> tuple[list[str], bool, str | None]:
    """Parse one ListBucketResult page.

    Returns ``(keys, is_truncated, next_marker)``; keys are the text of every
    ``Key`` element in document order.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise KeySourceError(f"Malformed bucket listing: {e}") from e

    keys: list[str] = []
    truncated = False
    next_marker: str | None = None
    for elem in root.iter():
        name = _local_name(elem.tag)
        if name == "Key":
            keys.append(elem.text or "")
        elif name == "IsTruncated":
            truncated = (elem.text or "").strip().lower() == "true"
        elif name == "NextMarker":
            next_marker = elem.text or None
    return keys, truncated, next_marker


class BucketKeySource:
    """Fetches every object key under a prefix, following continuation pages."""

    def __init__(
        self,
        bucket_url: str | None = None,
        prefix: str | None = None,
        timeout: float | None = None,
        max_pages: int | None = None,
    ):
        self._bucket_url = (bucket_url or settings.bucket_url).rstrip("/")
        self._prefix = settings.list_prefix if prefix is None else prefix
        self._timeout = settings.fetch_timeout_seconds if timeout is None else timeout
        self._max_pages = settings.max_list_pages if max_pages is None else max_pages
        if self._max_pages < 1:
            raise ValueError(f"max_pages must be >= 1, got {self._max_pages}")

    @property
    def bucket_url(self) -> str:
        return self._bucket_url

    def object_url(self, key: str) -> str:
        return object_url(key, self._bucket_url)

    async def fetch_keys(self) -> list[str]:
        """Return all keys in listing order. Raises KeySourceError on any failure."""
        keys: list[str] = []
        marker: str | None = None

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                for page in range(1, self._max_pages + 1):
                    params = {"prefix": self._prefix}
                    if marker:
                        params["marker"] = marker
                    resp = await client.get(self._bucket_url, params=params)
                    resp.raise_for_status()

                    page_keys, truncated, next_marker = parse_listing(resp.text)
                    keys.extend(page_keys)
                    if not truncated:
                        break

                    # Without a delimiter S3 omits NextMarker; continue after the last key
                    next_marker = next_marker or (page_keys[-1] if page_keys else None)
                    if not next_marker or next_marker == marker:
                        logger.warning("Listing truncated without a usable marker after page %d", page)
                        break
                    marker = next_marker
                else:
                    logger.warning(
                        "Listing still truncated after %d pages — %d keys kept",
                        self._max_pages, len(keys),
                    )
        except httpx.HTTPError as e:
            raise KeySourceError(f"Failed to fetch bucket contents: {e}") from e

        logger.info("Fetched %d keys from %s", len(keys), self._bucket_url)
        return keys
