"""Business logic services — singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bucketview.config import settings

if TYPE_CHECKING:
    from bucketview.services.browser import BrowserService
    from bucketview.services.key_source import BucketKeySource

logger = logging.getLogger(__name__)

_key_source: BucketKeySource | None = None
_browser_service: BrowserService | None = None


def init_services(key_source: BucketKeySource | None = None) -> None:
    """Create and wire up all service singletons."""
    global _key_source, _browser_service

    from bucketview.services.browser import BrowserService
    from bucketview.services.key_source import BucketKeySource

    _key_source = key_source or BucketKeySource()
    _browser_service = BrowserService(_key_source, page_size=settings.page_size)
    logger.info(
        "Services initialized (bucket %s, page size %d)",
        _key_source.bucket_url, settings.page_size,
    )


def shutdown_services() -> None:
    """Drop the singletons; the next init starts from an empty tree."""
    global _key_source, _browser_service
    _key_source = None
    _browser_service = None


def get_key_source() -> BucketKeySource:
    if _key_source is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _key_source


def get_browser_service() -> BrowserService:
    if _browser_service is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _browser_service
