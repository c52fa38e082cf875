"""Browser session — owns the current tree snapshot, location and page."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Sequence

from bucketview.config import settings
from bucketview.services.key_source import KeySourceError
from bucketview.services.navigator import Breadcrumb, breadcrumbs, join_path, resolve
from bucketview.services.tree_builder import FileEntry, FolderNode, build_tree
from bucketview.utils.pagination import Page, clamp_page, paginate, total_pages

if TYPE_CHECKING:
    from bucketview.services.key_source import BucketKeySource

logger = logging.getLogger(__name__)


class BrowserStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class BrowseView:
    path: tuple[str, ...]
    folder: FolderNode | None
    page: Page[FileEntry]
    breadcrumbs: tuple[Breadcrumb, ...]

    @property
    def folder_missing(self) -> bool:
        return self.folder is None

    @property
    def subfolders(self) -> tuple[FolderNode, ...]:
        return self.folder.subfolders if self.folder else ()


def build_view(
    root: FolderNode,
    path: Sequence[str],
    page_number: int,
    page_size: int,
) -> BrowseView:
    """Derive the visible slice for ``path``; the page is clamped to the folder."""
    path = tuple(path)
    folder = resolve(root, path)
    files = folder.files if folder else ()
    page_number = clamp_page(page_number, total_pages(len(files), page_size))
    return BrowseView(
        path=path,
        folder=folder,
        page=paginate(files, page_number, page_size),
        breadcrumbs=tuple(breadcrumbs(path)),
    )


class BrowserService:
    """Holds one built tree at a time and the consumer's position in it.

    A refresh builds a new tree and swaps the reference; a built tree is
    never modified. Overlapping refreshes are resolved by generation: only
    the most recently started one may install its result.
    """

    def __init__(self, key_source: BucketKeySource, page_size: int | None = None):
        self._source = key_source
        self._page_size = page_size or settings.page_size
        if self._page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self._page_size}")

        self._root: FolderNode | None = None
        self._status = BrowserStatus.LOADING
        self._error: str | None = None
        self._generation = 0
        self._key_count = 0
        self._last_refreshed: datetime | None = None

        self._path: tuple[str, ...] = ()
        self._page = 1

    @property
    def status(self) -> BrowserStatus:
        return self._status

    @property
    def root(self) -> FolderNode | None:
        return self._root

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def key_count(self) -> int:
        return self._key_count

    @property
    def last_refreshed(self) -> datetime | None:
        return self._last_refreshed

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def path(self) -> tuple[str, ...]:
        return self._path

    @property
    def page(self) -> int:
        return self._page

    async def refresh(self) -> bool:
        """Fetch the key list and rebuild the tree. Returns True if installed."""
        self._generation += 1
        generation = self._generation

        try:
            keys = await self._source.fetch_keys()
        except KeySourceError as e:
            if generation != self._generation:
                logger.info("Ignoring failure of superseded refresh #%d", generation)
                return False
            self._root = None
            self._key_count = 0
            self._status = BrowserStatus.UNAVAILABLE
            self._error = str(e)
            logger.error("Bucket contents unavailable: %s", e)
            return False

        root = build_tree(keys, reference_builder=self._source.object_url)
        if generation != self._generation:
            logger.info(
                "Discarding result of refresh #%d (refresh #%d is newer)",
                generation, self._generation,
            )
            return False

        self._root = root
        self._key_count = len(keys)
        self._status = BrowserStatus.READY
        self._error = None
        self._last_refreshed = datetime.now(timezone.utc)

        folder = resolve(root, self._path)
        if folder is None:
            logger.info("Folder '%s' gone after refresh — back to root", join_path(self._path))
            self._path = ()
            self._page = 1
        else:
            self._page = clamp_page(self._page, total_pages(folder.file_count, self._page_size))

        logger.info("Refresh #%d installed: %d keys", generation, len(keys))
        return True

    def navigate(self, path: Sequence[str]) -> FolderNode | None:
        """Move to ``path`` and reset to page 1. Returns the folder, or None if missing."""
        self._path = tuple(path)
        self._page = 1
        if self._root is None:
            return None
        return resolve(self._root, self._path)

    def set_page(self, page_number: int) -> int:
        """Select a page of the current folder, clamped to the valid range."""
        folder = resolve(self._root, self._path) if self._root else None
        count = folder.file_count if folder else 0
        self._page = clamp_page(page_number, total_pages(count, self._page_size))
        return self._page

    def view(self) -> BrowseView | None:
        """Current folder, page slice and breadcrumbs; None until a tree is loaded."""
        if self._root is None:
            return None
        return build_view(self._root, self._path, self._page, self._page_size)

    def browse(self, path: Sequence[str], page_number: int = 1) -> BrowseView | None:
        """Same as :meth:`view` for an explicit location, without moving the session."""
        if self._root is None:
            return None
        return build_view(self._root, path, page_number, self._page_size)
