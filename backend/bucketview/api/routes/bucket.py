"""Bucket browsing routes — tree, session navigation, stateless browse."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from bucketview.schemas.bucket import (
    BrowseResponse,
    BucketStatus,
    FolderTree,
    NavigateRequest,
    PageRequest,
)
from bucketview.services import get_browser_service, get_key_source
from bucketview.services.browser import BrowserService, BrowserStatus, BrowseView
from bucketview.services.key_source import BucketKeySource
from bucketview.services.navigator import split_path
from bucketview.services.tree_builder import FolderNode

logger = logging.getLogger(__name__)
router = APIRouter()


def _unavailable(browser: BrowserService) -> HTTPException:
    if browser.status == BrowserStatus.LOADING:
        return HTTPException(503, "Bucket contents are still loading")
    return HTTPException(503, "Bucket contents unavailable")


def _require_root(browser: BrowserService) -> FolderNode:
    if browser.root is None:
        raise _unavailable(browser)
    return browser.root


def _respond(browser: BrowserService, view: BrowseView | None) -> BrowseResponse:
    if view is None:
        raise _unavailable(browser)
    return BrowseResponse.from_view(view)


@router.get("/status", response_model=BucketStatus)
async def bucket_status(
    browser: BrowserService = Depends(get_browser_service),
    source: BucketKeySource = Depends(get_key_source),
):
    """Ingestion state and counts for the current tree."""
    file_count = folder_count = 0
    if browser.root is not None:
        for node in browser.root.walk():
            file_count += node.file_count
            folder_count += node.subfolder_count

    return BucketStatus(
        status=browser.status.value,
        bucket_url=source.bucket_url,
        generation=browser.generation,
        key_count=browser.key_count,
        file_count=file_count,
        folder_count=folder_count,
        last_refreshed=browser.last_refreshed,
        error=browser.error,
    )


@router.post("/refresh", response_model=BrowseResponse)
async def refresh(browser: BrowserService = Depends(get_browser_service)):
    """Re-fetch the key list, rebuild the tree and return the session view."""
    installed = await browser.refresh()
    if not installed and browser.status == BrowserStatus.UNAVAILABLE:
        raise HTTPException(503, "Bucket contents unavailable")
    return _respond(browser, browser.view())


@router.get("/tree", response_model=FolderTree)
async def tree(browser: BrowserService = Depends(get_browser_service)):
    """Whole folder tree as a flat list of folders linked by path."""
    return FolderTree.from_node(_require_root(browser))


@router.get("/view", response_model=BrowseResponse)
async def current_view(browser: BrowserService = Depends(get_browser_service)):
    """Current folder and page of the session."""
    return _respond(browser, browser.view())


@router.post("/navigate", response_model=BrowseResponse)
async def navigate(body: NavigateRequest, browser: BrowserService = Depends(get_browser_service)):
    """Move the session to a folder; the page resets to 1."""
    _require_root(browser)
    if browser.navigate(body.path) is None:
        logger.info("Navigated to missing folder: %s", "/".join(body.path))
    return _respond(browser, browser.view())


@router.post("/page", response_model=BrowseResponse)
async def set_page(body: PageRequest, browser: BrowserService = Depends(get_browser_service)):
    """Select a page of the current folder (clamped to the last page)."""
    _require_root(browser)
    browser.set_page(body.page)
    return _respond(browser, browser.view())


@router.get("/browse", response_model=BrowseResponse)
async def browse(
    path: str = Query("", description="Folder path, '/'-separated"),
    page: int = Query(1, ge=1),
    browser: BrowserService = Depends(get_browser_service),
):
    """Stateless view of any folder page; the session is left untouched."""
    return _respond(browser, browser.browse(split_path(path), page))
