"""Bucket browsing schemas — tree, folder view, navigation requests."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from bucketview.services.browser import BrowseView
from bucketview.services.navigator import Breadcrumb
from bucketview.services.tree_builder import FileEntry, FolderNode


class FileItem(BaseModel):
    """One listed object."""
    name: str
    full_key: str
    extension: str
    kind: str  # image | other
    url: str
    icon: str

    @classmethod
    def from_entry(cls, entry: FileEntry) -> "FileItem":
        return cls(
            name=entry.name,
            full_key=entry.full_key,
            extension=entry.extension,
            kind=entry.kind.value,
            url=entry.url,
            icon=entry.icon,
        )


class FolderSummary(BaseModel):
    """Subfolder card — name plus counts, without children."""
    name: str
    path: list[str]
    file_count: int
    subfolder_count: int

    @classmethod
    def from_node(cls, node: FolderNode) -> "FolderSummary":
        return cls(
            name=node.name,
            path=list(node.parts),
            file_count=node.file_count,
            subfolder_count=node.subfolder_count,
        )


class FolderRecord(BaseModel):
    """One folder of the flattened tree; children are referenced by path."""
    name: str
    path: str
    parent: str | None  # None for the root
    files: list[FileItem] = []
    subfolders: list[str] = []  # child paths, listing order

    @classmethod
    def from_node(cls, node: FolderNode) -> "FolderRecord":
        return cls(
            name=node.name,
            path=node.path,
            parent=node.path.rpartition("/")[0] if node.path else None,
            files=[FileItem.from_entry(f) for f in node.files],
            subfolders=[child.path for child in node.subfolders],
        )


class FolderTree(BaseModel):
    """Whole tree as a flat list, root first, depth-first in listing order.

    Flat so that serialization depth does not grow with folder depth.
    """
    folders: list[FolderRecord]

    @classmethod
    def from_node(cls, root: FolderNode) -> "FolderTree":
        return cls(folders=[FolderRecord.from_node(node) for node in root.walk()])


class BreadcrumbItem(BaseModel):
    label: str
    path: list[str]

    @classmethod
    def from_crumb(cls, crumb: Breadcrumb) -> "BreadcrumbItem":
        return cls(label=crumb.label, path=list(crumb.path))


class BrowseResponse(BaseModel):
    """Derived view of one folder page."""
    path: list[str]
    folder_missing: bool
    breadcrumbs: list[BreadcrumbItem]
    subfolders: list[FolderSummary]
    files: list[FileItem]
    page: int
    page_size: int
    total_pages: int
    total_files: int
    has_previous: bool
    has_next: bool

    @classmethod
    def from_view(cls, view: BrowseView) -> "BrowseResponse":
        page = view.page
        return cls(
            path=list(view.path),
            folder_missing=view.folder_missing,
            breadcrumbs=[BreadcrumbItem.from_crumb(c) for c in view.breadcrumbs],
            subfolders=[FolderSummary.from_node(n) for n in view.subfolders],
            files=[FileItem.from_entry(f) for f in page.items],
            page=page.page_number,
            page_size=page.page_size,
            total_pages=page.total_pages,
            total_files=view.folder.file_count if view.folder else 0,
            has_previous=page.has_previous,
            has_next=page.has_next,
        )


class BucketStatus(BaseModel):
    """Ingestion state of the current tree."""
    status: str  # loading | ready | unavailable
    bucket_url: str
    generation: int
    key_count: int
    file_count: int
    folder_count: int
    last_refreshed: datetime | None = None
    error: str | None = None


class NavigateRequest(BaseModel):
    path: list[str] = []


class PageRequest(BaseModel):
    page: int = Field(ge=1)
