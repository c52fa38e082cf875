"""Page slicing over a folder's file list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: tuple[T, ...]
    page_number: int
    page_size: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages


def total_pages(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return -(-count // page_size)


def paginate(items: Sequence[T], page_number: int, page_size: int) -> Page[T]:
    """Slice ``items`` for a 1-based page.

    Pages past the end (or below 1) give an empty slice; callers clamp with
    :func:`clamp_page` first when they want the nearest valid page instead.
    """
    pages = total_pages(len(items), page_size)
    if page_number < 1:
        window: tuple[T, ...] = ()
    else:
        start = (page_number - 1) * page_size
        window = tuple(items[start:start + page_size])
    return Page(items=window, page_number=page_number, page_size=page_size, total_pages=pages)


def clamp_page(page_number: int, pages: int) -> int:
    """Clamp into [1, max(pages, 1)]."""
    return min(max(page_number, 1), max(pages, 1))
