"""Folder lookup by path, plus breadcrumb trail."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from bucketview.services.tree_builder import SEPARATOR, FolderNode, split_key

ROOT_LABEL = "Root"


@dataclass(frozen=True)
class Breadcrumb:
    label: str
    path: tuple[str, ...]


def resolve(root: FolderNode, path: Sequence[str]) -> FolderNode | None:
    """Follow ``path`` down from ``root``; None when any segment is missing.

    A missing segment usually means the path came from an older tree.
    """
    current = root
    for name in path:
        for child in current.subfolders:
            if child.name == name:
                current = child
                break
        else:
            return None
    return current


def breadcrumbs(path: Sequence[str]) -> list[Breadcrumb]:
    crumbs = [Breadcrumb(label=ROOT_LABEL, path=())]
    for index, name in enumerate(path):
        crumbs.append(Breadcrumb(label=name, path=tuple(path[:index + 1])))
    return crumbs


def split_path(text: str | None) -> tuple[str, ...]:
    """'docs/2023' -> ('docs', '2023'); empty segments are ignored."""
    return tuple(split_key(text or ""))


def join_path(path: Sequence[str]) -> str:
    return SEPARATOR.join(path)
