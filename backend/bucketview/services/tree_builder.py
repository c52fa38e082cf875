"""Flat key list -> folder tree, built in one pass over the key segments."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable

from bucketview.services.key_source import object_url
from bucketview.utils.classifier import (
    ALLOWED_EXTENSIONS,
    IMAGE_EXTENSIONS,
    FileKind,
    classify,
    icon_for,
    is_eligible,
)

logger = logging.getLogger(__name__)

SEPARATOR = "/"

ReferenceBuilder = Callable[[str], str]


@dataclass(frozen=True)
class FileEntry:
    name: str
    full_key: str
    extension: str
    kind: FileKind
    url: str
    icon: str


@dataclass(frozen=True)
class FolderNode:
    """One path segment. Immutable once :func:`build_tree` returns."""

    name: str
    path: str
    files: tuple[FileEntry, ...] = ()
    subfolders: tuple["FolderNode", ...] = ()

    @property
    def parts(self) -> tuple[str, ...]:
        return tuple(self.path.split(SEPARATOR)) if self.path else ()

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def subfolder_count(self) -> int:
        return len(self.subfolders)

    def walk(self) -> Iterable["FolderNode"]:
        """Yield this node and every descendant, depth-first in listing order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.subfolders))


@dataclass
class _PendingFolder:
    name: str
    path: str
    files: list[FileEntry] = field(default_factory=list)
    subfolders: list["_PendingFolder"] = field(default_factory=list)


def _depth(path: str) -> int:
    return path.count(SEPARATOR) + 1 if path else 0


def _freeze(folders: dict[str, _PendingFolder]) -> FolderNode:
    """Freeze every pending folder, deepest paths first, without recursion.

    Children always sit one level below their parent, so by the time a
    folder is frozen all of its subfolders already are.
    """
    frozen: dict[str, FolderNode] = {}
    for path in sorted(folders, key=_depth, reverse=True):
        pending = folders[path]
        frozen[path] = FolderNode(
            name=pending.name,
            path=pending.path,
            files=tuple(pending.files),
            subfolders=tuple(frozen[child.path] for child in pending.subfolders),
        )
    return frozen[""]


def split_key(key: str) -> list[str]:
    """Split on the separator, dropping empty segments ('a//b', '/a/', '')."""
    return [segment for segment in key.split(SEPARATOR) if segment]


def build_tree(
    keys: Iterable[str],
    reference_builder: ReferenceBuilder | None = None,
    image_extensions: frozenset[str] = IMAGE_EXTENSIONS,
    allowed_extensions: frozenset[str] = ALLOWED_EXTENSIONS,
) -> FolderNode:
    """Build the root folder for an ordered key listing.

    Folders are created on first reference along every key's path, whether
    or not the key's leaf is eligible, and kept in first-seen order. Keys
    whose extension is not allowed are dropped. A file and a folder may
    share a name at the same level; both are kept.
    """
    to_url = reference_builder or object_url
    root = _PendingFolder(name="", path="")
    folders: dict[str, _PendingFolder] = {"": root}
    listed = dropped = 0

    for key in keys:
        segments = split_key(key)
        if not segments:
            continue

        parent = root
        cumulative = ""
        for segment in segments[:-1]:
            cumulative = f"{cumulative}{SEPARATOR}{segment}" if cumulative else segment
            folder = folders.get(cumulative)
            if folder is None:
                folder = _PendingFolder(name=segment, path=cumulative)
                parent.subfolders.append(folder)
                folders[cumulative] = folder
            parent = folder

        leaf = segments[-1]
        info = classify(leaf, image_extensions)
        if not is_eligible(info.extension, allowed_extensions):
            dropped += 1
            continue

        parent.files.append(FileEntry(
            name=leaf,
            full_key=key,
            extension=info.extension,
            kind=info.kind,
            url=to_url(key),
            icon=icon_for(info.extension, image_extensions),
        ))
        listed += 1

    logger.debug(
        "Built tree: %d files, %d folders, %d keys dropped",
        listed, len(folders) - 1, dropped,
    )
    return _freeze(folders)
