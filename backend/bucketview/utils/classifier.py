"""File-name classification — extension, kind, listing eligibility, icon."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FileKind(str, Enum):
    IMAGE = "image"
    OTHER = "other"


IMAGE_EXTENSIONS: frozenset[str] = frozenset({"jpg", "jpeg", "png", "gif", "webp"})
ALLOWED_EXTENSIONS: frozenset[str] = IMAGE_EXTENSIONS | {"csv", "pdf", "xlsx", "docx", "txt"}

IMAGE_ICON = "🖼️"
DEFAULT_ICON = "📄"
ICONS: dict[str, str] = {
    "pdf": "📄",
    "csv": "📊",
    "xlsx": "📊",
    "docx": "📝",
    "txt": "📄",
}


@dataclass(frozen=True)
class Classification:
    extension: str
    kind: FileKind


def file_extension(file_name: str) -> str:
    """Lower-cased suffix after the last '.', or '' when there is none."""
    _, dot, suffix = file_name.rpartition(".")
    return suffix.lower() if dot else ""


def classify(
    file_name: str,
    image_extensions: frozenset[str] = IMAGE_EXTENSIONS,
) -> Classification:
    extension = file_extension(file_name)
    kind = FileKind.IMAGE if extension in image_extensions else FileKind.OTHER
    return Classification(extension=extension, kind=kind)


def is_eligible(extension: str, allowed: frozenset[str] = ALLOWED_EXTENSIONS) -> bool:
    """Whether a file with this extension is listed at all."""
    return bool(extension) and extension in allowed


def icon_for(extension: str, image_extensions: frozenset[str] = IMAGE_EXTENSIONS) -> str:
    if extension in image_extensions:
        return IMAGE_ICON
    return ICONS.get(extension, DEFAULT_ICON)
