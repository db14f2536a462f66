from __future__ import annotations

from declutter.scan.types import Category, FileRecord

# Declared order is the match order; the first category that matches wins.
CATEGORY_TABLE: tuple[tuple[Category, frozenset[str], frozenset[str]], ...] = (
    (
        Category.IMAGES,
        frozenset(
            {
                "image/jpeg",
                "image/png",
                "image/gif",
                "image/bmp",
                "image/webp",
                "image/svg+xml",
                "image/tiff",
            }
        ),
        frozenset({"jpg", "jpeg", "png", "gif", "bmp", "webp", "svg", "tiff", "tif"}),
    ),
    (
        Category.VIDEOS,
        frozenset(
            {
                "video/mp4",
                "video/avi",
                "video/mov",
                "video/wmv",
                "video/flv",
                "video/webm",
                "video/mkv",
                "video/m4v",
            }
        ),
        frozenset({"mp4", "avi", "mov", "wmv", "flv", "webm", "mkv", "m4v"}),
    ),
    (
        Category.AUDIO,
        frozenset(
            {
                "audio/mpeg",
                "audio/wav",
                "audio/ogg",
                "audio/mp3",
                "audio/aac",
                "audio/flac",
                "audio/wma",
            }
        ),
        frozenset({"mp3", "wav", "ogg", "aac", "flac", "wma"}),
    ),
    (
        Category.DOCUMENTS,
        frozenset(
            {
                "application/pdf",
                "application/msword",
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                "application/vnd.ms-excel",
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                "application/vnd.ms-powerpoint",
                "application/vnd.openxmlformats-officedocument.presentationml.presentation",
                "text/plain",
            }
        ),
        frozenset({"pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt"}),
    ),
)


def file_extension(name: str | None) -> str:
    if not name:
        return ""
    _head, sep, tail = name.rpartition(".")
    if not sep:
        return ""
    return tail.lower()


def categorize(file: FileRecord) -> Category:
    mime_type = file.mime_type or ""
    if mime_type:
        for category, mime_types, _extensions in CATEGORY_TABLE:
            if mime_type in mime_types:
                return category

    extension = file_extension(file.name)
    if extension:
        for category, _mime_types, extensions in CATEGORY_TABLE:
            if extension in extensions:
                return category

    return Category.OTHER
