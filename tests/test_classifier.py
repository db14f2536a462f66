from __future__ import annotations

import pytest

from declutter.scan.classifier import CATEGORY_TABLE, categorize, file_extension
from declutter.scan.types import Category, FileRecord


@pytest.mark.parametrize(
    ("mime_type", "expected"),
    [
        ("image/png", Category.IMAGES),
        ("video/mp4", Category.VIDEOS),
        ("audio/flac", Category.AUDIO),
        ("application/pdf", Category.DOCUMENTS),
        ("text/plain", Category.DOCUMENTS),
        ("application/vnd.google-apps.folder", Category.OTHER),
    ],
)
def test_categorize_matches_mime_type(mime_type: str, expected: Category) -> None:
    record = FileRecord(id="f1", name="untitled", mime_type=mime_type)
    assert categorize(record) is expected


def test_mime_type_takes_priority_over_extension() -> None:
    record = FileRecord(id="f1", name="scan.pdf", mime_type="image/jpeg")
    assert categorize(record) is Category.IMAGES


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("holiday.JPG", Category.IMAGES),
        ("clip.final.mov", Category.VIDEOS),
        ("song.mp3", Category.AUDIO),
        ("report.docx", Category.DOCUMENTS),
        ("x.txt", Category.DOCUMENTS),
        ("archive.zip", Category.OTHER),
        ("Makefile", Category.OTHER),
        ("trailing.", Category.OTHER),
    ],
)
def test_categorize_falls_back_to_extension(name: str, expected: Category) -> None:
    record = FileRecord(id="f1", name=name, mime_type="application/octet-stream")
    assert categorize(record) is expected


def test_unknown_mime_with_known_extension_uses_extension() -> None:
    record = FileRecord(id="f1", name="movie.mkv", mime_type="video/x-matroska")
    assert categorize(record) is Category.VIDEOS


def test_missing_name_and_mime_type_is_other() -> None:
    assert categorize(FileRecord(id="f1")) is Category.OTHER
    assert categorize(FileRecord(id="f2", name="", mime_type="")) is Category.OTHER


def test_no_partial_mime_matching() -> None:
    record = FileRecord(id="f1", name="blob", mime_type="image/heic")
    assert categorize(record) is Category.OTHER


def test_file_extension_uses_last_dot_and_lowercases() -> None:
    assert file_extension("a.b.TAR") == "tar"
    assert file_extension("noext") == ""
    assert file_extension(None) == ""


def test_category_table_order_is_declared_order() -> None:
    assert [entry[0] for entry in CATEGORY_TABLE] == [
        Category.IMAGES,
        Category.VIDEOS,
        Category.AUDIO,
        Category.DOCUMENTS,
    ]


def test_categorize_is_deterministic() -> None:
    record = FileRecord(id="f1", name="song.ogg", mime_type=None)
    assert {categorize(record) for _ in range(5)} == {Category.AUDIO}
