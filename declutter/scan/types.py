from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Mapping
from datetime import datetime
from enum import Enum


class Category(str, Enum):
    IMAGES = "images"
    VIDEOS = "videos"
    AUDIO = "audio"
    DOCUMENTS = "documents"
    OTHER = "other"


class DetectionMethod(str, Enum):
    CHECKSUM_MATCH = "checksum_match"
    NAME_SIZE_MATCH = "name_size_match"


class StorageSummaryError(str, Enum):
    DIVIDE_BY_ZERO = "divide_by_zero"


class InvalidFileRecordError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class FileRecord:
    id: str
    name: str = ""
    size: int = 0
    mime_type: str | None = None
    modified_time: datetime | None = None
    checksum: str | None = None
    parents: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.size < 0:
            raise InvalidFileRecordError(f"File {self.id!r} has a negative size: {self.size}")


@dataclass(frozen=True, slots=True)
class QuotaSnapshot:
    limit: int
    usage: int
    usage_in_drive: int | None = None
    usage_in_drive_trash: int | None = None


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    id: str
    name: str
    size: int
    method: DetectionMethod
    files: tuple[FileRecord, ...]
    total_size: int

    @property
    def potential_savings(self) -> int:
        # One copy is kept; every other member is redundant.
        return self.total_size - self.files[0].size


@dataclass(frozen=True, slots=True)
class LargeFile:
    file: FileRecord
    size_in_mb: str
    category: Category


@dataclass(frozen=True, slots=True)
class OldFile:
    file: FileRecord
    days_old: int
    category: Category


@dataclass(frozen=True, slots=True)
class CategoryStats:
    count: int
    total_size: int
    total_size_mb: str
    total_size_gb: str


@dataclass(frozen=True, slots=True)
class ByteTotal:
    bytes: int
    gib: float
    display: str


@dataclass(frozen=True, slots=True)
class StorageSummary:
    total: ByteTotal
    used: ByteTotal
    free: ByteTotal
    usage_percentage: float | None
    error: StorageSummaryError | None
    duplicate_savings: ByteTotal
    large_files_total: ByteTotal
    old_files_total: ByteTotal


@dataclass(frozen=True, slots=True)
class ScanSummary:
    total_files: int
    total_size: str
    duplicate_savings: str
    large_files_count: int
    old_files_count: int
    duplicate_groups_count: int


@dataclass(frozen=True, slots=True)
class ScanResult:
    duplicates: tuple[DuplicateGroup, ...]
    large_files: tuple[LargeFile, ...]
    old_files: tuple[OldFile, ...]
    file_stats: Mapping[Category, CategoryStats]
    storage: StorageSummary
    summary: ScanSummary
    scanned_at: datetime


@dataclass(frozen=True, slots=True)
class ListedFile:
    file: FileRecord
    category: Category
    size_in_mb: str
    size_in_gb: str
    is_large: bool
    is_old: bool


@dataclass(frozen=True, slots=True)
class FileListingResult:
    files: tuple[ListedFile, ...]
    file_stats: Mapping[Category, CategoryStats]
    total_files: int
    total_size: str
    listed_at: datetime
