from __future__ import annotations

from collections.abc import Sequence

from declutter.core.config import GIB, MIB
from declutter.scan.classifier import categorize
from declutter.scan.duplicates import total_potential_savings
from declutter.scan.types import (
    ByteTotal,
    Category,
    CategoryStats,
    DuplicateGroup,
    FileRecord,
    LargeFile,
    OldFile,
    QuotaSnapshot,
    StorageSummary,
    StorageSummaryError,
)


def format_gib(size: int) -> str:
    return f"{size / GIB:.2f}"


def byte_total(size: int) -> ByteTotal:
    display = format_gib(size)
    return ByteTotal(bytes=size, gib=float(display), display=f"{display} GB")


def build_category_stats(files: Sequence[FileRecord]) -> dict[Category, CategoryStats]:
    counts = {category: 0 for category in Category}
    sizes = {category: 0 for category in Category}
    for record in files:
        category = categorize(record)
        counts[category] += 1
        sizes[category] += record.size

    return {
        category: CategoryStats(
            count=counts[category],
            total_size=sizes[category],
            total_size_mb=f"{sizes[category] / MIB:.2f}",
            total_size_gb=format_gib(sizes[category]),
        )
        for category in Category
    }


def usage_percentage(limit: int, usage: int) -> float | None:
    if limit == 0:
        return None
    return round(usage / limit * 100, 1)


def build_storage_summary(
    quota: QuotaSnapshot,
    *,
    duplicates: Sequence[DuplicateGroup] = (),
    large_files: Sequence[LargeFile] = (),
    old_files: Sequence[OldFile] = (),
) -> StorageSummary:
    """Summarize quota usage and what each finding would free up.

    ``free`` is reported as-is, so an over-quota account shows a negative
    value. A zero limit leaves ``usage_percentage`` empty and sets ``error``.
    """
    percentage = usage_percentage(quota.limit, quota.usage)
    return StorageSummary(
        total=byte_total(quota.limit),
        used=byte_total(quota.usage),
        free=byte_total(quota.limit - quota.usage),
        usage_percentage=percentage,
        error=StorageSummaryError.DIVIDE_BY_ZERO if percentage is None else None,
        duplicate_savings=byte_total(total_potential_savings(duplicates)),
        large_files_total=byte_total(sum(item.file.size for item in large_files)),
        old_files_total=byte_total(sum(item.file.size for item in old_files)),
    )


def aggregate(
    files: Sequence[FileRecord],
    quota: QuotaSnapshot,
    *,
    duplicates: Sequence[DuplicateGroup] = (),
    large_files: Sequence[LargeFile] = (),
    old_files: Sequence[OldFile] = (),
) -> tuple[dict[Category, CategoryStats], StorageSummary]:
    stats = build_category_stats(files)
    storage = build_storage_summary(
        quota,
        duplicates=duplicates,
        large_files=large_files,
        old_files=old_files,
    )
    return stats, storage
