from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import asdict
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from declutter.core.config import Settings
from declutter.scan.aggregate import aggregate, build_category_stats, format_gib
from declutter.scan.classifier import categorize
from declutter.scan.duplicates import detect_duplicates
from declutter.scan.thresholds import coerce_utc, detect_large, detect_old, format_mib
from declutter.scan.types import (
    ByteTotal,
    Category,
    CategoryStats,
    DuplicateGroup,
    FileListingResult,
    FileRecord,
    LargeFile,
    ListedFile,
    OldFile,
    QuotaSnapshot,
    ScanResult,
    ScanSummary,
    StorageSummary,
)

logger = logging.getLogger(__name__)


class ScanService:
    def __init__(self, settings: Settings):
        self._settings = settings

    def _now(self, now: datetime | None) -> datetime:
        if now is None:
            return datetime.now(tz=timezone.utc)
        return coerce_utc(now)

    def scan(
        self,
        files: Sequence[FileRecord],
        quota: QuotaSnapshot,
        *,
        now: datetime | None = None,
    ) -> ScanResult:
        scanned_at = self._now(now)

        duplicates = detect_duplicates(files, min_size=self._settings.duplicate_min_size_bytes)
        large_files = detect_large(files, self._settings.large_file_threshold_bytes)
        old_files = detect_old(files, self._settings.old_file_days, scanned_at)
        file_stats, storage = aggregate(
            files,
            quota,
            duplicates=duplicates,
            large_files=large_files,
            old_files=old_files,
        )

        summary = ScanSummary(
            total_files=len(files),
            total_size=storage.used.display,
            duplicate_savings=storage.duplicate_savings.display,
            large_files_count=len(large_files),
            old_files_count=len(old_files),
            duplicate_groups_count=len(duplicates),
        )

        if storage.error is not None:
            logger.warning("Quota limit is zero; usage percentage unavailable (error=%s)", storage.error.value)
        logger.info(
            "Scan complete: files=%d duplicate_groups=%d large=%d old=%d",
            summary.total_files,
            summary.duplicate_groups_count,
            summary.large_files_count,
            summary.old_files_count,
        )

        return ScanResult(
            duplicates=tuple(duplicates),
            large_files=tuple(large_files),
            old_files=tuple(old_files),
            file_stats=MappingProxyType(file_stats),
            storage=storage,
            summary=summary,
            scanned_at=scanned_at,
        )

    def list_files(self, files: Sequence[FileRecord], *, now: datetime | None = None) -> FileListingResult:
        listed_at = self._now(now)
        large_ids = {item.file.id for item in detect_large(files, self._settings.large_file_threshold_bytes)}
        old_ids = {item.file.id for item in detect_old(files, self._settings.old_file_days, listed_at)}

        listed = tuple(
            ListedFile(
                file=record,
                category=categorize(record),
                size_in_mb=format_mib(record.size),
                size_in_gb=format_gib(record.size),
                is_large=record.id in large_ids,
                is_old=record.id in old_ids,
            )
            for record in files
        )
        return FileListingResult(
            files=listed,
            file_stats=MappingProxyType(build_category_stats(files)),
            total_files=len(files),
            total_size=f"{format_gib(sum(record.size for record in files))} GB",
            listed_at=listed_at,
        )


def file_record_to_dict(record: FileRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "size": record.size,
        "mime_type": record.mime_type,
        "modified_time": record.modified_time,
        "checksum": record.checksum,
        "parents": list(record.parents),
    }


def duplicate_group_to_dict(group: DuplicateGroup) -> dict[str, Any]:
    return {
        "id": group.id,
        "name": group.name,
        "size": group.size,
        "method": group.method.value,
        "files": [file_record_to_dict(member) for member in group.files],
        "total_size": group.total_size,
        "potential_savings": group.potential_savings,
    }


def large_file_to_dict(item: LargeFile) -> dict[str, Any]:
    return {
        **file_record_to_dict(item.file),
        "size_in_mb": item.size_in_mb,
        "category": item.category.value,
    }


def old_file_to_dict(item: OldFile) -> dict[str, Any]:
    return {
        **file_record_to_dict(item.file),
        "days_old": item.days_old,
        "category": item.category.value,
    }


def category_stats_to_dict(stats: Mapping[Category, CategoryStats]) -> dict[str, Any]:
    return {category.value: asdict(entry) for category, entry in stats.items()}


def _byte_total_to_dict(total: ByteTotal) -> dict[str, Any]:
    return asdict(total)


def storage_summary_to_dict(storage: StorageSummary) -> dict[str, Any]:
    return {
        "total": _byte_total_to_dict(storage.total),
        "used": _byte_total_to_dict(storage.used),
        "free": _byte_total_to_dict(storage.free),
        "usage_percentage": storage.usage_percentage,
        "error": storage.error.value if storage.error is not None else None,
        "duplicates": _byte_total_to_dict(storage.duplicate_savings),
        "large_files": _byte_total_to_dict(storage.large_files_total),
        "old_files": _byte_total_to_dict(storage.old_files_total),
    }


def scan_result_to_dict(result: ScanResult) -> dict[str, Any]:
    return {
        "duplicates": [duplicate_group_to_dict(group) for group in result.duplicates],
        "large_files": [large_file_to_dict(item) for item in result.large_files],
        "old_files": [old_file_to_dict(item) for item in result.old_files],
        "file_stats": category_stats_to_dict(result.file_stats),
        "storage": storage_summary_to_dict(result.storage),
        "summary": asdict(result.summary),
        "scanned_at": result.scanned_at,
    }


def listed_file_to_dict(item: ListedFile) -> dict[str, Any]:
    return {
        **file_record_to_dict(item.file),
        "category": item.category.value,
        "size_in_mb": item.size_in_mb,
        "size_in_gb": item.size_in_gb,
        "is_large": item.is_large,
        "is_old": item.is_old,
    }


def file_listing_to_dict(result: FileListingResult) -> dict[str, Any]:
    return {
        "files": [listed_file_to_dict(item) for item in result.files],
        "file_stats": category_stats_to_dict(result.file_stats),
        "summary": {
            "total_files": result.total_files,
            "total_size": result.total_size,
        },
        "listed_at": result.listed_at,
    }
