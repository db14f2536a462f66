from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from declutter.core.config import MIB
from declutter.scan.classifier import categorize
from declutter.scan.types import FileRecord, LargeFile, OldFile

DEFAULT_LARGE_FILE_THRESHOLD = 100 * MIB
DEFAULT_OLD_FILE_DAYS = 365


def coerce_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_mib(size: int) -> str:
    return f"{size / MIB:.2f}"


def detect_large(
    files: Sequence[FileRecord],
    threshold_bytes: int = DEFAULT_LARGE_FILE_THRESHOLD,
) -> list[LargeFile]:
    matches = [
        LargeFile(file=record, size_in_mb=format_mib(record.size), category=categorize(record))
        for record in files
        if record.size > threshold_bytes
    ]
    # sorted() is stable, so equal sizes keep listing order.
    return sorted(matches, key=lambda item: item.file.size, reverse=True)


def detect_old(
    files: Sequence[FileRecord],
    max_age_days: int = DEFAULT_OLD_FILE_DAYS,
    now: datetime | None = None,
) -> list[OldFile]:
    reference = coerce_utc(now) if now is not None else datetime.now(tz=timezone.utc)
    cutoff = reference - timedelta(days=max_age_days)

    matches: list[tuple[datetime, OldFile]] = []
    for record in files:
        if record.modified_time is None:
            continue
        modified = coerce_utc(record.modified_time)
        if modified >= cutoff:
            continue
        # timedelta.days floors toward the earlier whole day.
        days_old = (reference - modified).days
        matches.append((modified, OldFile(file=record, days_old=days_old, category=categorize(record))))

    matches.sort(key=lambda pair: pair[0])
    return [item for _modified, item in matches]
