from __future__ import annotations

from declutter.scan.aggregate import aggregate, build_category_stats, build_storage_summary, byte_total
from declutter.scan.duplicates import detect_duplicates
from declutter.scan.thresholds import detect_large
from declutter.scan.types import Category, FileRecord, QuotaSnapshot, StorageSummaryError

MIB = 1024 * 1024
GIB = 1024 * MIB


def test_category_stats_count_every_file_once() -> None:
    files = [
        FileRecord(id="1", name="a.jpg", size=MIB),
        FileRecord(id="2", name="b.png", size=MIB),
        FileRecord(id="3", name="c.mp4", size=GIB),
        FileRecord(id="4", name="d.pdf"),
        FileRecord(id="5", name="e.unknown", size=10),
    ]

    stats = build_category_stats(files)

    assert list(stats) == list(Category)
    assert sum(entry.count for entry in stats.values()) == len(files)
    assert stats[Category.IMAGES].count == 2
    assert stats[Category.IMAGES].total_size == 2 * MIB
    assert stats[Category.IMAGES].total_size_mb == "2.00"
    assert stats[Category.VIDEOS].total_size_gb == "1.00"
    assert stats[Category.AUDIO].count == 0
    assert stats[Category.AUDIO].total_size_mb == "0.00"
    assert stats[Category.DOCUMENTS].total_size == 0
    assert stats[Category.OTHER].count == 1


def test_storage_summary_reports_usage_percentage() -> None:
    quota = QuotaSnapshot(limit=16106127360, usage=8053063680)

    storage = build_storage_summary(quota)

    assert storage.usage_percentage == 50.0
    assert storage.error is None
    assert storage.free.bytes == 8053063680
    assert storage.total.display == "15.00 GB"
    assert storage.used.gib == 7.5


def test_zero_limit_reports_divide_by_zero() -> None:
    storage = build_storage_summary(QuotaSnapshot(limit=0, usage=0))

    assert storage.usage_percentage is None
    assert storage.error is StorageSummaryError.DIVIDE_BY_ZERO
    assert storage.free.bytes == 0


def test_over_quota_free_is_negative() -> None:
    storage = build_storage_summary(QuotaSnapshot(limit=2 * GIB, usage=3 * GIB))

    assert storage.free.bytes == -GIB
    assert storage.free.display == "-1.00 GB"
    assert storage.usage_percentage == 150.0


def test_usage_percentage_rounds_to_one_decimal() -> None:
    storage = build_storage_summary(QuotaSnapshot(limit=3, usage=1))
    assert storage.usage_percentage == 33.3


def test_savings_totals_come_from_findings() -> None:
    files = [
        FileRecord(id="a", size=GIB, checksum="same"),
        FileRecord(id="b", size=GIB, checksum="same"),
        FileRecord(id="c", size=200 * MIB),
    ]
    duplicates = detect_duplicates(files)
    large_files = detect_large(files)

    stats, storage = aggregate(
        files,
        QuotaSnapshot(limit=15 * GIB, usage=3 * GIB),
        duplicates=duplicates,
        large_files=large_files,
    )

    assert stats[Category.OTHER].count == 3
    assert storage.duplicate_savings.bytes == GIB
    assert storage.duplicate_savings.display == "1.00 GB"
    assert storage.large_files_total.bytes == 2 * GIB + 200 * MIB
    assert storage.old_files_total.bytes == 0


def test_byte_total_exposes_display_and_float() -> None:
    total = byte_total(1610612736)
    assert total.bytes == 1610612736
    assert total.gib == 1.5
    assert total.display == "1.50 GB"
