from declutter.scan.aggregate import aggregate, build_category_stats, build_storage_summary
from declutter.scan.classifier import categorize
from declutter.scan.duplicates import detect_duplicates
from declutter.scan.records import parse_file_record, parse_file_records, parse_quota
from declutter.scan.service import ScanService, file_listing_to_dict, scan_result_to_dict
from declutter.scan.thresholds import detect_large, detect_old
from declutter.scan.types import (
    Category,
    DetectionMethod,
    DuplicateGroup,
    FileRecord,
    InvalidFileRecordError,
    QuotaSnapshot,
    ScanResult,
    StorageSummaryError,
)

__all__ = [
    "Category",
    "DetectionMethod",
    "DuplicateGroup",
    "FileRecord",
    "InvalidFileRecordError",
    "QuotaSnapshot",
    "ScanResult",
    "ScanService",
    "StorageSummaryError",
    "aggregate",
    "build_category_stats",
    "build_storage_summary",
    "categorize",
    "detect_duplicates",
    "detect_large",
    "detect_old",
    "file_listing_to_dict",
    "parse_file_record",
    "parse_file_records",
    "parse_quota",
    "scan_result_to_dict",
]
