from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ScanRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    storage_type: str = Field(default="googleDrive", min_length=1, max_length=64)


class FileRecordResponse(BaseModel):
    id: str
    name: str
    size: int
    mime_type: str | None
    modified_time: datetime | None
    checksum: str | None
    parents: list[str]


class DuplicateGroupResponse(BaseModel):
    id: str
    name: str
    size: int
    method: str
    files: list[FileRecordResponse]
    total_size: int
    potential_savings: int


class LargeFileResponse(FileRecordResponse):
    size_in_mb: str
    category: str


class OldFileResponse(FileRecordResponse):
    days_old: int
    category: str


class CategoryStatsResponse(BaseModel):
    count: int
    total_size: int
    total_size_mb: str
    total_size_gb: str


class ByteTotalResponse(BaseModel):
    bytes: int
    gib: float
    display: str


class StorageSummaryResponse(BaseModel):
    total: ByteTotalResponse
    used: ByteTotalResponse
    free: ByteTotalResponse
    usage_percentage: float | None
    error: str | None
    duplicates: ByteTotalResponse
    large_files: ByteTotalResponse
    old_files: ByteTotalResponse


class ScanSummaryResponse(BaseModel):
    total_files: int
    total_size: str
    duplicate_savings: str
    large_files_count: int
    old_files_count: int
    duplicate_groups_count: int


class ScanResultResponse(BaseModel):
    duplicates: list[DuplicateGroupResponse]
    large_files: list[LargeFileResponse]
    old_files: list[OldFileResponse]
    file_stats: dict[str, CategoryStatsResponse]
    storage: StorageSummaryResponse
    summary: ScanSummaryResponse
    scanned_at: datetime


class ScanResponse(BaseModel):
    results: ScanResultResponse
