from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from declutter.api.schemas.scan import CategoryStatsResponse, FileRecordResponse


class ListedFileResponse(FileRecordResponse):
    category: str
    size_in_mb: str
    size_in_gb: str
    is_large: bool
    is_old: bool


class FileListingSummaryResponse(BaseModel):
    total_files: int
    total_size: str


class FileListingResponse(BaseModel):
    files: list[ListedFileResponse]
    file_stats: dict[str, CategoryStatsResponse]
    summary: FileListingSummaryResponse
    listed_at: datetime
