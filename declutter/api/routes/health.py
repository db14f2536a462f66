from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from declutter.core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
def get_health() -> dict[str, object]:
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
        "scan_limits": {
            "large_file_threshold_bytes": settings.large_file_threshold_bytes,
            "old_file_days": settings.old_file_days,
            "duplicate_min_size_bytes": settings.duplicate_min_size_bytes,
            "max_files_per_scan": settings.max_files_per_scan,
        },
        "drive_api_base_url": settings.drive_api_base_url,
        "checked_at": datetime.now(tz=timezone.utc),
    }
