from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from declutter.scan.types import FileRecord, InvalidFileRecordError, QuotaSnapshot


def parse_size(raw: Any) -> int:
    """Coerce a provider size value into a byte count.

    Drive reports sizes as decimal strings and omits them for folders and
    native Docs files. Missing and unparsable values map to 0; negative values
    are rejected.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw) or not raw.is_integer():
            return 0
        value = int(raw)
    else:
        try:
            value = int(str(raw).strip())
        except ValueError:
            return 0
    if value < 0:
        raise InvalidFileRecordError(f"File size cannot be negative: {raw!r}")
    return value


def parse_timestamp(raw: Any) -> datetime | None:
    if raw is None:
        return None
    if isinstance(raw, datetime):
        value = raw
    else:
        token = str(raw).strip()
        if not token:
            return None
        if token.endswith(("Z", "z")):
            token = token[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(token)
        except ValueError:
            return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _optional_str(raw: Any) -> str | None:
    if raw is None:
        return None
    token = str(raw).strip()
    return token or None


def parse_file_record(raw: Mapping[str, Any]) -> FileRecord:
    if not isinstance(raw, Mapping):
        raise InvalidFileRecordError("File record must be a JSON object")

    file_id = _optional_str(raw.get("id"))
    if file_id is None:
        raise InvalidFileRecordError("File record is missing an id")

    parents = raw.get("parents") or ()
    if isinstance(parents, str):
        parents = (parents,)

    return FileRecord(
        id=file_id,
        name=str(raw.get("name") or ""),
        size=parse_size(raw.get("size")),
        mime_type=_optional_str(raw.get("mimeType")),
        modified_time=parse_timestamp(raw.get("modifiedTime")),
        checksum=_optional_str(raw.get("md5Checksum")),
        parents=tuple(str(parent) for parent in parents),
    )


def parse_file_records(raw_files: Iterable[Mapping[str, Any]]) -> list[FileRecord]:
    return [parse_file_record(raw) for raw in raw_files]


def parse_quota(raw: Mapping[str, Any], *, default: QuotaSnapshot) -> QuotaSnapshot:
    """Build a quota snapshot from a Drive ``storageQuota`` object.

    Accounts without a storage cap omit ``limit``; the default limit is used
    for those so the usage percentage stays meaningful.
    """
    limit_raw = raw.get("limit")
    limit = parse_size(limit_raw) if limit_raw is not None else default.limit
    usage_in_drive = raw.get("usageInDrive")
    usage_in_drive_trash = raw.get("usageInDriveTrash")
    return QuotaSnapshot(
        limit=limit,
        usage=parse_size(raw.get("usage", default.usage)),
        usage_in_drive=parse_size(usage_in_drive) if usage_in_drive is not None else None,
        usage_in_drive_trash=parse_size(usage_in_drive_trash) if usage_in_drive_trash is not None else None,
    )
