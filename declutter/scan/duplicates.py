from __future__ import annotations

from collections.abc import Sequence

from declutter.scan.types import DetectionMethod, DuplicateGroup, FileRecord

DEFAULT_DUPLICATE_MIN_SIZE = 1024


def _make_group(group_id: str, method: DetectionMethod, members: list[FileRecord]) -> DuplicateGroup:
    first = members[0]
    return DuplicateGroup(
        id=group_id,
        name=first.name,
        size=first.size,
        method=method,
        files=tuple(members),
        total_size=sum(member.size for member in members),
    )


def _group_by_checksum(files: Sequence[FileRecord], min_size: int) -> list[DuplicateGroup]:
    buckets: dict[str, list[FileRecord]] = {}
    for record in files:
        if not record.checksum or record.size <= min_size:
            continue
        buckets.setdefault(record.checksum, []).append(record)

    return [
        _make_group(f"md5_{checksum}", DetectionMethod.CHECKSUM_MATCH, members)
        for checksum, members in buckets.items()
        if len(members) > 1
    ]


def _group_by_name_and_size(
    files: Sequence[FileRecord],
    min_size: int,
    claimed_ids: set[str],
) -> list[DuplicateGroup]:
    buckets: dict[tuple[str, int], list[FileRecord]] = {}
    for record in files:
        if record.checksum or record.size <= min_size:
            continue
        buckets.setdefault((record.name, record.size), []).append(record)

    groups: list[DuplicateGroup] = []
    for (name, size), members in buckets.items():
        if len(members) < 2:
            continue
        if any(member.id in claimed_ids for member in members):
            continue
        groups.append(_make_group(f"name_size_{name}-{size}", DetectionMethod.NAME_SIZE_MATCH, members))
    return groups


def detect_duplicates(
    files: Sequence[FileRecord],
    *,
    min_size: int = DEFAULT_DUPLICATE_MIN_SIZE,
) -> list[DuplicateGroup]:
    """Group files that look like copies of one another.

    Provider checksums are trusted first. Files without a checksum fall back to
    a name+size match, and such a group is dropped entirely when any of its
    members already sits in a checksum group. Files at or below ``min_size``
    bytes never take part.
    """
    checksum_groups = _group_by_checksum(files, min_size)
    claimed_ids = {member.id for group in checksum_groups for member in group.files}
    name_size_groups = _group_by_name_and_size(files, min_size, claimed_ids)
    return checksum_groups + name_size_groups


def total_potential_savings(groups: Sequence[DuplicateGroup]) -> int:
    return sum(group.potential_savings for group in groups)
