from __future__ import annotations

import argparse
import os
import time
from datetime import datetime, timedelta, timezone

from declutter.core.config import MAX_FILES_PER_SCAN_CEILING, MIB, get_settings
from declutter.scan.service import ScanService
from declutter.scan.types import FileRecord, QuotaSnapshot

EXTENSIONS = ("jpg", "mp4", "mp3", "pdf", "bin")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark the in-memory scan engine")
    parser.add_argument("--files", type=int, default=1000, help="Number of synthetic file records")
    parser.add_argument("--duplicate-every", type=int, default=5, help="Every Nth file shares a checksum")
    parser.add_argument("--rounds", type=int, default=20, help="Scan repetitions")
    return parser.parse_args()


def configure_env(max_files: int) -> None:
    os.environ["DECLUTTER_MAX_FILES_PER_SCAN"] = str(max_files)
    get_settings.cache_clear()


def build_fixture(total_files: int, duplicate_every: int) -> list[FileRecord]:
    now = datetime.now(tz=timezone.utc)
    records: list[FileRecord] = []
    for idx in range(total_files):
        extension = EXTENSIONS[idx % len(EXTENSIONS)]
        shared = duplicate_every > 0 and idx % duplicate_every == 0
        records.append(
            FileRecord(
                id=f"file-{idx}",
                name=f"fixture-{idx % 97}.{extension}",
                size=2048 + (idx % 13) * 512 + (idx % 3) * 150 * MIB,
                modified_time=now - timedelta(days=idx % 900),
                checksum=f"shared-{idx % 31}" if shared else (f"md5-{idx}" if idx % 2 else None),
            )
        )
    return records


def benchmark(files: list[FileRecord], rounds: int) -> tuple[int, float]:
    service = ScanService(get_settings())
    quota = QuotaSnapshot(limit=15 * 1024 * MIB, usage=sum(record.size for record in files))

    start = time.perf_counter()
    groups = 0
    for _ in range(rounds):
        result = service.scan(files, quota)
        groups = result.summary.duplicate_groups_count
    elapsed = time.perf_counter() - start
    return groups, elapsed


def main() -> None:
    args = parse_args()
    configure_env(min(max(args.files, 1), MAX_FILES_PER_SCAN_CEILING))
    files = build_fixture(total_files=args.files, duplicate_every=args.duplicate_every)
    groups, elapsed = benchmark(files, rounds=args.rounds)
    per_scan = elapsed / max(args.rounds, 1)
    print(f"files={len(files)} duplicate_groups={groups} rounds={args.rounds} per_scan_seconds={per_scan:.4f}")


if __name__ == "__main__":
    main()
