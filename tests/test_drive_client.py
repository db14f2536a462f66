from __future__ import annotations

import asyncio
from collections.abc import Callable

import httpx
import pytest

from declutter.core.config import Settings
from declutter.drive.client import (
    DriveAuthError,
    DriveClient,
    DrivePermissionError,
    DriveRequestError,
)
from declutter.scan.types import QuotaSnapshot

GIB = 1024 * 1024 * 1024


def make_client(
    handler: Callable[[httpx.Request], object],
    *,
    max_files: int = 1000,
    default_quota: QuotaSnapshot | None = None,
) -> DriveClient:
    settings = Settings(
        max_files_per_scan=max_files,
        default_quota_limit_bytes=15 * GIB,
        drive_api_base_url="https://drive.test/drive/v3",
    )
    return DriveClient(settings, default_quota=default_quota, transport=httpx.MockTransport(handler))


def _file(idx: int) -> dict[str, str]:
    return {"id": f"f{idx}", "name": f"file-{idx}.jpg", "size": str(2048 + idx)}


def test_file_listing_follows_pages_until_cap() -> None:
    page_sizes: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/drive/v3/files"
        assert request.headers["Authorization"] == "Bearer token-1"
        assert "md5Checksum" in request.url.params["fields"]
        page_sizes.append(request.url.params["pageSize"])
        if "pageToken" not in request.url.params:
            return httpx.Response(200, json={"files": [_file(0), _file(1)], "nextPageToken": "p2"})
        assert request.url.params["pageToken"] == "p2"
        return httpx.Response(200, json={"files": [_file(2), _file(3)], "nextPageToken": "p3"})

    client = make_client(handler, max_files=3)
    files = asyncio.run(client.fetch_file_listing("token-1"))

    assert [record.id for record in files] == ["f0", "f1", "f2"]
    assert page_sizes == ["3", "1"]
    assert files[0].size == 2048


def test_file_listing_stops_without_next_page_token() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"files": [_file(0)]})

    files = asyncio.run(make_client(handler).fetch_file_listing("t"))

    assert len(files) == 1
    assert len(calls) == 1
    assert calls[0].url.params["pageSize"] == "1000"


def test_quota_is_parsed_from_about() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/drive/v3/about"
        assert request.url.params["fields"] == "storageQuota"
        return httpx.Response(
            200,
            json={"storageQuota": {"limit": "16106127360", "usage": "8053063680", "usageInDrive": "7000"}},
        )

    quota = asyncio.run(make_client(handler).fetch_quota("t"))

    assert quota.limit == 16106127360
    assert quota.usage == 8053063680
    assert quota.usage_in_drive == 7000
    assert quota.usage_in_drive_trash is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "backend"}),
        httpx.Response(401, json={"error": "expired"}),
        httpx.Response(200, json={"kind": "drive#about"}),
        httpx.Response(200, text="not json"),
    ],
)
def test_quota_failure_falls_back_to_default(response: httpx.Response) -> None:
    client = make_client(lambda _request: response)

    quota = asyncio.run(client.fetch_quota("t"))

    assert quota == QuotaSnapshot(limit=15 * GIB, usage=0, usage_in_drive=0, usage_in_drive_trash=0)
    assert quota == client.default_quota


def test_injected_default_quota_is_used() -> None:
    fallback = QuotaSnapshot(limit=100, usage=1)
    client = make_client(lambda _request: httpx.Response(503), default_quota=fallback)

    assert asyncio.run(client.fetch_quota("t")) is fallback


@pytest.mark.parametrize(
    ("status_code", "error_type"),
    [
        (401, DriveAuthError),
        (403, DrivePermissionError),
        (500, DriveRequestError),
    ],
)
def test_listing_errors_are_classified(status_code: int, error_type: type[Exception]) -> None:
    client = make_client(lambda _request: httpx.Response(status_code, json={"error": {"code": status_code}}))

    with pytest.raises(error_type):
        asyncio.run(client.fetch_file_listing("t"))


def test_transport_failure_is_a_request_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DriveRequestError):
        asyncio.run(make_client(handler).fetch_file_listing("t"))


def test_malformed_listing_record_propagates() -> None:
    client = make_client(lambda _request: httpx.Response(200, json={"files": [{"id": "x", "size": "-1"}]}))

    with pytest.raises(ValueError):
        asyncio.run(client.fetch_file_listing("t"))


def test_scan_inputs_are_fetched_concurrently() -> None:
    async def run() -> tuple[list, QuotaSnapshot]:
        quota_requested = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/about"):
                quota_requested.set()
                return httpx.Response(200, json={"storageQuota": {"limit": "1000", "usage": "250"}})
            # The listing only completes once the quota request is in flight.
            await asyncio.wait_for(quota_requested.wait(), timeout=5)
            return httpx.Response(200, json={"files": [_file(0), _file(1)]})

        client = make_client(handler)
        return await client.fetch_scan_inputs("t")

    files, quota = asyncio.run(run())

    assert [record.id for record in files] == ["f0", "f1"]
    assert quota.limit == 1000
    assert quota.usage == 250


def test_listing_failure_aborts_scan_inputs() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/about"):
            return httpx.Response(200, json={"storageQuota": {"limit": "1000", "usage": "0"}})
        return httpx.Response(401)

    with pytest.raises(DriveAuthError):
        asyncio.run(make_client(handler).fetch_scan_inputs("t"))
