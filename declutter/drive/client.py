from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

import httpx

from declutter.core.config import GIB, Settings
from declutter.scan.records import parse_file_records, parse_quota
from declutter.scan.types import FileRecord, InvalidFileRecordError, QuotaSnapshot

logger = logging.getLogger(__name__)

FILE_FIELDS = "nextPageToken, files(id, name, size, modifiedTime, mimeType, parents, md5Checksum)"
QUOTA_FIELDS = "storageQuota"
MAX_PAGE_SIZE = 1000

DEFAULT_QUOTA = QuotaSnapshot(limit=15 * GIB, usage=0, usage_in_drive=0, usage_in_drive_trash=0)


class DriveError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class DriveAuthError(DriveError):
    pass


class DrivePermissionError(DriveError):
    pass


class DriveRequestError(DriveError):
    pass


class DriveClient:
    """Read-only client for the Drive v3 endpoints a scan needs."""

    def __init__(
        self,
        settings: Settings,
        *,
        default_quota: QuotaSnapshot | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings
        if default_quota is None:
            default_quota = replace(DEFAULT_QUOTA, limit=settings.default_quota_limit_bytes)
        self._default_quota = default_quota
        self._transport = transport

    @property
    def default_quota(self) -> QuotaSnapshot:
        return self._default_quota

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._settings.drive_api_base_url,
            timeout=self._settings.drive_timeout_seconds,
            transport=self._transport,
        )

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        path: str,
        access_token: str,
        params: dict[str, Any],
    ) -> dict[str, Any]:
        try:
            response = await client.get(
                path,
                params=params,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.TimeoutException as exc:
            raise DriveRequestError(f"Drive request to {path} timed out") from exc
        except httpx.HTTPError as exc:
            raise DriveRequestError(f"Drive request to {path} failed: {exc}") from exc

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise DriveAuthError("Token expired. Please re-authenticate.", status_code=response.status_code)
        if response.status_code == httpx.codes.FORBIDDEN:
            raise DrivePermissionError(
                "Insufficient permissions to access Google Drive.",
                status_code=response.status_code,
                details=_response_details(response),
            )
        if response.is_error:
            raise DriveRequestError(
                f"Drive request to {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
                details=_response_details(response),
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise DriveRequestError(f"Drive response from {path} is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise DriveRequestError(f"Drive response from {path} is not a JSON object")
        return payload

    async def _fetch_file_listing(self, client: httpx.AsyncClient, access_token: str) -> list[FileRecord]:
        max_files = int(self._settings.max_files_per_scan)
        records: list[FileRecord] = []
        page_token: str | None = None

        while len(records) < max_files:
            params: dict[str, Any] = {
                "fields": FILE_FIELDS,
                "pageSize": min(MAX_PAGE_SIZE, max_files - len(records)),
            }
            if page_token:
                params["pageToken"] = page_token

            payload = await self._get_json(client, "/files", access_token, params)
            records.extend(parse_file_records(payload.get("files") or []))

            page_token = payload.get("nextPageToken")
            if not page_token:
                break

        if len(records) > max_files:
            records = records[:max_files]
        logger.debug("Fetched %d Drive file records", len(records))
        return records

    async def _fetch_quota(self, client: httpx.AsyncClient, access_token: str) -> QuotaSnapshot:
        try:
            payload = await self._get_json(client, "/about", access_token, {"fields": QUOTA_FIELDS})
        except DriveError as exc:
            logger.warning("Failed to fetch Drive quota, using defaults: %s", exc)
            return self._default_quota

        raw_quota = payload.get("storageQuota")
        if not isinstance(raw_quota, Mapping):
            logger.warning("Drive quota response has no storageQuota object, using defaults")
            return self._default_quota
        try:
            return parse_quota(raw_quota, default=self._default_quota)
        except InvalidFileRecordError as exc:
            logger.warning("Drive quota response is malformed, using defaults: %s", exc)
            return self._default_quota

    async def fetch_file_listing(self, access_token: str) -> list[FileRecord]:
        async with self._client() as client:
            return await self._fetch_file_listing(client, access_token)

    async def fetch_quota(self, access_token: str) -> QuotaSnapshot:
        async with self._client() as client:
            return await self._fetch_quota(client, access_token)

    async def fetch_scan_inputs(self, access_token: str) -> tuple[list[FileRecord], QuotaSnapshot]:
        async with self._client() as client:
            files, quota = await asyncio.gather(
                self._fetch_file_listing(client, access_token),
                self._fetch_quota(client, access_token),
            )
        return files, quota


def _response_details(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None
