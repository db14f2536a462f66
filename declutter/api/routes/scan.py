from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from declutter.api.auth import get_access_token, reauthenticate_exception
from declutter.api.schemas.scan import ScanRequest, ScanResponse, ScanResultResponse
from declutter.core.config import get_settings
from declutter.drive.client import DriveAuthError, DriveClient, DrivePermissionError, DriveRequestError
from declutter.scan.service import ScanService, scan_result_to_dict

router = APIRouter(prefix="/scan", tags=["scan"])

SUPPORTED_STORAGE_TYPES = {"googleDrive"}


def get_drive_client() -> DriveClient:
    return DriveClient(settings=get_settings())


def get_scan_service() -> ScanService:
    return ScanService(settings=get_settings())


@router.post("", response_model=ScanResponse)
async def run_scan(
    request: ScanRequest | None = None,
    access_token: str = Depends(get_access_token),
    drive: DriveClient = Depends(get_drive_client),
    service: ScanService = Depends(get_scan_service),
) -> ScanResponse:
    storage_type = request.storage_type if request is not None else "googleDrive"
    if storage_type not in SUPPORTED_STORAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only Google Drive scanning is currently supported",
        )

    try:
        files, quota = await drive.fetch_scan_inputs(access_token)
    except DriveAuthError as exc:
        raise reauthenticate_exception(str(exc)) from exc
    except DrivePermissionError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": str(exc), "details": exc.details},
        ) from exc
    except DriveRequestError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "Failed to scan Google Drive files", "details": str(exc)},
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "Google Drive returned a malformed file listing", "details": str(exc)},
        ) from exc

    result = service.scan(files, quota)
    return ScanResponse(results=ScanResultResponse.model_validate(scan_result_to_dict(result)))
