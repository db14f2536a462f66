from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from declutter.api.auth import get_access_token, reauthenticate_exception
from declutter.api.routes.scan import get_drive_client, get_scan_service
from declutter.api.schemas.files import FileListingResponse
from declutter.drive.client import DriveAuthError, DriveClient, DrivePermissionError, DriveRequestError
from declutter.scan.service import ScanService, file_listing_to_dict

router = APIRouter(prefix="/files", tags=["files"])


@router.get("", response_model=FileListingResponse)
async def list_files(
    access_token: str = Depends(get_access_token),
    drive: DriveClient = Depends(get_drive_client),
    service: ScanService = Depends(get_scan_service),
) -> FileListingResponse:
    try:
        files = await drive.fetch_file_listing(access_token)
    except DriveAuthError as exc:
        raise reauthenticate_exception(str(exc)) from exc
    except DrivePermissionError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": str(exc), "details": exc.details},
        ) from exc
    except (DriveRequestError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "Failed to fetch files", "details": str(exc)},
        ) from exc

    result = service.list_files(files)
    return FileListingResponse.model_validate(file_listing_to_dict(result))
