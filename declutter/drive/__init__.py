from declutter.drive.client import (
    DEFAULT_QUOTA,
    DriveAuthError,
    DriveClient,
    DriveError,
    DrivePermissionError,
    DriveRequestError,
)

__all__ = [
    "DEFAULT_QUOTA",
    "DriveAuthError",
    "DriveClient",
    "DriveError",
    "DrivePermissionError",
    "DriveRequestError",
]
