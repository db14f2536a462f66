from __future__ import annotations

from functools import lru_cache

from pydantic import NonNegativeInt, PositiveFloat, PositiveInt, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

MIB = 1024 * 1024
GIB = 1024 * MIB

MAX_FILES_PER_SCAN_CEILING = 100_000


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DECLUTTER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Declutter"
    environment: str = "production"
    log_level: str = "INFO"

    large_file_threshold_bytes: PositiveInt = 100 * MIB
    old_file_days: PositiveInt = 365
    duplicate_min_size_bytes: NonNegativeInt = 1024
    max_files_per_scan: PositiveInt = 1000

    default_quota_limit_bytes: NonNegativeInt = 15 * GIB

    drive_api_base_url: str = "https://www.googleapis.com/drive/v3"
    drive_timeout_seconds: PositiveFloat = 30.0
    auth_redirect_url: str = "/auth/google"

    @model_validator(mode="after")
    def _validate_runtime_constraints(self) -> "Settings":
        normalized_level = self.log_level.upper().strip()
        if normalized_level not in SUPPORTED_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(SUPPORTED_LOG_LEVELS)}")
        self.log_level = normalized_level

        if self.max_files_per_scan > MAX_FILES_PER_SCAN_CEILING:
            raise ValueError(f"max_files_per_scan must be <= {MAX_FILES_PER_SCAN_CEILING}")

        self.drive_api_base_url = self.drive_api_base_url.rstrip("/")
        if not self.drive_api_base_url.startswith(("http://", "https://")):
            raise ValueError("drive_api_base_url must be an http(s) URL")

        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
