from __future__ import annotations

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

MULTIPART_OVERHEAD = 1024 * 1024


class Settings(BaseSettings):
    """Configuration settings for the application."""

    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_store_path: str = "uploads-log.jsonl"

    resend_api_key: Optional[str] = None
    email_api_url: str = "https://api.resend.com"
    email_timeout: float = 30.0
    sender_email: str = "noreply@test123hatham.com"
    operator_email: str = "hathamtest123@gmail.com"
    brand_name: str = "TrueCraft Nashville"

    max_files: int = 10
    max_file_bytes: int = 25 * 1024 * 1024
    max_total_bytes: int = 50 * 1024 * 1024
    # whole multipart body incl. form fields and boundaries; None = max_total_bytes + 1 MiB
    max_request_bytes: Optional[int] = None

    cors_origins: List[str] = []
    frontend_dir: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def request_size_limit(self) -> int:
        if self.max_request_bytes is not None:
            return self.max_request_bytes
        return self.max_total_bytes + MULTIPART_OVERHEAD


config = Settings()

__all__ = ["Settings", "config"]
