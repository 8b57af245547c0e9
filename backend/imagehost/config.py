"""
Application configuration using Pydantic Settings.
All environment variables are loaded here, once, at process start.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PUBLIC_DIR = Path(__file__).resolve().parent / "public"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # S3-compatible storage (Cloudflare R2, Sevalla, MinIO, AWS S3)
    s3_bucket: str
    aws_access_key_id: str
    aws_secret_access_key: str
    endpoint: Optional[str] = None  # e.g., https://<account_id>.r2.cloudflarestorage.com
    s3_region: str = "auto"  # R2 uses "auto" for region

    # Upload / retrieval limits
    max_upload_bytes: int = 10 * 1024 * 1024  # 10 MiB
    signed_url_ttl: int = 3600  # seconds

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000
    forwarded_allow_ips: str = "127.0.0.1"
    public_dir: Path = DEFAULT_PUBLIC_DIR

    # Environment
    environment: str = "dev"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("s3_bucket", "aws_access_key_id", "aws_secret_access_key")
    @classmethod
    def require_non_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("endpoint")
    @classmethod
    def blank_endpoint_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("max_upload_bytes", "signed_url_ttl")
    @classmethod
    def require_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value


@lru_cache
def get_settings() -> Settings:
    """
    Load settings from the environment.

    Raises pydantic.ValidationError when S3_BUCKET or the credentials
    are missing, which stops the server before it accepts traffic.
    """
    return Settings()
