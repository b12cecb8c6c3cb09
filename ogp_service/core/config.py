"""
Runtime configuration for the OGP image service.
Values are read from the environment (and an optional .env file) once at import time.
"""
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Upper-case settings object shared by the app, routes and services."""

    DEBUG: bool = _env_bool("DEBUG")

    CORS_ORIGINS: List[str] = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()
    ]

    # Durable blob storage: 's3' (R2 / MinIO / S3) or 'local'
    STORAGE_MODE: str = os.getenv("STORAGE_MODE", "local").strip().lower()
    STORAGE_DIR: Path = Path(
        os.getenv("STORAGE_DIR", str(Path(__file__).resolve().parent.parent.parent / "storage")).strip()
    ).resolve()
    S3_ENDPOINT: str = os.getenv("S3_ENDPOINT", "http://localhost:9000")
    S3_ACCESS_KEY: str = os.getenv("S3_ACCESS_KEY", "minio")
    S3_SECRET_KEY: str = os.getenv("S3_SECRET_KEY", "minio123")
    S3_REGION: str = os.getenv("S3_REGION", "auto")
    S3_BUCKET: str = os.getenv("S3_BUCKET", "ogp-bucket")

    RENDER_CACHE_PREFIX: str = os.getenv("RENDER_CACHE_PREFIX", "image-cache").strip("/")

    # Page title source and share redirect target
    TITLE_SOURCE_BASE_URL: str = os.getenv("TITLE_SOURCE_BASE_URL", "http://pseudo-scp-jp.wikidot.com").rstrip("/")
    TITLE_FETCH_TIMEOUT_S: float = float(os.getenv("TITLE_FETCH_TIMEOUT_S", "10"))
    REDIRECT_BASE_URL: str = os.getenv("REDIRECT_BASE_URL", "http://scp-jp.wikidot.com").rstrip("/")

    # Rendering
    RENDER_SETTLE_MS: int = int(os.getenv("RENDER_SETTLE_MS", "500"))
    IMAGE_CACHE_CONTROL: str = os.getenv("IMAGE_CACHE_CONTROL", "public, max-age=604800, immutable")

    # Share page
    SHARE_SITE_TITLE: str = os.getenv("SHARE_SITE_TITLE", "SCP財団Wiki 日本語版")
    SHARE_SITE_DESCRIPTION: str = os.getenv("SHARE_SITE_DESCRIPTION", "SCP財団日本語版Wiki")
    SHARE_LANG: str = os.getenv("SHARE_LANG", "ja")

    @property
    def ALL_CORS_ORIGINS(self) -> List[str]:
        return list(dict.fromkeys(self.CORS_ORIGINS))


settings = Settings()
