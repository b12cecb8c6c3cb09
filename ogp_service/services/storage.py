"""
Durable blob storage back-ends.

Both the rendered-image cache and the variant assets (fonts, backgrounds)
live in one bucket. In 's3' mode the bucket is any S3 compatible endpoint
(Cloudflare R2, MinIO, AWS); in 'local' mode it is a directory on disk.
"""
import asyncio
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError, EndpointConnectionError, ConnectTimeoutError

from ..core.config import settings
from ..core.errors import StoreError, StoreUnavailable
from ..utils.debug import print_step

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


class BlobStore:
    """Interface shared by the storage back-ends."""

    async def get(self, path: str) -> Optional[bytes]:
        """Return the blob at path, or None when it does not exist."""
        raise NotImplementedError

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        raise NotImplementedError


class S3BlobStore(BlobStore):
    """Blob store on an S3 compatible bucket. boto3 calls run in a worker thread."""

    def __init__(self, bucket: str, client=None):
        self.bucket = bucket
        self.client = client or boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT,
            aws_access_key_id=settings.S3_ACCESS_KEY,
            aws_secret_access_key=settings.S3_SECRET_KEY,
            region_name=settings.S3_REGION,
        )

    def _get_sync(self, path: str) -> Optional[bytes]:
        try:
            obj = self.client.get_object(Bucket=self.bucket, Key=path)
            return obj["Body"].read()
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in _MISSING_CODES:
                return None
            raise StoreError(f"get {self.bucket}/{path} failed: {code or e}") from e
        except (EndpointConnectionError, ConnectTimeoutError) as e:
            raise StoreUnavailable(f"{settings.S3_ENDPOINT}: {e}") from e
        except BotoCoreError as e:
            raise StoreError(f"get {self.bucket}/{path} failed: {e}") from e

    def _put_sync(self, path: str, data: bytes, content_type: str) -> None:
        try:
            self.client.put_object(Bucket=self.bucket, Key=path, Body=data, ContentType=content_type)
        except (EndpointConnectionError, ConnectTimeoutError) as e:
            raise StoreUnavailable(f"{settings.S3_ENDPOINT}: {e}") from e
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"put {self.bucket}/{path} failed: {e}") from e

    async def get(self, path: str) -> Optional[bytes]:
        return await asyncio.to_thread(self._get_sync, path)

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        await asyncio.to_thread(self._put_sync, path, data, content_type)


class LocalBlobStore(BlobStore):
    """Blob store rooted at a local directory, for development and tests."""

    def __init__(self, root: Path):
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if self.root not in target.parents:
            raise StoreError(f"path escapes storage root: {path}")
        return target

    def _get_sync(self, path: str) -> Optional[bytes]:
        target = self._resolve(path)
        if not target.is_file():
            return None
        try:
            return target.read_bytes()
        except OSError as e:
            raise StoreError(f"read {target} failed: {e}") from e

    def _put_sync(self, path: str, data: bytes, content_type: str) -> None:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = target.with_suffix(target.suffix + ".tmp")
            tmp_path.write_bytes(data)
            tmp_path.replace(target)
        except OSError as e:
            raise StoreError(f"write {target} failed: {e}") from e

    async def get(self, path: str) -> Optional[bytes]:
        return await asyncio.to_thread(self._get_sync, path)

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        await asyncio.to_thread(self._put_sync, path, data, content_type)


def create_blob_store() -> BlobStore:
    """Build the blob store selected by STORAGE_MODE."""
    if settings.STORAGE_MODE == "s3":
        print_step("Blob Store", {"mode": "s3", "endpoint": settings.S3_ENDPOINT, "bucket": settings.S3_BUCKET}, "info")
        return S3BlobStore(settings.S3_BUCKET)
    print_step("Blob Store", {"mode": "local", "root": str(settings.STORAGE_DIR)}, "info")
    return LocalBlobStore(settings.STORAGE_DIR)
