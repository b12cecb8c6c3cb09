"""
Caches in front of the render step.

RenderCache is the durable, content-addressed store of finished PNGs.
AssetCache keeps each variant's font and background in process memory
after the first request that needed them.
"""
import hashlib
from dataclasses import dataclass
from typing import Dict, Optional

from ..core.config import settings
from ..core.errors import AssetNotFound, CacheStoreUnavailable, StoreError, StoreUnavailable
from ..utils.debug import print_step
from .storage import BlobStore
from .variants import Variant


def cache_key(url: str) -> str:
    """
    SHA-256 of the full request URL, lowercase hex.

    The URL is hashed as received: reordering or re-casing query
    parameters yields a different key.
    """
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


class RenderCache:
    """Durable cache of rendered images keyed by cache_key()."""

    def __init__(self, store: BlobStore, prefix: str = None):
        self.store = store
        self.prefix = (prefix if prefix is not None else settings.RENDER_CACHE_PREFIX).strip("/")

    def path_for(self, key: str) -> str:
        return f"{self.prefix}/{key}"

    async def get(self, key: str) -> Optional[bytes]:
        """
        Read a cached image.

        A failed read counts as a miss; an unreachable store fails the request.
        """
        try:
            return await self.store.get(self.path_for(key))
        except StoreUnavailable as e:
            print_step("Render Cache Unavailable", {"key": key, "error": str(e)}, "error")
            raise CacheStoreUnavailable(str(e)) from e
        except StoreError as e:
            print_step("Render Cache Read Failed", {"key": key, "error": str(e)}, "warning")
            return None

    async def put(self, key: str, data: bytes, content_type: str = "image/png") -> bool:
        """Write an image; failures are logged and reported as False."""
        try:
            await self.store.put(self.path_for(key), data, content_type)
        except StoreError as e:
            print_step("Render Cache Write Failed", {"key": key, "error": str(e)}, "warning")
            return False
        print_step("Render Cache Write", {"key": key, "size_bytes": len(data)}, "output")
        return True


@dataclass(frozen=True)
class VariantAssets:
    font: bytes
    background: bytes


class AssetCache:
    """
    Process-lifetime cache of variant fonts and backgrounds.

    Entries are added lazily and never evicted. Population is not locked:
    concurrent cold requests may both fetch and store the same blob.
    """

    def __init__(self, store: BlobStore):
        self.store = store
        self.fonts: Dict[str, bytes] = {}
        self.backgrounds: Dict[str, bytes] = {}

    async def _fetch(self, path: str) -> bytes:
        try:
            data = await self.store.get(path)
        except StoreUnavailable as e:
            raise CacheStoreUnavailable(str(e)) from e
        except StoreError as e:
            print_step("Asset Fetch Failed", {"path": path, "error": str(e)}, "error")
            raise AssetNotFound(path) from e
        if data is None:
            raise AssetNotFound(path)
        print_step("Asset Loaded", {"path": path, "size_bytes": len(data)}, "info")
        return data

    async def resolve(self, name: str, variant: Variant) -> VariantAssets:
        if name not in self.fonts:
            self.fonts[name] = await self._fetch(variant.font_asset)
        if name not in self.backgrounds:
            self.backgrounds[name] = await self._fetch(variant.background_asset)
        return VariantAssets(font=self.fonts[name], background=self.backgrounds[name])
