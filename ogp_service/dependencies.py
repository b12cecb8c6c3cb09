"""
Process-wide service instances injected into the routes.
"""
from functools import lru_cache

from .services.cache import AssetCache, RenderCache
from .services.og_service import OGRenderer
from .services.pipeline import ImagePipeline
from .services.storage import BlobStore, create_blob_store
from .services.title_service import TitleSource


@lru_cache(maxsize=None)
def get_blob_store() -> BlobStore:
    return create_blob_store()


@lru_cache(maxsize=None)
def get_asset_cache() -> AssetCache:
    return AssetCache(get_blob_store())


@lru_cache(maxsize=None)
def get_pipeline() -> ImagePipeline:
    """Pipeline shared by every /image request for the life of the process."""
    store = get_blob_store()
    return ImagePipeline(
        render_cache=RenderCache(store),
        asset_cache=get_asset_cache(),
        title_source=TitleSource(),
        renderer=OGRenderer()
    )
