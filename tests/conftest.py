"""
Pytest configuration and fixtures for OGP Service tests.
Collaborators that reach the network or a browser are replaced with in-memory fakes.
"""
from typing import Dict, Optional

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from ogp_service.core.errors import StoreError
from ogp_service.dependencies import get_pipeline
from ogp_service.main import app
from ogp_service.services.cache import AssetCache, RenderCache
from ogp_service.services.pipeline import ImagePipeline
from ogp_service.services.storage import BlobStore
from ogp_service.services.title_service import TitlePair

FAKE_PNG = b"\x89PNG\r\n\x1a\nfake rendered image"
FAKE_FONT = b"fake font bytes"
FAKE_BACKGROUND = b"\x89PNG\r\n\x1a\nfake background"


class MemoryBlobStore(BlobStore):
    """Blob store kept in a dict, recording every call."""

    def __init__(self, blobs: Optional[Dict[str, bytes]] = None):
        self.blobs: Dict[str, bytes] = dict(blobs or {})
        self.content_types: Dict[str, str] = {}
        self.gets = []
        self.puts = []
        self.get_error: Optional[Exception] = None
        self.put_error: Optional[Exception] = None

    async def get(self, path: str) -> Optional[bytes]:
        self.gets.append(path)
        if self.get_error is not None:
            raise self.get_error
        return self.blobs.get(path)

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        self.puts.append(path)
        if self.put_error is not None:
            raise self.put_error
        self.blobs[path] = data
        self.content_types[path] = content_type


@pytest.fixture
def blob_store():
    """Store seeded with the assets of every registered variant."""
    return MemoryBlobStore({
        "fonts/NotoSansJP-Black.ttf": FAKE_FONT,
        "bgs/ogp-bg-normal.png": FAKE_BACKGROUND,
        "bgs/ogp-bg-event25-time01.png": FAKE_BACKGROUND,
    })


@pytest.fixture
def title_source():
    """Title source that always resolves to a plain title."""
    source = AsyncMock()
    source.resolve = AsyncMock(side_effect=lambda page, subtitle=None: TitlePair(title=page, subtitle=subtitle))
    return source


@pytest.fixture
def renderer():
    """Renderer returning fixed PNG bytes."""
    mock_renderer = AsyncMock()
    mock_renderer.render = AsyncMock(return_value=FAKE_PNG)
    return mock_renderer


@pytest.fixture
def pipeline(blob_store, title_source, renderer):
    return ImagePipeline(
        render_cache=RenderCache(blob_store, prefix="image-cache"),
        asset_cache=AssetCache(blob_store),
        title_source=title_source,
        renderer=renderer
    )


@pytest.fixture
def client(pipeline):
    """Test client for the FastAPI application with the pipeline faked out."""
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def failing_store_error():
    return StoreError("simulated storage failure")
