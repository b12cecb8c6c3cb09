"""
OGP image request pipeline.

A request walks a fixed sequence of stages. The render cache check comes
first and answers on a hit; otherwise the title is resolved, the variant and
its assets are looked up, the text is fitted, the card is rendered and the
result is written back to the render cache before the response goes out.
Any stage that raises ends the request; nothing is retried.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from ..core.errors import MissingParameter
from ..utils.debug import print_step
from .cache import AssetCache, RenderCache, cache_key
from .og_service import OGRenderer, build_ogp_node
from .text_fit import layout_texts
from .title_service import TitleSource
from .variants import DEFAULT_VARIANT, get_variant

CACHE_HIT = "HIT"
CACHE_MISS = "MISS"


class PipelineStage(str, Enum):
    CACHE_CHECK = "cache_check"
    TITLE_RESOLVE = "title_resolve"
    VARIANT_LOOKUP = "variant_lookup"
    ASSET_RESOLVE = "asset_resolve"
    TEXT_FIT = "text_fit"
    RENDER_DELEGATE = "render_delegate"
    CACHE_WRITE = "cache_write"
    RESPOND = "respond"


@dataclass(frozen=True)
class RenderRequest:
    page: str
    variant: str = DEFAULT_VARIANT
    subtitle: Optional[str] = None
    bypass_cache: bool = False

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "RenderRequest":
        """Build a request from query parameters; `page` is required."""
        page = params.get("page")
        if not page:
            raise MissingParameter("page")
        return cls(
            page=page,
            variant=params.get("variant") or DEFAULT_VARIANT,
            subtitle=params.get("subtitle"),
            bypass_cache=params.get("nocache") == "true",
        )


@dataclass(frozen=True)
class ImageResult:
    content: bytes
    cache_status: str
    media_type: str = "image/png"


class ImagePipeline:
    """Composes the caches, title source and renderer for /image requests."""

    def __init__(
        self,
        render_cache: RenderCache,
        asset_cache: AssetCache,
        title_source: TitleSource,
        renderer: OGRenderer
    ):
        self.render_cache = render_cache
        self.asset_cache = asset_cache
        self.title_source = title_source
        self.renderer = renderer

    def _enter(self, stage: PipelineStage, data=None) -> None:
        print_step(f"Pipeline {stage.value}", data, "info")

    async def run(self, request: RenderRequest, url: str) -> ImageResult:
        """
        Produce the PNG for a request.

        Args:
            request: Parsed query parameters
            url: Full request URL, used as the cache fingerprint

        Returns:
            ImageResult with the PNG bytes and HIT/MISS status
        """
        key = cache_key(url)

        self._enter(PipelineStage.CACHE_CHECK, {"key": key, "bypass": request.bypass_cache})
        if not request.bypass_cache:
            cached = await self.render_cache.get(key)
            if cached is not None:
                self._enter(PipelineStage.RESPOND, {"cache": CACHE_HIT, "size_bytes": len(cached)})
                return ImageResult(content=cached, cache_status=CACHE_HIT)

        self._enter(PipelineStage.TITLE_RESOLVE, {"page": request.page})
        titles = await self.title_source.resolve(request.page, request.subtitle)

        self._enter(PipelineStage.VARIANT_LOOKUP, {"variant": request.variant})
        variant = get_variant(request.variant)

        self._enter(PipelineStage.ASSET_RESOLVE, {"variant": request.variant})
        assets = await self.asset_cache.resolve(request.variant, variant)

        self._enter(PipelineStage.TEXT_FIT, {"title": titles.title, "subtitle": titles.subtitle})
        title_block, subtitle_block = layout_texts(titles.title, titles.subtitle)

        self._enter(PipelineStage.RENDER_DELEGATE, {
            "title_font_size": title_block.font_size,
            "title_lines": len(title_block.lines),
            "subtitle_lines": len(subtitle_block.lines) if subtitle_block else 0
        })
        node = build_ogp_node(variant, assets.background, title_block, subtitle_block)
        png = await self.renderer.render(node, assets.font, variant)

        self._enter(PipelineStage.CACHE_WRITE, {"key": key})
        await self.render_cache.put(key, png, "image/png")

        self._enter(PipelineStage.RESPOND, {"cache": CACHE_MISS, "size_bytes": len(png)})
        return ImageResult(content=png, cache_status=CACHE_MISS)
