"""
Image route.
Answers /image from the durable render cache when it can, otherwise renders
the page title onto the variant background and stores the PNG before replying.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from ..core.config import settings
from ..dependencies import get_pipeline
from ..services.pipeline import ImagePipeline, RenderRequest
from ..utils.debug import print_step

router = APIRouter(tags=["og"])


@router.get("/image")
async def generate_og_image(
    request: Request,
    page: Optional[str] = Query(None, description="Wiki page name whose title is rendered"),
    variant: Optional[str] = Query(None, description="Visual variant, defaults to 'normal'"),
    subtitle: Optional[str] = Query(None, description="Subtitle used when the title has none of its own"),
    nocache: Optional[str] = Query(None, description="'true' skips the cache read and regenerates"),
    pipeline: ImagePipeline = Depends(get_pipeline)
):
    """
    Generate a dynamic Open Graph image for a wiki page.

    Returns a PNG image (1200x630) optimized for social media platforms.
    Rendered images are cached by the full request URL; the X-Cache header
    reports HIT or MISS.
    """
    render_request = RenderRequest.from_query({
        "page": page,
        "variant": variant,
        "subtitle": subtitle,
        "nocache": nocache
    })
    print_step("OG Image Request", {
        "page": render_request.page,
        "variant": render_request.variant,
        "nocache": render_request.bypass_cache
    }, "input")

    result = await pipeline.run(render_request, str(request.url))

    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={
            "X-Cache": result.cache_status,
            "Cache-Control": settings.IMAGE_CACHE_CONTROL,
            "Content-Disposition": "inline; filename=ogp.png"
        }
    )
