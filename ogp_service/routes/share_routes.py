"""
Share & redirect routes.
Serves a page carrying OGP tags for the image endpoint, then sends the reader on to the wiki page.
"""
import json
import re
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse

from ..core.config import settings
from ..core.errors import MissingParameter
from ..services.variants import DEFAULT_VARIANT
from ..utils.debug import print_step
from ..utils.security import build_redirect_url, encode_uri_component, escape_html

router = APIRouter(tags=["share"])

TEMPLATE_PATH = Path(__file__).parent.parent / "templates" / "share_redirect.html"
PLACEHOLDER_RE = re.compile(r"\{\{ (\w+) \}\}")


def build_og_image_url(origin: str, page: str, variant: str) -> str:
    return f"{origin}/image?page={encode_uri_component(page)}&variant={encode_uri_component(variant)}"


def render_share_page(page_url: str, og_image_url: str, redirect_url: str) -> str:
    """
    Fill the share template in a single pass; inserted values are never rescanned.
    The image URL is built from an escaped origin and encoded parts and inserted as is.
    """
    template_html = TEMPLATE_PATH.read_text(encoding="utf-8")
    values = {
        "lang": escape_html(settings.SHARE_LANG),
        "site_title": escape_html(settings.SHARE_SITE_TITLE),
        "site_description": escape_html(settings.SHARE_SITE_DESCRIPTION),
        "page_url": escape_html(page_url),
        "og_image_url": og_image_url,
        "redirect_url": escape_html(redirect_url),
        "redirect_js": json.dumps(redirect_url).replace("</", "<\\/"),
    }
    return PLACEHOLDER_RE.sub(lambda match: values[match.group(1)], template_html)


@router.get("/share", response_class=HTMLResponse)
async def share_page(
    request: Request,
    page: Optional[str] = Query(None, description="Wiki page to redirect to"),
    variant: Optional[str] = Query(None, description="Visual variant of the OGP image")
):
    """
    Return an HTML page embedding OGP/Twitter card tags that point at /image,
    followed by a script redirect and a no-script meta refresh to the wiki page.
    """
    if not page:
        raise MissingParameter("page")
    variant = variant or DEFAULT_VARIANT

    origin = f"{request.url.scheme}://{request.url.netloc}"
    og_image_url = build_og_image_url(escape_html(origin), page, variant)
    redirect_url = build_redirect_url(settings.REDIRECT_BASE_URL, page)

    print_step("Share Page Request", {
        "page": page,
        "variant": variant,
        "redirect_url": redirect_url
    }, "input")

    html = render_share_page(str(request.url), og_image_url, redirect_url)
    return HTMLResponse(content=html, media_type="text/html;charset=UTF-8")
