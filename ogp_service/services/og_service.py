"""
Open Graph (OG) Image Rendering Service.
Builds the styled node tree for an OGP card and uses Playwright to render it to PNG.
"""
import base64
from typing import Any, Dict, List, Optional, Union

from playwright.async_api import async_playwright

from ..core.config import settings
from ..utils.debug import print_step
from ..utils.security import escape_html
from .text_fit import FittedText
from .variants import Variant

OG_WIDTH = 1200
OG_HEIGHT = 630

Node = Dict[str, Any]

BROWSER_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-accelerated-2d-canvas',
    '--no-first-run',
    '--no-zygote',
    '--disable-gpu'
]


def _data_url(data: bytes, media_type: str) -> str:
    return f"data:{media_type};base64,{base64.b64encode(data).decode('ascii')}"


def _text_block(fitted: FittedText, variant: Variant, line_height: str, extra: Optional[Dict[str, str]] = None) -> Node:
    style = {
        "display": "flex",
        "flex-direction": "column",
        "align-items": "center",
        "justify-content": "center",
        "font-size": f"{fitted.font_size}px",
        "line-height": line_height,
        "font-weight": str(variant.font_weight),
    }
    style.update(extra or {})
    return {
        "tag": "div",
        "style": style,
        "children": [{"tag": "div", "style": {}, "children": [line]} for line in fitted.lines],
    }


def build_ogp_node(
    variant: Variant,
    background: bytes,
    title: FittedText,
    subtitle: Optional[FittedText] = None
) -> Node:
    """
    Build the styled node tree of an OGP card.

    Args:
        variant: Visual parameters (colours, font weight, shadow)
        background: Background PNG bytes, embedded as a data URL
        title: Fitted title block
        subtitle: Fitted subtitle block; omitted when None or without lines

    Returns:
        Root node of a fixed 1200x630 canvas
    """
    blocks: List[Node] = [_text_block(title, variant, "1.2")]
    if subtitle is not None and subtitle.lines:
        blocks.append(_text_block(subtitle, variant, "1.3", {"margin-top": "24px"}))

    container = {
        "tag": "div",
        "style": {
            "padding": "48px 96px",
            "display": "flex",
            "flex-direction": "column",
            "align-items": "center",
            "justify-content": "center",
            "font-size": "76px",
            "color": variant.text_color,
            "max-width": "100%",
            "max-height": "100%",
            "box-sizing": "border-box",
            "text-shadow": variant.text_shadow,
            "text-align": "center",
        },
        "children": blocks,
    }
    return {
        "tag": "div",
        "style": {
            "width": f"{OG_WIDTH}px",
            "height": f"{OG_HEIGHT}px",
            "display": "flex",
            "justify-content": "center",
            "align-items": "center",
            "background-image": f"url({_data_url(background, 'image/png')})",
            "background-size": "cover",
            "background-position": "center",
        },
        "children": [container],
    }


def render_node_html(node: Union[Node, str]) -> str:
    """Serialise a node tree to markup. Text children are always escaped."""
    if isinstance(node, str):
        return escape_html(node)
    style = "; ".join(f"{key}: {value}" for key, value in node.get("style", {}).items())
    children = "".join(render_node_html(child) for child in node.get("children", []))
    style_attr = f' style="{escape_html(style)}"' if style else ""
    return f"<{node['tag']}{style_attr}>{children}</{node['tag']}>"


def build_document(node: Node, font: bytes, variant: Variant) -> str:
    """Wrap a node tree in a full page that loads the variant font from memory."""
    return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="UTF-8">
    <style>
      @font-face {{
        font-family: "{variant.font_family}";
        src: url({_data_url(font, 'font/ttf')});
        font-weight: {variant.font_weight};
        font-style: normal;
      }}
      html, body {{ margin: 0; padding: 0; width: {OG_WIDTH}px; height: {OG_HEIGHT}px; overflow: hidden; }}
      body {{ font-family: "{variant.font_family}"; }}
    </style>
  </head>
  <body>{render_node_html(node)}</body>
</html>"""


class OGRenderer:
    """Renders OGP node trees to PNG with headless Chromium."""

    def __init__(self, settle_ms: int = None):
        self.settle_ms = settings.RENDER_SETTLE_MS if settle_ms is None else settle_ms

    async def render(self, node: Node, font: bytes, variant: Variant) -> bytes:
        """
        Render a node tree to a PNG.

        Args:
            node: Root node from build_ogp_node
            font: Font file bytes for the variant's font family
            variant: Variant the node was built for

        Returns:
            PNG image bytes (1200x630)
        """
        rendered_html = build_document(node, font, variant)
        print_step("OG Image Render", {
            "html_length": len(rendered_html),
            "font_family": variant.font_family
        }, "input")

        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True, args=BROWSER_ARGS)
            try:
                page = await browser.new_page()

                # Viewport at exact OG image dimensions
                await page.set_viewport_size({"width": OG_WIDTH, "height": OG_HEIGHT})
                await page.set_content(rendered_html)

                # Wait for the embedded font and layout
                await page.evaluate("document.fonts.ready.then(() => true)")
                await page.wait_for_timeout(self.settle_ms)

                screenshot_bytes = await page.screenshot(
                    type='png',
                    full_page=False
                )
            finally:
                await browser.close()

        print_step("OG Image Rendered", {
            "image_size_bytes": len(screenshot_bytes)
        }, "output")
        return screenshot_bytes
