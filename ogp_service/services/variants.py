"""
Registry of the visual variants an OGP image can be rendered with.
"""
from dataclasses import dataclass
from typing import Dict

from ..core.errors import UnknownVariant


@dataclass(frozen=True)
class Variant:
    background_asset: str  # blob store path of the background image
    font_asset: str        # blob store path of the font file
    font_family: str
    font_weight: int
    text_color: str
    text_shadow: str


DEFAULT_VARIANT = "normal"

VARIANTS: Dict[str, Variant] = {
    "normal": Variant(
        background_asset="bgs/ogp-bg-normal.png",
        font_asset="fonts/NotoSansJP-Black.ttf",
        font_family="Noto Sans JP",
        font_weight=900,
        text_color="#bc002d",
        text_shadow="none",
    ),
    "event25-time01": Variant(
        background_asset="bgs/ogp-bg-event25-time01.png",
        font_asset="fonts/NotoSansJP-Black.ttf",
        font_family="Noto Sans JP",
        font_weight=900,
        text_color="#fff",
        text_shadow="0 0 10px rgba(0, 0, 0, 0.7)",
    ),
}


def get_variant(name: str) -> Variant:
    """Look up a variant by name, raising UnknownVariant when it is not registered."""
    try:
        return VARIANTS[name]
    except KeyError:
        raise UnknownVariant(name) from None
