"""
Font size selection and line wrapping for OGP text blocks.

Widths are estimated from the character count and a fixed average
character width ratio rather than measured from glyph metrics.
"""
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

ELLIPSIS = "..."

MAX_WIDTH = 700            # px available to a text block
AVG_CHAR_WIDTH_RATIO = 0.7  # average glyph advance relative to font size


@dataclass(frozen=True)
class FittingEnvelope:
    min_size: float
    max_size: float
    max_lines: int
    max_width: float = MAX_WIDTH
    avg_char_width_ratio: float = AVG_CHAR_WIDTH_RATIO


@dataclass(frozen=True)
class FittedText:
    font_size: float
    lines: List[str] = field(default_factory=list)


TITLE_ONLY = FittingEnvelope(min_size=60, max_size=110, max_lines=4)
TITLE_WITH_SUBTITLE = FittingEnvelope(min_size=80, max_size=110, max_lines=1)
SUBTITLE = FittingEnvelope(min_size=30, max_size=70, max_lines=3)


def calculate_font_size(text: str, envelope: FittingEnvelope) -> float:
    """
    Pick a font size so that the text roughly fits the envelope width.

    Args:
        text: Text to size
        envelope: Size limits and width for the block

    Returns:
        Font size in px, clamped to [min_size, max_size]
    """
    if not text:
        return envelope.min_size
    estimated_width = len(text) * (envelope.max_size * envelope.avg_char_width_ratio)
    scale = min(envelope.max_width / estimated_width, 1.0)
    font_size = envelope.max_size * scale
    return max(envelope.min_size, min(envelope.max_size, font_size))


def chars_per_line(font_size: float, envelope: FittingEnvelope) -> int:
    return max(1, math.floor(envelope.max_width / (font_size * envelope.avg_char_width_ratio)))


def clamp_lines(text: str, font_size: float, envelope: FittingEnvelope) -> List[str]:
    """
    Split text into fixed-width lines, truncating with an ellipsis when it
    does not fit in max_lines. Breaks may fall mid-word.
    """
    if not text:
        return []
    per_line = chars_per_line(font_size, envelope)
    max_chars = per_line * envelope.max_lines

    processed = text
    if len(text) > max_chars:
        processed = text[:max(max_chars - len(ELLIPSIS), 0)] + ELLIPSIS

    lines = [processed[i:i + per_line] for i in range(0, len(processed), per_line)]
    return lines[:envelope.max_lines]


def fit_text(text: str, envelope: FittingEnvelope) -> FittedText:
    font_size = calculate_font_size(text, envelope)
    return FittedText(font_size=font_size, lines=clamp_lines(text, font_size, envelope))


def layout_texts(title: str, subtitle: Optional[str]) -> Tuple[FittedText, Optional[FittedText]]:
    """Fit the title and optional subtitle; a subtitle shrinks the title to a single line."""
    if subtitle:
        return fit_text(title, TITLE_WITH_SUBTITLE), fit_text(subtitle, SUBTITLE)
    return fit_text(title, TITLE_ONLY), None
