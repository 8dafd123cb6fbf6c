"""
Module: output.text_raster

Purpose:
    Rasterize TextElements. Text has no native vector form in the
    output, so each element is drawn onto a transparent bitmap the size
    of its box (times the resolution multiplier) and embedded like a
    snippet.

Key Functions:
    - rasterize_text(): Render one text element

Layout:
    - Horizontal: lines top to bottom, wrapped per character at the box
      width, aligned left/center/right
    - Vertical: glyphs top to bottom, columns right to left, aligned
      to top/center/bottom of each column

Dependencies:
    - PIL: ImageDraw, ImageFont

Used By:
    - output.renderer, output.print_surface
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from PIL import Image, ImageDraw, ImageFont

from snippet_layout.core.models import TextAlign, TextElement, WritingMode

logger = logging.getLogger(__name__)

LINE_SPACING = 1.5

_FONT_CANDIDATES = {
    "serif": [
        "NotoSerifCJK-Regular.ttc",
        "NotoSerifCJKjp-Regular.otf",
        "YuMincho.ttc",
        "msmincho.ttc",
        "DejaVuSerif.ttf",
        "Times New Roman.ttf",
    ],
    "sans-serif": [
        "NotoSansCJK-Regular.ttc",
        "NotoSansCJKjp-Regular.otf",
        "YuGothM.ttc",
        "msgothic.ttc",
        "DejaVuSans.ttf",
        "arial.ttf",
        "Arial.ttf",
    ],
}


@lru_cache(maxsize=32)
def _load_font(family: str, size: int) -> ImageFont.ImageFont:
    """
    Load a TrueType font for the family.

    Tries the family itself as a file name, then known CJK-capable
    fonts. Falls back to Pillow's default font.

    Args:
        family: CSS-like family name ("serif", "sans-serif", or a file)
        size: Font size in pixels

    Returns:
        Font object
    """
    key = "sans-serif" if "sans" in family.lower() or "gothic" in family.lower() else "serif"
    font_options = [family] + _FONT_CANDIDATES[key]

    for font_name in font_options:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning(f"Could not load TrueType font for {family!r}, using default")
    return ImageFont.load_default(size)


def _wrap_horizontal(
    content: str,
    font: ImageFont.ImageFont,
    draw: ImageDraw.ImageDraw,
    max_width: float,
) -> List[str]:
    """Break content into lines, wrapping per character at max_width."""
    lines: List[str] = []
    for paragraph in content.split("\n"):
        line = ""
        for ch in paragraph:
            candidate = line + ch
            if line and draw.textlength(candidate, font=font) > max_width:
                lines.append(line)
                line = ch
            else:
                line = candidate
        lines.append(line)
    return lines


def _wrap_vertical(content: str, glyph_height: float, max_height: float) -> List[str]:
    """Break content into columns of glyphs that fit max_height."""
    per_column = max(1, int(max_height // glyph_height))
    columns: List[str] = []
    for paragraph in content.split("\n"):
        if not paragraph:
            columns.append("")
            continue
        for start in range(0, len(paragraph), per_column):
            columns.append(paragraph[start:start + per_column])
    return columns


def _aligned_offset(align: TextAlign, extent: float, available: float) -> float:
    if align is TextAlign.CENTER:
        return (available - extent) / 2
    if align is TextAlign.RIGHT:
        return available - extent
    return 0.0


def rasterize_text(element: TextElement, multiplier: int = 2) -> Image.Image:
    """
    Render a text element to a transparent RGBA bitmap.

    Args:
        element: Text element (geometry in screen units)
        multiplier: Output pixels per screen unit

    Returns:
        RGBA image of size element.size x multiplier

    Example:
        >>> img = rasterize_text(TextElement(id="t", content="abc", position=Position(0, 0)))
        >>> img.size
        (200, 400)
    """
    width = max(1, round(element.size.width * multiplier))
    height = max(1, round(element.size.height * multiplier))
    image = Image.new("RGBA", (width, height), (255, 255, 255, 0))
    if not element.content:
        return image

    draw = ImageDraw.Draw(image)
    font_px = max(1, round(element.font_size * multiplier))
    font = _load_font(element.font_family, font_px)
    pitch = font_px * LINE_SPACING

    if element.writing_mode is WritingMode.HORIZONTAL:
        lines = _wrap_horizontal(element.content, font, draw, width)
        y = 0.0
        for line in lines:
            if y + font_px > height:
                break
            offset = _aligned_offset(element.text_align, draw.textlength(line, font=font), width)
            draw.text((offset, y), line, fill=element.color, font=font)
            y += pitch
    else:
        columns = _wrap_vertical(element.content, font_px, height)
        x = width - pitch
        for column in columns:
            if x + pitch < 0:
                break
            offset = _aligned_offset(element.text_align, len(column) * font_px, height)
            for index, ch in enumerate(column):
                glyph_w = draw.textlength(ch, font=font)
                gx = x + (pitch - glyph_w) / 2
                draw.text((gx, offset + index * font_px), ch, fill=element.color, font=font)
            x -= pitch

    logger.debug(f"Rasterized text {element.id} at {image.size}")
    return image
