"""
Module: output.renderer

Purpose:
    Render Pages to PDF using ReportLab. Each Page becomes one PDF page
    at its paper size in points; elements are drawn in order snippets,
    text, shapes, through one PageTransform per page.

Key Functions:
    - render_to_pdf(): Main rendering function

Key Classes:
    - RenderResult: Page count and skipped elements
    - ExportError: Output could not be produced

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - output.transform, output.images, output.text_raster

Used By:
    - controller: export_document()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Union

from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from snippet_layout.assets import AssetLibrary, MissingAssetError
from snippet_layout.core import units
from snippet_layout.core.errors import LayoutError
from snippet_layout.core.models import Margin, Page, PlacedSnippet, ShapeElement, ShapeKind, TextElement

from .images import RenderAssetError, prepare_image, to_image_reader
from .quality import ImageEnhancement, QualityPreset, QualitySettings
from .text_raster import rasterize_text
from .transform import PageTransform

logger = logging.getLogger(__name__)

Sink = Union[str, Path, BinaryIO]

SNIPPET_BORDER_WIDTH_PT = 0.5


class ExportError(LayoutError):
    """The output artifact could not be produced (no pages, sink failure)."""


@dataclass
class RenderResult:
    """
    Summary of one render pass.

    Attributes:
        page_count: Pages written
        skipped: Ids of elements left out because of missing or broken assets
    """

    page_count: int = 0
    skipped: List[str] = field(default_factory=list)


def render_to_pdf(
    pages: Sequence[Page],
    assets: AssetLibrary,
    sink: Sink,
    *,
    quality: QualityPreset = QualityPreset.STANDARD,
    output_dpi: float = units.PDF_DPI,
    enhancement: Optional[ImageEnhancement] = None,
    default_margin: Optional[Margin] = None,
    snippet_border: bool = False,
) -> RenderResult:
    """
    Render pages to a PDF.

    Snippets whose asset is missing or fails to encode are logged and
    omitted; the rest of the page is still drawn. Empty pages still
    produce a blank PDF page.

    Args:
        pages: Pages in output order
        assets: Library resolving snippet bitmaps
        sink: Output path or writable binary stream
        quality: Bitmap encoding preset
        output_dpi: Output resolution (72 = PDF points)
        enhancement: Optional image correction for snippets
        default_margin: Margin for pages without an override
        snippet_border: Draw a thin black frame around each snippet

    Returns:
        RenderResult

    Raises:
        ExportError: If there are no pages, the sink cannot be written or
            PDF generation fails.
            A partially written output file is removed.

    Example:
        >>> render_to_pdf(document.pages, library, Path("out/layout.pdf"))
    """
    if not pages:
        raise ExportError("Nothing to export: document has no pages")

    path = Path(sink) if isinstance(sink, (str, Path)) else None
    result = RenderResult()
    completed = False
    try:
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
        target = str(path) if path is not None else sink
        c = canvas.Canvas(target)
        for page in pages:
            transform = PageTransform.for_page(page, default_margin, output_dpi=output_dpi)
            c.setPageSize(transform.page_size)
            _render_page(c, page, transform, assets, quality, enhancement, snippet_border, result)
            c.showPage()
            result.page_count += 1
        c.save()
        completed = True
    except LayoutError:
        raise
    except OSError as e:
        raise ExportError(f"Cannot write PDF: {e}") from e
    except Exception as e:
        raise ExportError(f"PDF generation failed: {e}") from e
    finally:
        if not completed:
            _remove_partial(path)

    logger.info(f"Rendered {result.page_count} pages to {path or 'stream'}")
    if result.skipped:
        logger.warning(f"Skipped {len(result.skipped)} element(s): {', '.join(result.skipped)}")
    return result


def _remove_partial(path: Optional[Path]) -> None:
    if path is not None and path.exists():
        path.unlink()
        logger.debug(f"Removed partial output {path}")


def _render_page(
    c: canvas.Canvas,
    page: Page,
    transform: PageTransform,
    assets: AssetLibrary,
    quality: QualityPreset,
    enhancement: Optional[ImageEnhancement],
    snippet_border: bool,
    result: RenderResult,
) -> None:
    """
    Render a single page to the canvas.

    Args:
        c: ReportLab canvas
        page: Page to draw
        transform: Geometry mapping for this page
        assets: Bitmap source
        quality: Encoding preset
        enhancement: Optional image correction
        snippet_border: Frame snippets
        result: Collects skipped element ids
    """
    settings = quality.settings
    for snippet in page.snippets:
        if not _draw_snippet(c, snippet, transform, assets, settings, enhancement, snippet_border):
            result.skipped.append(snippet.asset_id)

    for text in page.texts:
        if not _draw_text(c, text, transform, settings.resolution_multiplier):
            result.skipped.append(text.id)

    for shape in page.shapes:
        if not _draw_shape(c, shape, transform):
            result.skipped.append(shape.id)

    logger.debug(f"Page {page.id}: {page.element_count} element(s)")


def _draw_snippet(
    c: canvas.Canvas,
    snippet: PlacedSnippet,
    transform: PageTransform,
    assets: AssetLibrary,
    settings: QualitySettings,
    enhancement: Optional[ImageEnhancement],
    border: bool,
) -> bool:
    x, y, width, height = transform.to_output(snippet.rect)
    try:
        bitmap = assets.get_bitmap(snippet.asset_id)
        prepared = prepare_image(
            bitmap, snippet.size, settings, enhancement=enhancement, asset_id=snippet.asset_id
        )
        try:
            c.drawImage(to_image_reader(prepared), x, y, width=width, height=height)
        except (OSError, ValueError) as e:
            raise RenderAssetError(snippet.asset_id, f"embed failed: {e}") from e
    except (MissingAssetError, RenderAssetError) as e:
        logger.warning(f"{e}; snippet omitted")
        return False

    if border:
        c.saveState()
        c.setStrokeColorRGB(0, 0, 0)
        c.setLineWidth(SNIPPET_BORDER_WIDTH_PT)
        c.rect(x, y, width, height, stroke=1, fill=0)
        c.restoreState()
    return True


def _draw_text(c: canvas.Canvas, text: TextElement, transform: PageTransform, multiplier: int) -> bool:
    try:
        image = rasterize_text(text, multiplier)
    except (OSError, ValueError) as e:
        logger.warning(f"Cannot rasterize text {text.id}: {e}; omitted")
        return False
    x, y, width, height = transform.to_output(text.rect)
    c.drawImage(ImageReader(image), x, y, width=width, height=height, mask="auto")
    return True


def _draw_shape(c: canvas.Canvas, shape: ShapeElement, transform: PageTransform) -> bool:
    try:
        stroke = HexColor(shape.stroke_color)
        fill = HexColor(shape.fill_color) if shape.is_filled else None
    except ValueError as e:
        logger.warning(f"Invalid color on shape {shape.id}: {e}; omitted")
        return False

    x, y, width, height = transform.to_output(shape.rect)
    line_width = transform.scale(shape.stroke_width)

    c.saveState()
    c.setStrokeColor(stroke)
    c.setLineWidth(line_width)
    if fill is not None:
        c.setFillColor(fill)

    if shape.shape_kind is ShapeKind.LINE:
        mid_y = y + height / 2
        c.line(x, mid_y, x + width, mid_y)
    elif shape.shape_kind is ShapeKind.CIRCLE:
        inset = line_width / 2
        c.ellipse(
            x + inset, y + inset, x + width - inset, y + height - inset,
            stroke=1, fill=1 if fill is not None else 0,
        )
    else:
        c.rect(x, y, width, height, stroke=1, fill=1 if fill is not None else 0)
    c.restoreState()
    return True
