"""
Module: output.print_surface

Purpose:
    Live-print rendering. Pages are composited into PIL bitmaps at the
    screen reference resolution (ratio 1, top-left origin) and handed
    to a PrintSink only after every raster has been decoded, so the
    host's print dialog never sees a half-drawn page.

Key Classes:
    - PrintPage / PrintSurface: Composited pages ready for printing
    - PrintSink: Abstract print destination
    - QtPrintSink: Native printing through PySide6 QPrinter/QPainter

Key Functions:
    - build_print_surface(): Composite pages
    - print_surface(): Send a surface to a sink

Dependencies:
    - PIL: Compositing
    - PySide6: QtPrintSink only (imported on use)

Used By:
    - controller: print_document()
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from PIL import Image, ImageColor, ImageDraw

from snippet_layout.assets import AssetLibrary, MissingAssetError
from snippet_layout.core import units
from snippet_layout.core.models import Margin, Page, ShapeElement, ShapeKind

from .images import RenderAssetError, decode_prepared, prepare_image
from .quality import ImageEnhancement, QualityPreset
from .renderer import ExportError
from .text_raster import rasterize_text
from .transform import PageTransform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrintPage:
    """
    One composited page.

    Attributes:
        page_id: Source page id
        image: RGB bitmap at SCREEN_DPI
        size_mm: Paper (width, height) in millimeters, orientation applied
    """

    page_id: str
    image: Image.Image
    size_mm: Tuple[float, float]

    @property
    def is_landscape(self) -> bool:
        return self.size_mm[0] > self.size_mm[1]


@dataclass(frozen=True)
class PrintSurface:
    pages: Tuple[PrintPage, ...]
    dpi: float = units.SCREEN_DPI

    @property
    def page_count(self) -> int:
        return len(self.pages)


class PrintSink(ABC):
    """Destination for a fully composited PrintSurface."""

    @abstractmethod
    def print_pages(self, surface: PrintSurface) -> None:
        """
        Print every page of the surface.

        Raises:
            ExportError: If the destination fails
        """


# ─────────────────────────────────────────────────────────────────────────────
# Compositing
# ─────────────────────────────────────────────────────────────────────────────

def build_print_surface(
    pages: Sequence[Page],
    assets: AssetLibrary,
    *,
    quality: QualityPreset = QualityPreset.MAXIMUM,
    enhancement: Optional[ImageEnhancement] = None,
    default_margin: Optional[Margin] = None,
) -> PrintSurface:
    """
    Composite pages into print bitmaps.

    Uses the same PageTransform as the PDF path with ratio 1 and no y
    flip. Missing or broken snippets are logged and left out.

    Raises:
        ExportError: If there are no pages
    """
    if not pages:
        raise ExportError("Nothing to print: document has no pages")

    settings = quality.settings
    printed = []
    for page in pages:
        transform = PageTransform.for_page(
            page, default_margin, output_dpi=units.SCREEN_DPI, flip_y=False
        )
        canvas = Image.new("RGB", (int(transform.page_width), int(transform.page_height)), "white")

        for snippet in page.snippets:
            try:
                bitmap = assets.get_bitmap(snippet.asset_id)
                prepared = prepare_image(
                    bitmap, snippet.size, settings, enhancement=enhancement, asset_id=snippet.asset_id
                )
                raster = decode_prepared(prepared, snippet.asset_id)
            except (MissingAssetError, RenderAssetError) as e:
                logger.warning(f"{e}; snippet omitted from print")
                continue
            _paste(canvas, raster, transform.to_output(snippet.rect), settings.resample)

        for text in page.texts:
            try:
                raster = rasterize_text(text, settings.resolution_multiplier)
            except (OSError, ValueError) as e:
                logger.warning(f"Cannot rasterize text {text.id}: {e}; omitted from print")
                continue
            _paste(canvas, raster, transform.to_output(text.rect), settings.resample)

        draw = ImageDraw.Draw(canvas)
        for shape in page.shapes:
            _draw_shape(draw, shape, transform)

        printed.append(PrintPage(page_id=page.id, image=canvas, size_mm=page.page_size_mm()))
        logger.debug(f"Composited print page {page.id}")

    logger.info(f"Prepared {len(printed)} page(s) for printing")
    return PrintSurface(pages=tuple(printed))


def _paste(
    canvas: Image.Image,
    image: Image.Image,
    box: Tuple[float, float, float, float],
    resample: Image.Resampling,
) -> None:
    """Scale image into box (x, y, w, h) and paste with its alpha."""
    x, y, width, height = box
    size = (max(1, round(width)), max(1, round(height)))
    if image.size != size:
        image = image.resize(size, resample)
    if image.mode == "RGBA":
        canvas.paste(image, (round(x), round(y)), mask=image)
    else:
        canvas.paste(image.convert("RGB"), (round(x), round(y)))


def _draw_shape(draw: ImageDraw.ImageDraw, shape: ShapeElement, transform: PageTransform) -> None:
    try:
        stroke = ImageColor.getrgb(shape.stroke_color)
        fill = ImageColor.getrgb(shape.fill_color) if shape.is_filled else None
    except ValueError as e:
        logger.warning(f"Invalid color on shape {shape.id}: {e}; omitted from print")
        return

    x, y, width, height = transform.to_output(shape.rect)
    line_width = max(1, round(transform.scale(shape.stroke_width)))
    if shape.shape_kind is ShapeKind.LINE:
        mid_y = y + height / 2
        draw.line([(x, mid_y), (x + width, mid_y)], fill=stroke, width=line_width)
    elif shape.shape_kind is ShapeKind.CIRCLE:
        inset = line_width / 2
        draw.ellipse(
            [x + inset, y + inset, x + width - inset, y + height - inset],
            outline=stroke, fill=fill, width=line_width,
        )
    else:
        draw.rectangle([x, y, x + width, y + height], outline=stroke, fill=fill, width=line_width)


def print_surface(surface: PrintSurface, sink: PrintSink) -> None:
    """
    Hand a composited surface to a print sink.

    Raises:
        ExportError: If the sink fails
    """
    try:
        sink.print_pages(surface)
    except ExportError:
        raise
    except (OSError, RuntimeError) as e:
        raise ExportError(f"Printing failed: {e}") from e
    logger.info(f"Sent {surface.page_count} page(s) to {type(sink).__name__}")


# ─────────────────────────────────────────────────────────────────────────────
# Qt printing
# ─────────────────────────────────────────────────────────────────────────────

class QtPrintSink(PrintSink):
    """
    Print through the host's native print system via PySide6.

    A QApplication (or QGuiApplication) must exist before printing.

    Args:
        printer: Pre-configured QPrinter (e.g. from a QPrintDialog);
            a high-resolution default printer is used if omitted
    """

    def __init__(self, printer=None) -> None:
        self._printer = printer

    def _get_printer(self):
        if self._printer is None:
            from PySide6.QtPrintSupport import QPrinter

            self._printer = QPrinter(QPrinter.PrinterMode.HighResolution)
        return self._printer

    def print_pages(self, surface: PrintSurface) -> None:
        from PySide6.QtCore import QRectF, QSizeF
        from PySide6.QtGui import QImage, QPageLayout, QPageSize, QPainter

        printer = self._get_printer()
        printer.setFullPage(True)
        painter = QPainter()

        try:
            for index, page in enumerate(surface.pages):
                width_mm, height_mm = sorted(page.size_mm)
                printer.setPageSize(QPageSize(QSizeF(width_mm, height_mm), QPageSize.Unit.Millimeter))
                printer.setPageOrientation(
                    QPageLayout.Orientation.Landscape if page.is_landscape
                    else QPageLayout.Orientation.Portrait
                )
                if index == 0:
                    if not painter.begin(printer):
                        raise ExportError("Cannot start printing: printer unavailable")
                elif not printer.newPage():
                    raise ExportError(f"Printer rejected page {index + 1}")

                rgb = page.image.convert("RGB")
                data = rgb.tobytes("raw", "RGB")
                image = QImage(data, rgb.width, rgb.height, rgb.width * 3, QImage.Format.Format_RGB888)
                target = QRectF(painter.viewport())
                painter.drawImage(target, image)
                logger.debug(f"Printed page {page.page_id}")
        finally:
            if painter.isActive():
                painter.end()
