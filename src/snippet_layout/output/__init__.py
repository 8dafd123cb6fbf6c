"""
Module: output

Purpose:
    Compositor: turns finalized pages plus asset bitmaps into a PDF
    (ReportLab) or a print surface (PIL pages for a PrintSink).
"""

from .quality import QualityPreset, QualitySettings, ImageEnhancement
from .transform import PageTransform
from .images import PreparedImage, RenderAssetError, prepare_image
from .text_raster import rasterize_text
from .renderer import ExportError, RenderResult, render_to_pdf
from .print_surface import (
    PrintPage,
    PrintSurface,
    PrintSink,
    QtPrintSink,
    build_print_surface,
    print_surface,
)

__all__ = [
    "QualityPreset",
    "QualitySettings",
    "ImageEnhancement",
    "PageTransform",
    "PreparedImage",
    "RenderAssetError",
    "prepare_image",
    "rasterize_text",
    "ExportError",
    "RenderResult",
    "render_to_pdf",
    "PrintPage",
    "PrintSurface",
    "PrintSink",
    "QtPrintSink",
    "build_print_surface",
    "print_surface",
]
