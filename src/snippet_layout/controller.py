"""
Module: snippet_layout.controller

Purpose:
    Orchestrate export of a Document.
    Validate → Check assets → Render (PDF or print surface)

Key Functions:
    - export_document(): Write a PDF for a document
    - print_document(): Composite and print a document

Key Classes:
    - ExportConfig: Export settings
    - ExportResult: Export outcome and metadata

Dependencies:
    - output: Renderer and print surface
    - assets: AssetLibrary

Used By:
    - snippet_layout.cli: export command
    - Host applications
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

from snippet_layout.assets import AssetLibrary, missing_asset_ids
from snippet_layout.core import units
from snippet_layout.core.models import Document

from .output import (
    ExportError,
    ImageEnhancement,
    PrintSink,
    QualityPreset,
    build_print_surface,
    print_surface,
    render_to_pdf,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for export (immutable).

    Attributes:
        quality: Bitmap encoding preset
        output_dpi: Output resolution; 72 maps one unit to one PDF point
        enhancement: Optional snippet image correction
        snippet_border: Frame each snippet with a thin black line

    Example:
        >>> config = ExportConfig(quality=QualityPreset.HIGH)
        >>> config.ratio
        0.75
    """

    quality: QualityPreset = QualityPreset.STANDARD
    output_dpi: float = units.PDF_DPI
    enhancement: Optional[ImageEnhancement] = None
    snippet_border: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.output_dpi <= 0:
            raise ValueError(f"output_dpi must be positive: {self.output_dpi}")

    @property
    def ratio(self) -> float:
        return units.output_ratio(self.output_dpi)


@dataclass(frozen=True)
class ExportResult:
    """
    Export outcome (immutable).

    Attributes:
        output_path: Written PDF
        page_count: Number of PDF pages
        skipped: Element ids left out (missing or broken assets)
        metadata: Export metadata dictionary
        warnings: Human-readable warnings
    """

    output_path: Path
    page_count: int
    skipped: Tuple[str, ...] = ()
    metadata: dict = field(default_factory=dict)
    warnings: Tuple[str, ...] = ()


def _missing_asset_warnings(document: Document, assets: AssetLibrary) -> list[str]:
    warnings = []
    for page in document.pages:
        missing = missing_asset_ids([s.asset_id for s in page.snippets], assets)
        if missing:
            warnings.append(f"Page {page.id}: missing assets {', '.join(missing)}")
    return warnings


def export_document(
    document: Document,
    assets: AssetLibrary,
    output_path: Path,
    config: Optional[ExportConfig] = None,
) -> ExportResult:
    """
    Export a document to PDF.

    Pipeline:
    1. Check that there is at least one page
    2. Report placements whose asset is gone (they are skipped, not fatal)
    3. Render every page through the PDF renderer

    Args:
        document: Document to export
        assets: Library resolving snippet bitmaps
        output_path: Destination PDF path
        config: Export settings (defaults used if omitted)

    Returns:
        ExportResult with page count and metadata

    Raises:
        ExportError: If the document has no pages or the PDF cannot be
            written; no partial file is left behind

    Example:
        >>> result = export_document(doc, library, Path("out/layout.pdf"))
        >>> print(f"Exported {result.page_count} pages")
    """
    config = config or ExportConfig()
    start_time = time.perf_counter()

    if document.page_count == 0:
        raise ExportError("Nothing to export: document has no pages")

    warnings = _missing_asset_warnings(document, assets)
    for warning in warnings:
        logger.warning(warning)

    result = render_to_pdf(
        document.pages,
        assets,
        output_path,
        quality=config.quality,
        output_dpi=config.output_dpi,
        enhancement=config.enhancement,
        default_margin=document.default_margin,
        snippet_border=config.snippet_border,
    )

    elapsed = time.perf_counter() - start_time
    metadata = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "page_count": result.page_count,
        "quality": config.quality.value,
        "output_dpi": config.output_dpi,
        "elapsed_s": round(elapsed, 3),
    }
    logger.info(f"Exported {result.page_count} pages to {output_path} in {elapsed:.2f}s")

    return ExportResult(
        output_path=Path(output_path),
        page_count=result.page_count,
        skipped=tuple(result.skipped),
        metadata=metadata,
        warnings=tuple(warnings),
    )


def print_document(
    document: Document,
    assets: AssetLibrary,
    sink: PrintSink,
    config: Optional[ExportConfig] = None,
) -> int:
    """
    Composite every page and hand the result to a print sink.

    Returns:
        Number of pages sent

    Raises:
        ExportError: If there are no pages or the sink fails
    """
    config = config or ExportConfig(quality=QualityPreset.MAXIMUM)
    surface = build_print_surface(
        document.pages,
        assets,
        quality=config.quality,
        enhancement=config.enhancement,
        default_margin=document.default_margin,
    )
    print_surface(surface, sink)
    return surface.page_count
