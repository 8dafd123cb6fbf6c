"""
Tests for output.renderer

PDFs are read back with pypdf to check page count, page sizes and
embedded images.

Test Coverage:
- Page count preserved, empty pages still produce a page
- Per-page paper size and orientation
- Missing and undecodable assets skipped without failing the export
- Stream sinks, failure cleanup for sink and generation errors
"""

import io

import pytest
from PIL import Image
from pypdf import PdfReader
from reportlab.pdfgen import canvas

from snippet_layout.assets import DirectoryAssetLibrary
from snippet_layout.core.models import (
    Orientation,
    Page,
    PaperSize,
    Position,
    ShapeElement,
    ShapeKind,
    Size,
    TextElement,
)
from snippet_layout.core.errors import LayoutError
from snippet_layout.editor import state
from snippet_layout.output import ExportError, QualityPreset, render_to_pdf


def _media_size(page):
    return round(float(page.mediabox.width)), round(float(page.mediabox.height))


@pytest.fixture
def two_page_document(populated_document):
    """Populated A4 page plus an empty A3 landscape page."""
    doc, _ = state.add_page(populated_document, PaperSize.A3, Orientation.LANDSCAPE, page_id="p2")
    return doc


class TestRenderToPdf:
    """Tests for render_to_pdf()."""

    def test_render_when_two_pages_then_two_pdf_pages(self, two_page_document, library, tmp_path):
        # Arrange
        out = tmp_path / "out" / "layout.pdf"

        # Act
        result = render_to_pdf(two_page_document.pages, library, out)

        # Assert
        reader = PdfReader(out)
        assert result.page_count == 2
        assert len(reader.pages) == 2
        assert result.skipped == []

    def test_render_when_pages_differ_then_each_has_own_size(self, two_page_document, library, tmp_path):
        out = tmp_path / "layout.pdf"
        render_to_pdf(two_page_document.pages, library, out)
        reader = PdfReader(out)
        assert _media_size(reader.pages[0]) == (595, 842)
        assert _media_size(reader.pages[1]) == (1191, 842)

    def test_render_when_snippets_placed_then_images_embedded(self, populated_document, library, tmp_path):
        out = tmp_path / "layout.pdf"
        render_to_pdf(populated_document.pages, library, out, quality=QualityPreset.MAXIMUM)
        assert len(PdfReader(out).pages[0].images) == 2

    def test_render_when_only_empty_page_then_blank_page_written(self, a4_document, library, tmp_path):
        out = tmp_path / "blank.pdf"
        result = render_to_pdf(a4_document.pages, library, out)
        assert result.page_count == 1
        assert len(PdfReader(out).pages) == 1

    def test_render_when_asset_missing_then_skipped_and_export_succeeds(self, populated_document, library, tmp_path):
        library.remove("s2")
        out = tmp_path / "layout.pdf"

        result = render_to_pdf(populated_document.pages, library, out)

        assert result.skipped == ["s2"]
        assert len(PdfReader(out).pages[0].images) == 1

    def test_render_when_text_and_shapes_then_all_drawn(self, a4_document, library):
        doc, _ = state.add_text(a4_document, "p1", Position(0, 0), content="縦書き", id_factory=lambda: "t1")
        doc, _ = state.add_shape(doc, "p1", ShapeKind.CIRCLE, Position(100, 100), id_factory=lambda: "c1", fill_color="#00ff00")
        doc, _ = state.add_shape(doc, "p1", ShapeKind.LINE, Position(0, 300), id_factory=lambda: "l1")
        sink = io.BytesIO()

        result = render_to_pdf(doc.pages, library, sink, snippet_border=True)

        assert result.skipped == []
        assert sink.getvalue().startswith(b"%PDF")

    def test_render_when_shape_color_invalid_then_shape_skipped(self, a4_page, library):
        page = Page(
            id=a4_page.id,
            paper_size=a4_page.paper_size,
            orientation=a4_page.orientation,
            shapes=(ShapeElement(id="bad", shape_kind=ShapeKind.RECTANGLE, position=Position(0, 0),
                                 size=Size(20, 20), stroke_color="#zz"),),
            texts=(TextElement(id="t", content="ok", position=Position(0, 0)),),
        )
        result = render_to_pdf([page], library, io.BytesIO())
        assert result.skipped == ["bad"]

    def test_render_when_no_pages_then_raises_export_error(self, library, tmp_path):
        with pytest.raises(ExportError, match="no pages"):
            render_to_pdf([], library, tmp_path / "x.pdf")

    def test_render_when_target_unwritable_then_export_error_and_no_file(self, a4_document, library, tmp_path):
        # Arrange: parent "directory" is a regular file
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        out = blocker / "layout.pdf"

        # Act / Assert
        with pytest.raises(ExportError, match="Cannot write PDF") as exc_info:
            render_to_pdf(a4_document.pages, library, out)
        assert isinstance(exc_info.value, LayoutError)
        assert not out.exists()

    def test_render_when_asset_file_corrupt_then_skipped_and_export_succeeds(self, populated_document, tmp_path):
        # Arrange: s1 decodes, s2 is not an image at all
        assets_dir = tmp_path / "assets"
        assets_dir.mkdir()
        Image.new("RGB", (120, 80), "red").save(assets_dir / "s1.png")
        (assets_dir / "s2.png").write_bytes(b"not an image")
        out = tmp_path / "layout.pdf"

        # Act
        with DirectoryAssetLibrary(assets_dir) as library:
            result = render_to_pdf(populated_document.pages, library, out)

        # Assert
        assert result.skipped == ["s2"]
        assert len(PdfReader(out).pages[0].images) == 1

    def test_render_when_generation_fails_then_export_error_and_partial_removed(
        self, a4_document, library, tmp_path, monkeypatch
    ):
        # Arrange: saving writes some bytes, then fails
        out = tmp_path / "layout.pdf"

        def broken_save(self):
            out.write_bytes(b"%PDF-1.4 partial")
            raise RuntimeError("font table corrupt")

        monkeypatch.setattr(canvas.Canvas, "save", broken_save)

        # Act / Assert
        with pytest.raises(ExportError, match="PDF generation failed: font table corrupt"):
            render_to_pdf(a4_document.pages, library, out)
        assert not out.exists()
