"""
Unit Tests for output.transform

A4 at 72 DPI is 595 x 842 points; a 15 mm margin is 43 points and
the screen → PDF ratio is 0.75.
"""

import pytest

from snippet_layout.core.models import Margin, Orientation, Page, PaperSize, Position, Rect, Size
from snippet_layout.output.transform import PageTransform


@pytest.fixture
def pdf_transform(a4_page):
    return PageTransform.for_page(a4_page, output_dpi=72)


class TestPageTransform:
    """Tests for PageTransform."""

    def test_for_page_when_a4_at_72dpi_then_point_geometry(self, pdf_transform):
        assert pdf_transform.page_size == (595, 842)
        assert (pdf_transform.margin_x, pdf_transform.margin_y) == (43, 43)
        assert pdf_transform.ratio == 0.75

    def test_to_output_when_pdf_then_x_is_margin_plus_scaled_offset(self, pdf_transform):
        x, y, width, height = pdf_transform.to_output(Rect(Position(10, 10), Size(40, 40)))
        assert x == 43 + 10 * 0.75
        assert (width, height) == (30, 30)

    def test_to_output_when_pdf_then_y_flipped_from_bottom(self, pdf_transform):
        _, y, _, height = pdf_transform.to_output(Rect(Position(10, 10), Size(40, 40)))
        assert y == 842 - 43 - 7.5 - 30
        assert y + height == 842 - 43 - 7.5

    def test_to_output_when_top_left_origin_then_not_flipped(self, a4_page):
        transform = PageTransform.for_page(a4_page, output_dpi=96, flip_y=False)
        assert transform.to_output(Rect(Position(10, 20), Size(40, 40))) == (67, 77, 40, 40)

    def test_for_page_when_no_override_then_default_margin_used(self):
        page = Page(id="p", paper_size=PaperSize.A3, orientation=Orientation.LANDSCAPE)
        transform = PageTransform.for_page(page, Margin(0, 10), output_dpi=72)
        assert transform.page_size == (1191, 842)
        assert (transform.margin_x, transform.margin_y) == (0, 28)

    def test_scale_when_higher_dpi_then_proportional(self, a4_page):
        transform = PageTransform.for_page(a4_page, output_dpi=144)
        assert transform.scale(10) == 15
