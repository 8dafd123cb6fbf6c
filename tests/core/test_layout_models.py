"""
Unit Tests for the layout models

Tests for geometry value types, element minimum sizes, Page geometry
and Document page lookup.
"""

import pytest

from snippet_layout.core.models import (
    Document,
    Margin,
    Orientation,
    Page,
    PaperSize,
    PlacedSnippet,
    Position,
    Rect,
    ShapeElement,
    ShapeKind,
    Size,
    TextElement,
    MIN_SNIPPET_SIZE,
    MIN_TEXT_SIZE,
)


class TestGeometry:
    """Tests for Position, Size and Rect."""

    def test_rect_edges_when_built_then_derived_from_position_and_size(self):
        r = Rect(Position(10, 20), Size(100, 50))
        assert (r.left, r.top, r.right, r.bottom) == (10, 20, 110, 70)

    def test_contains_when_point_on_edge_then_returns_true(self):
        r = Rect(Position(0, 0), Size(10, 10))
        assert r.contains(Position(10, 10)) is True
        assert r.contains(Position(10.1, 5)) is False

    def test_aspect_ratio_when_zero_height_then_returns_one(self):
        assert Size(10, 0).aspect_ratio == 1.0

    def test_clamped_when_below_minimum_then_raised(self):
        assert Size(5, 50).clamped(20) == Size(20, 50)


class TestElements:
    """Tests for element geometry surface."""

    def test_with_geometry_when_snippet_too_small_then_clamped_to_minimum(self):
        s = PlacedSnippet("a", Position(0, 0), Size(100, 100))
        updated = s.with_geometry(Position(1, 2), Size(3, 4))
        assert updated.size == Size(MIN_SNIPPET_SIZE, MIN_SNIPPET_SIZE)
        assert updated.position == Position(1, 2)

    def test_with_geometry_when_text_too_small_then_clamped_to_text_minimum(self):
        t = TextElement(id="t", content="x", position=Position(0, 0))
        assert t.with_geometry(t.position, Size(1, 1)).size == Size(MIN_TEXT_SIZE, MIN_TEXT_SIZE)

    def test_element_id_when_snippet_then_asset_id(self):
        assert PlacedSnippet("asset-7", Position(0, 0), Size(50, 50)).element_id == "asset-7"

    def test_is_filled_when_fill_none_then_false(self):
        shape = ShapeElement(id="r", shape_kind=ShapeKind.RECTANGLE, position=Position(0, 0), size=Size(20, 20))
        assert shape.is_filled is False

    def test_from_dict_when_text_defaults_missing_then_uses_vertical_left(self):
        t = TextElement.from_dict({
            "id": "t",
            "position": {"x": 1, "y": 2},
            "size": {"width": 100, "height": 200},
        })
        assert t.writing_mode.value == "vertical"
        assert t.text_align.value == "left"
        assert t.font_size == 16


class TestPage:
    """Tests for Page geometry and lookup."""

    def test_printable_size_when_a4_15mm_then_page_minus_margins(self, a4_page):
        # 794 - 2*57, 1123 - 2*57
        assert a4_page.printable_size() == Size(680, 1009)

    def test_margin_units_when_no_override_then_uses_default(self):
        page = Page(id="p", paper_size=PaperSize.A4, orientation=Orientation.PORTRAIT)
        assert page.margin_units(default=Margin(10, 20)) == (38, 76)

    def test_page_size_units_when_landscape_then_swapped(self):
        page = Page(id="p", paper_size=PaperSize.A4, orientation=Orientation.LANDSCAPE)
        assert page.page_size_units() == (1123, 794)

    def test_elements_when_mixed_then_draw_order(self, populated_document):
        page = populated_document.pages[0]
        assert [e.element_id for e in page.elements()] == ["s1", "s2"]

    def test_find_when_unknown_then_none(self, a4_page):
        assert a4_page.find("missing") is None
        assert a4_page.is_empty is True


class TestDocument:
    """Tests for Document."""

    def test_with_pages_when_active_page_removed_then_active_cleared(self, a4_document):
        doc = a4_document.with_pages(())
        assert doc.active_page_id is None
        assert doc.page_count == 0

    def test_active_page_when_set_then_returns_page(self, a4_document):
        assert a4_document.active_page.id == "p1"

    def test_page_index_when_unknown_then_minus_one(self, a4_document):
        assert a4_document.page_index("nope") == -1

    def test_margin_when_negative_then_raises_error(self):
        with pytest.raises(ValueError, match="margin must be >= 0"):
            Margin(-1, 0)
