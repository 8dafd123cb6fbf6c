"""
Unit Tests for editor.resize

Tests the single parametrized resize formula across all eight handles.
"""

import pytest

from snippet_layout.core.models import Position, Rect, Size
from snippet_layout.editor.resize import Handle, resize_rect

START = Rect(Position(100, 100), Size(200, 100))
MIN = 20


def _anchored_edges(rect: Rect, handle: Handle):
    """Edges that must not move for handle."""
    dx_sign, dy_sign = handle.signs
    edges = {}
    if dx_sign > 0:
        edges["left"] = rect.left
    elif dx_sign < 0:
        edges["right"] = rect.right
    if dy_sign > 0:
        edges["top"] = rect.top
    elif dy_sign < 0:
        edges["bottom"] = rect.bottom
    return edges


class TestResizeRect:
    """Tests for resize_rect()."""

    @pytest.mark.parametrize("handle", list(Handle))
    @pytest.mark.parametrize("delta", [(-500, -500), (500, 500), (-500, 500), (500, -500), (37, -12)])
    def test_resize_when_any_handle_then_minimum_held_and_opposite_edge_fixed(self, handle, delta):
        """No handle drag shrinks below the minimum or moves the anchored edge."""
        # Act
        result = resize_rect(START, handle, *delta, min_size=MIN)

        # Assert
        assert result.size.width >= MIN
        assert result.size.height >= MIN
        for edge, value in _anchored_edges(START, handle).items():
            assert getattr(result, edge) == pytest.approx(value)

    def test_resize_when_west_handle_dragged_right_then_left_edge_moves(self):
        result = resize_rect(START, Handle.W, 30, 0, min_size=MIN)
        assert result == Rect(Position(130, 100), Size(170, 100))

    def test_resize_when_edge_handle_then_other_axis_untouched(self):
        result = resize_rect(START, Handle.S, 999, 40, min_size=MIN)
        assert result.size == Size(200, 140)
        assert result.position == START.position

    def test_resize_when_edge_handle_on_thin_box_then_unmoved_axis_not_clamped(self):
        thin = Rect(Position(0, 0), Size(100, 2))
        result = resize_rect(thin, Handle.E, 20, 0, min_size=10)
        assert result.size == Size(120, 2)

    def test_resize_when_north_dragged_past_bottom_then_clamped_at_bottom(self):
        result = resize_rect(START, Handle.N, 0, 300, min_size=MIN)
        assert result.size.height == MIN
        assert result.bottom == START.bottom

    def test_resize_when_keep_aspect_corner_then_ratio_preserved(self):
        result = resize_rect(START, Handle.SE, 100, 10, min_size=MIN, keep_aspect=True)
        assert result.size.aspect_ratio == pytest.approx(START.size.aspect_ratio)
        assert result.size.width == 300

    def test_resize_when_keep_aspect_edge_handle_then_free(self):
        result = resize_rect(START, Handle.E, 100, 0, min_size=MIN, keep_aspect=True)
        assert result.size == Size(300, 100)

    def test_resize_when_keep_aspect_clamped_then_ratio_still_preserved(self):
        result = resize_rect(START, Handle.NW, 1000, 1000, min_size=MIN, keep_aspect=True)
        assert min(result.size.width, result.size.height) == pytest.approx(MIN)
        assert result.size.aspect_ratio == pytest.approx(2.0)
        assert (result.right, result.bottom) == (START.right, START.bottom)

    def test_resize_when_grid_given_then_size_snapped(self):
        result = resize_rect(START, Handle.E, 13, 0, min_size=MIN, grid=38)
        assert result.size.width == 228


class TestHandle:
    """Tests for Handle helpers."""

    def test_anchor_point_when_ne_then_top_right(self):
        assert Handle.NE.anchor_point(START) == Position(300, 100)

    def test_is_corner_when_edge_handle_then_false(self):
        assert Handle.N.is_corner is False
        assert Handle.SW.is_corner is True
