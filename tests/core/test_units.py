"""
Unit Tests for core.units

Tests for millimeter/unit conversion, output ratio and paper sizes.
"""

import pytest

from snippet_layout.core import units
from snippet_layout.core.models import Orientation, PaperSize


class TestConversion:
    """Tests for mm_to_units() / units_to_mm()."""

    def test_mm_to_units_when_15mm_at_96dpi_then_rounds_to_57(self):
        """15 mm is 56.69 units at 96 DPI, rounded to 57."""
        assert units.mm_to_units(15, 96) == 57

    def test_mm_to_units_when_15mm_at_72dpi_then_rounds_to_43(self):
        assert units.mm_to_units(15, 72) == 43

    def test_units_to_mm_when_one_inch_then_returns_25_4(self):
        assert units.units_to_mm(96, 96) == pytest.approx(25.4)

    @pytest.mark.parametrize("mm", [0, 1, 10, 15, 210, 297])
    def test_round_trip_when_converted_back_then_within_half_unit(self, mm):
        """Converting mm → units → mm loses at most half a unit."""
        back = units.units_to_mm(units.mm_to_units(mm))
        assert abs(back - mm) <= units.units_to_mm(0.5)


class TestOutputRatio:
    """Tests for output_ratio()."""

    def test_output_ratio_when_72dpi_then_three_quarters(self):
        assert units.output_ratio(72) == 0.75

    def test_output_ratio_when_screen_dpi_then_one(self):
        assert units.output_ratio(units.SCREEN_DPI) == 1.0

    def test_output_ratio_when_zero_dpi_then_raises_error(self):
        with pytest.raises(ValueError, match="dpi must be positive"):
            units.output_ratio(0)


class TestPaperSize:
    """Tests for paper_size_mm() / paper_size_units()."""

    def test_paper_size_units_when_a4_portrait_then_794_by_1123(self):
        assert units.paper_size_units(PaperSize.A4, Orientation.PORTRAIT) == (794, 1123)

    def test_paper_size_units_when_a4_at_72dpi_then_pdf_points(self):
        assert units.paper_size_units(PaperSize.A4, Orientation.PORTRAIT, 72) == (595, 842)

    def test_paper_size_mm_when_landscape_then_swaps_dimensions(self):
        assert units.paper_size_mm(PaperSize.B4, Orientation.LANDSCAPE) == (364.0, 257.0)


class TestSnap:
    """Tests for snap()."""

    def test_snap_when_grid_positive_then_rounds_to_multiple(self):
        assert units.snap(52, 38) == 38
        assert units.snap(60, 38) == 76

    def test_snap_when_grid_zero_then_returns_value(self):
        assert units.snap(52.3, 0) == 52.3
