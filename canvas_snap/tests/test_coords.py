"""Tests for screen/canvas coordinate conversions."""

import pytest

from canvas_snap.geometry.coords import (
    distance_to_canvas,
    distance_to_screen,
    rect_to_canvas,
    to_canvas,
    to_screen,
)
from canvas_snap.geometry.schema import CanvasTransform, Point, Rect


class TestPointConversion:
    """Tests for to_canvas and to_screen."""

    def test_to_canvas(self) -> None:
        """Test screen point maps through offset and scale."""
        transform = CanvasTransform(offset_x=100, offset_y=50, scale=2)
        assert to_canvas(Point(x=300, y=250), transform) == Point(x=100, y=100)

    def test_to_screen(self) -> None:
        """Test canvas point maps back to screen pixels."""
        transform = CanvasTransform(offset_x=100, offset_y=50, scale=2)
        assert to_screen(Point(x=100, y=100), transform) == Point(x=300, y=250)

    def test_identity_transform(self) -> None:
        """Test default transform leaves points unchanged."""
        point = Point(x=12.5, y=-3)
        assert to_canvas(point, CanvasTransform()) == point
        assert to_screen(point, CanvasTransform()) == point

    @pytest.mark.parametrize("scale", [0, -1.5])
    def test_invalid_scale_raises(self, scale: float) -> None:
        """Test non-positive scale is rejected."""
        transform = CanvasTransform(scale=scale)
        assert not transform.is_valid
        with pytest.raises(ValueError):
            to_canvas(Point(x=0, y=0), transform)
        with pytest.raises(ValueError):
            to_screen(Point(x=0, y=0), transform)


class TestDistanceConversion:
    """Tests for length conversions."""

    def test_threshold_shrinks_when_zoomed_in(self) -> None:
        """Test an 8px tolerance is 4 canvas units at 2x zoom."""
        assert distance_to_canvas(8, 2) == 4

    def test_distance_to_screen(self) -> None:
        """Test canvas length grows with zoom."""
        assert distance_to_screen(4, 2) == 8

    def test_zero_scale_raises(self) -> None:
        """Test zero scale is rejected."""
        with pytest.raises(ValueError):
            distance_to_canvas(8, 0)


class TestRectToCanvas:
    """Tests for rect_to_canvas."""

    def test_measured_rect(self) -> None:
        """Test a measured rectangle is offset by the origin and unscaled."""
        rect = rect_to_canvas(
            Rect(left=120, top=70, width=200, height=100),
            origin=Point(x=20, y=20),
            scale=2,
        )
        assert rect == Rect(left=50, top=25, width=100, height=50)
        assert rect.right == 150
        assert rect.bottom == 75

    def test_negative_scale_raises(self) -> None:
        """Test negative scale is rejected."""
        with pytest.raises(ValueError):
            rect_to_canvas(Rect(left=0, top=0, width=1, height=1), Point(x=0, y=0), -1)
