"""
Conversions between screen pixels and canvas space.

The host reports pointer positions and measured rectangles in screen pixels.
Everything else in the package works in canvas space, so conversions happen
here and nowhere else.

    canvas = (screen - offset) / scale
    screen = canvas * scale + offset
"""

from canvas_snap.geometry.schema import CanvasTransform, Point, Rect


def _check_scale(scale: float) -> None:
    if not scale > 0:
        raise ValueError(f"Canvas scale must be > 0, got {scale}")


def to_canvas(point: Point, transform: CanvasTransform) -> Point:
    """Convert a screen point to canvas space."""
    _check_scale(transform.scale)
    return Point(
        x=(point.x - transform.offset_x) / transform.scale,
        y=(point.y - transform.offset_y) / transform.scale,
    )


def to_screen(point: Point, transform: CanvasTransform) -> Point:
    """Convert a canvas point to screen pixels."""
    _check_scale(transform.scale)
    return Point(
        x=point.x * transform.scale + transform.offset_x,
        y=point.y * transform.scale + transform.offset_y,
    )


def distance_to_canvas(pixels: float, scale: float) -> float:
    """Convert an on-screen length (e.g. a snap tolerance) to canvas units."""
    _check_scale(scale)
    return pixels / scale


def distance_to_screen(units: float, scale: float) -> float:
    """Convert a canvas length to on-screen pixels."""
    _check_scale(scale)
    return units * scale


def rect_to_canvas(screen_rect: Rect, origin: Point, scale: float) -> Rect:
    """Convert a measured on-screen rectangle to canvas space.

    Args:
        screen_rect: Rectangle in screen pixels.
        origin: Screen position of the canvas content origin.
        scale: Current zoom factor.

    Returns:
        The same rectangle in canvas units.
    """
    _check_scale(scale)
    return Rect(
        left=(screen_rect.left - origin.x) / scale,
        top=(screen_rect.top - origin.y) / scale,
        width=screen_rect.width / scale,
        height=screen_rect.height / scale,
    )
