"""Geometry value objects and coordinate conversions."""

from canvas_snap.geometry.coords import (
    distance_to_canvas,
    distance_to_screen,
    rect_to_canvas,
    to_canvas,
    to_screen,
)
from canvas_snap.geometry.schema import (
    EDGES_BY_AXIS,
    ActiveGuide,
    Axis,
    Box,
    CanvasTransform,
    EdgeName,
    GestureFrame,
    GestureKind,
    GuideState,
    ModifierKeys,
    Point,
    Rect,
    ResizeHandle,
    Segment,
    Size,
    SnapCandidate,
    SpacingKind,
    SpacingMatch,
    SpacingMeasurement,
)

__all__ = [
    # Schema
    "EDGES_BY_AXIS",
    "ActiveGuide",
    "Axis",
    "Box",
    "CanvasTransform",
    "EdgeName",
    "GestureFrame",
    "GestureKind",
    "GuideState",
    "ModifierKeys",
    "Point",
    "Rect",
    "ResizeHandle",
    "Segment",
    "Size",
    "SnapCandidate",
    "SpacingKind",
    "SpacingMatch",
    "SpacingMeasurement",
    # Coordinates
    "distance_to_canvas",
    "distance_to_screen",
    "rect_to_canvas",
    "to_canvas",
    "to_screen",
]
