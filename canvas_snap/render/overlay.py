"""
Screen-space geometry for the guide overlay.

Projects the canvas-space :class:`GuideState` pieces to screen pixels
(``screen = canvas * scale + offset``). Drawing itself belongs to the host.
"""


from pydantic import BaseModel, ConfigDict, Field

from canvas_snap.geometry.coords import distance_to_screen, to_screen
from canvas_snap.geometry.schema import (
    ActiveGuide,
    Axis,
    CanvasTransform,
    Point,
    Size,
    SpacingMatch,
)

# Label anchor relative to the band center, in pixels
LABEL_OFFSET_X = -18
LABEL_OFFSET_Y = -10


class GuideLine(BaseModel):
    """A 1px guide line across the viewport."""

    model_config = ConfigDict(frozen=True)

    axis: Axis
    left: float
    top: float
    width: float
    height: float


class SpacingBand(BaseModel):
    """A highlighted gap with its distance label."""

    model_config = ConfigDict(frozen=True)

    axis: Axis
    left: float
    top: float
    width: float
    height: float
    label: str = Field(description='Rounded gap, e.g. "24px"')
    label_position: Point


def project_guides(
    guides: ActiveGuide,
    transform: CanvasTransform,
    viewport: Size | None = None,
) -> list[GuideLine]:
    """Project guide positions to full-width/height lines.

    Args:
        guides: Published guide positions in canvas units.
        transform: Current pan/zoom.
        viewport: Container size in pixels; lines have zero length without it.

    Returns:
        Horizontal lines first, then vertical lines.
    """
    viewport = viewport or Size(width=0, height=0)
    lines: list[GuideLine] = []

    for position in guides.horizontal:
        y = to_screen(Point(x=0, y=position), transform).y
        lines.append(
            GuideLine(axis=Axis.HORIZONTAL, left=0, top=y, width=viewport.width, height=1)
        )
    for position in guides.vertical:
        x = to_screen(Point(x=position, y=0), transform).x
        lines.append(
            GuideLine(axis=Axis.VERTICAL, left=x, top=0, width=1, height=viewport.height)
        )

    return lines


def project_spacing(
    match: SpacingMatch | None, transform: CanvasTransform
) -> list[SpacingBand]:
    """Project the equal-gap segments of a spacing match."""
    if match is None:
        return []

    bands: list[SpacingBand] = []
    for segment in match.segments:
        gap = segment.end - segment.start
        length = distance_to_screen(gap, transform.scale)
        thickness = distance_to_screen(
            segment.cross_axis_max - segment.cross_axis_min, transform.scale
        )
        if match.axis is Axis.HORIZONTAL:
            origin = to_screen(Point(x=segment.start, y=segment.cross_axis_min), transform)
            width, height = length, thickness
        else:
            origin = to_screen(Point(x=segment.cross_axis_min, y=segment.start), transform)
            width, height = thickness, length

        bands.append(
            SpacingBand(
                axis=match.axis,
                left=origin.x,
                top=origin.y,
                width=width,
                height=height,
                label=f"{round(gap)}px",
                label_position=Point(
                    x=origin.x + width / 2 + LABEL_OFFSET_X,
                    y=origin.y + height / 2 + LABEL_OFFSET_Y,
                ),
            )
        )

    return bands
