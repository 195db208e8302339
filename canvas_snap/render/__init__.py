"""Screen-space projection of published guide state."""

from canvas_snap.render.overlay import (
    LABEL_OFFSET_X,
    LABEL_OFFSET_Y,
    GuideLine,
    SpacingBand,
    project_guides,
    project_spacing,
)

__all__ = [
    "LABEL_OFFSET_X",
    "LABEL_OFFSET_Y",
    "GuideLine",
    "SpacingBand",
    "project_guides",
    "project_spacing",
]
