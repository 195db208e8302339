"""Pydantic v2 models for snapping geometry.

All positions are in canvas space (the zoom/pan independent coordinate
system of the scene) unless a field says otherwise. Models are frozen: the
session driver publishes new instances every frame instead of mutating
existing ones.
"""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Axis(str, Enum):
    """Axis of a guide line, or the primary axis of a spacing match."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def other(self) -> "Axis":
        """The perpendicular axis."""
        return Axis.VERTICAL if self is Axis.HORIZONTAL else Axis.HORIZONTAL


class EdgeName(str, Enum):
    """Named edge positions of a box."""

    TOP = "top"
    CENTER_Y = "centerY"
    BOTTOM = "bottom"
    LEFT = "left"
    CENTER_X = "centerX"
    RIGHT = "right"

    @property
    def axis(self) -> Axis:
        """Axis of the guide line this edge produces."""
        if self in (EdgeName.TOP, EdgeName.CENTER_Y, EdgeName.BOTTOM):
            return Axis.HORIZONTAL
        return Axis.VERTICAL


EDGES_BY_AXIS: dict[Axis, tuple[EdgeName, ...]] = {
    Axis.HORIZONTAL: (EdgeName.TOP, EdgeName.CENTER_Y, EdgeName.BOTTOM),
    Axis.VERTICAL: (EdgeName.LEFT, EdgeName.CENTER_X, EdgeName.RIGHT),
}


# ============================================================================
# Primitive Geometry
# ============================================================================


class Point(BaseModel):
    """A 2D point."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class Size(BaseModel):
    """Width and height of a box. Degenerate sizes are allowed."""

    model_config = ConfigDict(frozen=True)

    width: float
    height: float

    @property
    def is_degenerate(self) -> bool:
        """True if the size cannot take part in snapping."""
        return not (self.width > 0 and self.height > 0)


class Rect(BaseModel):
    """Axis-aligned rectangle as reported by the scene graph."""

    model_config = ConfigDict(frozen=True)

    left: float = Field(description="Left position")
    top: float = Field(description="Top position")
    width: float = Field(description="Width")
    height: float = Field(description="Height")

    @property
    def right(self) -> float:
        """Right edge position."""
        return self.left + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge position."""
        return self.top + self.height


class CanvasTransform(BaseModel):
    """Pan/zoom transform between screen pixels and canvas space.

    ``scale`` is not validated on construction; consumers check
    :attr:`is_valid` before dividing by it.
    """

    model_config = ConfigDict(frozen=True)

    offset_x: float = Field(default=0.0, description="Screen x of the canvas origin")
    offset_y: float = Field(default=0.0, description="Screen y of the canvas origin")
    scale: float = Field(default=1.0, description="Uniform zoom factor")

    @property
    def is_valid(self) -> bool:
        """True if the transform can be inverted."""
        return self.scale > 0 and math.isfinite(self.scale)


# ============================================================================
# Boxes & Edges
# ============================================================================


class Box(BaseModel):
    """A candidate box in canvas space, projected from a scene node."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Scene node identifier")
    left: float
    top: float
    right: float
    bottom: float
    family_id: str | None = Field(
        default=None,
        description="Nearest enclosing layout boundary (e.g. a viewport)",
    )

    @classmethod
    def from_rect(cls, node_id: str, rect: Rect, family_id: str | None = None) -> "Box":
        """Build a box from a scene rectangle."""
        return cls(
            id=node_id,
            left=rect.left,
            top=rect.top,
            right=rect.right,
            bottom=rect.bottom,
            family_id=family_id,
        )

    @classmethod
    def at(
        cls,
        node_id: str,
        position: Point,
        size: Size,
        family_id: str | None = None,
    ) -> "Box":
        """Build a box from a top-left position and a size."""
        return cls(
            id=node_id,
            left=position.x,
            top=position.y,
            right=position.x + size.width,
            bottom=position.y + size.height,
            family_id=family_id,
        )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2

    @property
    def is_degenerate(self) -> bool:
        """True for zero, negative or non-finite extents."""
        return not (self.width > 0 and self.height > 0)

    def edge(self, name: EdgeName) -> float:
        """Position of a named edge."""
        if name is EdgeName.TOP:
            return self.top
        if name is EdgeName.CENTER_Y:
            return self.center_y
        if name is EdgeName.BOTTOM:
            return self.bottom
        if name is EdgeName.LEFT:
            return self.left
        if name is EdgeName.CENTER_X:
            return self.center_x
        return self.right

    def span(self, axis: Axis) -> tuple[float, float]:
        """Extent along a primary axis (left/right for horizontal)."""
        if axis is Axis.HORIZONTAL:
            return self.left, self.right
        return self.top, self.bottom

    def cross_span(self, axis: Axis) -> tuple[float, float]:
        """Extent perpendicular to a primary axis."""
        return self.span(axis.other)

    def moved_to(self, axis: Axis, start: float) -> "Box":
        """Copy of this box with its primary-axis start moved to ``start``."""
        if axis is Axis.HORIZONTAL:
            return self.model_copy(update={"left": start, "right": start + self.width})
        return self.model_copy(update={"top": start, "bottom": start + self.height})


# ============================================================================
# Detection Results
# ============================================================================


class SnapCandidate(BaseModel):
    """One edge of the moving box matched against one snap position."""

    model_config = ConfigDict(frozen=True)

    axis: Axis
    position: float = Field(description="Canvas position the edge snaps to")
    source_edge: EdgeName = Field(description="Edge of the moving box that matched")
    distance: float = Field(ge=0, description="Absolute distance to the position")


class ActiveGuide(BaseModel):
    """Guide line positions tied for the minimum distance, per axis."""

    model_config = ConfigDict(frozen=True)

    horizontal: tuple[float, ...] = ()
    vertical: tuple[float, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.horizontal and not self.vertical

    def for_axis(self, axis: Axis) -> tuple[float, ...]:
        return self.horizontal if axis is Axis.HORIZONTAL else self.vertical


class Segment(BaseModel):
    """A visualized gap band between two neighboring boxes."""

    model_config = ConfigDict(frozen=True)

    start: float = Field(description="Primary-axis start of the gap")
    end: float = Field(description="Primary-axis end of the gap")
    cross_axis_min: float
    cross_axis_max: float


class SpacingKind(str, Enum):
    """How an equal-spacing match was found."""

    CENTERING = "centering"
    CONTINUATION_BEFORE = "continuation_before"
    CONTINUATION_AFTER = "continuation_after"


class SpacingMatch(BaseModel):
    """Winning equal-spacing placement for the moving box."""

    model_config = ConfigDict(frozen=True)

    axis: Axis = Field(description="Primary axis the gap is measured along")
    kind: SpacingKind
    gap_distance: float = Field(description="Gap reproduced by the placement")
    target_position: float = Field(description="Primary-axis start of the moving box")
    distance: float = Field(ge=0, description="Snap delta that made this match win")
    segments: tuple[Segment, ...] = ()


class SpacingMeasurement(BaseModel):
    """Measured gap between two neighboring boxes, for distance labels."""

    model_config = ConfigDict(frozen=True)

    axis: Axis
    start: float
    end: float
    distance: int
    label: str
    indicator: float = Field(description="Cross-axis position of the label")


# ============================================================================
# Gesture Input
# ============================================================================


class GestureKind(str, Enum):
    """Kind of gesture currently moving nodes."""

    DRAG = "drag"
    RESIZE = "resize"


class ResizeHandle(str, Enum):
    """Resize handle grabbed by the pointer."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    TOP_LEFT = "topLeft"
    TOP_RIGHT = "topRight"
    BOTTOM_LEFT = "bottomLeft"
    BOTTOM_RIGHT = "bottomRight"


class ModifierKeys(BaseModel):
    """Keyboard modifiers held during the gesture."""

    model_config = ConfigDict(frozen=True)

    shift: bool = False


class GestureFrame(BaseModel):
    """Gesture state reported by the host on each tick."""

    model_config = ConfigDict(frozen=True)

    moving_ids: tuple[str, ...] = Field(description="Nodes being dragged or resized")
    position: Point = Field(description="Top-left of the moving box in canvas space")
    size: Size
    kind: GestureKind = GestureKind.DRAG
    resize_handle: ResizeHandle | None = None
    modifiers: ModifierKeys = Field(default_factory=ModifierKeys)
    drop_target_active: bool = Field(
        default=False,
        description="A drop zone elsewhere has taken over the gesture",
    )

    @property
    def primary_id(self) -> str | None:
        return self.moving_ids[0] if self.moving_ids else None

    def moving_box(self, family_id: str | None = None) -> Box:
        """The moving box at its raw pointer-derived position."""
        return Box.at(self.primary_id or "", self.position, self.size, family_id)


# ============================================================================
# Published State
# ============================================================================


class GuideState(BaseModel):
    """Everything the renderer draws for one frame."""

    model_config = ConfigDict(frozen=True)

    guides: ActiveGuide = Field(default_factory=ActiveGuide)
    horizontal_snap: SnapCandidate | None = None
    vertical_snap: SnapCandidate | None = None
    spacing: SpacingMatch | None = None
    all_positions: ActiveGuide = Field(default_factory=ActiveGuide)
    measurements: tuple[SpacingMeasurement, ...] = ()

    @property
    def is_empty(self) -> bool:
        return (
            self.guides.is_empty
            and self.horizontal_snap is None
            and self.vertical_snap is None
            and self.spacing is None
            and self.all_positions.is_empty
            and not self.measurements
        )
