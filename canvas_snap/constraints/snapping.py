"""Per-frame snap resolution for a moving box.

Alignment and equal-spacing matches compete per axis: the smaller snap
distance wins and exactly one of them is reported for that axis.
"""

from dataclasses import dataclass, field
from typing import Iterable

from canvas_snap.constraints.alignment import ActiveEdges, detect_alignment
from canvas_snap.constraints.gaps import DEFAULT_GAP_EPSILON, collect_equal_gaps
from canvas_snap.constraints.spacing import (
    DEFAULT_LOCALITY_MARGIN,
    DEFAULT_MIN_FAMILY_OVERLAP,
    SpacingCandidate,
    detect_equal_spacing,
)
from canvas_snap.geometry.schema import (
    ActiveGuide,
    Axis,
    Box,
    EdgeName,
    SnapCandidate,
    SpacingMatch,
)


@dataclass
class SnapResult:
    """Result of a snap operation."""

    original_x: float
    original_y: float
    delta_x: float = 0.0
    delta_y: float = 0.0
    guides: ActiveGuide = field(default_factory=ActiveGuide)
    horizontal: SnapCandidate | None = None  # Moves y
    vertical: SnapCandidate | None = None  # Moves x
    spacing: SpacingMatch | None = None

    @property
    def snapped(self) -> bool:
        return self.horizontal is not None or self.vertical is not None

    @property
    def snapped_x(self) -> float:
        """Corrected left edge for a drag."""
        return self.original_x + self.delta_x

    @property
    def snapped_y(self) -> float:
        """Corrected top edge for a drag."""
        return self.original_y + self.delta_y


@dataclass
class SnapOptions:
    """Tunables for :func:`snap_moving_box`, in canvas units."""

    active_edges: ActiveEdges | None = None
    allow_spacing: bool = False
    locality_margin: float = DEFAULT_LOCALITY_MARGIN
    gap_epsilon: float = DEFAULT_GAP_EPSILON
    min_family_overlap: float = DEFAULT_MIN_FAMILY_OVERLAP
    family_id: str | None = None


def _spacing_snap_point(candidate: SpacingCandidate) -> SnapCandidate:
    """Express a spacing placement as a snap of the moving box's leading edge."""
    guide_axis = candidate.axis.other
    source_edge = EdgeName.LEFT if candidate.axis is Axis.HORIZONTAL else EdgeName.TOP
    return SnapCandidate(
        axis=guide_axis,
        position=candidate.target_position,
        source_edge=source_edge,
        distance=candidate.distance,
    )


def _delta(moving: Box, candidate: SnapCandidate | None) -> float:
    if candidate is None:
        return 0.0
    return candidate.position - moving.edge(candidate.source_edge)


def snap_moving_box(
    moving: Box,
    boxes: Iterable[Box],
    threshold: float,
    options: SnapOptions | None = None,
) -> SnapResult:
    """Snap a moving box against a snapshot.

    Args:
        moving: Moving box at its raw pointer-derived position.
        boxes: Box snapshot, built once per frame.
        threshold: Tolerance in canvas units.
        options: Active edges, spacing switch and spacing tunables.

    Returns:
        SnapResult with guides, per-axis snap points and the position delta.
    """
    options = options or SnapOptions()
    result = SnapResult(original_x=moving.left, original_y=moving.top)
    if moving.is_degenerate or not threshold >= 0:
        return result

    boxes = list(boxes)
    alignment = detect_alignment(moving, boxes, threshold, options.active_edges)
    snap_points: dict[Axis, SnapCandidate | None] = {
        Axis.HORIZONTAL: alignment.best.get(Axis.HORIZONTAL),
        Axis.VERTICAL: alignment.best.get(Axis.VERTICAL),
    }
    guides: dict[Axis, tuple[float, ...]] = {
        Axis.HORIZONTAL: alignment.guides.horizontal,
        Axis.VERTICAL: alignment.guides.vertical,
    }

    spacing: SpacingMatch | None = None
    if options.allow_spacing:
        found = detect_equal_spacing(
            moving,
            boxes,
            threshold,
            locality_margin=options.locality_margin,
            min_overlap=options.min_family_overlap,
            family_id=options.family_id,
        )
        for candidate in sorted(found.values(), key=lambda c: c.distance):
            guide_axis = candidate.axis.other
            rival = snap_points[guide_axis]
            if rival is not None and rival.distance <= candidate.distance:
                continue

            snap_points[guide_axis] = _spacing_snap_point(candidate)
            guides[guide_axis] = ()
            snapped_box = moving.moved_to(candidate.axis, candidate.target_position)
            segments = collect_equal_gaps(
                [*boxes, snapped_box],
                candidate.gap_distance,
                candidate.axis,
                epsilon=options.gap_epsilon,
                cross_range=moving.cross_span(candidate.axis),
                min_overlap=options.min_family_overlap,
                family_id=options.family_id,
            )
            spacing = SpacingMatch(
                axis=candidate.axis,
                kind=candidate.kind,
                gap_distance=candidate.gap_distance,
                target_position=candidate.target_position,
                distance=candidate.distance,
                segments=tuple(segments),
            )
            break

    result.guides = ActiveGuide(
        horizontal=guides[Axis.HORIZONTAL],
        vertical=guides[Axis.VERTICAL],
    )
    result.horizontal = snap_points[Axis.HORIZONTAL]
    result.vertical = snap_points[Axis.VERTICAL]
    result.spacing = spacing
    result.delta_x = _delta(moving, result.vertical)
    result.delta_y = _delta(moving, result.horizontal)
    return result
