"""Edge alignment detection against a box snapshot."""

import math
from dataclasses import dataclass, field
from typing import Iterable

from canvas_snap.geometry.schema import (
    EDGES_BY_AXIS,
    ActiveGuide,
    Axis,
    Box,
    EdgeName,
    GestureKind,
    ResizeHandle,
    SnapCandidate,
)

# Candidates closer than this to the minimum count as tied
TIE_EPSILON = 1e-6

ActiveEdges = dict[Axis, tuple[EdgeName, ...]]

DRAG_EDGES: ActiveEdges = dict(EDGES_BY_AXIS)

RESIZE_EDGES: dict[ResizeHandle, ActiveEdges] = {
    ResizeHandle.LEFT: {Axis.HORIZONTAL: (), Axis.VERTICAL: (EdgeName.LEFT,)},
    ResizeHandle.RIGHT: {Axis.HORIZONTAL: (), Axis.VERTICAL: (EdgeName.RIGHT,)},
    ResizeHandle.TOP: {Axis.HORIZONTAL: (EdgeName.TOP,), Axis.VERTICAL: ()},
    ResizeHandle.BOTTOM: {Axis.HORIZONTAL: (EdgeName.BOTTOM,), Axis.VERTICAL: ()},
    ResizeHandle.TOP_LEFT: {Axis.HORIZONTAL: (EdgeName.TOP,), Axis.VERTICAL: (EdgeName.LEFT,)},
    ResizeHandle.TOP_RIGHT: {Axis.HORIZONTAL: (EdgeName.TOP,), Axis.VERTICAL: (EdgeName.RIGHT,)},
    ResizeHandle.BOTTOM_LEFT: {Axis.HORIZONTAL: (EdgeName.BOTTOM,), Axis.VERTICAL: (EdgeName.LEFT,)},
    ResizeHandle.BOTTOM_RIGHT: {Axis.HORIZONTAL: (EdgeName.BOTTOM,), Axis.VERTICAL: (EdgeName.RIGHT,)},
}


def active_edges_for(
    kind: GestureKind, handle: ResizeHandle | None = None
) -> ActiveEdges:
    """Edges of the moving box that take part in alignment.

    Args:
        kind: Drag or resize.
        handle: Grabbed resize handle. A resize without a handle keeps all
            edges active.

    Returns:
        Active edge names per guide axis.
    """
    if kind is GestureKind.RESIZE and handle is not None:
        return RESIZE_EDGES[handle]
    return DRAG_EDGES


@dataclass
class AlignmentResult:
    """Outcome of one alignment pass."""

    guides: ActiveGuide = field(default_factory=ActiveGuide)
    best: dict[Axis, SnapCandidate] = field(default_factory=dict)
    candidates: list[SnapCandidate] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return bool(self.best)


def find_candidates(
    moving: Box,
    boxes: Iterable[Box],
    threshold: float,
    active_edges: ActiveEdges | None = None,
) -> list[SnapCandidate]:
    """Compare every active edge of the moving box with every box edge.

    Returns:
        All matches within ``threshold`` (inclusive), in scan order.
    """
    active_edges = DRAG_EDGES if active_edges is None else active_edges
    boxes = list(boxes)
    candidates: list[SnapCandidate] = []

    for axis in (Axis.HORIZONTAL, Axis.VERTICAL):
        for source_edge in active_edges.get(axis, ()):
            edge_position = moving.edge(source_edge)
            for box in boxes:
                for target_edge in EDGES_BY_AXIS[axis]:
                    position = box.edge(target_edge)
                    distance = abs(edge_position - position)
                    if distance <= threshold:
                        candidates.append(
                            SnapCandidate(
                                axis=axis,
                                position=position,
                                source_edge=source_edge,
                                distance=distance,
                            )
                        )

    return candidates


def detect_alignment(
    moving: Box,
    boxes: Iterable[Box],
    threshold: float,
    active_edges: ActiveEdges | None = None,
) -> AlignmentResult:
    """Find the nearest alignment per axis.

    Every candidate tied at the minimum distance contributes a guide line;
    the first one found is the snap point for that axis.

    Args:
        moving: Moving box at its candidate position.
        boxes: Box snapshot.
        threshold: Tolerance in canvas units.
        active_edges: Edges to test, defaults to all six.

    Returns:
        AlignmentResult, empty for degenerate input.
    """
    if moving.is_degenerate or not threshold >= 0:
        return AlignmentResult()

    candidates = find_candidates(moving, boxes, threshold, active_edges)
    best: dict[Axis, SnapCandidate] = {}
    guides: dict[Axis, tuple[float, ...]] = {}

    for axis in (Axis.HORIZONTAL, Axis.VERTICAL):
        on_axis = [c for c in candidates if c.axis is axis]
        if not on_axis:
            guides[axis] = ()
            continue

        minimum = min(c.distance for c in on_axis)
        tied = [c for c in on_axis if c.distance - minimum <= TIE_EPSILON]
        best[axis] = tied[0]
        # Keep first-seen order, drop exact duplicates
        guides[axis] = tuple(dict.fromkeys(c.position for c in tied))

    return AlignmentResult(
        guides=ActiveGuide(
            horizontal=guides[Axis.HORIZONTAL],
            vertical=guides[Axis.VERTICAL],
        ),
        best=best,
        candidates=candidates,
    )


def collect_snap_positions(boxes: Iterable[Box]) -> ActiveGuide:
    """Every edge position of the snapshot, for the "show all guides" overlay."""
    horizontal: list[float] = []
    vertical: list[float] = []

    for box in boxes:
        horizontal.extend(box.edge(e) for e in EDGES_BY_AXIS[Axis.HORIZONTAL])
        vertical.extend(box.edge(e) for e in EDGES_BY_AXIS[Axis.VERTICAL])

    return ActiveGuide(
        horizontal=tuple(p for p in horizontal if not math.isnan(p)),
        vertical=tuple(p for p in vertical if not math.isnan(p)),
    )
