"""Equal-spacing detection for a dragged box.

Two placements are searched along each primary axis:

* Gap-centering: the moving box sits between two neighbors with equal gaps
  on both sides.
* Pattern continuation: the moving box sits before or after an existing
  neighbor pair, reproducing that pair's gap.

Only pairs in the same layout family (cross-axis overlap ratio above a
minimum) and rows/columns that overlap the moving box are considered.
"""

from dataclasses import dataclass
from typing import Iterable

from canvas_snap.geometry.schema import Axis, Box, SpacingKind

DEFAULT_LOCALITY_MARGIN = 600.0
DEFAULT_MIN_FAMILY_OVERLAP = 0.01


@dataclass(frozen=True)
class GapPair:
    """Two adjacent boxes along a primary axis, ``first`` before ``second``."""

    first: Box
    second: Box
    axis: Axis

    @property
    def start(self) -> float:
        """Where the gap starts (end of the first box)."""
        return self.first.span(self.axis)[1]

    @property
    def end(self) -> float:
        """Where the gap ends (start of the second box)."""
        return self.second.span(self.axis)[0]

    @property
    def gap(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class SpacingCandidate:
    """A proposed equal-spacing placement along one axis."""

    axis: Axis
    kind: SpacingKind
    target_position: float  # Primary-axis start of the moving box
    gap_distance: float
    distance: float


def ranges_overlap(a1: float, a2: float, b1: float, b2: float) -> bool:
    """Open-interval overlap of [a1, a2] and [b1, b2]."""
    return a1 < b2 and b1 < a2


def within_locality(p: float, q: float, margin: float = DEFAULT_LOCALITY_MARGIN) -> bool:
    """True if two positions are no more than ``margin`` apart."""
    return abs(p - q) <= margin


def cross_axis_overlap_ratio(a: Box, b: Box, axis: Axis) -> float:
    """Overlap of two boxes perpendicular to ``axis``, relative to the smaller one.

    Returns:
        Ratio in [0, 1]; 0 if either box has no cross-axis extent.
    """
    a_start, a_end = a.cross_span(axis)
    b_start, b_end = b.cross_span(axis)
    smaller = min(a_end - a_start, b_end - b_start)
    if not smaller > 0:
        return 0.0
    overlap = min(a_end, b_end) - max(a_start, b_start)
    return max(0.0, overlap) / smaller


def same_family(a: Box, b: Box) -> bool:
    """False only when both boxes belong to different layout boundaries."""
    if a.family_id is None or b.family_id is None:
        return True
    return a.family_id == b.family_id


def _has_box_between(boxes: list[Box], first: Box, second: Box, axis: Axis) -> bool:
    gap_start = first.span(axis)[1]
    gap_end = second.span(axis)[0]
    for box in boxes:
        if box is first or box is second:
            continue
        start, end = box.span(axis)
        if start > gap_start and end < gap_end:
            return True
    return False


def find_neighbor_pairs(
    boxes: Iterable[Box],
    axis: Axis,
    min_overlap: float = DEFAULT_MIN_FAMILY_OVERLAP,
    family_id: str | None = None,
) -> list[GapPair]:
    """Find adjacent box pairs along an axis.

    A pair qualifies when the second box starts strictly after the first
    ends, no third box lies strictly inside the gap, and both boxes are in
    the same layout family.

    Args:
        boxes: Candidate boxes.
        axis: Primary axis.
        min_overlap: Minimum cross-axis overlap ratio.
        family_id: If given, only boxes of this family are paired.

    Returns:
        Qualifying pairs ordered by the first box's start.
    """
    pool = [b for b in boxes if family_id is None or b.family_id == family_id]
    ordered = sorted(pool, key=lambda b: b.span(axis)[0])
    pairs: list[GapPair] = []

    for i, first in enumerate(ordered):
        first_end = first.span(axis)[1]
        for second in ordered[i + 1:]:
            if second.span(axis)[0] <= first_end:
                continue
            if not same_family(first, second):
                continue
            if cross_axis_overlap_ratio(first, second, axis) < min_overlap:
                continue
            if _has_box_between(ordered, first, second, axis):
                continue
            pairs.append(GapPair(first=first, second=second, axis=axis))

    return pairs


def _overlaps_moving(pair: GapPair, moving: Box) -> bool:
    lo, hi = moving.cross_span(pair.axis)
    return ranges_overlap(*pair.first.cross_span(pair.axis), lo, hi) and ranges_overlap(
        *pair.second.cross_span(pair.axis), lo, hi
    )


def _center(box: Box, axis: Axis) -> float:
    return box.center_x if axis is Axis.HORIZONTAL else box.center_y


def find_gap_centering(
    moving: Box,
    pairs: Iterable[GapPair],
    threshold: float,
    locality_margin: float = DEFAULT_LOCALITY_MARGIN,
) -> SpacingCandidate | None:
    """Best slot where the moving box has equal gaps to both neighbors."""
    best: SpacingCandidate | None = None

    for pair in pairs:
        axis = pair.axis
        size = moving.span(axis)[1] - moving.span(axis)[0]
        if pair.gap <= size or not _overlaps_moving(pair, moving):
            continue
        if not within_locality((pair.start + pair.end) / 2, _center(moving, axis), locality_margin):
            continue

        margin = (pair.gap - size) / 2
        target = pair.start + margin
        distance = abs(target - moving.span(axis)[0])
        if distance <= threshold and (best is None or distance < best.distance):
            best = SpacingCandidate(
                axis=axis,
                kind=SpacingKind.CENTERING,
                target_position=target,
                gap_distance=margin,
                distance=distance,
            )

    return best


def find_pattern_continuation(
    moving: Box,
    pairs: Iterable[GapPair],
    threshold: float,
    locality_margin: float = DEFAULT_LOCALITY_MARGIN,
) -> SpacingCandidate | None:
    """Best placement just before or after a pair that repeats its gap."""
    best: SpacingCandidate | None = None

    for pair in pairs:
        if not _overlaps_moving(pair, moving):
            continue

        axis = pair.axis
        moving_start, moving_end = moving.span(axis)
        size = moving_end - moving_start
        center = _center(moving, axis)
        first_start = pair.first.span(axis)[0]
        second_end = pair.second.span(axis)[1]

        options = []
        if moving_end < first_start:
            target = first_start - pair.gap - size
            options.append((SpacingKind.CONTINUATION_BEFORE, target, (target + size + first_start) / 2))
        if moving_start > second_end:
            target = second_end + pair.gap
            options.append((SpacingKind.CONTINUATION_AFTER, target, (second_end + target) / 2))

        for kind, target, reference in options:
            if not within_locality(reference, center, locality_margin):
                continue
            distance = abs(target - moving_start)
            if distance <= threshold and (best is None or distance < best.distance):
                best = SpacingCandidate(
                    axis=axis,
                    kind=kind,
                    target_position=target,
                    gap_distance=pair.gap,
                    distance=distance,
                )

    return best


def detect_equal_spacing(
    moving: Box,
    boxes: Iterable[Box],
    threshold: float,
    locality_margin: float = DEFAULT_LOCALITY_MARGIN,
    min_overlap: float = DEFAULT_MIN_FAMILY_OVERLAP,
    family_id: str | None = None,
) -> dict[Axis, SpacingCandidate]:
    """Best equal-spacing candidate per primary axis.

    Args:
        moving: Moving box at its raw position.
        boxes: Box snapshot (moving box excluded).
        threshold: Tolerance in canvas units.
        locality_margin: Max distance between the reference point and the
            moving box center.
        min_overlap: Minimum cross-axis overlap ratio for a family.
        family_id: Restrict to boxes of this layout family.

    Returns:
        Mapping of primary axis to its smallest-distance candidate. Axes
        with no candidate are absent.
    """
    if moving.is_degenerate or not threshold >= 0:
        return {}

    boxes = list(boxes)
    found: dict[Axis, SpacingCandidate] = {}

    for axis in (Axis.HORIZONTAL, Axis.VERTICAL):
        pairs = find_neighbor_pairs(boxes, axis, min_overlap, family_id)
        centering = find_gap_centering(moving, pairs, threshold, locality_margin)
        continuation = find_pattern_continuation(moving, pairs, threshold, locality_margin)

        options = [c for c in (centering, continuation) if c is not None]
        if options:
            found[axis] = min(options, key=lambda c: c.distance)

    return found
