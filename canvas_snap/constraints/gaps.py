"""Gap bands and distance labels between neighboring boxes."""

from typing import Iterable

from canvas_snap.constraints.spacing import (
    DEFAULT_MIN_FAMILY_OVERLAP,
    find_neighbor_pairs,
    ranges_overlap,
)
from canvas_snap.geometry.schema import Axis, Box, Segment, SpacingMeasurement

DEFAULT_GAP_EPSILON = 0.5


def collect_equal_gaps(
    boxes: Iterable[Box],
    gap_distance: float,
    axis: Axis,
    epsilon: float = DEFAULT_GAP_EPSILON,
    cross_range: tuple[float, float] | None = None,
    min_overlap: float = DEFAULT_MIN_FAMILY_OVERLAP,
    family_id: str | None = None,
) -> list[Segment]:
    """Find every neighbor gap equal to ``gap_distance``.

    Args:
        boxes: Snapshot boxes, including the moving box at its snapped position.
        gap_distance: Gap of the winning spacing match.
        axis: Primary axis of the match.
        epsilon: Tolerance for gap equality.
        cross_range: If given, only bands overlapping this cross-axis range
            (the moving box's row or column) are kept.
        min_overlap: Minimum cross-axis overlap ratio for a family.
        family_id: Restrict to boxes of this layout family.

    Returns:
        Segments for visualization, ordered along the axis.
    """
    segments: list[Segment] = []

    for pair in find_neighbor_pairs(boxes, axis, min_overlap, family_id):
        if abs(pair.gap - gap_distance) > epsilon:
            continue

        first_lo, first_hi = pair.first.cross_span(axis)
        second_lo, second_hi = pair.second.cross_span(axis)
        segment = Segment(
            start=pair.start,
            end=pair.end,
            cross_axis_min=min(first_lo, second_lo),
            cross_axis_max=max(first_hi, second_hi),
        )
        if cross_range is not None and not ranges_overlap(
            segment.cross_axis_min, segment.cross_axis_max, *cross_range
        ):
            continue
        segments.append(segment)

    return segments


def measure_spacings(
    boxes: Iterable[Box],
    axis: Axis,
    min_overlap: float = DEFAULT_MIN_FAMILY_OVERLAP,
) -> list[SpacingMeasurement]:
    """Measure the gap between every pair of neighbors along an axis.

    Returns:
        One measurement per distinct gap interval with a positive rounded
        distance.
    """
    measurements: list[SpacingMeasurement] = []
    seen: set[tuple[float, float]] = set()

    for pair in find_neighbor_pairs(boxes, axis, min_overlap):
        distance = round(pair.gap)
        if distance <= 0 or (pair.start, pair.end) in seen:
            continue
        seen.add((pair.start, pair.end))

        first_lo, first_hi = pair.first.cross_span(axis)
        second_lo, second_hi = pair.second.cross_span(axis)
        indicator = (max(first_lo, second_lo) + min(first_hi, second_hi)) / 2

        measurements.append(
            SpacingMeasurement(
                axis=axis,
                start=pair.start,
                end=pair.end,
                distance=distance,
                label=f"{distance}px",
                indicator=indicator,
            )
        )

    return measurements
