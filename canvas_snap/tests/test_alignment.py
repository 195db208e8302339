"""Tests for edge alignment detection."""

import math
from typing import Callable

import pytest

from canvas_snap.constraints.alignment import (
    DRAG_EDGES,
    active_edges_for,
    collect_snap_positions,
    detect_alignment,
    find_candidates,
)
from canvas_snap.geometry.schema import (
    Axis,
    Box,
    EdgeName,
    GestureKind,
    ResizeHandle,
)


def _scaled(b: Box, k: float) -> Box:
    return Box(id=b.id, left=b.left * k, top=b.top * k, right=b.right * k, bottom=b.bottom * k)


class TestDetectAlignment:
    """Tests for detect_alignment."""

    def test_left_edge_snaps_to_right_edge(self, box: Callable[..., Box]) -> None:
        """Test the nearest edge pair becomes the vertical snap."""
        target = box("a", 0, 0, 100, 50)
        moving = box("m", 102, 300, 142, 340)

        result = detect_alignment(moving, [target], threshold=5)

        assert result.matched
        snap = result.best[Axis.VERTICAL]
        assert snap.position == 100
        assert snap.source_edge is EdgeName.LEFT
        assert snap.distance == 2
        assert Axis.HORIZONTAL not in result.best
        assert result.guides.vertical == (100,)
        assert result.guides.horizontal == ()

    def test_threshold_is_inclusive(self, box: Callable[..., Box]) -> None:
        """Test a distance exactly equal to the threshold still snaps."""
        target = box("a", 0, 0, 100, 50)
        moving = box("m", 105, 300, 145, 340)

        assert detect_alignment(moving, [target], threshold=5).matched
        assert not detect_alignment(moving, [target], threshold=4.999).matched

    def test_symmetry(self, box: Callable[..., Box]) -> None:
        """Test swapping moving and target boxes gives the same distance."""
        a = box("a", 0, 0, 100, 50)
        b = box("b", 102, 300, 142, 340)

        forward = detect_alignment(b, [a], threshold=5).best[Axis.VERTICAL]
        backward = detect_alignment(a, [b], threshold=5).best[Axis.VERTICAL]

        assert forward.distance == backward.distance == 2

    def test_scale_invariance(self, box: Callable[..., Box]) -> None:
        """Test scaling geometry and threshold together scales the snap."""
        target = box("a", 0, 0, 100, 50)
        moving = box("m", 102, 48, 142, 88)
        plain = detect_alignment(moving, [target], threshold=4)

        k = 2.5
        scaled = detect_alignment(_scaled(moving, k), [_scaled(target, k)], threshold=4 * k)

        for axis in (Axis.HORIZONTAL, Axis.VERTICAL):
            assert scaled.best[axis].position == pytest.approx(plain.best[axis].position * k)
            assert scaled.best[axis].distance == pytest.approx(plain.best[axis].distance * k)

    def test_ties_report_every_position(self, box: Callable[..., Box]) -> None:
        """Test all minimum-distance positions become guides."""
        boxes = [
            box("p", 0, 100, 50, 300),
            box("q", 0, 104, 50, 404),
            box("r", 0, 100, 50, 400),
        ]
        moving = box("m", 1000, 102, 1020, 122)

        result = detect_alignment(moving, boxes, threshold=5)

        assert result.guides.horizontal == (100, 104)
        assert result.best[Axis.HORIZONTAL].position == 100
        assert result.guides.vertical == ()

    def test_nearest_wins(self, box: Callable[..., Box]) -> None:
        """Test only the closest of several in-threshold positions is a guide."""
        boxes = [box("a", 0, 0, 100, 50), box("b", 0, 103, 100, 145)]
        moving = box("m", 300, 101, 340, 141)

        result = detect_alignment(moving, boxes, threshold=5)

        assert result.guides.horizontal == (103,)
        assert [c.distance for c in result.candidates] == [2, 3, 4]

    def test_degenerate_moving_box(self, box: Callable[..., Box]) -> None:
        """Test zero-width moving boxes never snap."""
        moving = box("m", 100, 0, 100, 50)
        assert not detect_alignment(moving, [box("a", 0, 0, 100, 50)], threshold=5).matched

    def test_negative_threshold(self, box: Callable[..., Box]) -> None:
        """Test a negative threshold yields no match."""
        moving = box("m", 100, 0, 140, 50)
        assert not detect_alignment(moving, [box("a", 0, 0, 100, 50)], threshold=-1).matched

    def test_empty_snapshot(self, box: Callable[..., Box]) -> None:
        """Test no boxes means no guides."""
        result = detect_alignment(box("m", 0, 0, 10, 10), [], threshold=5)
        assert not result.matched
        assert result.guides.is_empty


class TestActiveEdges:
    """Tests for resize handle edge filtering."""

    def test_drag_uses_all_edges(self) -> None:
        """Test drags compare all six edges."""
        assert active_edges_for(GestureKind.DRAG) == DRAG_EDGES

    def test_resize_without_handle(self) -> None:
        """Test a resize without a handle keeps all edges."""
        assert active_edges_for(GestureKind.RESIZE) == DRAG_EDGES

    def test_corner_handle(self) -> None:
        """Test a corner handle activates one edge per axis."""
        edges = active_edges_for(GestureKind.RESIZE, ResizeHandle.BOTTOM_LEFT)
        assert edges[Axis.HORIZONTAL] == (EdgeName.BOTTOM,)
        assert edges[Axis.VERTICAL] == (EdgeName.LEFT,)

    def test_right_handle_ignores_left_edge(self, box: Callable[..., Box]) -> None:
        """Test only the grabbed edge is matched during resize."""
        moving = box("m", 102, 300, 142, 340)
        edges = active_edges_for(GestureKind.RESIZE, ResizeHandle.RIGHT)

        assert find_candidates(moving, [box("a", 0, 0, 100, 50)], 5, edges) == []

        candidates = find_candidates(moving, [box("b", 140, 0, 200, 50)], 5, edges)
        assert len(candidates) == 1
        assert candidates[0].source_edge is EdgeName.RIGHT
        assert candidates[0].position == 140


class TestCollectSnapPositions:
    """Tests for collect_snap_positions."""

    def test_lists_every_edge(self, box: Callable[..., Box]) -> None:
        """Test all six edges are listed per box."""
        positions = collect_snap_positions([box("a", 0, 0, 100, 50)])
        assert positions.horizontal == (0, 25, 50)
        assert positions.vertical == (0, 50, 100)

    def test_drops_nan(self, box: Callable[..., Box]) -> None:
        """Test undefined positions are skipped."""
        positions = collect_snap_positions([box("a", math.nan, 0, 10, 10)])
        assert positions.vertical == (10,)
        assert positions.horizontal == (0, 5, 10)
