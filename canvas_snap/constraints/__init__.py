"""Snapping constraints - alignment guides and equal spacing for dragged nodes."""

from canvas_snap.constraints.alignment import (
    AlignmentResult,
    active_edges_for,
    collect_snap_positions,
    detect_alignment,
    find_candidates,
)
from canvas_snap.constraints.engine import (
    ScopeMode,
    SessionScope,
    SessionState,
    SnapSession,
)
from canvas_snap.constraints.gaps import collect_equal_gaps, measure_spacings
from canvas_snap.constraints.snapping import SnapOptions, SnapResult, snap_moving_box
from canvas_snap.constraints.snapshot import (
    SnapshotScope,
    build_snapshot,
    collect_descendants,
    collect_scope_ids,
    find_family_id,
    find_scope_root,
)
from canvas_snap.constraints.spacing import (
    GapPair,
    SpacingCandidate,
    detect_equal_spacing,
    find_gap_centering,
    find_neighbor_pairs,
    find_pattern_continuation,
)

__all__ = [
    # Session
    "ScopeMode",
    "SessionScope",
    "SessionState",
    "SnapSession",
    # Snapshot
    "SnapshotScope",
    "build_snapshot",
    "collect_descendants",
    "collect_scope_ids",
    "find_family_id",
    "find_scope_root",
    # Alignment
    "AlignmentResult",
    "active_edges_for",
    "collect_snap_positions",
    "detect_alignment",
    "find_candidates",
    # Spacing
    "GapPair",
    "SpacingCandidate",
    "detect_equal_spacing",
    "find_gap_centering",
    "find_neighbor_pairs",
    "find_pattern_continuation",
    # Gaps
    "collect_equal_gaps",
    "measure_spacings",
    # Snapping
    "SnapOptions",
    "SnapResult",
    "snap_moving_box",
]
