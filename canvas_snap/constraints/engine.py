"""Snap session driver.

Runs once per animation frame while a drag or resize gesture is active:
builds the box snapshot for the gesture's scope, runs the detectors and
publishes a new immutable :class:`GuideState` for the renderer.

States::

    IDLE --start()--> SCOPE_CONFIGURED --tick()--> ACTIVE
      ^                                              |
      +------------- stop() / cancel() --------------+

The scope (which nodes can be snapped to) is computed once in ``start()``,
not per frame.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from canvas_snap.config import SnapConfig
from canvas_snap.constraints.alignment import active_edges_for, collect_snap_positions
from canvas_snap.constraints.gaps import measure_spacings
from canvas_snap.constraints.snapping import SnapOptions, SnapResult, snap_moving_box
from canvas_snap.constraints.snapshot import (
    SnapshotScope,
    build_snapshot,
    collect_descendants,
    collect_scope_ids,
    find_family_id,
    find_scope_root,
)
from canvas_snap.geometry.schema import (
    ActiveGuide,
    Axis,
    CanvasTransform,
    GestureFrame,
    GestureKind,
    GuideState,
    Point,
)
from canvas_snap.scene.protocol import SceneGraph

logger = logging.getLogger(__name__)

EMPTY_STATE = GuideState()


class SessionState(str, Enum):
    """Lifecycle of a snap session."""

    IDLE = "idle"
    SCOPE_CONFIGURED = "scope_configured"
    ACTIVE = "active"


class ScopeMode(str, Enum):
    """Which nodes a gesture snaps against."""

    FREE_CANVAS = "free_canvas"  # Other top-level nodes
    NESTED = "nested"  # Nodes under the same scope ancestor


@dataclass(frozen=True)
class SessionScope:
    """Scope fixed at gesture start."""

    mode: ScopeMode
    snapshot: SnapshotScope
    family_id: str | None = None


class SnapSession:
    """Drives snapping for one gesture at a time.

    Collaborators are injected as accessors so the session can run against
    any scene store or a synthetic scene in tests.
    """

    def __init__(
        self,
        scene: SceneGraph,
        gesture: Callable[[], GestureFrame | None],
        transform: Callable[[], CanvasTransform],
        config: SnapConfig | None = None,
        on_publish: Callable[[GuideState], None] | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            scene: Scene graph to read geometry and hierarchy from.
            gesture: Returns the current gesture frame, or None when no
                gesture is in progress.
            transform: Returns the current canvas pan/zoom.
            config: Session tunables. Defaults come from the environment.
            on_publish: Called with every newly published state.
        """
        self.scene = scene
        self.config = config or SnapConfig.from_settings()
        self._gesture = gesture
        self._transform = transform
        self._on_publish = on_publish

        self._state = SessionState.IDLE
        self._scope: SessionScope | None = None
        self._start_frame: GestureFrame | None = None
        self._resize_moved = False
        self._published: GuideState = EMPTY_STATE
        self._last_result: SnapResult | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def scope(self) -> SessionScope | None:
        return self._scope

    @property
    def published(self) -> GuideState:
        """Most recently published guide state."""
        return self._published

    @property
    def snap_result(self) -> SnapResult | None:
        """Snap outcome of the last tick, for the gesture host."""
        return self._last_result

    def corrected_position(self) -> Point | None:
        """Snapped top-left of the moving box, or None if nothing snapped."""
        if self._last_result is None or not self._last_result.snapped:
            return None
        return Point(x=self._last_result.snapped_x, y=self._last_result.snapped_y)

    # --- Lifecycle ---

    def start(self) -> bool:
        """Configure the scope for the gesture that just began.

        Calling this while a gesture is already running drops the previous
        scope first.

        Returns:
            True if the session is now configured.
        """
        if self._state is not SessionState.IDLE:
            logger.debug("Reconfiguring snap scope mid-gesture")
            self._clear()

        frame = self._gesture()
        if frame is None or frame.primary_id is None:
            logger.debug("No gesture in progress, snap session stays idle")
            self.stop()
            return False

        if self.scene.is_locked(frame.primary_id):
            self.cancel(f"node {frame.primary_id} is locked")
            return False

        self._scope = self._configure_scope(frame)
        self._start_frame = frame
        self._resize_moved = False
        self._state = SessionState.SCOPE_CONFIGURED
        logger.debug(
            f"Snap scope for {frame.primary_id}: {self._scope.mode.value}, "
            f"{len(self._scope.snapshot.excluded_ids)} excluded"
        )
        return True

    def stop(self) -> None:
        """End the gesture and clear published state. Safe to call repeatedly."""
        if self._state is not SessionState.IDLE:
            logger.debug("Snap session stopped")
        self._clear()
        self._state = SessionState.IDLE
        self._publish(EMPTY_STATE)

    def cancel(self, reason: str) -> None:
        """Abort the gesture's snapping."""
        logger.debug(f"Snap session cancelled: {reason}")
        self.stop()

    def tick(self) -> GuideState:
        """Run detection for the current frame and publish the result."""
        if self._state is SessionState.IDLE:
            return self._published

        try:
            frame = self._gesture()
            if frame is None:
                self.stop()
                return self._published
            if frame.drop_target_active:
                self.cancel("drop target active")
                return self._published
            if frame.modifiers.shift:
                self.cancel("modifier mode switch")
                return self._published
            if self._start_frame is not None and frame.moving_ids != self._start_frame.moving_ids:
                if not self.start():
                    return self._published

            state = self._detect(frame, self._transform())
        except Exception as e:
            logger.error(f"Snap detection failed: {e}")
            self._last_result = None
            state = EMPTY_STATE

        if self._state is not SessionState.IDLE:
            self._state = SessionState.ACTIVE
        self._publish(state)
        return state

    # --- Internals ---

    def _clear(self) -> None:
        self._scope = None
        self._start_frame = None
        self._resize_moved = False
        self._last_result = None

    def _publish(self, state: GuideState) -> None:
        if state == self._published:
            return
        self._published = state
        if self._on_publish is not None:
            self._on_publish(state)

    def _configure_scope(self, frame: GestureFrame) -> SessionScope:
        primary = frame.primary_id
        excluded = frozenset(frame.moving_ids) | frozenset(
            collect_descendants(self.scene, frame.moving_ids)
        )
        chain = self.scene.get_ancestor_chain(primary)

        limit = self.config.limit_to_node_ids

        if not chain:
            if limit is None:
                limit = collect_scope_ids(
                    self.scene,
                    SnapshotScope(
                        excluded_ids=excluded,
                        show_child_elements=self.config.show_child_elements,
                    ),
                )
            return SessionScope(
                mode=ScopeMode.FREE_CANVAS,
                snapshot=SnapshotScope(
                    excluded_ids=excluded,
                    limit_to_ids=limit,
                    descendants_resolved=True,
                ),
            )

        root = find_scope_root(self.scene, primary)
        if limit is None:
            limit = frozenset(
                node_id
                for node_id in self.scene.list_candidate_node_ids()
                if node_id not in excluded
                and (node_id == root or root in self.scene.get_ancestor_chain(node_id))
            )

        return SessionScope(
            mode=ScopeMode.NESTED,
            snapshot=SnapshotScope(
                excluded_ids=excluded,
                limit_to_ids=limit,
                scope_root_id=root,
                descendants_resolved=True,
            ),
            family_id=find_family_id(self.scene, chain[0]),
        )

    def _waiting_for_resize_move(self, frame: GestureFrame) -> bool:
        if self._resize_moved or self._start_frame is None:
            return False
        start = self._start_frame
        if frame.position != start.position or frame.size != start.size:
            self._resize_moved = True
            return False
        return True

    def _detect(self, frame: GestureFrame, transform: CanvasTransform) -> GuideState:
        self._last_result = None
        config = self.config
        if not config.enabled or self._scope is None:
            return EMPTY_STATE

        threshold = config.canvas_threshold(transform.scale)
        if threshold is None or not transform.is_valid or frame.size.is_degenerate:
            return EMPTY_STATE

        if (
            frame.kind is GestureKind.RESIZE
            and config.wait_for_resize_move
            and self._waiting_for_resize_move(frame)
        ):
            return EMPTY_STATE

        scope = self._scope
        boxes = build_snapshot(self.scene, frame.moving_ids, scope.snapshot)
        moving = frame.moving_box(scope.family_id)
        options = SnapOptions(
            active_edges=active_edges_for(frame.kind, frame.resize_handle),
            allow_spacing=(
                frame.kind is GestureKind.DRAG
                and scope.mode is ScopeMode.FREE_CANVAS
                and len(frame.moving_ids) == 1
            ),
            locality_margin=config.locality_margin,
            gap_epsilon=config.gap_epsilon,
            min_family_overlap=config.min_family_overlap,
        )
        result = snap_moving_box(moving, boxes, threshold, options)
        self._last_result = result

        all_positions = collect_snap_positions(boxes) if config.show_all_guides else ActiveGuide()
        measurements: tuple = ()
        if config.show_spacing and scope.mode is ScopeMode.FREE_CANVAS:
            measurements = tuple(
                measure_spacings(boxes, Axis.HORIZONTAL, config.min_family_overlap)
                + measure_spacings(boxes, Axis.VERTICAL, config.min_family_overlap)
            )

        return GuideState(
            guides=result.guides,
            horizontal_snap=result.horizontal,
            vertical_snap=result.vertical,
            spacing=result.spacing,
            all_positions=all_positions,
            measurements=measurements,
        )
