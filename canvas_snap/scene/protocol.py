"""
SceneGraph protocol definition.

The snapping engine never owns nodes. It reads geometry and hierarchy from
whatever scene store the editor uses through this interface. Any object with
these methods works; :class:`canvas_snap.scene.memory.InMemoryScene` is the
reference implementation used in tests.
"""

from typing import Iterable, Protocol, runtime_checkable

from canvas_snap.geometry.schema import Rect


@runtime_checkable
class SceneGraph(Protocol):
    """Read-only view of the scene needed for snapping."""

    def list_candidate_node_ids(
        self, scope_filter: Iterable[str] | None = None
    ) -> list[str]:
        """
        List node ids in scene order.

        Args:
            scope_filter: If given, only ids in this collection that still
                exist in the scene are returned. Unknown ids are ignored.

        Returns:
            Node ids.
        """
        ...

    def get_bounding_box(self, node_id: str) -> Rect | None:
        """Canvas-space rectangle of a node, or None if it cannot be resolved."""
        ...

    def get_ancestor_chain(self, node_id: str) -> list[str]:
        """Ancestors of a node, nearest parent first. Empty for top-level nodes."""
        ...

    def is_layout_boundary(self, node_id: str) -> bool:
        """True if the node scopes snapping for its descendants (e.g. a viewport)."""
        ...

    def is_locked(self, node_id: str) -> bool:
        """True if the node cannot be moved."""
        ...
