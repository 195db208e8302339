"""In-memory scene graph for tests and headless use."""

from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from canvas_snap.geometry.schema import Rect


class SceneNode(BaseModel):
    """A single node in the in-memory scene."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique node identifier")
    parent_id: str | None = Field(default=None, description="Parent node, None on the canvas")
    rect: Rect | None = Field(default=None, description="Geometry, None if not laid out")
    is_layout_boundary: bool = Field(default=False, description="Viewport or similar scope")
    is_locked: bool = Field(default=False)


class InMemoryScene:
    """Scene graph backed by a list of :class:`SceneNode`.

    Implements :class:`canvas_snap.scene.protocol.SceneGraph`.
    """

    def __init__(self, nodes: Iterable[SceneNode] = ()) -> None:
        self._nodes: dict[str, SceneNode] = {}
        for node in nodes:
            self.add(node)

    def add(self, node: SceneNode) -> None:
        """Add or replace a node."""
        self._nodes[node.id] = node

    def remove(self, node_id: str) -> None:
        """Remove a node. Children keep their (now dangling) parent id."""
        self._nodes.pop(node_id, None)

    def get_node(self, node_id: str) -> SceneNode | None:
        return self._nodes.get(node_id)

    def get_children(self, node_id: str | None) -> list[str]:
        """Direct children of a node, or top-level nodes for None."""
        return [n.id for n in self._nodes.values() if n.parent_id == node_id]

    # --- SceneGraph ---

    def list_candidate_node_ids(
        self, scope_filter: Iterable[str] | None = None
    ) -> list[str]:
        if scope_filter is None:
            return list(self._nodes)
        wanted = set(scope_filter)
        return [node_id for node_id in self._nodes if node_id in wanted]

    def get_bounding_box(self, node_id: str) -> Rect | None:
        node = self._nodes.get(node_id)
        return node.rect if node else None

    def get_ancestor_chain(self, node_id: str) -> list[str]:
        chain: list[str] = []
        seen = {node_id}
        node = self._nodes.get(node_id)
        while node is not None and node.parent_id is not None:
            if node.parent_id in seen:
                # Cycle in malformed data
                break
            chain.append(node.parent_id)
            seen.add(node.parent_id)
            node = self._nodes.get(node.parent_id)
        return chain

    def is_layout_boundary(self, node_id: str) -> bool:
        node = self._nodes.get(node_id)
        return bool(node and node.is_layout_boundary)

    def is_locked(self, node_id: str) -> bool:
        node = self._nodes.get(node_id)
        return bool(node and node.is_locked)
