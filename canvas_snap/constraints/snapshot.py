"""Box snapshots: the candidate boxes a moving node can snap against."""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from canvas_snap.geometry.schema import Box
from canvas_snap.scene.protocol import SceneGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotScope:
    """Id filter applied when building a snapshot.

    The session driver decides the scope once per gesture; the builder only
    applies it.
    """

    excluded_ids: frozenset[str] = field(default_factory=frozenset)
    limit_to_ids: frozenset[str] | None = None
    scope_root_id: str | None = None  # Always included when limiting
    show_child_elements: bool = False
    anchor_parent_id: str | None = None  # Siblings-only filter
    # excluded_ids already holds every descendant of the moving nodes
    descendants_resolved: bool = False


def collect_descendants(scene: SceneGraph, node_ids: Iterable[str]) -> set[str]:
    """Collect every descendant of the given nodes.

    Args:
        scene: Scene to walk.
        node_ids: Roots whose subtrees are collected.

    Returns:
        Descendant ids, roots not included.
    """
    roots = set(node_ids)
    if not roots:
        return set()

    descendants = set()
    for node_id in scene.list_candidate_node_ids():
        if node_id in roots:
            continue
        if roots.intersection(scene.get_ancestor_chain(node_id)):
            descendants.add(node_id)
    return descendants


def find_family_id(
    scene: SceneGraph, node_id: str, chain: list[str] | None = None
) -> str | None:
    """Nearest layout boundary enclosing a node (a boundary is its own family).

    Args:
        scene: Scene to query.
        node_id: Node to look up.
        chain: The node's ancestor chain, if the caller already has it.
    """
    if scene.is_layout_boundary(node_id):
        return node_id
    if chain is None:
        chain = scene.get_ancestor_chain(node_id)
    for ancestor in chain:
        if scene.is_layout_boundary(ancestor):
            return ancestor
    return None


def find_scope_root(scene: SceneGraph, node_id: str) -> str | None:
    """Topmost scope ancestor of a node.

    The nearest layout boundary ancestor if there is one, otherwise the
    outermost ancestor. None for top-level nodes.
    """
    chain = scene.get_ancestor_chain(node_id)
    for ancestor in chain:
        if scene.is_layout_boundary(ancestor):
            return ancestor
    return chain[-1] if chain else None


def _passes_parent_filter(chain: list[str], scope: SnapshotScope) -> bool:
    parent = chain[0] if chain else None
    if scope.show_child_elements:
        if scope.anchor_parent_id is not None:
            return parent == scope.anchor_parent_id
        return parent is not None
    return parent is None


def collect_scope_ids(scene: SceneGraph, scope: SnapshotScope) -> frozenset[str]:
    """Ids that pass the scope's parent filter, minus its exclusions.

    Walks the whole scene once. The session driver calls this at gesture
    start and hands the result to :func:`build_snapshot` as a limit.
    """
    return frozenset(
        node_id
        for node_id in scene.list_candidate_node_ids()
        if node_id not in scope.excluded_ids
        and _passes_parent_filter(scene.get_ancestor_chain(node_id), scope)
    )


def build_snapshot(
    scene: SceneGraph,
    moving_ids: Iterable[str],
    scope: SnapshotScope | None = None,
) -> list[Box]:
    """Project the scene to the ordered list of candidate boxes.

    The moving nodes and all of their descendants are always excluded.
    Nodes whose geometry cannot be resolved are dropped without failing the
    snapshot.

    With a limit set, only the limited ids are visited, so the cost of a
    call follows the scope size rather than the scene size as long as
    ``scope.descendants_resolved`` spares the descendant walk.

    Args:
        scene: Scene graph to read.
        moving_ids: Nodes being dragged or resized.
        scope: Id filter for the current gesture.

    Returns:
        Boxes in scene order.
    """
    scope = scope or SnapshotScope()
    moving = set(moving_ids)
    excluded = moving | scope.excluded_ids
    if not scope.descendants_resolved:
        excluded |= collect_descendants(scene, moving)

    if scope.limit_to_ids is not None:
        wanted = set(scope.limit_to_ids)
        if scope.scope_root_id is not None:
            wanted.add(scope.scope_root_id)
        candidate_ids = scene.list_candidate_node_ids(wanted)
    else:
        candidate_ids = scene.list_candidate_node_ids()

    boxes: list[Box] = []
    for node_id in candidate_ids:
        if node_id in excluded:
            continue

        chain = scene.get_ancestor_chain(node_id)
        if scope.limit_to_ids is None and not _passes_parent_filter(chain, scope):
            continue

        rect = scene.get_bounding_box(node_id)
        if rect is None:
            logger.debug(f"No geometry for node {node_id}, skipping")
            continue

        boxes.append(Box.from_rect(node_id, rect, find_family_id(scene, node_id, chain)))

    return boxes
