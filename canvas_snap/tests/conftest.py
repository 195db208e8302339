"""Pytest configuration and fixtures."""

from typing import Callable

import pytest

from canvas_snap.config import SnapConfig
from canvas_snap.geometry.schema import Box, Rect
from canvas_snap.scene.memory import InMemoryScene, SceneNode


def _node(
    node_id: str,
    left: float,
    top: float,
    width: float,
    height: float,
    parent_id: str | None = None,
    **kwargs,
) -> SceneNode:
    """Build a scene node with geometry."""
    return SceneNode(
        id=node_id,
        parent_id=parent_id,
        rect=Rect(left=left, top=top, width=width, height=height),
        **kwargs,
    )


@pytest.fixture
def node() -> Callable[..., SceneNode]:
    """Factory for scene nodes given as left, top, width, height."""
    return _node


@pytest.fixture
def box() -> Callable[..., Box]:
    """Factory for canvas boxes given as left, top, right, bottom."""

    def _box(
        node_id: str,
        left: float,
        top: float,
        right: float,
        bottom: float,
        family_id: str | None = None,
    ) -> Box:
        return Box(
            id=node_id,
            left=left,
            top=top,
            right=right,
            bottom=bottom,
            family_id=family_id,
        )

    return _box


@pytest.fixture
def config() -> SnapConfig:
    """Session config independent of the environment."""
    return SnapConfig(snap_threshold=5.0)


@pytest.fixture
def row_scene() -> InMemoryScene:
    """Two top-level boxes in a row with a 200 unit gap, plus the dragged node."""
    return InMemoryScene(
        [
            _node("a", 0, 0, 100, 50),
            _node("b", 300, 0, 100, 50),
            _node("n", 600, 400, 100, 50),
        ]
    )


@pytest.fixture
def nested_scene() -> InMemoryScene:
    """A frame with a viewport holding two children, and a top-level sibling.

    frame
    └── viewport (layout boundary)
        ├── c1
        │   └── c1_inner
        └── c2
    other
    """
    return InMemoryScene(
        [
            _node("frame", 0, 0, 1000, 1000),
            _node("viewport", 50, 50, 800, 800, parent_id="frame", is_layout_boundary=True),
            _node("c1", 100, 100, 100, 100, parent_id="viewport"),
            _node("c1_inner", 110, 110, 20, 20, parent_id="c1"),
            _node("c2", 400, 103, 100, 100, parent_id="viewport"),
            _node("other", 2000, 0, 100, 100),
        ]
    )
