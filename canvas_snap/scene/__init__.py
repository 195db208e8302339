"""Scene graph interface consumed by the snapping engine."""

from canvas_snap.scene.memory import InMemoryScene, SceneNode
from canvas_snap.scene.protocol import SceneGraph

__all__ = ["InMemoryScene", "SceneGraph", "SceneNode"]
