"""partspace - World-space measurements for assembly scene graphs.

A Python library for computing precise world-space bounding boxes, centers,
offsets and distances of parts in a hierarchical scene graph, and for
converting points between world space and any node's local frame.
"""

__version__ = "0.1.0"

from .core.config import PartspaceConfig
from .scene.bounds import BoundingBox
from .scene.node import Mesh, SceneNode
from .scene.transform import Transform3D
from .spatial.bounds import compute_precise_world_bounds
from .spatial.frames import local_to_world, world_to_local
from .spatial.queries import SpatialQueries
from .commands.damper import get_damper_animation_commands
from .highlight.stencil import StencilOutlineHighlight

__all__ = [
    "PartspaceConfig",
    "BoundingBox",
    "Mesh",
    "SceneNode",
    "Transform3D",
    "compute_precise_world_bounds",
    "local_to_world",
    "world_to_local",
    "SpatialQueries",
    "get_damper_animation_commands",
    "StencilOutlineHighlight",
]
