"""Scene graph data structures.

This module provides the node tree, local transforms, attached meshes and
the axis-aligned bounding box type shared by the spatial queries.
"""

from .transform import Transform3D, apply_matrix
from .bounds import BoundingBox
from .node import Mesh, SceneNode
from .description import BoxDescription, NodeDescription, SceneDescription

__all__ = [
    "Transform3D",
    "apply_matrix",
    "BoundingBox",
    "Mesh",
    "SceneNode",
    "BoxDescription",
    "NodeDescription",
    "SceneDescription",
]
