"""Derived spatial queries over a scene graph.

SpatialQueries bundles the measurements viewers need for camera framing,
part alignment and animation targeting. Every operation is a small
composition of ``compute_precise_world_bounds`` and the frame conversions,
and refreshes world matrices before reading them.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..core.config import BoundsParams
from ..scene.bounds import BoundingBox
from ..scene.node import SceneNode
from .bounds import compute_precise_world_bounds
from .frames import local_to_world, world_to_local


class SpatialQueries:
    """World-space measurements of scene nodes.

    Stateless apart from its parameters; safe to share across callers as
    long as the scene graph is not mutated during a call.
    """

    def __init__(self, params: BoundsParams | None = None):
        """Initialize queries.

        Args:
            params: Bounding volume parameters (fallback box size)
        """
        self.params = params or BoundsParams()

    def compute_precise_world_bounds(self, node: SceneNode) -> BoundingBox:
        """Return the raw world-space bounding box of a subtree."""
        return compute_precise_world_bounds(node, self.params.fallback_box_size)

    def get_world_center(self, node: SceneNode) -> NDArray[np.float64]:
        """Return the center of the node's world bounding box."""
        return self.compute_precise_world_bounds(node).center

    def get_bounding_box_size(self, node: SceneNode) -> NDArray[np.float64]:
        """Return the (width, height, depth) of the node's world bounding box."""
        return self.compute_precise_world_bounds(node).size

    def get_world_distance(self, a: SceneNode, b: SceneNode) -> float:
        """Return the Euclidean distance between two nodes' world centers."""
        return float(np.linalg.norm(self.get_world_center(a) - self.get_world_center(b)))

    def get_local_offset(self, source: SceneNode, target: SceneNode) -> NDArray[np.float64]:
        """Return the position that moves ``source`` onto ``target``'s center.

        The target's world center is expressed in the frame of the source's
        parent, i.e. the space ``source.transform.position`` lives in. For a
        root source the world center is returned unchanged.

        Example:
            offset = queries.get_local_offset(cover_body, assembly)
            cover_body.transform.position = tuple(offset)
        """
        target_center = self.get_world_center(target)

        parent = source.parent
        if parent is None:
            return target_center
        return world_to_local(target_center, parent)

    def get_extreme_world_position(
        self,
        node: SceneNode,
        direction: ArrayLike,
    ) -> NDArray[np.float64]:
        """Return the bounding-box surface point in a world direction.

        Computes ``center + 0.5 * size * normalize(direction)`` per axis.
        This is the box-surface point in the direction's octant, not the
        true silhouette extreme of the geometry; it is exact only for
        directions along the box axes. Useful for finding e.g. a screw head.

        Args:
            node: Node to measure
            direction: World-space direction (need not be normalized)

        Returns:
            XYZ point in world space

        Raises:
            ValueError: If the direction is zero or not finite
        """
        direction = np.asarray(direction, dtype=np.float64)
        length = np.linalg.norm(direction)
        if not np.isfinite(length) or length == 0.0:
            raise ValueError(f"Direction must be a non-zero finite vector, got {direction.tolist()}")

        box = self.compute_precise_world_bounds(node)
        half_size = box.size * 0.5
        return box.center + (direction / length) * half_size

    def world_to_local(self, point: ArrayLike, frame: SceneNode) -> NDArray[np.float64]:
        """Convert a world-space point into ``frame``'s local space."""
        return world_to_local(point, frame)

    def local_to_world(self, point: ArrayLike, frame: SceneNode) -> NDArray[np.float64]:
        """Convert a point in ``frame``'s local space into world space."""
        return local_to_world(point, frame)
