"""Precise world-space bounding volumes for scene subtrees.

The box of a subtree is the union of every attached mesh's local bounding
box mapped through that mesh node's world matrix. When nothing in the
subtree contributes real geometry, a small fallback box centered on the
node's world position is returned instead, so callers always receive a box
with positive extent on every axis.
"""

from __future__ import annotations

import logging

import numpy as np

from ..scene.bounds import BoundingBox
from ..scene.node import SceneNode

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_SIZE = 0.01


def compute_precise_world_bounds(
    node: SceneNode,
    fallback_size: float = DEFAULT_FALLBACK_SIZE,
) -> BoundingBox:
    """Compute the world-space bounding box of a node and its descendants.

    World matrices of the node, its ancestors and its whole subtree are
    refreshed first. Meshes whose local bounds are missing get them computed
    (and cached on the mesh); meshes whose local bounds are degenerate are
    skipped.

    Args:
        node: Root of the subtree to measure
        fallback_size: Side length of the box used when no mesh contributes

    Returns:
        World-space BoundingBox with positive size on every axis. A fallback
        box carries no geometric meaning.
    """
    node.update_world_matrix(update_parents=True, update_children=True)

    box = BoundingBox.empty()
    contributed = 0

    for child in node.iter_nodes():
        if child.mesh is None:
            continue

        local_box = child.mesh.get_bounding_box()
        if local_box.is_degenerate:
            logger.debug(f"Skipping degenerate mesh bounds on '{child.name}'")
            continue

        box = box.union(local_box.transformed(child.world_matrix))
        contributed += 1

    if contributed == 0 or box.is_degenerate:
        position = node.world_position()
        logger.warning(
            f"No mesh found for '{node.name}', using world position "
            f"({position[0]:.3f}, {position[1]:.3f}, {position[2]:.3f})"
        )
        size = np.full(3, fallback_size, dtype=np.float64)
        return BoundingBox.from_center_and_size(position, size)

    return box
