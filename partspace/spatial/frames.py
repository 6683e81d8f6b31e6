"""Point conversion between world space and a node's local frame."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..scene.node import SceneNode
from ..scene.transform import apply_matrix


def world_to_local(point: ArrayLike, frame: SceneNode) -> NDArray[np.float64]:
    """Express a world-space point in the local frame of ``frame``.

    The frame's world matrix (and its ancestors') is refreshed, inverted and
    applied to a copy of the point.

    Args:
        point: XYZ point in world space
        frame: Node whose local frame is the target

    Returns:
        New XYZ array in the frame's local space

    Raises:
        numpy.linalg.LinAlgError: If the frame's world matrix is singular
            (zero scale on some axis in the chain)
    """
    frame.update_world_matrix(update_parents=True, update_children=False)
    inverse = np.linalg.inv(frame.world_matrix)
    return apply_matrix(inverse, point)


def local_to_world(point: ArrayLike, frame: SceneNode) -> NDArray[np.float64]:
    """Express a point given in the local frame of ``frame`` in world space.

    Args:
        point: XYZ point in the frame's local space
        frame: Node whose local frame the point is expressed in

    Returns:
        New XYZ array in world space
    """
    frame.update_world_matrix(update_parents=True, update_children=False)
    return apply_matrix(frame.world_matrix, point)
