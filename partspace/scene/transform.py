"""3D transformation utilities for scene nodes.

Provides Transform3D class for representing position, rotation, and scale,
with conversion to 4x4 homogeneous transformation matrices.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from pydantic import BaseModel, Field, field_validator
from scipy.spatial.transform import Rotation


def apply_matrix(matrix: NDArray[np.float64], points: ArrayLike) -> NDArray[np.float64]:
    """Apply a 4x4 homogeneous matrix to one point or an Nx3 array of points.

    Args:
        matrix: 4x4 transformation matrix
        points: A single XYZ point or an Nx3 array

    Returns:
        Transformed point(s), same shape as the input
    """
    pts = np.asarray(points, dtype=np.float64)
    single = pts.ndim == 1
    pts = np.atleast_2d(pts)

    # Convert to homogeneous coordinates (Nx4)
    ones = np.ones((len(pts), 1), dtype=np.float64)
    homogeneous = np.hstack([pts, ones])

    transformed = (matrix @ homogeneous.T).T
    # Projective row is (0, 0, 0, 1) for affine matrices
    result = transformed[:, :3] / transformed[:, 3:4]

    return result[0] if single else result


class Transform3D(BaseModel):
    """Local transformation of a scene node: position + rotation + scale.

    Attributes:
        position: XYZ translation relative to the parent frame
        rotation: XYZ Euler angles in degrees (applied in XYZ order)
        scale: Per-axis scale factors (a single number scales uniformly)
    """

    position: tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0),
        description="XYZ translation"
    )
    rotation: tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0),
        description="XYZ rotation in degrees (Euler angles)"
    )
    scale: tuple[float, float, float] = Field(
        default=(1.0, 1.0, 1.0),
        description="Per-axis scale factors"
    )

    model_config = {"frozen": False}

    @field_validator("scale", mode="before")
    @classmethod
    def _broadcast_scale(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return (float(value),) * 3
        return value

    def to_matrix(self) -> NDArray[np.float64]:
        """Convert to 4x4 homogeneous transformation matrix.

        The transformation order is: Scale -> Rotate -> Translate
        This means the matrix is built as: T @ R @ S

        Returns:
            4x4 transformation matrix
        """
        s = np.diag([*self.scale, 1.0]).astype(np.float64)

        rot = Rotation.from_euler('xyz', self.rotation, degrees=True)
        r = np.eye(4, dtype=np.float64)
        r[:3, :3] = rot.as_matrix()

        t = np.eye(4, dtype=np.float64)
        t[:3, 3] = self.position

        return t @ r @ s

    def apply_to_points(self, points: ArrayLike) -> NDArray[np.float64]:
        """Apply transformation to a point or an Nx3 array of points."""
        return apply_matrix(self.to_matrix(), points)

    @classmethod
    def identity(cls) -> Transform3D:
        """Return identity transform (no transformation)."""
        return cls()

    def __repr__(self) -> str:
        return (
            f"Transform3D(pos={self.position}, "
            f"rot={self.rotation}, scale={self.scale})"
        )
