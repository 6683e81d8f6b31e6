"""Axis-aligned bounding box value type.

A BoundingBox is used both for a mesh's local bounds (in the mesh's own
space) and for world-space bounds derived from them. The empty box has
``min = +inf`` and ``max = -inf`` so that it is the identity element of
``union``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .transform import apply_matrix


def _inf_vector(sign: float) -> NDArray[np.float64]:
    return np.full(3, sign * np.inf, dtype=np.float64)


@dataclass(eq=False)
class BoundingBox:
    """An axis-aligned box described by its min and max corners.

    Attributes:
        min: XYZ of the minimum corner
        max: XYZ of the maximum corner
    """

    min: NDArray[np.float64] = field(default_factory=lambda: _inf_vector(1.0))
    max: NDArray[np.float64] = field(default_factory=lambda: _inf_vector(-1.0))

    def __post_init__(self) -> None:
        """Validate and normalize data after initialization."""
        self.min = np.asarray(self.min, dtype=np.float64).reshape(-1)
        self.max = np.asarray(self.max, dtype=np.float64).reshape(-1)

        if self.min.shape != (3,) or self.max.shape != (3,):
            raise ValueError(
                f"Box corners must be XYZ vectors, got {self.min.shape} and {self.max.shape}"
            )

    @classmethod
    def empty(cls) -> BoundingBox:
        """Return the empty box (identity for union)."""
        return cls()

    @classmethod
    def from_points(cls, points: ArrayLike) -> BoundingBox:
        """Create the minimal box enclosing an Nx3 array of points.

        An empty point set gives the empty box.
        """
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if len(pts) == 0:
            return cls.empty()
        return cls(min=pts.min(axis=0), max=pts.max(axis=0))

    @classmethod
    def from_center_and_size(cls, center: ArrayLike, size: ArrayLike) -> BoundingBox:
        """Create a box from its center point and per-axis size."""
        center = np.asarray(center, dtype=np.float64)
        half = np.asarray(size, dtype=np.float64) * 0.5
        return cls(min=center - half, max=center + half)

    @property
    def is_empty(self) -> bool:
        """True if max < min on any axis."""
        return bool(np.any(self.max < self.min))

    @property
    def is_degenerate(self) -> bool:
        """True if the box is empty, non-finite, or flat along any axis."""
        if self.is_empty:
            return True
        if not (np.all(np.isfinite(self.min)) and np.all(np.isfinite(self.max))):
            return True
        return bool(np.any(self.max - self.min <= 0.0))

    @property
    def center(self) -> NDArray[np.float64]:
        """Return center of the box."""
        return (self.min + self.max) / 2

    @property
    def size(self) -> NDArray[np.float64]:
        """Return size of the box (x, y, z). Zero for an empty box."""
        if self.is_empty:
            return np.zeros(3, dtype=np.float64)
        return self.max - self.min

    @property
    def corners(self) -> NDArray[np.float64]:
        """Return the 8 corner points as an 8x3 array."""
        lo, hi = self.min, self.max
        return np.array([
            [lo[0], lo[1], lo[2]],
            [lo[0], lo[1], hi[2]],
            [lo[0], hi[1], lo[2]],
            [lo[0], hi[1], hi[2]],
            [hi[0], lo[1], lo[2]],
            [hi[0], lo[1], hi[2]],
            [hi[0], hi[1], lo[2]],
            [hi[0], hi[1], hi[2]],
        ], dtype=np.float64)

    def union(self, other: BoundingBox) -> BoundingBox:
        """Return the minimal box enclosing both boxes."""
        return BoundingBox(
            min=np.minimum(self.min, other.min),
            max=np.maximum(self.max, other.max),
        )

    def transformed(self, matrix: NDArray[np.float64]) -> BoundingBox:
        """Map the box through an affine 4x4 matrix.

        The 8 corners are transformed and the minimal axis-aligned box
        enclosing them is returned. Rotations therefore enlarge the box.
        """
        if self.is_empty:
            return BoundingBox.empty()
        return BoundingBox.from_points(apply_matrix(matrix, self.corners))

    def contains_point(self, point: ArrayLike, tolerance: float = 0.0) -> bool:
        """Check if a point is within the box."""
        p = np.asarray(point, dtype=np.float64)
        return bool(
            np.all(p >= self.min - tolerance) and np.all(p <= self.max + tolerance)
        )

    def contains_box(self, other: BoundingBox, tolerance: float = 0.0) -> bool:
        """Check if another box lies fully inside this one."""
        if other.is_empty:
            return True
        return bool(
            np.all(other.min >= self.min - tolerance)
            and np.all(other.max <= self.max + tolerance)
        )

    def copy(self) -> BoundingBox:
        """Create a deep copy of this box."""
        return BoundingBox(min=self.min.copy(), max=self.max.copy())

    def __repr__(self) -> str:
        if self.is_empty:
            return "BoundingBox(empty)"
        return f"BoundingBox(min={self.min.round(4).tolist()}, max={self.max.round(4).tolist()})"
