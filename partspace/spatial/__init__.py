"""World-space bounding volumes, frame conversion and derived queries."""

from .bounds import DEFAULT_FALLBACK_SIZE, compute_precise_world_bounds
from .frames import local_to_world, world_to_local
from .queries import SpatialQueries

__all__ = [
    "DEFAULT_FALLBACK_SIZE",
    "compute_precise_world_bounds",
    "local_to_world",
    "world_to_local",
    "SpatialQueries",
]
