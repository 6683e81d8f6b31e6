"""Scene graph nodes and their attached meshes.

A SceneNode owns its children through its ``children`` list; the link back
to the parent is a plain private reference that keeps ancestors alive for
as long as any descendant is held. Each node caches its world matrix, which
is only valid after ``update_world_matrix`` has run for the current state
of the local-transform chain. Spatial queries always refresh before reading.
"""

from __future__ import annotations

from typing import Any, Iterator

import numpy as np
import trimesh
from numpy.typing import ArrayLike, NDArray
from pydantic import BaseModel, Field, PrivateAttr

from .bounds import BoundingBox
from .transform import Transform3D


class Mesh:
    """Renderable geometry attached to a single scene node.

    Wraps a trimesh geometry together with its local bounding box, computed
    lazily and cached. The cache is never invalidated automatically: callers
    that edit vertices must call ``invalidate_bounding_box``.
    """

    def __init__(
        self,
        geometry: trimesh.Trimesh | None = None,
        material: Any = None,
        bounding_box: BoundingBox | None = None,
    ):
        """Create a mesh.

        Args:
            geometry: Triangle geometry in the mesh's local space
            material: Opaque render material (anything with an optional
                ``dispose()`` method)
            bounding_box: Precomputed local bounding box, if known
        """
        self._geometry = geometry
        self.material = material
        self._bounding_box = bounding_box

    @classmethod
    def from_bounds(
        cls,
        bounds_min: ArrayLike,
        bounds_max: ArrayLike,
        material: Any = None,
    ) -> Mesh:
        """Create a box-shaped mesh spanning the given local bounds."""
        bounds = np.array([bounds_min, bounds_max], dtype=np.float64)
        return cls(trimesh.creation.box(bounds=bounds), material=material)

    @property
    def geometry(self) -> trimesh.Trimesh | None:
        """Return the wrapped trimesh geometry."""
        return self._geometry

    @property
    def bounding_box(self) -> BoundingBox | None:
        """Return the cached local bounding box, or None if not computed."""
        return self._bounding_box

    @property
    def vertex_count(self) -> int:
        """Number of vertices in the mesh."""
        if self._geometry is None:
            return 0
        return len(self._geometry.vertices)

    @property
    def face_count(self) -> int:
        """Number of faces in the mesh."""
        if self._geometry is None:
            return 0
        return len(self._geometry.faces)

    def compute_bounding_box(self) -> BoundingBox:
        """Compute the local bounding box from the geometry and cache it.

        A mesh without geometry or without vertices gets the empty box.
        """
        if self._geometry is None or len(self._geometry.vertices) == 0:
            box = BoundingBox.empty()
        else:
            bounds = self._geometry.bounds
            box = BoundingBox(min=bounds[0], max=bounds[1])
        self._bounding_box = box
        return box

    def get_bounding_box(self) -> BoundingBox:
        """Return the cached local bounding box, computing it if absent."""
        if self._bounding_box is None:
            return self.compute_bounding_box()
        return self._bounding_box

    def invalidate_bounding_box(self) -> None:
        """Drop the cached local bounding box after a geometry edit."""
        self._bounding_box = None

    def transformed_copy(self, matrix: NDArray[np.float64], material: Any = None) -> Mesh:
        """Return a new mesh with the geometry baked through a 4x4 matrix.

        Args:
            matrix: 4x4 transformation matrix
            material: Material for the copy (the original's is not shared)

        Returns:
            New Mesh with transformed vertices
        """
        geometry = None
        if self._geometry is not None:
            geometry = self._geometry.copy()
            geometry.apply_transform(matrix)
        return Mesh(geometry, material=material)

    def dispose(self) -> None:
        """Release geometry, cached bounds and material."""
        if self.material is not None and hasattr(self.material, "dispose"):
            self.material.dispose()
        self._geometry = None
        self._bounding_box = None
        self.material = None

    def __repr__(self) -> str:
        return f"Mesh({self.vertex_count} vertices, {self.face_count} faces)"


class SceneNode(BaseModel):
    """A node in the scene hierarchy.

    Each node has a local transform, an optional mesh, and ordered children
    whose transforms are relative to this node.

    Example:
        root = SceneNode(name="assembly")
        cover = root.add_child(SceneNode(name="cover", mesh=cover_mesh))
        cover.transform.position = (0.0, 12.5, 0.0)
    """

    name: str = Field(default="", description="Display name (not guaranteed unique)")
    transform: Transform3D = Field(
        default_factory=Transform3D,
        description="Transform relative to the parent node"
    )
    mesh: Mesh | None = Field(default=None, exclude=True, description="Attached geometry")
    children: list[SceneNode] = Field(default_factory=list, description="Child nodes")

    # Back-reference to the parent and the cached world matrix
    _parent: SceneNode | None = PrivateAttr(default=None)
    _world_matrix: NDArray[np.float64] = PrivateAttr(
        default_factory=lambda: np.eye(4, dtype=np.float64)
    )

    model_config = {"frozen": False, "arbitrary_types_allowed": True}

    def model_post_init(self, context: Any) -> None:
        for child in self.children:
            self._adopt(child)

    # Nodes are identities in a tree, not values.
    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    @property
    def parent(self) -> SceneNode | None:
        """Return the parent node, or None for a root."""
        return self._parent

    @property
    def root(self) -> SceneNode:
        """Get the root node of this hierarchy."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def add_child(self, node: SceneNode) -> SceneNode:
        """Add a child node, detaching it from any previous parent.

        Args:
            node: The node to add as a child

        Returns:
            The added node (for chaining)

        Raises:
            ValueError: If the node is this node or one of its ancestors
        """
        if node is self or any(node is ancestor for ancestor in self.iter_ancestors()):
            raise ValueError(
                f"Cannot add '{node.name}' under '{self.name}': would create a cycle"
            )

        self._adopt(node)
        self.children.append(node)
        return node

    def _adopt(self, node: SceneNode) -> None:
        previous = node._parent
        if previous is not None:
            previous.remove_child(node)
        node._parent = self

    def remove_child(self, node: SceneNode) -> bool:
        """Remove a child node.

        Args:
            node: The node to remove

        Returns:
            True if the node was found and removed
        """
        for i, child in enumerate(self.children):
            if child is node:
                self.children.pop(i)
                node._parent = None
                return True
        return False

    def iter_nodes(self, include_self: bool = True) -> Iterator[SceneNode]:
        """Iterate over this node and all descendants (depth-first).

        Args:
            include_self: Whether to include this node in the iteration

        Yields:
            SceneNode instances
        """
        if include_self:
            yield self
        for child in self.children:
            yield from child.iter_nodes(include_self=True)

    def iter_ancestors(self) -> Iterator[SceneNode]:
        """Iterate from the parent up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def find(self, name: str) -> SceneNode | None:
        """Find the first node in this subtree with the given name."""
        for node in self.iter_nodes():
            if node.name == name:
                return node
        return None

    def find_all(self, name: str) -> list[SceneNode]:
        """Find all nodes in this subtree with the given name."""
        return [node for node in self.iter_nodes() if node.name == name]

    def update_world_matrix(
        self,
        update_parents: bool = True,
        update_children: bool = True,
    ) -> None:
        """Recompute the cached world matrix from the local-transform chain.

        Args:
            update_parents: Refresh ancestors first (root to node)
            update_children: Refresh the whole subtree afterwards
        """
        parent = self.parent
        if parent is not None and update_parents:
            parent.update_world_matrix(update_parents=True, update_children=False)

        local = self.transform.to_matrix()
        if parent is None:
            self._world_matrix = local
        else:
            self._world_matrix = parent._world_matrix @ local

        if update_children:
            for child in self.children:
                child.update_world_matrix(update_parents=False, update_children=True)

    @property
    def world_matrix(self) -> NDArray[np.float64]:
        """Return a copy of the cached world matrix (no refresh)."""
        return self._world_matrix.copy()

    def world_position(self) -> NDArray[np.float64]:
        """Refresh the world matrix and return the node origin in world space."""
        self.update_world_matrix(update_parents=True, update_children=False)
        return self._world_matrix[:3, 3].copy()

    def __repr__(self) -> str:
        mesh_str = f", mesh={self.mesh.face_count}f" if self.mesh is not None else ""
        children_str = f", children={len(self.children)}" if self.children else ""
        return f"SceneNode({self.name!r}{mesh_str}{children_str})"
