"""Stencil-buffer outline highlighting of a single part.

The highlighted part is cloned twice into overlay nodes under the scene
root. The first clone writes the stencil reference value wherever it is
drawn; the second, enlarged by ``outline_scale`` about the part's origin and
drawn back-side only, passes the stencil test only where the first one
wrote, producing an outline. Overlays are tracked so they can be removed and
disposed in one call.
"""

from __future__ import annotations

import logging
from enum import Enum

import numpy as np
from pydantic import BaseModel, Field

from ..core.config import HighlightParams
from ..scene.node import Mesh, SceneNode
from ..scene.transform import Transform3D

logger = logging.getLogger(__name__)


class StencilFunc(str, Enum):
    """Stencil comparison function."""

    ALWAYS = "always"
    EQUAL = "equal"


class StencilOp(str, Enum):
    """Stencil operation on depth pass."""

    KEEP = "keep"
    REPLACE = "replace"


class MaterialSide(str, Enum):
    """Which faces a material renders."""

    FRONT = "front"
    BACK = "back"
    DOUBLE = "double"


class OverlayMaterial(BaseModel):
    """Render state for one overlay pass."""

    color: int = Field(default=0xFF0000, ge=0, le=0xFFFFFF)
    opacity: float = Field(default=1.0, ge=0, le=1)
    transparent: bool = True
    side: MaterialSide = MaterialSide.FRONT
    depth_test: bool = False
    depth_write: bool = False
    stencil_write: bool = True
    stencil_func: StencilFunc = StencilFunc.ALWAYS
    stencil_ref: int = Field(default=1, ge=0, le=255)
    stencil_zpass: StencilOp = StencilOp.KEEP
    disposed: bool = False

    model_config = {"frozen": False}

    def dispose(self) -> None:
        """Mark the material's GPU resources as released."""
        self.disposed = True


class StencilOutlineHighlight:
    """Spawn and clear stencil outline overlays for scene parts."""

    def __init__(self, params: HighlightParams | None = None):
        self.params = params or HighlightParams()
        self._scene_root: SceneNode | None = None
        self._active: list[SceneNode] = []

    def initialize(self, scene_root: SceneNode) -> None:
        """Set the node overlays are attached to."""
        self._scene_root = scene_root

    @property
    def active_highlights(self) -> tuple[SceneNode, ...]:
        """Overlay nodes currently in the scene."""
        return tuple(self._active)

    def _write_material(self, color: int) -> OverlayMaterial:
        return OverlayMaterial(
            color=color,
            opacity=self.params.fill_opacity,
            side=MaterialSide.DOUBLE,
            stencil_func=StencilFunc.ALWAYS,
            stencil_ref=self.params.stencil_ref,
            stencil_zpass=StencilOp.REPLACE,
        )

    def _outline_material(self, color: int) -> OverlayMaterial:
        return OverlayMaterial(
            color=color,
            opacity=self.params.outline_opacity,
            side=MaterialSide.BACK,
            stencil_func=StencilFunc.EQUAL,
            stencil_ref=self.params.stencil_ref,
            stencil_zpass=StencilOp.KEEP,
        )

    def create_single_mesh_clone_highlight(
        self,
        node: SceneNode,
        color: int | None = None,
    ) -> tuple[SceneNode, SceneNode] | None:
        """Highlight a mesh node with a stencil outline.

        The node's geometry is baked into the scene root's frame so the
        overlays line up with the part regardless of where it sits in the
        hierarchy.

        Args:
            node: Node carrying the mesh to highlight
            color: RGB hex color (defaults to the configured color)

        Returns:
            (write_pass_node, outline_node), or None if not initialized

        Raises:
            ValueError: If the node has no mesh
        """
        if self._scene_root is None:
            logger.warning("Highlight requested before initialize(); ignoring")
            return None
        if node.mesh is None:
            raise ValueError(f"Node '{node.name}' has no mesh to highlight")

        color = self.params.color if color is None else color
        root = self._scene_root

        node.update_world_matrix(update_parents=True, update_children=False)
        root.update_world_matrix(update_parents=True, update_children=False)
        root_inverse = np.linalg.inv(root.world_matrix)
        to_root = root_inverse @ node.world_matrix

        fill = SceneNode(
            name=f"{node.name}__highlight",
            mesh=node.mesh.transformed_copy(to_root, material=self._write_material(color)),
        )

        # Scale about the part origin: p' = o + s * (p - o)
        scale = self.params.outline_scale
        origin = to_root[:3, 3]
        outline = SceneNode(
            name=f"{node.name}__outline",
            transform=Transform3D(
                position=tuple((origin * (1.0 - scale)).tolist()),
                scale=scale,
            ),
            mesh=node.mesh.transformed_copy(to_root, material=self._outline_material(color)),
        )

        root.add_child(fill)
        root.add_child(outline)
        self._active.extend([fill, outline])

        logger.info(f"Stencil outline highlight added for '{node.name}'")
        return fill, outline

    def clear_highlights(self) -> None:
        """Remove all overlays from the scene and dispose their resources."""
        for overlay in self._active:
            parent = overlay.parent
            if parent is not None:
                parent.remove_child(overlay)
            if overlay.mesh is not None:
                overlay.mesh.dispose()
        count = len(self._active)
        self._active = []
        logger.debug(f"Cleared {count} highlight overlay(s)")
