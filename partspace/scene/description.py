"""JSON scene descriptions.

A SceneDescription is a serializable outline of a node tree: names,
local transforms and optional box-shaped geometry. It is used to feed the
CLI and to build reproducible test assemblies; it is not a model-file
loader.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from .node import Mesh, SceneNode
from .transform import Transform3D


class BoxDescription(BaseModel):
    """Box geometry given by its local min/max corners."""

    min: tuple[float, float, float] = Field(description="Minimum corner in local space")
    max: tuple[float, float, float] = Field(description="Maximum corner in local space")

    @model_validator(mode="after")
    def _check_order(self) -> BoxDescription:
        if any(lo > hi for lo, hi in zip(self.min, self.max)):
            raise ValueError(f"Box min {self.min} exceeds max {self.max}")
        return self


class NodeDescription(BaseModel):
    """One node of a described scene tree."""

    name: str = Field(default="", description="Node name")
    transform: Transform3D = Field(
        default_factory=Transform3D,
        description="Transform relative to the parent"
    )
    box: BoxDescription | None = Field(default=None, description="Optional box geometry")
    children: list[NodeDescription] = Field(default_factory=list)

    def build(self) -> SceneNode:
        """Create the SceneNode subtree described by this node."""
        mesh = None
        if self.box is not None:
            mesh = Mesh.from_bounds(self.box.min, self.box.max)

        node = SceneNode(
            name=self.name,
            transform=self.transform.model_copy(deep=True),
            mesh=mesh,
        )
        for child in self.children:
            node.add_child(child.build())
        return node


class SceneDescription(BaseModel):
    """A named scene tree that can be saved to and loaded from JSON."""

    name: str = Field(default="Untitled Scene", description="Scene name")
    version: str = Field(default="1.0", description="Scene file version")
    root: NodeDescription = Field(default_factory=NodeDescription)

    def build(self) -> SceneNode:
        """Create the scene graph, returning its root node."""
        return self.root.build()

    def save(self, path: str | Path) -> None:
        """Save scene to a JSON file.

        Args:
            path: Output file path
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)

    @classmethod
    def load(cls, path: str | Path) -> SceneDescription:
        """Load scene from a JSON file.

        Args:
            path: Input file path

        Returns:
            Loaded SceneDescription
        """
        path = Path(path)
        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)
