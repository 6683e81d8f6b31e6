"""Configuration management for partspace.

This module defines all configuration models using Pydantic for validation.
Configuration can be loaded from JSON files or constructed programmatically.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class BoundsParams(BaseModel):
    """Parameters for world-space bounding volume computation."""

    fallback_box_size: float = Field(
        default=0.01,
        gt=0,
        description="Side length of the box used when a subtree has no usable mesh",
    )


class HighlightParams(BaseModel):
    """Stencil outline highlight parameters.

    The write pass marks the part's pixels in the stencil buffer, the outline
    pass draws a slightly enlarged back-face copy only where the stencil
    matches.
    """

    color: int = Field(default=0xFF0000, ge=0, le=0xFFFFFF, description="RGB hex color")
    fill_opacity: float = Field(default=0.6, ge=0, le=1, description="Opacity of the write pass")
    outline_opacity: float = Field(default=0.8, ge=0, le=1, description="Opacity of the outline pass")
    outline_scale: float = Field(
        default=1.03,
        ge=1.0,
        le=2.0,
        description="Scale of the outline copy about the part origin",
    )
    stencil_ref: int = Field(default=1, ge=0, le=255, description="Stencil reference value")


class CommandParams(BaseModel):
    """Free-text animation command classification."""

    trigger_keyword: str = Field(default="damper", min_length=1, description="Keyword that triggers damper commands")
    default_side: Literal["left", "right"] = Field(
        default="left",
        description="Side used when the text names neither left nor right",
    )


class PartspaceConfig(BaseModel):
    """Main configuration container."""

    bounds: BoundsParams = Field(default_factory=BoundsParams)
    highlight: HighlightParams = Field(default_factory=HighlightParams)
    commands: CommandParams = Field(default_factory=CommandParams)

    model_config = {"extra": "forbid"}

    @classmethod
    def from_file(cls, path: Path | str) -> PartspaceConfig:
        """Load configuration from a JSON file."""
        path = Path(path)
        with open(path) as f:
            data = json.load(f)
        return cls.model_validate(data)

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)

    @classmethod
    def default(cls) -> PartspaceConfig:
        """Create a default configuration."""
        return cls()
