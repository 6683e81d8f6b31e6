"""Core modules for partspace."""

from .config import BoundsParams, CommandParams, HighlightParams, PartspaceConfig

__all__ = ["BoundsParams", "CommandParams", "HighlightParams", "PartspaceConfig"]
