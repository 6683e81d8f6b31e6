"""Outline highlighting of scene parts."""

from .stencil import (
    MaterialSide,
    OverlayMaterial,
    StencilFunc,
    StencilOp,
    StencilOutlineHighlight,
)

__all__ = [
    "MaterialSide",
    "OverlayMaterial",
    "StencilFunc",
    "StencilOp",
    "StencilOutlineHighlight",
]
