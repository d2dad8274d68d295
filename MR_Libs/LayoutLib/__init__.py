"""
LayoutLib - Skin layout tables and remapping

This module describes where each skin region lands on the output canvases,
executes those tables and stores them as JSON files.
"""

from MR_Libs.LayoutLib.layout_models import (
    CanvasSpec,
    LayoutEntry,
    SkinLayout,
    Transform,
    TRANSFORMS,
)
from MR_Libs.LayoutLib.layout_remapper import (
    LayoutRemapper,
    OutputCanvasSet,
    apply_transform,
    validate_layout,
)
from MR_Libs.LayoutLib.skin_layout import DEFAULT_SKIN_LAYOUT, build_default_layout
from MR_Libs.LayoutLib.layout_store import load_layout, save_layout

__all__ = [
    "CanvasSpec",
    "LayoutEntry",
    "SkinLayout",
    "Transform",
    "TRANSFORMS",
    "LayoutRemapper",
    "OutputCanvasSet",
    "apply_transform",
    "validate_layout",
    "DEFAULT_SKIN_LAYOUT",
    "build_default_layout",
    "load_layout",
    "save_layout",
]
