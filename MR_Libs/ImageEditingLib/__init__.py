"""
ImageEditingLib - Core image editing functionality

This module provides image models, the tone corrector and pixel
operations for the Minecraft Render project.
"""

from MR_Libs.ImageEditingLib.image_models import Rect, RgbaColor, SkinRecord
from MR_Libs.ImageEditingLib.image_editing_ops import (
    ensure_rgba,
    new_canvas,
    apply_reference_alpha,
    images_identical,
)
from MR_Libs.ImageEditingLib.tone_corrector import (
    ToneCurveParameters,
    ToneCorrector,
    build_lookup_table,
    round_half_up,
)

__all__ = [
    "Rect",
    "RgbaColor",
    "SkinRecord",
    "ensure_rgba",
    "new_canvas",
    "apply_reference_alpha",
    "images_identical",
    "ToneCurveParameters",
    "ToneCorrector",
    "build_lookup_table",
    "round_half_up",
]
