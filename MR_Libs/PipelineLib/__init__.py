"""
PipelineLib - Skin loading, canvas writing and the render pipeline

This module runs skins through tone correction and layout remapping and
persists the resulting canvases.
"""

from MR_Libs.PipelineLib.skin_loader import (
    SkinLoader,
    load_skin,
    get_supported_skin_formats,
    is_supported_skin_format,
)
from MR_Libs.PipelineLib.canvas_writer import CanvasWriter, CanvasWriterConfig
from MR_Libs.PipelineLib.render_pipeline import (
    PipelineConfig,
    RenderResult,
    correct_skin,
    run_pipeline,
    apply_reference_masks,
    render_skin_file,
    precorrect_skin_file,
    render_skin_batch,
)

__all__ = [
    "SkinLoader",
    "load_skin",
    "get_supported_skin_formats",
    "is_supported_skin_format",
    "CanvasWriter",
    "CanvasWriterConfig",
    "PipelineConfig",
    "RenderResult",
    "correct_skin",
    "run_pipeline",
    "apply_reference_masks",
    "render_skin_file",
    "precorrect_skin_file",
    "render_skin_batch",
]
