"""
Core image editing operations for Minecraft Render.

This module provides low-level image helpers shared by the tone corrector,
the layout remapper and the pipeline.

Functions:
    ensure_rgba: Validate channel depth and return an RGBA copy
    new_canvas: Create a filled canvas for a canvas spec
    apply_reference_alpha: Mask a canvas with a reference image's alpha
    images_identical: Byte-level image comparison
"""

from typing import Any

from MR_Libs.constants import SUPPORTED_IMAGE_MODES
from MR_Libs.errors import DimensionMismatch, InvalidImageFormat
from MR_Libs.pillow_compat import Image


def ensure_rgba(image: Any) -> Any:
    """
    Return an RGBA copy of an image with 8-bit channels.

    The returned image never shares its buffer with the input.

    Args:
        image: A PIL Image object

    Returns:
        A new PIL Image in RGBA mode

    Raises:
        TypeError: If image is not a PIL Image
        InvalidImageFormat: If the image mode is not 8 bits per channel
    """
    if not hasattr(image, "mode") or not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    if image.mode not in SUPPORTED_IMAGE_MODES:
        raise InvalidImageFormat(image.mode)

    if image.mode == "RGBA":
        return image.copy()
    return image.convert("RGBA")


def new_canvas(spec: Any) -> Any:
    """
    Create a blank canvas for a canvas spec.

    Args:
        spec: A CanvasSpec (anything with width, height and fill)

    Returns:
        A new RGBA PIL Image filled with spec.fill
    """
    return Image.new("RGBA", (spec.width, spec.height), tuple(spec.fill))


def apply_reference_alpha(canvas: Any, reference: Any) -> Any:
    """
    Copy the alpha channel of a reference image onto a canvas.

    The in-game portraits are masked (for example by a portrait frame), so
    reusing their alpha keeps the custom texture inside the same silhouette.

    Args:
        canvas: RGBA PIL Image to mask
        reference: PIL Image of the same size whose alpha is copied

    Returns:
        A new RGBA PIL Image with the canvas colors and the reference alpha

    Raises:
        DimensionMismatch: If the two images differ in size
    """
    if canvas.size != reference.size:
        raise DimensionMismatch(canvas.size, reference.size, what="reference image")

    masked = ensure_rgba(canvas)
    masked.putalpha(ensure_rgba(reference).getchannel("A"))
    return masked


def images_identical(first: Any, second: Any) -> bool:
    """Check whether two images have the same mode, size and pixel bytes."""
    return (
        first.mode == second.mode
        and first.size == second.size
        and first.tobytes() == second.tobytes()
    )
