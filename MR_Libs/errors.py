"""
Error types for Minecraft Render.

Every error raised by the render pipeline derives from SkinRenderError, which
is itself a ValueError, so callers that only guard against ValueError still
catch pipeline failures.

Classes:
    SkinRenderError: Base class for all pipeline errors
    InvalidImageFormat: Image channels are not 8-bit integers
    DimensionMismatch: Image size differs from the expected size
    SourceRectOutOfBounds: Layout entry reads outside the source image
    DestinationRectOutOfBounds: Layout entry writes outside its canvas
    UnknownCanvasIdentifier: Layout entry targets a canvas that does not exist
    OverlappingRegions: Two layout entries write the same canvas pixels
    LayoutFormatError: A layout document is malformed
    BatchRenderError: One or more skins of a batch failed
"""

from pathlib import Path
from typing import Any, Dict, Tuple


class SkinRenderError(ValueError):
    """Base class for all errors raised by the render pipeline."""


class InvalidImageFormat(SkinRenderError):
    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(
            f"InvalidImageFormat: image mode '{mode}' does not have 8-bit integer channels"
        )


class DimensionMismatch(SkinRenderError):
    def __init__(self, expected: Tuple[int, int], actual: Tuple[int, int], what: str = "image"):
        self.expected = tuple(expected)
        self.actual = tuple(actual)
        super().__init__(
            f"DimensionMismatch: {what} is {actual[0]}x{actual[1]}, "
            f"expected {expected[0]}x{expected[1]}"
        )


class SourceRectOutOfBounds(SkinRenderError):
    def __init__(self, entry_name: str, rect: Any, bounds: Tuple[int, int]):
        self.entry_name = entry_name
        self.rect = rect
        self.bounds = tuple(bounds)
        super().__init__(
            f"SourceRectOutOfBounds: entry '{entry_name}' reads {rect} "
            f"outside the {bounds[0]}x{bounds[1]} source image"
        )


class DestinationRectOutOfBounds(SkinRenderError):
    def __init__(self, entry_name: str, rect: Any, canvas_id: str, bounds: Tuple[int, int]):
        self.entry_name = entry_name
        self.rect = rect
        self.canvas_id = canvas_id
        self.bounds = tuple(bounds)
        super().__init__(
            f"DestinationRectOutOfBounds: entry '{entry_name}' writes {rect} "
            f"outside canvas '{canvas_id}' ({bounds[0]}x{bounds[1]})"
        )


class UnknownCanvasIdentifier(SkinRenderError):
    def __init__(self, canvas_id: str, entry_name: str = ""):
        self.canvas_id = canvas_id
        self.entry_name = entry_name
        where = f" (entry '{entry_name}')" if entry_name else ""
        super().__init__(f"UnknownCanvasIdentifier: no canvas named '{canvas_id}'{where}")


class OverlappingRegions(SkinRenderError):
    def __init__(self, canvas_id: str, first: Any, second: Any):
        self.canvas_id = canvas_id
        self.first = first
        self.second = second
        super().__init__(
            f"OverlappingRegions: entries '{first.name}' {first.dest_rect} and "
            f"'{second.name}' {second.dest_rect} overlap on canvas '{canvas_id}'"
        )


class LayoutFormatError(SkinRenderError):
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"LayoutFormatError: {field}: {message}")


class BatchRenderError(SkinRenderError):
    def __init__(self, failures: Dict[Path, Exception]):
        self.failures = dict(failures)
        details = "; ".join(f"{path}: {error}" for path, error in self.failures.items())
        super().__init__(f"{len(self.failures)} skin(s) failed to render: {details}")
