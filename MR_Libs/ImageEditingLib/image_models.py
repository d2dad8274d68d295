"""
Image data models for Minecraft Render.

This module defines core data structures used throughout the render pipeline.

Classes:
    Rect: Pixel rectangle in image space
    SkinRecord: Container for a skin's path and both original and corrected versions

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from MR_Libs.pillow_compat import Image

RgbaColor = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned pixel rectangle with its origin at the top-left corner."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Rect size must be > 0, got {self.width}x{self.height}")

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Pillow crop box (left, upper, right, lower)."""
        return (self.x, self.y, self.right, self.bottom)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def intersects(self, other: "Rect") -> bool:
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def fits_within(self, width: int, height: int) -> bool:
        return (
            self.x >= 0
            and self.y >= 0
            and self.right <= width
            and self.bottom <= height
        )

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.width}x{self.height})"


@dataclass
class SkinRecord:
    path: Path
    original: 'Image.Image'
    corrected: 'Image.Image'
