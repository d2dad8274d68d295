"""
Layout data models for Minecraft Render.

A layout is a plain table: a list of canvases and an ordered list of
entries, each copying one source rectangle of the skin to an offset on one
canvas. New layouts are new tables, never new code paths.

Classes:
    CanvasSpec: Identifier, file name, size and fill of one output canvas
    LayoutEntry: One source rectangle -> canvas offset copy
    SkinLayout: Complete layout (source size, canvases, entries)

Type Aliases:
    Transform: Name of a pixel block transform applied before pasting
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple

from MR_Libs.constants import (
    FIELD_CANVASES,
    FIELD_ENTRIES,
    FIELD_NAME,
    FIELD_SOURCE_HEIGHT,
    FIELD_SOURCE_WIDTH,
    TRANSFORM_FLIP_HORIZONTAL,
    TRANSFORM_FLIP_VERTICAL,
    TRANSFORM_NONE,
    TRANSFORM_ROTATE_90,
    TRANSFORM_ROTATE_180,
    TRANSFORM_ROTATE_270,
    TRANSFORM_TRANSPOSE,
    TRANSPARENT,
)
from MR_Libs.errors import LayoutFormatError, UnknownCanvasIdentifier
from MR_Libs.ImageEditingLib.image_models import Rect, RgbaColor

Transform = Literal[
    "none",
    "flip_horizontal",
    "flip_vertical",
    "rotate_90",
    "rotate_180",
    "rotate_270",
    "transpose",
]

TRANSFORMS = (
    TRANSFORM_NONE,
    TRANSFORM_FLIP_HORIZONTAL,
    TRANSFORM_FLIP_VERTICAL,
    TRANSFORM_ROTATE_90,
    TRANSFORM_ROTATE_180,
    TRANSFORM_ROTATE_270,
    TRANSFORM_TRANSPOSE,
)

# Transforms that swap the width and height of the block
QUARTER_TURN_TRANSFORMS = {TRANSFORM_ROTATE_90, TRANSFORM_ROTATE_270, TRANSFORM_TRANSPOSE}

CHANNEL_RANGE = range(256)


def is_plain_file_name(name: str) -> bool:
    """Check that a name has no directory parts and is not '.' or '..'."""
    return (
        bool(name)
        and name not in (".", "..")
        and Path(name).name == name
        and "\\" not in name
    )


def _integer(value: Any, field: str) -> int:
    # bool is an int subclass, but true/false is never a valid coordinate
    if isinstance(value, bool) or not isinstance(value, int):
        raise LayoutFormatError(field, f"expected an integer, got {value!r}")
    return value


def _integers(value: Any, count: int, field: str, shape: str) -> List[int]:
    if not isinstance(value, (list, tuple)) or len(value) != count:
        raise LayoutFormatError(field, f"expected {shape}, got {value!r}")
    return [_integer(item, field) for item in value]


def _string(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise LayoutFormatError(field, f"expected a string, got {value!r}")
    return value


@dataclass(frozen=True)
class CanvasSpec:
    """Configuration of one output canvas.

    Attributes:
        identifier: Unique canvas name referenced by layout entries
        file_name: File the canvas is saved to
        width: Canvas width in pixels
        height: Canvas height in pixels
        fill: Initial RGBA fill (default: fully transparent)
        reference_file: Optional in-game portrait whose alpha masks this canvas
    """
    identifier: str
    file_name: str
    width: int
    height: int
    fill: RgbaColor = TRANSPARENT
    reference_file: Optional[str] = None

    def __post_init__(self):
        if not self.identifier:
            raise ValueError("Canvas identifier is required")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be > 0, got {self.width}x{self.height}")
        if len(self.fill) != 4 or any(channel not in CHANNEL_RANGE for channel in self.fill):
            raise ValueError(f"Canvas fill must be an RGBA tuple of 0-255 values, got {self.fill}")
        if self.reference_file is not None and not is_plain_file_name(self.reference_file):
            raise ValueError(
                f"reference_file must be a plain file name, got '{self.reference_file}'"
            )

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "identifier": self.identifier,
            "file_name": self.file_name,
            "width": self.width,
            "height": self.height,
            "fill": list(self.fill),
        }
        if self.reference_file:
            data["reference_file"] = self.reference_file
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CanvasSpec":
        if not isinstance(data, dict):
            raise LayoutFormatError("canvases[]", f"expected an object, got {type(data).__name__}")
        for key in ("identifier", "file_name", "width", "height"):
            if key not in data:
                raise LayoutFormatError(f"canvases[].{key}", "missing required field")

        fill = _integers(data.get("fill", TRANSPARENT), 4, "canvases[].fill", "[r, g, b, a]")
        if any(channel not in CHANNEL_RANGE for channel in fill):
            raise LayoutFormatError("canvases[].fill", f"values must be 0-255, got {fill}")

        reference_file = data.get("reference_file")
        if reference_file is not None and not (
            isinstance(reference_file, str) and is_plain_file_name(reference_file)
        ):
            raise LayoutFormatError(
                "canvases[].reference_file",
                f"expected a plain file name, got {reference_file!r}",
            )

        try:
            return cls(
                identifier=_string(data["identifier"], "canvases[].identifier"),
                file_name=_string(data["file_name"], "canvases[].file_name"),
                width=_integer(data["width"], "canvases[].width"),
                height=_integer(data["height"], "canvases[].height"),
                fill=tuple(fill),
                reference_file=reference_file,
            )
        except LayoutFormatError:
            raise
        except ValueError as e:
            raise LayoutFormatError("canvases[]", str(e))


@dataclass(frozen=True)
class LayoutEntry:
    """One copy operation of a layout.

    Attributes:
        name: Human-readable part name (used in error messages)
        source: Rectangle read from the skin
        canvas_id: Identifier of the destination canvas
        dest_x: Left edge of the write on the canvas
        dest_y: Top edge of the write on the canvas
        transform: Transform applied to the block before scaling
        scale: Integer nearest-neighbour upscale factor (1 = verbatim copy)
        allow_overlap: Permit this write to overlap other writes (last wins)
    """
    name: str
    source: Rect
    canvas_id: str
    dest_x: int
    dest_y: int
    transform: Transform = "none"
    scale: int = 1
    allow_overlap: bool = False

    def __post_init__(self):
        if self.transform not in TRANSFORMS:
            raise ValueError(
                f"Unsupported transform '{self.transform}' for entry '{self.name}'. "
                f"Must be one of: {', '.join(TRANSFORMS)}"
            )
        if int(self.scale) < 1:
            raise ValueError(f"scale must be >= 1 for entry '{self.name}', got {self.scale}")

    @property
    def block_size(self) -> Tuple[int, int]:
        """Size of the source block after the transform, before scaling."""
        if self.transform in QUARTER_TURN_TRANSFORMS:
            return (self.source.height, self.source.width)
        return self.source.size

    @property
    def dest_rect(self) -> Rect:
        width, height = self.block_size
        return Rect(self.dest_x, self.dest_y, width * self.scale, height * self.scale)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "source": [self.source.x, self.source.y, self.source.width, self.source.height],
            "canvas": self.canvas_id,
            "dest": [self.dest_x, self.dest_y],
        }
        if self.transform != TRANSFORM_NONE:
            data["transform"] = self.transform
        if self.scale != 1:
            data["scale"] = self.scale
        if self.allow_overlap:
            data["allow_overlap"] = True
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutEntry":
        if not isinstance(data, dict):
            raise LayoutFormatError("entries[]", f"expected an object, got {type(data).__name__}")
        name = _string(data.get("name", ""), "entries[].name")
        field_prefix = f"entries[{name}]" if name else "entries[]"

        for key in ("source", "canvas", "dest"):
            if key not in data:
                raise LayoutFormatError(f"{field_prefix}.{key}", "missing required field")

        source_values = _integers(
            data["source"], 4, f"{field_prefix}.source", "[x, y, width, height]"
        )
        dest_values = _integers(data["dest"], 2, f"{field_prefix}.dest", "[x, y]")
        canvas_id = _string(data["canvas"], f"{field_prefix}.canvas")
        transform = _string(data.get("transform", TRANSFORM_NONE), f"{field_prefix}.transform")
        scale = _integer(data.get("scale", 1), f"{field_prefix}.scale")

        allow_overlap = data.get("allow_overlap", False)
        if not isinstance(allow_overlap, bool):
            raise LayoutFormatError(
                f"{field_prefix}.allow_overlap", f"expected true or false, got {allow_overlap!r}"
            )

        try:
            return cls(
                name=name,
                source=Rect(*source_values),
                canvas_id=canvas_id,
                dest_x=dest_values[0],
                dest_y=dest_values[1],
                transform=transform,
                scale=scale,
                allow_overlap=allow_overlap,
            )
        except ValueError as e:
            raise LayoutFormatError(field_prefix, str(e))


@dataclass(frozen=True)
class SkinLayout:
    """Complete layout: the expected source size, the canvases and the copy table."""
    name: str
    source_width: int
    source_height: int
    canvases: Tuple[CanvasSpec, ...]
    entries: Tuple[LayoutEntry, ...]

    def __post_init__(self):
        identifiers = [canvas.identifier for canvas in self.canvases]
        duplicates = sorted({i for i in identifiers if identifiers.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate canvas identifiers: {', '.join(duplicates)}")

    @property
    def source_size(self) -> Tuple[int, int]:
        return (self.source_width, self.source_height)

    def canvas_ids(self) -> List[str]:
        return [canvas.identifier for canvas in self.canvases]

    def canvas(self, identifier: str) -> CanvasSpec:
        """
        Look up a canvas by identifier.

        Raises:
            UnknownCanvasIdentifier: If no canvas has this identifier
        """
        for canvas in self.canvases:
            if canvas.identifier == identifier:
                return canvas
        raise UnknownCanvasIdentifier(identifier)

    def entries_for(self, identifier: str) -> List[LayoutEntry]:
        """Entries writing to one canvas, in table order."""
        return [entry for entry in self.entries if entry.canvas_id == identifier]

    def to_dict(self) -> Dict[str, Any]:
        return {
            FIELD_NAME: self.name,
            FIELD_SOURCE_WIDTH: self.source_width,
            FIELD_SOURCE_HEIGHT: self.source_height,
            FIELD_CANVASES: [canvas.to_dict() for canvas in self.canvases],
            FIELD_ENTRIES: [entry.to_dict() for entry in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SkinLayout":
        if not isinstance(data, dict):
            raise LayoutFormatError("layout", f"expected an object, got {type(data).__name__}")

        for field in (FIELD_SOURCE_WIDTH, FIELD_SOURCE_HEIGHT, FIELD_CANVASES, FIELD_ENTRIES):
            if field not in data:
                raise LayoutFormatError(field, "missing required field")

        canvases = data[FIELD_CANVASES]
        entries = data[FIELD_ENTRIES]
        if not isinstance(canvases, list) or not canvases:
            raise LayoutFormatError(FIELD_CANVASES, "expected a non-empty list")
        if not isinstance(entries, list):
            raise LayoutFormatError(FIELD_ENTRIES, "expected a list")

        source_width = _integer(data[FIELD_SOURCE_WIDTH], FIELD_SOURCE_WIDTH)
        source_height = _integer(data[FIELD_SOURCE_HEIGHT], FIELD_SOURCE_HEIGHT)

        try:
            return cls(
                name=str(data.get(FIELD_NAME) or "custom"),
                source_width=source_width,
                source_height=source_height,
                canvases=tuple(CanvasSpec.from_dict(canvas) for canvas in canvases),
                entries=tuple(LayoutEntry.from_dict(entry) for entry in entries),
            )
        except LayoutFormatError:
            raise
        except ValueError as e:
            raise LayoutFormatError(FIELD_CANVASES, str(e))
