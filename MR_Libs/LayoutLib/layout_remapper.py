"""
Layout remapping: copy skin regions into fixed-size output canvases.

The remapper walks a layout table in order and, for each entry, crops the
source rectangle, applies the entry's transform, upscales it by an integer
factor with nearest-neighbour sampling and pastes it onto its canvas without
a mask. Pixels are copied exactly: no interpolation, no blending with the
canvas, no tone processing.

The whole layout is validated before any canvas is created, so a bad table
never produces partial output.

Classes:
    OutputCanvasSet: Ordered canvas identifier -> image mapping
    LayoutRemapper: Executes a SkinLayout against a skin image

Functions:
    validate_layout: Check a layout's bounds, canvases and overlaps
    apply_transform: Apply a named transform to a pixel block
"""

from typing import Any, Dict, Iterator, List, Tuple
import logging

from MR_Libs.constants import (
    TRANSFORM_FLIP_HORIZONTAL,
    TRANSFORM_FLIP_VERTICAL,
    TRANSFORM_NONE,
    TRANSFORM_ROTATE_90,
    TRANSFORM_ROTATE_180,
    TRANSFORM_ROTATE_270,
    TRANSFORM_TRANSPOSE,
)
from MR_Libs.errors import (
    DestinationRectOutOfBounds,
    DimensionMismatch,
    OverlappingRegions,
    SourceRectOutOfBounds,
    UnknownCanvasIdentifier,
)
from MR_Libs.ImageEditingLib.image_editing_ops import ensure_rgba, new_canvas
from MR_Libs.LayoutLib.layout_models import CanvasSpec, LayoutEntry, SkinLayout
from MR_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)

_TRANSPOSE_METHODS = {
    TRANSFORM_FLIP_HORIZONTAL: Image.Transpose.FLIP_LEFT_RIGHT,
    TRANSFORM_FLIP_VERTICAL: Image.Transpose.FLIP_TOP_BOTTOM,
    TRANSFORM_ROTATE_90: Image.Transpose.ROTATE_90,
    TRANSFORM_ROTATE_180: Image.Transpose.ROTATE_180,
    TRANSFORM_ROTATE_270: Image.Transpose.ROTATE_270,
    TRANSFORM_TRANSPOSE: Image.Transpose.TRANSPOSE,
}


class OutputCanvasSet:
    """
    Canvases produced by one remap, keyed by canvas identifier.

    Iteration follows the layout's canvas order. Each image is owned by the
    set; callers that modify a canvas should replace it with `replace()`.
    """

    def __init__(self, specs: List[CanvasSpec], images: Dict[str, Any]):
        self._specs = {spec.identifier: spec for spec in specs}
        self._order = [spec.identifier for spec in specs]
        self._images = dict(images)

    def __getitem__(self, identifier: str) -> Any:
        if identifier not in self._images:
            raise UnknownCanvasIdentifier(identifier)
        return self._images[identifier]

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._images

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def identifiers(self) -> List[str]:
        return list(self._order)

    def spec(self, identifier: str) -> CanvasSpec:
        if identifier not in self._specs:
            raise UnknownCanvasIdentifier(identifier)
        return self._specs[identifier]

    def items(self) -> List[Tuple[str, Any]]:
        return [(identifier, self._images[identifier]) for identifier in self._order]

    def replace(self, identifier: str, image: Any) -> None:
        """Swap in a new image for a canvas, keeping the canvas size."""
        spec = self.spec(identifier)
        if image.size != spec.size:
            raise DimensionMismatch(spec.size, image.size, what=f"canvas '{identifier}'")
        self._images[identifier] = image


def validate_layout(layout: SkinLayout) -> None:
    """
    Validate a layout table without touching any image.

    Checks, in table order, that every entry targets a known canvas, reads
    inside the source image and writes inside its canvas, then checks that
    no two writes on a canvas overlap unless one of them allows it.

    Args:
        layout: The layout to validate

    Raises:
        UnknownCanvasIdentifier: Entry names a canvas missing from the layout
        SourceRectOutOfBounds: Entry reads outside the source size
        DestinationRectOutOfBounds: Entry writes outside its canvas
        OverlappingRegions: Two entries write the same canvas pixels
    """
    canvas_sizes = {canvas.identifier: canvas.size for canvas in layout.canvases}

    for entry in layout.entries:
        if entry.canvas_id not in canvas_sizes:
            raise UnknownCanvasIdentifier(entry.canvas_id, entry.name)

        if not entry.source.fits_within(layout.source_width, layout.source_height):
            raise SourceRectOutOfBounds(entry.name, entry.source, layout.source_size)

        canvas_width, canvas_height = canvas_sizes[entry.canvas_id]
        if not entry.dest_rect.fits_within(canvas_width, canvas_height):
            raise DestinationRectOutOfBounds(
                entry.name,
                entry.dest_rect,
                entry.canvas_id,
                (canvas_width, canvas_height),
            )

    for canvas_id in canvas_sizes:
        _check_overlaps(canvas_id, layout.entries_for(canvas_id))

    logger.debug(f"Layout '{layout.name}' validated: {len(layout.entries)} entries")


def _check_overlaps(canvas_id: str, entries: List[LayoutEntry]) -> None:
    for index, first in enumerate(entries):
        for second in entries[index + 1:]:
            if first.allow_overlap or second.allow_overlap:
                continue
            if first.dest_rect.intersects(second.dest_rect):
                raise OverlappingRegions(canvas_id, first, second)


def apply_transform(block: Any, transform: str) -> Any:
    """
    Apply a named transform to a pixel block.

    Rotations are counter-clockwise, matching Pillow's transpose constants.

    Args:
        block: PIL Image
        transform: One of the layout transform names

    Returns:
        Transformed PIL Image (the block itself for 'none')

    Raises:
        ValueError: If the transform name is unknown
    """
    if transform == TRANSFORM_NONE:
        return block
    if transform not in _TRANSPOSE_METHODS:
        raise ValueError(f"Unsupported transform: {transform}")
    return block.transpose(_TRANSPOSE_METHODS[transform])


class LayoutRemapper:
    """Copies the regions of a skin into the canvases of a layout."""

    def __init__(self, layout: SkinLayout) -> None:
        self.layout = layout

    def remap(self, image: Any) -> OutputCanvasSet:
        """
        Build every canvas of the layout from a (tone corrected) skin.

        Args:
            image: PIL Image of the skin, 8 bits per channel

        Returns:
            OutputCanvasSet with one RGBA image per layout canvas

        Raises:
            InvalidImageFormat: If the image is not 8 bits per channel
            DimensionMismatch: If the image size differs from the layout source size
            UnknownCanvasIdentifier, SourceRectOutOfBounds,
            DestinationRectOutOfBounds, OverlappingRegions: If the layout is invalid
        """
        source = ensure_rgba(image)
        if source.size != self.layout.source_size:
            raise DimensionMismatch(self.layout.source_size, source.size, what="skin")

        validate_layout(self.layout)

        canvases = {spec.identifier: new_canvas(spec) for spec in self.layout.canvases}

        for entry in self.layout.entries:
            block = self.extract_block(source, entry)
            canvases[entry.canvas_id].paste(block, (entry.dest_x, entry.dest_y))
            logger.debug(
                f"Copied {entry.name}: {entry.source} -> {entry.canvas_id} {entry.dest_rect}"
            )

        logger.info(
            f"Remapped skin into {len(canvases)} canvases "
            f"using layout '{self.layout.name}'"
        )
        return OutputCanvasSet(list(self.layout.canvases), canvases)

    def extract_block(self, source: Any, entry: LayoutEntry) -> Any:
        """Crop, transform and scale the block an entry writes."""
        block = apply_transform(source.crop(entry.source.box), entry.transform)
        if entry.scale != 1:
            width, height = block.size
            block = block.resize(
                (width * entry.scale, height * entry.scale),
                Image.Resampling.NEAREST,
            )
        return block
