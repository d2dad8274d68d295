"""
Default layout for 64x64 Minecraft Java skins.

Part rectangles follow the standard Java skin texture (inner layer, classic
4 pixel arms). The canvases hold front-facing renders of the character
assembled from those parts:

- chara_3: head front, 12x
- chara_4: head front, 8x
- chara_6: full front view, 16x
- output:  front view and back view side by side, 4x

A view is laid out on a 16x32 grid (head 8x8 on top, arms 4x12 beside the
8x12 body, legs 4x12 below). Seen from the front the character's right limbs
are on the viewer's left; seen from the back the sides swap.
"""

from typing import List, Sequence, Tuple

from MR_Libs.constants import (
    CANVAS_CHARA_3,
    CANVAS_CHARA_4,
    CANVAS_CHARA_6,
    CANVAS_OUTPUT,
    CHARA_3_FILE_NAME,
    CHARA_3_REFERENCE,
    CHARA_4_FILE_NAME,
    CHARA_4_REFERENCE,
    CHARA_6_FILE_NAME,
    CHARA_6_REFERENCE,
    DEFAULT_LAYOUT_NAME,
    OUTPUT_FILE_NAME,
    SKIN_HEIGHT,
    SKIN_WIDTH,
)
from MR_Libs.ImageEditingLib.image_models import Rect
from MR_Libs.LayoutLib.layout_models import CanvasSpec, LayoutEntry, SkinLayout

# Head
HEAD_FRONT = Rect(8, 8, 8, 8)
HEAD_BACK = Rect(24, 8, 8, 8)

# Body
BODY_FRONT = Rect(20, 20, 8, 12)
BODY_BACK = Rect(32, 20, 8, 12)

# Limbs
RIGHT_LEG_FRONT = Rect(4, 20, 4, 12)
RIGHT_LEG_BACK = Rect(12, 20, 4, 12)
RIGHT_ARM_FRONT = Rect(44, 20, 4, 12)
RIGHT_ARM_BACK = Rect(52, 20, 4, 12)
LEFT_LEG_FRONT = Rect(20, 52, 4, 12)
LEFT_LEG_BACK = Rect(28, 52, 4, 12)
LEFT_ARM_FRONT = Rect(36, 52, 4, 12)
LEFT_ARM_BACK = Rect(44, 52, 4, 12)

VIEW_WIDTH = 16
VIEW_HEIGHT = 32

# (part name, source rect, grid x, grid y)
FRONT_VIEW: Tuple[Tuple[str, Rect, int, int], ...] = (
    ("head_front", HEAD_FRONT, 4, 0),
    ("right_arm_front", RIGHT_ARM_FRONT, 0, 8),
    ("body_front", BODY_FRONT, 4, 8),
    ("left_arm_front", LEFT_ARM_FRONT, 12, 8),
    ("right_leg_front", RIGHT_LEG_FRONT, 4, 20),
    ("left_leg_front", LEFT_LEG_FRONT, 8, 20),
)

BACK_VIEW: Tuple[Tuple[str, Rect, int, int], ...] = (
    ("head_back", HEAD_BACK, 4, 0),
    ("left_arm_back", LEFT_ARM_BACK, 0, 8),
    ("body_back", BODY_BACK, 4, 8),
    ("right_arm_back", RIGHT_ARM_BACK, 12, 8),
    ("left_leg_back", LEFT_LEG_BACK, 4, 20),
    ("right_leg_back", RIGHT_LEG_BACK, 8, 20),
)


def view_entries(
    canvas_id: str,
    parts: Sequence[Tuple[str, Rect, int, int]],
    origin_x: int = 0,
    origin_y: int = 0,
    scale: int = 1,
) -> List[LayoutEntry]:
    """
    Place a set of parts on a canvas at a common origin and scale.

    Args:
        canvas_id: Destination canvas
        parts: (name, source rect, grid x, grid y) tuples
        origin_x: Canvas x of the grid origin
        origin_y: Canvas y of the grid origin
        scale: Upscale factor applied to every part and grid offset

    Returns:
        Layout entries in the order of parts
    """
    return [
        LayoutEntry(
            name=f"{canvas_id}.{name}",
            source=source,
            canvas_id=canvas_id,
            dest_x=origin_x + grid_x * scale,
            dest_y=origin_y + grid_y * scale,
            scale=scale,
        )
        for name, source, grid_x, grid_y in parts
    ]


def build_default_layout() -> SkinLayout:
    """Build the layout used for the four render texture slots."""
    canvases = (
        CanvasSpec(CANVAS_CHARA_3, CHARA_3_FILE_NAME, 96, 96, reference_file=CHARA_3_REFERENCE),
        CanvasSpec(CANVAS_CHARA_4, CHARA_4_FILE_NAME, 64, 64, reference_file=CHARA_4_REFERENCE),
        CanvasSpec(
            CANVAS_CHARA_6,
            CHARA_6_FILE_NAME,
            VIEW_WIDTH * 16,
            VIEW_HEIGHT * 16,
            reference_file=CHARA_6_REFERENCE,
        ),
        CanvasSpec(CANVAS_OUTPUT, OUTPUT_FILE_NAME, VIEW_WIDTH * 4 * 2, VIEW_HEIGHT * 4),
    )

    entries: List[LayoutEntry] = []
    entries.append(
        LayoutEntry("chara_3.head_front", HEAD_FRONT, CANVAS_CHARA_3, 0, 0, scale=12)
    )
    entries.append(
        LayoutEntry("chara_4.head_front", HEAD_FRONT, CANVAS_CHARA_4, 0, 0, scale=8)
    )
    entries.extend(view_entries(CANVAS_CHARA_6, FRONT_VIEW, scale=16))
    entries.extend(view_entries(CANVAS_OUTPUT, FRONT_VIEW, scale=4))
    entries.extend(view_entries(CANVAS_OUTPUT, BACK_VIEW, origin_x=VIEW_WIDTH * 4, scale=4))

    return SkinLayout(
        name=DEFAULT_LAYOUT_NAME,
        source_width=SKIN_WIDTH,
        source_height=SKIN_HEIGHT,
        canvases=canvases,
        entries=tuple(entries),
    )


DEFAULT_SKIN_LAYOUT = build_default_layout()
