"""
Tests for the layout remapper.

Tests cover:
- Exact pixel copies, with and without scaling
- Block transforms
- Layout validation errors
- Overlap handling
- The OutputCanvasSet container
"""

import unittest

from PIL import Image

from MR_Libs.errors import (
    DestinationRectOutOfBounds,
    DimensionMismatch,
    InvalidImageFormat,
    OverlappingRegions,
    SkinRenderError,
    SourceRectOutOfBounds,
    UnknownCanvasIdentifier,
)
from MR_Libs.ImageEditingLib.image_models import Rect
from MR_Libs.LayoutLib.layout_models import CanvasSpec, LayoutEntry, SkinLayout
from MR_Libs.LayoutLib.layout_remapper import (
    LayoutRemapper,
    OutputCanvasSet,
    apply_transform,
    validate_layout,
)

from conftest import make_unique_skin


def single_canvas_layout(*entries, width=32, height=32, fill=(0, 0, 0, 0)):
    return SkinLayout(
        name="test",
        source_width=64,
        source_height=64,
        canvases=(CanvasSpec("canvas", "canvas.png", width, height, fill=fill),),
        entries=tuple(entries),
    )


class TestRemapCopies(unittest.TestCase):
    """Test exact pixel copies."""

    def setUp(self):
        self.skin = make_unique_skin()

    def test_verbatim_copy(self):
        layout = single_canvas_layout(LayoutEntry("head", Rect(8, 8, 8, 8), "canvas", 2, 3))
        canvas = LayoutRemapper(layout).remap(self.skin)["canvas"]

        for j in range(8):
            for i in range(8):
                self.assertEqual(
                    canvas.getpixel((2 + i, 3 + j)),
                    self.skin.getpixel((8 + i, 8 + j)),
                )

    def test_untouched_pixels_keep_fill(self):
        layout = single_canvas_layout(LayoutEntry("head", Rect(8, 8, 8, 8), "canvas", 0, 0))
        canvas = LayoutRemapper(layout).remap(self.skin)["canvas"]

        self.assertEqual(canvas.getpixel((8, 0)), (0, 0, 0, 0))
        self.assertEqual(canvas.getpixel((31, 31)), (0, 0, 0, 0))

    def test_custom_fill(self):
        layout = single_canvas_layout(
            LayoutEntry("head", Rect(8, 8, 8, 8), "canvas", 0, 0),
            fill=(10, 20, 30, 255),
        )
        canvas = LayoutRemapper(layout).remap(self.skin)["canvas"]
        self.assertEqual(canvas.getpixel((20, 20)), (10, 20, 30, 255))

    def test_nearest_neighbour_scale(self):
        layout = single_canvas_layout(
            LayoutEntry("head", Rect(8, 8, 8, 8), "canvas", 0, 0, scale=3)
        )
        canvas = LayoutRemapper(layout).remap(self.skin)["canvas"]

        for j in range(8):
            for i in range(8):
                expected = self.skin.getpixel((8 + i, 8 + j))
                for dy in range(3):
                    for dx in range(3):
                        self.assertEqual(canvas.getpixel((3 * i + dx, 3 * j + dy)), expected)

    def test_transparent_source_pixels_overwrite_canvas(self):
        """Pasting copies alpha as-is instead of blending."""
        skin = Image.new("RGBA", (64, 64), (0, 0, 0, 0))
        layout = single_canvas_layout(
            LayoutEntry("head", Rect(0, 0, 4, 4), "canvas", 0, 0),
            fill=(255, 255, 255, 255),
        )
        canvas = LayoutRemapper(layout).remap(skin)["canvas"]
        self.assertEqual(canvas.getpixel((0, 0)), (0, 0, 0, 0))
        self.assertEqual(canvas.getpixel((4, 4)), (255, 255, 255, 255))

    def test_rgb_skin_accepted(self):
        skin = self.skin.convert("RGB")
        layout = single_canvas_layout(LayoutEntry("head", Rect(8, 8, 8, 8), "canvas", 0, 0))
        canvas = LayoutRemapper(layout).remap(skin)["canvas"]
        self.assertEqual(canvas.mode, "RGBA")
        self.assertEqual(canvas.getpixel((0, 0)), (8, 8, 32, 255))

    def test_source_not_mutated(self):
        before = self.skin.tobytes()
        layout = single_canvas_layout(LayoutEntry("head", Rect(8, 8, 8, 8), "canvas", 0, 0))
        LayoutRemapper(layout).remap(self.skin)
        self.assertEqual(self.skin.tobytes(), before)

    def test_deterministic(self):
        layout = single_canvas_layout(
            LayoutEntry("head", Rect(8, 8, 8, 8), "canvas", 0, 0, scale=2),
            LayoutEntry("arm", Rect(44, 20, 4, 12), "canvas", 16, 0, transform="rotate_90"),
        )
        first = LayoutRemapper(layout).remap(self.skin)["canvas"]
        second = LayoutRemapper(layout).remap(self.skin)["canvas"]
        self.assertEqual(first.tobytes(), second.tobytes())


class TestTransforms(unittest.TestCase):
    """Test block transforms."""

    def setUp(self):
        self.skin = make_unique_skin()
        self.source = Rect(44, 20, 4, 12)

    def remap(self, transform):
        layout = single_canvas_layout(
            LayoutEntry("arm", self.source, "canvas", 0, 0, transform=transform)
        )
        return LayoutRemapper(layout).remap(self.skin)["canvas"]

    def src(self, i, j):
        return self.skin.getpixel((self.source.x + i, self.source.y + j))

    def test_flip_horizontal(self):
        canvas = self.remap("flip_horizontal")
        for j in range(12):
            for i in range(4):
                self.assertEqual(canvas.getpixel((i, j)), self.src(3 - i, j))

    def test_flip_vertical(self):
        canvas = self.remap("flip_vertical")
        for j in range(12):
            for i in range(4):
                self.assertEqual(canvas.getpixel((i, j)), self.src(i, 11 - j))

    def test_rotate_90_counter_clockwise(self):
        canvas = self.remap("rotate_90")
        for y in range(4):
            for x in range(12):
                self.assertEqual(canvas.getpixel((x, y)), self.src(3 - y, x))

    def test_rotate_180(self):
        canvas = self.remap("rotate_180")
        for j in range(12):
            for i in range(4):
                self.assertEqual(canvas.getpixel((i, j)), self.src(3 - i, 11 - j))

    def test_transpose(self):
        canvas = self.remap("transpose")
        for y in range(4):
            for x in range(12):
                self.assertEqual(canvas.getpixel((x, y)), self.src(y, x))

    def test_apply_transform_none_returns_block(self):
        block = Image.new("RGBA", (2, 3))
        self.assertIs(apply_transform(block, "none"), block)

    def test_apply_transform_unknown(self):
        with self.assertRaises(ValueError):
            apply_transform(Image.new("RGBA", (2, 3)), "warp")


class TestValidation(unittest.TestCase):
    """Test layout validation errors."""

    def setUp(self):
        self.skin = make_unique_skin()

    def test_source_out_of_bounds(self):
        layout = single_canvas_layout(LayoutEntry("bad", Rect(60, 60, 8, 8), "canvas", 0, 0))
        with self.assertRaises(SourceRectOutOfBounds) as ctx:
            LayoutRemapper(layout).remap(self.skin)
        self.assertEqual(ctx.exception.entry_name, "bad")

    def test_negative_source_origin(self):
        layout = single_canvas_layout(LayoutEntry("bad", Rect(-1, 0, 4, 4), "canvas", 0, 0))
        with self.assertRaises(SourceRectOutOfBounds):
            validate_layout(layout)

    def test_destination_out_of_bounds(self):
        layout = single_canvas_layout(
            LayoutEntry("big", Rect(0, 0, 8, 8), "canvas", 0, 0, scale=5)
        )
        with self.assertRaises(DestinationRectOutOfBounds) as ctx:
            LayoutRemapper(layout).remap(self.skin)
        self.assertEqual(ctx.exception.canvas_id, "canvas")

    def test_rotated_block_checked_with_swapped_size(self):
        layout = single_canvas_layout(
            LayoutEntry("arm", Rect(44, 20, 4, 12), "canvas", 0, 0, transform="rotate_90"),
            width=12,
            height=4,
        )
        validate_layout(layout)

    def test_unknown_canvas(self):
        layout = single_canvas_layout(LayoutEntry("lost", Rect(0, 0, 4, 4), "nowhere", 0, 0))
        with self.assertRaises(UnknownCanvasIdentifier) as ctx:
            LayoutRemapper(layout).remap(self.skin)
        self.assertEqual(ctx.exception.canvas_id, "nowhere")

    def test_overlap_rejected(self):
        layout = single_canvas_layout(
            LayoutEntry("first", Rect(0, 0, 4, 4), "canvas", 0, 0),
            LayoutEntry("second", Rect(8, 8, 4, 4), "canvas", 2, 2),
        )
        with self.assertRaises(OverlappingRegions) as ctx:
            LayoutRemapper(layout).remap(self.skin)
        self.assertEqual(ctx.exception.first.name, "first")
        self.assertEqual(ctx.exception.second.name, "second")

    def test_touching_regions_do_not_overlap(self):
        layout = single_canvas_layout(
            LayoutEntry("first", Rect(0, 0, 4, 4), "canvas", 0, 0),
            LayoutEntry("second", Rect(8, 8, 4, 4), "canvas", 4, 0),
        )
        validate_layout(layout)

    def test_allowed_overlap_last_write_wins(self):
        layout = single_canvas_layout(
            LayoutEntry("first", Rect(0, 0, 4, 4), "canvas", 0, 0),
            LayoutEntry("second", Rect(8, 8, 4, 4), "canvas", 2, 2, allow_overlap=True),
        )
        canvas = LayoutRemapper(layout).remap(self.skin)["canvas"]
        self.assertEqual(canvas.getpixel((2, 2)), self.skin.getpixel((8, 8)))
        self.assertEqual(canvas.getpixel((0, 0)), self.skin.getpixel((0, 0)))

    def test_skin_size_mismatch(self):
        layout = single_canvas_layout(LayoutEntry("head", Rect(8, 8, 8, 8), "canvas", 0, 0))
        with self.assertRaises(DimensionMismatch) as ctx:
            LayoutRemapper(layout).remap(Image.new("RGBA", (64, 32)))
        self.assertEqual(ctx.exception.expected, (64, 64))
        self.assertEqual(ctx.exception.actual, (64, 32))

    def test_invalid_image_mode(self):
        layout = single_canvas_layout(LayoutEntry("head", Rect(8, 8, 8, 8), "canvas", 0, 0))
        with self.assertRaises(InvalidImageFormat):
            LayoutRemapper(layout).remap(Image.new("F", (64, 64)))

    def test_errors_are_value_errors(self):
        self.assertTrue(issubclass(SourceRectOutOfBounds, SkinRenderError))
        self.assertTrue(issubclass(SkinRenderError, ValueError))


class TestOutputCanvasSet(unittest.TestCase):
    """Test the canvas container."""

    def setUp(self):
        self.specs = [CanvasSpec("b", "b.png", 2, 2), CanvasSpec("a", "a.png", 3, 3)]
        self.images = {
            "a": Image.new("RGBA", (3, 3)),
            "b": Image.new("RGBA", (2, 2)),
        }
        self.canvas_set = OutputCanvasSet(self.specs, self.images)

    def test_order_follows_specs(self):
        self.assertEqual(list(self.canvas_set), ["b", "a"])
        self.assertEqual(self.canvas_set.identifiers(), ["b", "a"])
        self.assertEqual([i for i, _ in self.canvas_set.items()], ["b", "a"])
        self.assertEqual(len(self.canvas_set), 2)

    def test_lookup(self):
        self.assertIn("a", self.canvas_set)
        self.assertNotIn("c", self.canvas_set)
        self.assertIs(self.canvas_set["a"], self.images["a"])
        with self.assertRaises(UnknownCanvasIdentifier):
            self.canvas_set["c"]

    def test_replace_keeps_size(self):
        replacement = Image.new("RGBA", (2, 2), (1, 2, 3, 4))
        self.canvas_set.replace("b", replacement)
        self.assertIs(self.canvas_set["b"], replacement)

        with self.assertRaises(DimensionMismatch):
            self.canvas_set.replace("b", Image.new("RGBA", (3, 3)))


if __name__ == "__main__":
    unittest.main()
