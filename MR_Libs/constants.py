"""
Constants and configuration values for Minecraft Render.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Skin layout constants
SKIN_WIDTH = 64
SKIN_HEIGHT = 64
DEFAULT_LAYOUT_NAME = "java_classic_64"

# Tone curve (levels adjustment) constants
TONE_EXPONENT = 0.72
TONE_SCALE = 0.72
CHANNEL_MAX = 255

# Pillow modes whose channels are 8-bit integers
SUPPORTED_IMAGE_MODES = {"1", "L", "LA", "P", "PA", "RGB", "RGBA", "RGBX"}

# Canvas identifiers
CANVAS_CHARA_3 = "chara_3"
CANVAS_CHARA_4 = "chara_4"
CANVAS_CHARA_6 = "chara_6"
CANVAS_OUTPUT = "output"

# Output file names
CHARA_3_FILE_NAME = "chara_3_custom.png"
CHARA_4_FILE_NAME = "chara_4_custom.png"
CHARA_6_FILE_NAME = "chara_6_custom.png"
OUTPUT_FILE_NAME = "output.png"

# In-game reference portraits used for alpha masking
CHARA_3_REFERENCE = "chara_3_pickel_00.png"
CHARA_4_REFERENCE = "chara_4_pickel_00.png"
CHARA_6_REFERENCE = "chara_6_pickel_00.png"

# Canvas fill (fully transparent)
TRANSPARENT = (0, 0, 0, 0)

# Saving
DEFAULT_OUTPUT_FORMAT = "PNG"
TEMP_FILE_SUFFIX = ".partial"
BACKUP_FILE_SUFFIX = ".previous"
PRECORRECTED_SUFFIX = "_corrected"

# Supported input file formats
SUPPORTED_SKIN_EXTENSIONS = {".png", ".bmp", ".gif", ".tiff", ".webp"}

# Layout file constants
LAYOUT_SCHEMA_VERSION = 1
FIELD_SCHEMA_VERSION = "schema_version"
FIELD_NAME = "name"
FIELD_SOURCE_WIDTH = "source_width"
FIELD_SOURCE_HEIGHT = "source_height"
FIELD_CANVASES = "canvases"
FIELD_ENTRIES = "entries"

# Transforms
TRANSFORM_NONE = "none"
TRANSFORM_FLIP_HORIZONTAL = "flip_horizontal"
TRANSFORM_FLIP_VERTICAL = "flip_vertical"
TRANSFORM_ROTATE_90 = "rotate_90"
TRANSFORM_ROTATE_180 = "rotate_180"
TRANSFORM_ROTATE_270 = "rotate_270"
TRANSFORM_TRANSPOSE = "transpose"
