"""
Tone correction (levels adjustment) for Minecraft skins.

The render textures expect colors that went through a fixed levels curve:

    out = clamp((in / 255) ** exponent * scale, 0.0, 1.0)

with exponent = 0.72 and scale = 0.72, applied to R, G and B. Alpha is
copied unchanged. Results are quantized back to 8 bits with round-half-up,
so a value of exactly n + 0.5 always becomes n + 1.

Example:
    >>> from PIL import Image
    >>> skin = Image.open("skin.png")
    >>> corrected = ToneCorrector().correct(skin)
    >>> ToneCorrector().correct_channel_value(255)
    184
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

import numpy as np

from MR_Libs.constants import CHANNEL_MAX, TONE_EXPONENT, TONE_SCALE
from MR_Libs.ImageEditingLib.image_editing_ops import ensure_rgba
from MR_Libs.pillow_compat import Image


@dataclass(frozen=True)
class ToneCurveParameters:
    """Levels curve constants.

    Attributes:
        exponent: Gamma exponent applied to the normalized channel value
        scale: Linear scale applied after the exponent
    """
    exponent: float = TONE_EXPONENT
    scale: float = TONE_SCALE

    def __post_init__(self):
        if self.exponent <= 0:
            raise ValueError(f"exponent must be > 0, got {self.exponent}")
        if self.scale < 0:
            raise ValueError(f"scale must be >= 0, got {self.scale}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ToneCurveParameters":
        """Create from dictionary."""
        filtered = {k: float(v) for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)


def round_half_up(values: Any) -> np.ndarray:
    """
    Round to the nearest integer, with halves rounded up.

    numpy's own rounding is half-to-even (2.5 -> 2); the tone curve uses
    half-up (2.5 -> 3) for every channel value.

    Args:
        values: Scalar or array of non-negative floats

    Returns:
        Integer numpy array of rounded values
    """
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5).astype(np.int64)


def build_lookup_table(parameters: ToneCurveParameters) -> np.ndarray:
    """
    Build the 256-entry channel lookup table for a tone curve.

    Args:
        parameters: Curve exponent and scale

    Returns:
        uint8 numpy array where table[v] is the corrected value of v
    """
    normalized = np.arange(CHANNEL_MAX + 1, dtype=np.float64) / CHANNEL_MAX
    curved = np.clip(np.power(normalized, parameters.exponent) * parameters.scale, 0.0, 1.0)
    return round_half_up(curved * CHANNEL_MAX).astype(np.uint8)


class ToneCorrector:
    """Applies the levels curve to the color channels of an image."""

    def __init__(self, parameters: ToneCurveParameters = ToneCurveParameters()) -> None:
        self.parameters = parameters
        self._table = build_lookup_table(parameters)

    def lookup_table(self) -> np.ndarray:
        """Return a copy of the channel lookup table."""
        return self._table.copy()

    def correct_channel_value(self, value: int) -> int:
        """
        Correct a single 8-bit channel value.

        Raises:
            ValueError: If value is outside 0-255
        """
        if not 0 <= int(value) <= CHANNEL_MAX:
            raise ValueError(f"channel value must be 0-{CHANNEL_MAX}, got {value}")
        return int(self._table[int(value)])

    def correct(self, image: Any) -> Any:
        """
        Apply the tone curve to every pixel of an image.

        Args:
            image: PIL Image with 8-bit channels (converted to RGBA)

        Returns:
            New RGBA PIL Image; the input is left untouched

        Raises:
            InvalidImageFormat: If the image is not 8 bits per channel
        """
        rgba = ensure_rgba(image)
        pixels = np.array(rgba, dtype=np.uint8)
        pixels[..., :3] = self._table[pixels[..., :3]]
        return Image.fromarray(pixels)
