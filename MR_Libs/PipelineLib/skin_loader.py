"""
Skin loading for Minecraft Render.

This module loads skin textures from the file system with Pillow and hands
them to the pipeline as RGBA images with 8-bit channels.

Classes:
    SkinLoader: Data model for one skin file

Functions:
    load_skin: Load a skin file in one call
    get_supported_skin_formats: Get list of supported skin file extensions
    is_supported_skin_format: Check a path's extension
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List
import logging

from MR_Libs.constants import SUPPORTED_IMAGE_MODES, SUPPORTED_SKIN_EXTENSIONS
from MR_Libs.errors import InvalidImageFormat
from MR_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)


def get_supported_skin_formats() -> List[str]:
    """
    Get list of supported skin file formats.

    Returns:
        List of file extensions (e.g., ['.bmp', '.gif', '.png', ...])
    """
    return sorted(SUPPORTED_SKIN_EXTENSIONS)


def is_supported_skin_format(file_path: Path) -> bool:
    """Check if a file path has a supported skin extension."""
    return Path(file_path).suffix.lower() in SUPPORTED_SKIN_EXTENSIONS


@dataclass
class SkinLoader:
    """Data model for a skin file on disk.

    Lossy formats (JPEG) are not accepted: skins rely on exact pixel values
    and a transparent background.

    Attributes:
        file_path: Path to the skin image
    """

    file_path: Path

    def __post_init__(self):
        """Validate input parameters."""
        self.file_path = Path(self.file_path)

        if not self.file_path.exists():
            raise FileNotFoundError(f"Skin file not found: {self.file_path}")

        if not self.file_path.is_file():
            raise ValueError(f"Path is not a file: {self.file_path}")

        if not is_supported_skin_format(self.file_path):
            raise ValueError(
                f"Unsupported skin format '{self.file_path.suffix}'. "
                f"Supported: {', '.join(get_supported_skin_formats())}"
            )

    def load(self) -> Any:
        """
        Load the skin from disk.

        Returns:
            RGBA PIL Image, detached from the file

        Raises:
            InvalidImageFormat: If the file's channels are not 8-bit integers
            OSError: If the image cannot be read
        """
        try:
            with Image.open(self.file_path) as img:
                mode = img.mode
                if mode not in SUPPORTED_IMAGE_MODES:
                    raise InvalidImageFormat(mode)
                skin = img.convert("RGBA")
        except OSError as e:
            raise OSError(f"Failed to load skin from {self.file_path}: {str(e)}") from e

        logger.debug(f"Loaded skin {self.file_path} ({mode}, {skin.width}x{skin.height})")
        return skin


def load_skin(file_path: Path) -> Any:
    """
    Load a skin file.

    Args:
        file_path: Path to the skin image

    Returns:
        RGBA PIL Image

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the path is not a file or has an unsupported extension
        InvalidImageFormat: If the file's channels are not 8-bit integers
        OSError: If the image cannot be read
    """
    return SkinLoader(file_path).load()
