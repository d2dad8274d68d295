"""
Unit tests for skin_loader module.

Tests skin file validation and loading.
"""

from pathlib import Path

import pytest
from PIL import Image

from MR_Libs.errors import InvalidImageFormat
from MR_Libs.PipelineLib.skin_loader import (
    SkinLoader,
    get_supported_skin_formats,
    is_supported_skin_format,
    load_skin,
)


class TestSupportedFormats:
    """Tests for format helpers."""

    def test_png_supported(self):
        assert ".png" in get_supported_skin_formats()
        assert is_supported_skin_format(Path("skin.PNG"))

    def test_jpeg_not_supported(self):
        assert not is_supported_skin_format(Path("skin.jpg"))

    def test_formats_sorted(self):
        formats = get_supported_skin_formats()
        assert formats == sorted(formats)


class TestSkinLoader:
    """Tests for SkinLoader dataclass."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SkinLoader(tmp_path / "missing.png")

    def test_directory(self, tmp_path):
        folder = tmp_path / "skin.png"
        folder.mkdir()
        with pytest.raises(ValueError):
            SkinLoader(folder)

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "skin.jpg"
        Image.new("RGB", (64, 64)).save(path)
        with pytest.raises(ValueError) as exc_info:
            SkinLoader(path)
        assert ".jpg" in str(exc_info.value)

    def test_loads_rgba(self, skin_file, unique_skin):
        skin = SkinLoader(skin_file).load()
        assert skin.mode == "RGBA"
        assert skin.size == (64, 64)
        assert skin.tobytes() == unique_skin.tobytes()

    def test_converts_palette_image(self, tmp_path):
        path = tmp_path / "palette.png"
        Image.new("RGB", (64, 64), (255, 0, 0)).convert("P").save(path)
        skin = load_skin(path)
        assert skin.mode == "RGBA"
        assert skin.getpixel((0, 0)) == (255, 0, 0, 255)

    def test_rejects_16bit_image(self, tmp_path):
        path = tmp_path / "deep.png"
        Image.new("I;16", (64, 64)).save(path)
        with pytest.raises(InvalidImageFormat):
            load_skin(path)

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "corrupt.png"
        path.write_bytes(b"not a png")
        with pytest.raises(OSError) as exc_info:
            load_skin(path)
        assert "Failed to load skin" in str(exc_info.value)

    def test_accepts_string_path(self, skin_file):
        loader = SkinLoader(str(skin_file))
        assert isinstance(loader.file_path, Path)
