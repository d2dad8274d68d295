"""
Pytest configuration and shared fixtures for Minecraft Render tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest
from PIL import Image


def make_unique_skin(width=64, height=64):
    """
    Build a skin where every pixel has its own color.

    Pixel (x, y) is (x, y, (x * 3 + y) % 256, 255), so any copied block can be
    traced back to its source coordinates.
    """
    image = Image.new("RGBA", (width, height))
    image.putdata([
        (x, y, (x * 3 + y) % 256, 255)
        for y in range(height)
        for x in range(width)
    ])
    return image


@pytest.fixture
def unique_skin():
    """Provide a 64x64 skin with a distinct color per pixel."""
    return make_unique_skin()


@pytest.fixture
def gray_skin():
    """Provide a 64x64 skin filled with opaque mid gray."""
    return Image.new("RGBA", (64, 64), (128, 128, 128, 255))


@pytest.fixture
def skin_file(tmp_path, unique_skin):
    """Write the unique skin to a PNG file and return its path."""
    path = tmp_path / "steve.png"
    unique_skin.save(path)
    return path


@pytest.fixture
def output_dir(tmp_path):
    """Provide an output directory path that does not exist yet."""
    return tmp_path / "out"
