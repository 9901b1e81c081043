"""
Shared pytest fixtures and configuration for tile converter tests
"""

import logging

import pytest
from PIL import Image

from tile_converter.logging_config import LOGGER_NAME
from tile_converter.models import BitDepth, Color, TileSettings, Vector2


@pytest.fixture(autouse=True)
def reset_logger():
    """Undo setup_logging() so caplog keeps working between tests"""
    logger = logging.getLogger(LOGGER_NAME)
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings_4bpp():
    """4bpp settings for a 16x16 image of 8x8 tiles"""
    return TileSettings(
        bit_depth=BitDepth.BPP_4,
        tile_size=Vector2(8, 8),
        metatile_size=Vector2(1, 1),
        image_size=Vector2(16, 16),
    )


@pytest.fixture
def three_color_pixels():
    """16x16 image with red, green, blue and red 8x8 quadrants"""
    red = Color(255, 0, 0, 255)
    green = Color(0, 255, 0, 255)
    blue = Color(0, 0, 255, 255)
    pixels = []
    for y in range(16):
        for x in range(16):
            if y < 8:
                pixels.append(red if x < 8 else green)
            else:
                pixels.append(blue if x < 8 else red)
    return pixels


@pytest.fixture
def numbered_pixels():
    """Factory for distinct colors numbered 0..count-1, useful for tracking positions"""
    def _numbered_pixels(count):
        return [Color(i & 0xFF, (i >> 8) & 0xFF, 0, 255) for i in range(count)]
    return _numbered_pixels


@pytest.fixture
def distinct_colors():
    """Factory for colors whose channels are 0 or 255 so they survive RGB555 packing (up to 8)"""
    def _distinct_colors(count):
        colors = []
        for i in range(count):
            colors.append(Color(
                255 if i & 1 else 0,
                255 if i & 2 else 0,
                255 if i & 4 else 0,
                255,
            ))
        return colors
    return _distinct_colors


@pytest.fixture
def make_png(tmp_path):
    """Write a list of RGB tuples to a PNG and return its path"""
    def _make_png(name, size, pixels, mode="RGB"):
        path = tmp_path / name
        img = Image.new(mode, size)
        img.putdata(pixels)
        img.save(path)
        return path
    return _make_png
