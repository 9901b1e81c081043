#!/usr/bin/env python3
"""
Tests for image_processor.py
Tests the full conversion pipeline for paletted and truecolor output
"""

import random

import pytest

from tile_converter.color_utils import decode_palette, encode_palette
from tile_converter.exceptions import (
    InsufficientDataError,
    PaletteOverflowError,
    StartingIndexTooHighError,
    TileConverterError,
    TileSizeError,
)
from tile_converter.image_processor import process_image
from tile_converter.index_packer import pack_truecolor, unpack_indices
from tile_converter.models import BitDepth, Color, TileSettings, Vector2
from tile_converter.tile_utils import untile

RED = Color(255, 0, 0, 255)
GREEN = Color(0, 255, 0, 255)
BLUE = Color(0, 0, 255, 255)
MAGENTA = Color(255, 0, 255, 255)


def solid_tiles_image(colors, tiles_x, tiles_y, tile_size=8):
    """Row-major image where tile k (row-major) is filled with colors[k]"""
    width = tiles_x * tile_size
    pixels = []
    for y in range(tiles_y * tile_size):
        for x in range(width):
            pixels.append(colors[(y // tile_size) * tiles_x + x // tile_size])
    return pixels


@pytest.mark.integration
class TestPalettedConversion:
    """Test 4bpp and 8bpp conversion"""

    def test_three_color_16x16_4bpp(self, three_color_pixels, settings_4bpp):
        result = process_image(three_color_pixels, settings_4bpp)

        assert len(result.image_data) == 128
        assert len(result.palette_data) == 6
        assert result.palette_data == encode_palette([RED, GREEN, BLUE])
        assert result.warnings == []

    def test_three_color_tile_contents(self, three_color_pixels, settings_4bpp):
        result = process_image(three_color_pixels, settings_4bpp)

        # Tiles in grid order: red, green, blue, red
        assert result.image_data[:32] == bytes([0x00] * 32)
        assert result.image_data[32:64] == bytes([0x11] * 32)
        assert result.image_data[64:96] == bytes([0x22] * 32)
        assert result.image_data[96:] == bytes([0x00] * 32)

    def test_8bpp_one_byte_per_pixel(self, three_color_pixels, settings_4bpp):
        settings = TileSettings(
            bit_depth=BitDepth.BPP_8,
            tile_size=settings_4bpp.tile_size,
            image_size=settings_4bpp.image_size,
        )

        result = process_image(three_color_pixels, settings)

        assert len(result.image_data) == 256
        assert result.image_data[64:128] == bytes([1] * 64)
        assert len(result.palette_data) == 6

    def test_metatile_order(self, distinct_colors):
        """A 4x2 grid of solid tiles grouped into 2x2 metatiles"""
        colors = distinct_colors(8)
        pixels = solid_tiles_image(colors, 4, 2)
        settings = TileSettings(
            bit_depth=BitDepth.BPP_4,
            metatile_size=Vector2(2, 2),
            image_size=Vector2(32, 16),
        )

        result = process_image(pixels, settings)

        tile_order = [result.image_data[i * 32] & 0x0F for i in range(8)]
        assert tile_order == [0, 1, 4, 5, 2, 3, 6, 7]
        assert decode_palette(result.palette_data) == colors

    def test_transparent_color_is_index_0(self, three_color_pixels, settings_4bpp):
        settings = TileSettings(
            bit_depth=BitDepth.BPP_4,
            image_size=settings_4bpp.image_size,
            transparent_color=MAGENTA,
        )

        result = process_image(three_color_pixels, settings)

        assert decode_palette(result.palette_data) == [MAGENTA, RED, GREEN, BLUE]
        assert result.image_data[:32] == bytes([0x11] * 32)

    def test_starting_palette_index(self, distinct_colors):
        colors = distinct_colors(5)
        pixels = solid_tiles_image(colors + [colors[0]], 3, 2)
        settings = TileSettings(
            bit_depth=BitDepth.BPP_4,
            starting_palette_index=10,
            image_size=Vector2(24, 16),
        )

        result = process_image(pixels, settings)

        first_nibbles = [result.image_data[i * 32] & 0x0F for i in range(6)]
        assert first_nibbles == [10, 11, 12, 13, 14, 10]
        assert len(result.palette_data) == 10

    def test_starting_palette_index_too_high(self, numbered_pixels):
        colors = numbered_pixels(7)
        pixels = solid_tiles_image(colors + [colors[0]], 4, 2)
        settings = TileSettings(
            bit_depth=BitDepth.BPP_4,
            starting_palette_index=10,
            image_size=Vector2(32, 16),
        )

        with pytest.raises(StartingIndexTooHighError):
            process_image(pixels, settings)

    @pytest.mark.parametrize("bit_depth", [BitDepth.BPP_4, BitDepth.BPP_8])
    def test_unpack_restores_pixels(self, bit_depth, distinct_colors):
        rng = random.Random(42)
        colors = distinct_colors(8)
        image_size = Vector2(24, 16)
        pixels = [rng.choice(colors) for _ in range(image_size.area())]
        settings = TileSettings(bit_depth=bit_depth, image_size=image_size)

        result = process_image(pixels, settings)

        palette = decode_palette(result.palette_data)
        indices = unpack_indices(result.image_data, bit_depth)
        tiles = [indices[i:i + 64] for i in range(0, len(indices), 64)]
        restored = [palette[i] for i in untile(tiles, image_size, Vector2(8, 8))]
        assert restored == pixels

    def test_palette_overflow(self, numbered_pixels):
        pixels = numbered_pixels(17) + [Color(0, 0, 0)] * (64 - 17)
        settings = TileSettings(bit_depth=BitDepth.BPP_4, image_size=Vector2(8, 8))

        with pytest.raises(PaletteOverflowError):
            process_image(pixels, settings)

    def test_palette_overflow_fixed_by_8bpp(self, numbered_pixels):
        pixels = numbered_pixels(17) + [Color(0, 0, 0)] * (64 - 17)
        settings = TileSettings(bit_depth=BitDepth.BPP_8, image_size=Vector2(8, 8))

        result = process_image(pixels, settings)

        assert list(result.image_data[:17]) == list(range(17))
        assert len(result.palette_data) == 17 * 2


@pytest.mark.integration
class TestTruecolorConversion:
    """Test 16bpp conversion"""

    def test_pure_red_8x8(self):
        settings = TileSettings(bit_depth=BitDepth.BPP_16, image_size=Vector2(8, 8))

        result = process_image([RED] * 64, settings)

        assert result.image_data == bytes([0x1F, 0x80]) * 64
        assert result.palette_data == b""
        assert result.warnings == []

    def test_pixels_not_tiled(self, numbered_pixels):
        pixels = numbered_pixels(256)
        settings = TileSettings(bit_depth=BitDepth.BPP_16, image_size=Vector2(16, 16))

        result = process_image(pixels, settings)

        assert result.image_data == pack_truecolor(pixels)

    def test_no_palette_limit(self, numbered_pixels):
        pixels = numbered_pixels(300) + [RED] * (24 * 16 - 300)
        settings = TileSettings(bit_depth=BitDepth.BPP_16, image_size=Vector2(24, 16))

        result = process_image(pixels, settings)

        assert len(result.image_data) == 24 * 16 * 2

    def test_extent_still_validated(self):
        settings = TileSettings(bit_depth=BitDepth.BPP_16, image_size=Vector2(12, 8))

        with pytest.raises(TileSizeError):
            process_image([RED] * 96, settings)


@pytest.mark.unit
class TestConversionErrors:
    """Test fatal configuration and data errors"""

    def test_fewer_pixels_than_one_tile(self):
        settings = TileSettings(image_size=Vector2(8, 8))

        with pytest.raises(InsufficientDataError, match="fewer than one 8x8 tile"):
            process_image([RED] * 63, settings)

    def test_fewer_pixels_than_image(self):
        settings = TileSettings(image_size=Vector2(16, 16))

        with pytest.raises(InsufficientDataError):
            process_image([RED] * 128, settings)

    def test_image_not_multiple_of_tile(self):
        settings = TileSettings(image_size=Vector2(12, 8))

        with pytest.raises(TileSizeError):
            process_image([RED] * 96, settings)

    def test_metatile_not_multiple_of_grid(self, three_color_pixels):
        settings = TileSettings(metatile_size=Vector2(3, 1), image_size=Vector2(16, 16))

        with pytest.raises(TileSizeError):
            process_image(three_color_pixels, settings)

    def test_errors_share_base_class(self):
        settings = TileSettings(image_size=Vector2(12, 8))

        with pytest.raises(TileConverterError):
            process_image([RED] * 96, settings)
