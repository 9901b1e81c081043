#!/usr/bin/env python3
"""
Image conversion pipeline
Tiles an image, builds its palette and packs it into raw image/palette data
"""

from collections.abc import Sequence

from .color_utils import encode_palette
from .exceptions import InsufficientDataError
from .index_packer import pack_tile, pack_truecolor
from .logging_config import get_logger
from .models import Color, ConversionResult, TileSettings
from .palette_builder import build_palette
from .tile_utils import tile, tile_sequentially

logger = get_logger(__name__)


def process_image(pixels: Sequence[Color], settings: TileSettings) -> ConversionResult:
    """
    Convert a row-major pixel buffer to raw tile data.

    Paletted bit depths produce metatile-ordered packed indices plus an
    RGB555 palette. Truecolor produces ARGB1555 words in the original pixel
    order (no tiling) and no palette.

    Args:
        pixels: Row-major pixels, at least settings.image_size.area() long
        settings: Settings with image_size filled in

    Returns:
        ConversionResult with image data, palette data and packing warnings

    Raises:
        TileConverterError: Any configuration or data error aborts the image
    """
    expected_length = settings.tile_size.area()
    if len(pixels) < expected_length:
        raise InsufficientDataError(
            f"Image has {len(pixels)} pixels, fewer than one "
            f"{settings.tile_size.x}x{settings.tile_size.y} tile"
        )

    logger.debug(
        f"Processing {settings.image_size.x}x{settings.image_size.y} image, "
        f"{settings.bit_depth}, tile {settings.tile_size.x}x{settings.tile_size.y}, "
        f"metatile {settings.metatile_size.x}x{settings.metatile_size.y}"
    )

    # Split the image into tiles, then group them into metatiles
    tiles = tile(pixels, settings.image_size, settings.tile_size)
    tile_grid = settings.tile_grid_size
    metatiled = tile_sequentially(tiles, tile_grid, settings.metatile_size)

    if not settings.bit_depth.is_paletted:
        # Tiling is not applied to truecolor output
        return ConversionResult(image_data=pack_truecolor(pixels))

    return _process_paletted(pixels, metatiled, settings)


def _process_paletted(pixels: Sequence[Color], tiles: Sequence[Sequence[Color]],
                      settings: TileSettings) -> ConversionResult:
    # The palette covers the entire image, not each tile
    palette = build_palette(pixels, settings)

    image_data = bytearray()
    warnings: list[str] = []
    for current in tiles:
        packed = pack_tile(current, settings, palette)
        image_data.extend(packed.data)
        for warning in packed.warnings:
            if warning not in warnings:
                warnings.append(warning)

    result = ConversionResult(
        image_data=bytes(image_data),
        palette_data=encode_palette(palette),
        warnings=warnings,
    )
    logger.debug(
        f"Packed {len(tiles)} tiles into {len(result.image_data)} bytes, "
        f"{len(palette)} palette colors"
    )
    return result

