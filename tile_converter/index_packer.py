#!/usr/bin/env python3
"""
Pixel-to-index mapping and bit packing
Turns tile pixels into packed 4bpp/8bpp indices or 16-bit truecolor words
"""

import struct
from collections.abc import Iterable, Sequence

from .color_utils import to_argb1555
from .constants import MAX_INDEX_4BPP, MAX_INDEX_8BPP
from .exceptions import (
    ColorNotInPaletteError,
    ConfigurationError,
    InvalidBitDepthError,
    StartingIndexTooHighError,
)
from .logging_config import get_logger
from .models import BitDepth, Color, PackResult, TileSettings

logger = get_logger(__name__)

TOO_MANY_COLORS_WARNING = (
    "You have too many colors, please use a mode which supports more colors, "
    "or remove some colors"
)


def map_to_indices(tile_pixels: Sequence[Color], settings: TileSettings,
                   palette: Sequence[Color]) -> list[int]:
    """
    Convert the pixels of one tile to palette indices.

    Only the first tile_size.area() pixels are read. Every index is shifted
    by settings.starting_palette_index.

    Raises:
        ColorNotInPaletteError: If a pixel color is not in the palette
        ConfigurationError: If the starting index is negative
        StartingIndexTooHighError: If a shifted index is past the palette limit
    """
    lookup: dict[Color, int] = {}
    for index, color in enumerate(palette):
        lookup.setdefault(color, index)

    output = []
    for i in range(settings.tile_size.area()):
        color = tile_pixels[i]
        try:
            output.append(lookup[color])
        except KeyError:
            raise ColorNotInPaletteError(
                f"Color {color.to_tuple()} does not exist in palette! "
                "(this should never happen, please report this as a bug)"
            ) from None

    # Start index at starting_palette_index instead of 0
    offset = settings.starting_palette_index
    if offset < 0:
        raise ConfigurationError(f"Starting palette index can't be negative: {offset}")
    if offset != 0:
        max_length = settings.bit_depth.max_palette_length
        output = [index + offset for index in output]
        if max_length is not None and any(index >= max_length for index in output):
            raise StartingIndexTooHighError(
                f"Starting palette index {offset} is set too high for a "
                f"{len(palette)} color palette (max {max_length} colors), "
                "please set it lower!"
            )

    return output


def pack_4bpp(indices: Sequence[int]) -> PackResult:
    """
    Pack indices two per byte, first index in the low nibble.

    Indices above 0xF become 0 and produce a single warning. An odd
    trailing index is dropped.
    """
    result = PackResult()
    packed = bytearray()

    # We go 2 items at a time
    for i in range(len(indices) // 2):
        low = _clamp(indices[i * 2], MAX_INDEX_4BPP, result)
        high = _clamp(indices[i * 2 + 1], MAX_INDEX_4BPP, result)
        packed.append(low | (high << 4))

    result.data = bytes(packed)
    return result


def pack_8bpp(indices: Iterable[int]) -> PackResult:
    """
    Pack indices one per byte.

    Indices above 0xFF become 0 and produce a single warning.
    """
    result = PackResult()
    result.data = bytes(_clamp(index, MAX_INDEX_8BPP, result) for index in indices)
    return result


def _clamp(index: int, max_index: int, result: PackResult) -> int:
    if index <= max_index:
        return index
    # Warn only once per packing run
    if not result.warnings:
        logger.warning(f"Warning: {TOO_MANY_COLORS_WARNING}")
        result.warnings.append(TOO_MANY_COLORS_WARNING)
    return 0


def pack_truecolor(pixels: Iterable[Color]) -> bytes:
    """Pack colors as little-endian ARGB1555 words, no palette involved."""
    output = bytearray()
    for color in pixels:
        output.extend(struct.pack("<H", to_argb1555(color)))
    return bytes(output)


def pack_tile(tile_pixels: Sequence[Color], settings: TileSettings,
              palette: Sequence[Color]) -> PackResult:
    """
    Map a tile to palette indices and pack them for the configured bit depth.

    Raises:
        InvalidBitDepthError: If the bit depth is truecolor
    """
    if not settings.bit_depth.is_paletted:
        raise InvalidBitDepthError(
            f"{settings.bit_depth.bits} bit images are not paletted"
        )

    indices = map_to_indices(tile_pixels, settings, palette)

    if settings.bit_depth is BitDepth.BPP_4:
        return pack_4bpp(indices)
    return pack_8bpp(indices)


def unpack_indices(data: bytes, bit_depth: BitDepth) -> list[int]:
    """
    Read packed indices back out of 4bpp or 8bpp data.

    Raises:
        InvalidBitDepthError: If the bit depth is truecolor
    """
    if bit_depth is BitDepth.BPP_4:
        indices = []
        for byte in data:
            indices.append(byte & 0x0F)
            indices.append(byte >> 4)
        return indices
    if bit_depth is BitDepth.BPP_8:
        return list(data)
    raise InvalidBitDepthError(f"{bit_depth.bits} bit images are not paletted")
