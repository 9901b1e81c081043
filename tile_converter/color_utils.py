#!/usr/bin/env python3
"""
Color packing utilities
RGBA8888 <-> RGB555 / ARGB1555 conversions for palette and truecolor data
"""

import struct
from collections.abc import Iterable

import numpy as np

from .constants import (
    ARGB1555_ALPHA_MASK,
    BYTES_PER_COLOR,
    RGB555_BLUE_MASK,
    RGB555_BLUE_SHIFT,
    RGB555_GREEN_MASK,
    RGB555_GREEN_SHIFT,
    RGB555_MAX_VALUE,
    RGB555_RED_MASK,
    RGB555_RED_SHIFT,
    RGB888_MAX_VALUE,
)
from .models import Color

# 8-bit -> 5-bit lookup. Scale factor and product are float32, truncated
# toward zero; rounding to nearest gives different results for some channels.
_SCALE_TO_5BIT = np.float32(RGB555_MAX_VALUE) / np.float32(RGB888_MAX_VALUE)
_CHANNEL_TO_5BIT = tuple(
    int(v) for v in (np.arange(256, dtype=np.float32) * _SCALE_TO_5BIT).astype(np.uint16)
)


def to_5bit(channel: int) -> int:
    """Scale a 0-255 channel to 0-31."""
    return _CHANNEL_TO_5BIT[channel & 0xFF]


def to_rgb555(color: Color) -> int:
    """
    Pack a color into a 16-bit palette entry.

    Layout is -bbbbbgggggrrrrr with bit 15 always clear.
    """
    return (
        (to_5bit(color.r) << RGB555_RED_SHIFT)
        | (to_5bit(color.g) << RGB555_GREEN_SHIFT)
        | (to_5bit(color.b) << RGB555_BLUE_SHIFT)
    )


def to_argb1555(color: Color) -> int:
    """
    Pack a color into a 16-bit truecolor pixel.

    Same as to_rgb555, with bit 15 set for any nonzero alpha.
    """
    if color.a > 0:
        return to_rgb555(color) | ARGB1555_ALPHA_MASK
    return to_rgb555(color)


def to_rgba8888(color: Color) -> int:
    """Pack a color as R<<24 | G<<16 | B<<8 | A."""
    return (
        ((color.r & 0xFF) << 24)
        | ((color.g & 0xFF) << 16)
        | ((color.b & 0xFF) << 8)
        | (color.a & 0xFF)
    )


def rgb555_to_color(value: int) -> Color:
    """
    Expand a 16-bit RGB555 value back to an opaque 8-bit color.

    Args:
        value: 16-bit packed color (bit 15 ignored)

    Returns:
        Color with channels in 0-255 range and alpha 255
    """
    r = (value & RGB555_RED_MASK) >> RGB555_RED_SHIFT
    g = (value & RGB555_GREEN_MASK) >> RGB555_GREEN_SHIFT
    b = (value & RGB555_BLUE_MASK) >> RGB555_BLUE_SHIFT

    return Color(
        (r * RGB888_MAX_VALUE) // RGB555_MAX_VALUE,
        (g * RGB888_MAX_VALUE) // RGB555_MAX_VALUE,
        (b * RGB888_MAX_VALUE) // RGB555_MAX_VALUE,
        RGB888_MAX_VALUE,
    )


def encode_palette(palette: Iterable[Color]) -> bytes:
    """Serialize palette entries as little-endian RGB555 words."""
    palette_data = bytearray()
    for color in palette:
        palette_data.extend(struct.pack("<H", to_rgb555(color)))
    return bytes(palette_data)


def decode_palette(data: bytes) -> list[Color]:
    """
    Read little-endian RGB555 palette data.

    A trailing odd byte is ignored.
    """
    usable = len(data) - (len(data) % BYTES_PER_COLOR)
    return [
        rgb555_to_color(value)
        for (value,) in struct.iter_unpack("<H", data[:usable])
    ]
