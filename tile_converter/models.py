"""
Value types shared by the conversion pipeline
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from .constants import (
    DEFAULT_BITS_PER_PIXEL,
    DEFAULT_METATILE_HEIGHT,
    DEFAULT_METATILE_WIDTH,
    DEFAULT_STARTING_PALETTE_INDEX,
    DEFAULT_TILE_HEIGHT,
    DEFAULT_TILE_WIDTH,
    MAX_PALETTE_LENGTH_4BPP,
    MAX_PALETTE_LENGTH_8BPP,
)
from .exceptions import InvalidBitDepthError, InvalidColorError


@dataclass(frozen=True, order=True)
class Color:
    """A four channel 8-bit color"""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self):
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 0xFF:
                raise InvalidColorError(
                    f"Color channels must be in 0-255, got {self.to_tuple()}"
                )

    @classmethod
    def from_rgba(cls, values: Sequence[int]) -> Color:
        """Build a color from the first four items of a sequence."""
        if len(values) < 4:
            raise InvalidColorError(f"Expected 4 channels, got {len(values)}")
        r, g, b, a = (int(v) for v in values[:4])
        return cls(r, g, b, a)

    @classmethod
    def from_hex(cls, value: int) -> Color:
        """
        Build a color from a 32-bit integer.

        The value is read big-endian so red comes first: 0xFF00FFFF is
        opaque magenta.
        """
        if not 0 <= value <= 0xFFFFFFFF:
            raise InvalidColorError(f"Color value out of range: {value:#x}")
        return cls.from_rgba(value.to_bytes(4, "big"))

    def to_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


@dataclass(frozen=True)
class Vector2:
    """Width/height or column/row pair"""
    x: int
    y: int

    def area(self) -> int:
        return self.x * self.y


class BitDepth(Enum):
    """Output pixel format; 4 and 8 are paletted, 16 is truecolor"""
    BPP_4 = 4
    BPP_8 = 8
    BPP_16 = 16

    @classmethod
    def from_bits(cls, bits: int) -> BitDepth:
        try:
            return cls(int(bits))
        except ValueError:
            raise InvalidBitDepthError(f"{bits} is not a bit depth!") from None

    @property
    def bits(self) -> int:
        return self.value

    @property
    def is_paletted(self) -> bool:
        return self is not BitDepth.BPP_16

    @property
    def max_palette_length(self) -> Optional[int]:
        """Palette capacity, or None for truecolor."""
        return _MAX_PALETTE_LENGTHS[self]

    def __str__(self) -> str:
        return f"Bits per pixel: {self.value}"


_MAX_PALETTE_LENGTHS = {
    BitDepth.BPP_4: MAX_PALETTE_LENGTH_4BPP,
    BitDepth.BPP_8: MAX_PALETTE_LENGTH_8BPP,
    BitDepth.BPP_16: None,
}


@dataclass(frozen=True)
class TileSettings:
    """Fully resolved settings for converting one image"""
    bit_depth: BitDepth = BitDepth(DEFAULT_BITS_PER_PIXEL)
    tile_size: Vector2 = Vector2(DEFAULT_TILE_WIDTH, DEFAULT_TILE_HEIGHT)
    metatile_size: Vector2 = Vector2(DEFAULT_METATILE_WIDTH, DEFAULT_METATILE_HEIGHT)
    transparent_color: Optional[Color] = None
    starting_palette_index: int = DEFAULT_STARTING_PALETTE_INDEX
    image_size: Vector2 = Vector2(0, 0)

    def with_image_size(self, image_size: Vector2) -> TileSettings:
        """Copy of these settings for an image of the given size."""
        return replace(self, image_size=image_size)

    @property
    def tile_grid_size(self) -> Vector2:
        """Image extent measured in tiles."""
        return Vector2(self.image_size.x // self.tile_size.x,
                       self.image_size.y // self.tile_size.y)


@dataclass
class PackResult:
    """Bytes produced by one packing run plus any clamping warnings"""
    data: bytes = b""
    warnings: list[str] = field(default_factory=list)


@dataclass
class ConversionResult:
    """Raw image and palette data, ready to be written"""
    image_data: bytes = b""
    palette_data: bytes = b""
    warnings: list[str] = field(default_factory=list)
