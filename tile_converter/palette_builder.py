#!/usr/bin/env python3
"""
Palette construction for paletted bit depths
"""

from collections.abc import Iterable

from .exceptions import InvalidBitDepthError, PaletteOverflowError
from .logging_config import get_logger
from .models import Color, TileSettings

logger = get_logger(__name__)


def build_palette(pixels: Iterable[Color], settings: TileSettings) -> list[Color]:
    """
    Get the palette of an image.

    The transparent color (if any) comes first, followed by every distinct
    pixel color in order of first appearance.

    Args:
        pixels: Every pixel of the image
        settings: Conversion settings (bit depth and transparent color)

    Returns:
        Ordered list of unique colors

    Raises:
        InvalidBitDepthError: If the bit depth is truecolor
        PaletteOverflowError: If there are more colors than the bit depth allows
    """
    max_length = settings.bit_depth.max_palette_length
    if max_length is None:
        raise InvalidBitDepthError(
            f"{settings.bit_depth.bits} bit images don't use a palette"
        )

    # dict keeps insertion order, so it doubles as an ordered set
    palette: dict[Color, None] = {}
    if settings.transparent_color is not None:
        palette[settings.transparent_color] = None
    for color in pixels:
        palette.setdefault(color, None)

    if len(palette) > max_length:
        raise PaletteOverflowError(
            f"Palette length is {len(palette)}, which is longer than {max_length} colors, "
            f"the max for your selected bit-depth. Please choose a higher bit-depth, "
            "or remove some colors from your image."
        )

    logger.debug(f"Built palette with {len(palette)} colors (max {max_length})")
    return list(palette)
