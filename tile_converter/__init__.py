"""
Tile Converter
Converts images to the tiled, paletted or truecolor layouts used by tile-based
graphics hardware
"""

from .exceptions import TileConverterError
from .image_processor import process_image
from .models import BitDepth, Color, ConversionResult, TileSettings, Vector2

__version__ = "1.0.0"
__all__ = [
    "BitDepth",
    "Color",
    "ConversionResult",
    "TileConverterError",
    "TileSettings",
    "Vector2",
    "process_image",
]
