#!/usr/bin/env python3
"""
Constants for the tile converter
All magic numbers and layout values in one place
"""

# Tile defaults
DEFAULT_TILE_WIDTH = 8  # pixels
DEFAULT_TILE_HEIGHT = 8  # pixels
DEFAULT_METATILE_WIDTH = 1  # tiles
DEFAULT_METATILE_HEIGHT = 1  # tiles
DEFAULT_BITS_PER_PIXEL = 4
DEFAULT_STARTING_PALETTE_INDEX = 0

# Palette limits per bit depth
MAX_PALETTE_LENGTH_4BPP = 16
MAX_PALETTE_LENGTH_8BPP = 256

# Largest index that fits in a packed pixel
MAX_INDEX_4BPP = 0x0F
MAX_INDEX_8BPP = 0xFF

# Color conversion
RGB555_MAX_VALUE = 31  # 5 bits per color component
RGB888_MAX_VALUE = 255  # 8 bits per color component
BYTES_PER_COLOR = 2  # RGB555 / ARGB1555 words

# RGB555 channel masks (bit 15 unused in palette entries)
RGB555_BLUE_MASK = 0x7C00   # Bits 14-10 for blue
RGB555_GREEN_MASK = 0x03E0  # Bits 9-5 for green
RGB555_RED_MASK = 0x001F    # Bits 4-0 for red
ARGB1555_ALPHA_MASK = 0x8000  # Bit 15, set for any nonzero alpha

# Bit shifts for RGB555
RGB555_BLUE_SHIFT = 10
RGB555_GREEN_SHIFT = 5
RGB555_RED_SHIFT = 0

# Output file suffixes
IMAGE_DATA_SUFFIX = ".img.bin"
PALETTE_DATA_SUFFIX = ".pal.bin"

# Environment switch for debug logging
DEBUG_ENV_VAR = "TILE_CONVERTER_DEBUG"
