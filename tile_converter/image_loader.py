#!/usr/bin/env python3
"""
Load source images into flat pixel buffers
"""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .exceptions import ImageLoadError
from .logging_config import get_logger
from .models import Color, Vector2

logger = get_logger(__name__)


def load_image(path: Union[str, Path]) -> tuple[list[Color], Vector2]:
    """
    Read an image and get its raw pixel data.

    The image is converted to RGB, so every pixel is opaque (alpha 255).

    Args:
        path: Image file to read

    Returns:
        Tuple of (row-major pixels, image size)

    Raises:
        ImageLoadError: If the file is missing or can't be decoded
    """
    path = Path(path)
    if not path.is_file():
        raise ImageLoadError(f"Unable to open file {path}! Reason: file not found")

    try:
        with Image.open(path) as img:
            size = Vector2(img.width, img.height)
            rgb = np.asarray(img.convert("RGB"), dtype=np.uint8)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageLoadError(f"Unable to open file {path}! Reason: {e}") from e

    pixels = [Color(int(r), int(g), int(b), 255) for r, g, b in rgb.reshape(-1, 3)]
    logger.debug(f"Loaded {path}: {size.x}x{size.y}, {len(pixels)} pixels")
    return pixels, size
