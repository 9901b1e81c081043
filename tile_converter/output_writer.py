#!/usr/bin/env python3
"""
Write converted data to raw binary files
"""

from pathlib import Path
from typing import Union

from .constants import IMAGE_DATA_SUFFIX, PALETTE_DATA_SUFFIX
from .exceptions import OutputWriteError
from .logging_config import get_logger
from .models import ConversionResult

logger = get_logger(__name__)


def output_paths(filename_prefix: Union[str, Path]) -> tuple[Path, Path]:
    """Image and palette file paths for a prefix."""
    prefix = str(filename_prefix)
    return Path(prefix + IMAGE_DATA_SUFFIX), Path(prefix + PALETTE_DATA_SUFFIX)


def write_raw_binary_files(filename_prefix: Union[str, Path],
                           result: ConversionResult) -> list[Path]:
    """
    Write image data to <prefix>.img.bin and palette data to <prefix>.pal.bin.

    The palette file is only written when there is palette data. Existing
    files are overwritten.

    Args:
        filename_prefix: Path prefix for both files
        result: Converted data

    Returns:
        List of the files written

    Raises:
        OutputWriteError: If a file can't be written
    """
    image_path, palette_path = output_paths(filename_prefix)

    written = [_write_file(image_path, result.image_data)]
    if result.palette_data:
        written.append(_write_file(palette_path, result.palette_data))

    return written


def _write_file(path: Path, data: bytes) -> Path:
    try:
        path.write_bytes(data)
    except OSError as e:
        raise OutputWriteError(f"Unable to write {path}: {e}") from e

    logger.info(f"Done writing file {path} ({len(data)} bytes)")
    return path
