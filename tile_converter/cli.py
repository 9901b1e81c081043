#!/usr/bin/env python3
"""
Tile Converter
Converts images to raw tile data for tile-based graphics hardware

Usage:
    python -m tile_converter -f <file> [<file> ...] [options]

Each input produces <name>.img.bin and, for paletted bit depths,
<name>.pal.bin next to it (or at --output-name).
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .exceptions import OutputNameError, TileConverterError
from .image_loader import load_image
from .image_processor import process_image
from .logging_config import get_logger, setup_logging
from .models import TileSettings
from .output_writer import write_raw_binary_files
from .settings_manager import LOG_LEVELS, build_tile_settings, get_settings

logger = get_logger(__name__)


def build_parser(defaults: dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tile-converter",
        description="Convert images to raw tile, palette and truecolor data",
    )
    parser.add_argument("-f", "--files", nargs="+", required=True,
                        help="The files to process")
    parser.add_argument("--bpp", type=int, choices=[4, 8, 16], default=defaults["bpp"],
                        help="Bits per pixel. 4 and 8 are paletted, 16 is truecolor mode")
    parser.add_argument("--size-per-tile", type=int, nargs=2, metavar=("X", "Y"),
                        default=defaults["size_per_tile"],
                        help="The size of each basic tile")
    parser.add_argument("--size-per-metatile", type=int, nargs=2, metavar=("X", "Y"),
                        default=defaults["size_per_metatile"],
                        help="The size of each metatile in tiles (keeps sprites larger "
                             "than one tile together)")
    parser.add_argument("-t", "--transparent-color", default=defaults["transparent_color"],
                        help="The transparent color as RGBA, decimal or 0x hex "
                             "(will be first in the palette)")
    parser.add_argument("--starting-palette-index", type=int,
                        default=defaults["starting_palette_index"],
                        help="The starting index of the palette")
    parser.add_argument("--output-name",
                        help="Output filename prefix (only works with one file)")
    parser.add_argument("--config", help="Settings file to read defaults from")
    parser.add_argument("--save-defaults", action="store_true",
                        help="Store these options as the new defaults")
    parser.add_argument("--log-level", default=defaults["log_level"],
                        choices=LOG_LEVELS)
    parser.add_argument("--log-file", help="Also write log output to this file")
    return parser


def _config_path(argv: list[str]) -> Optional[str]:
    """Find --config before the full parse so its defaults can apply."""
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--config")
    known, _ = pre_parser.parse_known_args(argv)
    return known.config


def convert_file(file: str, settings: TileSettings,
                 output_name: Optional[str] = None) -> list[Path]:
    """
    Load, convert and write a single image.

    Returns:
        List of written paths

    Raises:
        TileConverterError: If any step fails
    """
    pixels, image_size = load_image(file)
    result = process_image(pixels, settings.with_image_size(image_size))
    return write_raw_binary_files(output_name or file, result)


def main(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    manager = get_settings(_config_path(argv))
    args = build_parser(manager.get_defaults()).parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    try:
        if args.output_name and len(args.files) > 1:
            raise OutputNameError(
                "Output Name cannot be used if more than 1 files is being processed!"
            )
        settings = build_tile_settings(
            bpp=args.bpp,
            size_per_tile=args.size_per_tile,
            size_per_metatile=args.size_per_metatile,
            transparent_color=args.transparent_color,
            starting_palette_index=args.starting_palette_index,
        )
    except TileConverterError as e:
        logger.error(f"Error: {e}")
        return 1

    if args.save_defaults:
        manager.update_defaults(
            bpp=args.bpp,
            size_per_tile=list(args.size_per_tile),
            size_per_metatile=list(args.size_per_metatile),
            transparent_color=args.transparent_color,
            starting_palette_index=args.starting_palette_index,
            log_level=args.log_level,
        )
        logger.info(f"Saved defaults to {manager.settings_file}")

    failed = []
    for file in args.files:
        try:
            convert_file(file, settings, args.output_name)
        except TileConverterError as e:
            logger.error(f"Failed to convert {file}: {e}")
            failed.append(file)

    if failed:
        logger.error(f"{len(failed)} of {len(args.files)} files failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
