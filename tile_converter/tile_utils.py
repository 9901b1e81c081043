#!/usr/bin/env python3
"""
Tile reslicing utilities
Split row-major buffers into tiles and regroup tiles into metatiles
"""

from collections.abc import Sequence
from typing import TypeVar

from .exceptions import InsufficientDataError, TileSizeError
from .models import Vector2

T = TypeVar("T")


def validate_tile_layout(total_size: Vector2, tile_size: Vector2) -> None:
    """
    Check that a grid of total_size divides evenly into tile_size blocks.

    Raises:
        TileSizeError: If a tile dimension is zero or does not divide the total
    """
    if tile_size.x <= 0 or tile_size.y <= 0:
        raise TileSizeError(
            f"Tile size must be positive, got {tile_size.x}x{tile_size.y}"
        )
    if total_size.x % tile_size.x != 0:
        raise TileSizeError(
            f"The x size ({total_size.x}) must be divisible by the tile x size ({tile_size.x})"
        )
    if total_size.y % tile_size.y != 0:
        raise TileSizeError(
            f"The y size ({total_size.y}) must be divisible by the tile y size ({tile_size.y})"
        )


def tile(items: Sequence[T], total_size: Vector2, tile_size: Vector2) -> list[list[T]]:
    """
    Split a row-major buffer into tiles.

    Tiles are emitted row by row across the grid, and each tile holds its
    items in tile-local row-major order.

    Args:
        items: Row-major buffer of at least total_size.area() items
        total_size: Buffer extent
        tile_size: Extent of one tile

    Returns:
        List of tiles, each a list of tile_size.area() items

    Raises:
        InsufficientDataError: If the buffer is shorter than total_size.area()
        TileSizeError: If total_size is not a multiple of tile_size
    """
    expected_length = total_size.area()
    if len(items) < expected_length:
        raise InsufficientDataError(
            f"Data is too short! Expected {expected_length} items, got {len(items)} "
            "(Is your image the correct size?)"
        )
    validate_tile_layout(total_size, tile_size)

    tiles_x = total_size.x // tile_size.x
    tiles_y = total_size.y // tile_size.y
    stride = tiles_x * tile_size.x

    tiles = []
    for tile_y in range(tiles_y):
        for tile_x in range(tiles_x):
            new_tile = []
            for y in range(tile_size.y):
                start = (tile_y * tile_size.y + y) * stride + tile_x * tile_size.x
                new_tile.extend(items[start:start + tile_size.x])
            tiles.append(new_tile)

    return tiles


def tile_sequentially(items: Sequence[T], total_size: Vector2,
                      tile_size: Vector2) -> list[T]:
    """
    Tile a buffer and concatenate the tiles into one flat list.

    Used with whole tiles as items to put them in metatile order:
    total_size and tile_size are then measured in tiles.
    """
    return [item for group in tile(items, total_size, tile_size) for item in group]


def untile(tiles: Sequence[Sequence[T]], total_size: Vector2,
           tile_size: Vector2) -> list[T]:
    """
    Reassemble tiles produced by tile() into a row-major buffer.

    Raises:
        TileSizeError: If the layout is invalid or the tile count is wrong
    """
    validate_tile_layout(total_size, tile_size)

    tiles_x = total_size.x // tile_size.x
    tiles_y = total_size.y // tile_size.y
    if len(tiles) != tiles_x * tiles_y:
        raise TileSizeError(f"Expected {tiles_x * tiles_y} tiles, got {len(tiles)}")

    output: list[T] = []
    for tile_y in range(tiles_y):
        row_tiles = tiles[tile_y * tiles_x:(tile_y + 1) * tiles_x]
        for y in range(tile_size.y):
            for current in row_tiles:
                output.extend(current[y * tile_size.x:(y + 1) * tile_size.x])

    return output
