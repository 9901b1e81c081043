"""
Settings manager for the tile converter
Handles saving and loading default conversion options
"""

import json
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Optional, Union

from .constants import (
    DEFAULT_BITS_PER_PIXEL,
    DEFAULT_METATILE_HEIGHT,
    DEFAULT_METATILE_WIDTH,
    DEFAULT_STARTING_PALETTE_INDEX,
    DEFAULT_TILE_HEIGHT,
    DEFAULT_TILE_WIDTH,
)
from .exceptions import ConfigurationError, InvalidColorError
from .logging_config import get_logger
from .models import BitDepth, Color, TileSettings, Vector2

logger = get_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_size(value: Any) -> bool:
    return isinstance(value, list) and len(value) == 2 and all(_is_int(v) for v in value)


# Shape checks for values read from the "defaults" section of a settings file
_DEFAULT_CHECKS = {
    "bpp": _is_int,
    "size_per_tile": _is_size,
    "size_per_metatile": _is_size,
    "transparent_color": lambda v: v is None or isinstance(v, str) or _is_int(v),
    "starting_palette_index": _is_int,
    "log_level": lambda v: v in LOG_LEVELS,
}


class SettingsManager:
    """Manages default conversion options with persistence"""

    def __init__(self, app_name="tile_converter",
                 settings_file: Optional[Union[str, Path]] = None):
        self.app_name = app_name
        if settings_file is None:
            self.settings_file = self._get_settings_path()
        else:
            self.settings_file = Path(settings_file)
        self.settings = self._load_settings()

    def _get_settings_path(self) -> Path:
        """Get the appropriate settings directory for the platform"""
        if os.name == "nt":  # Windows
            base = Path(os.environ.get("APPDATA", os.path.expanduser("~")))
            settings_dir = base / self.app_name
        else:  # Linux/Mac
            base = Path(os.path.expanduser("~"))
            settings_dir = base / f".{self.app_name}"

        return settings_dir / "settings.json"

    def _load_settings(self) -> dict[str, Any]:
        """Load settings from file"""
        if self.settings_file.exists():
            try:
                with open(self.settings_file) as f:
                    loaded = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                # If file is corrupted, start fresh
                logger.warning(f"Ignoring unreadable settings file {self.settings_file}: {e}")
                return self._get_default_settings()
            if not isinstance(loaded, dict):
                logger.warning(f"Ignoring malformed settings file {self.settings_file}")
                return self._get_default_settings()
            return self._merge_defaults(loaded)
        return self._get_default_settings()

    def _get_default_settings(self) -> dict[str, Any]:
        """Get default settings"""
        return {
            "defaults": {
                "bpp": DEFAULT_BITS_PER_PIXEL,
                "size_per_tile": [DEFAULT_TILE_WIDTH, DEFAULT_TILE_HEIGHT],
                "size_per_metatile": [DEFAULT_METATILE_WIDTH, DEFAULT_METATILE_HEIGHT],
                "transparent_color": None,
                "starting_palette_index": DEFAULT_STARTING_PALETTE_INDEX,
                "log_level": "INFO",
            },
        }

    def _merge_defaults(self, loaded: dict[str, Any]) -> dict[str, Any]:
        """Fill in keys missing from a loaded settings file"""
        settings = self._get_default_settings()
        for key, value in loaded.items():
            if key == "defaults":
                self._merge_conversion_defaults(settings["defaults"], value)
            elif isinstance(value, dict) and isinstance(settings.get(key), dict):
                settings[key].update(value)
            else:
                settings[key] = value
        return settings

    def _merge_conversion_defaults(self, defaults: dict[str, Any], loaded: Any):
        """Take over loaded conversion defaults, skipping values of the wrong shape"""
        if not isinstance(loaded, dict):
            logger.warning(f"Ignoring malformed defaults in {self.settings_file}")
            return
        for key, value in loaded.items():
            check = _DEFAULT_CHECKS.get(key)
            if check is not None and not check(value):
                logger.warning(
                    f"Ignoring invalid default {key}={value!r} in {self.settings_file}"
                )
                continue
            defaults[key] = value

    def save_settings(self):
        """Save current settings to file"""
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, "w") as f:
                json.dump(self.settings, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save settings to {self.settings_file}: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value"""
        keys = key.split(".")
        value = self.settings
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def get_defaults(self) -> dict[str, Any]:
        """Get the default conversion options"""
        return dict(self.get("defaults", {}))

    def update_defaults(self, **options: Any):
        """Update default conversion options and persist them"""
        self.settings.setdefault("defaults", {}).update(options)
        self.save_settings()

    def reset_settings(self):
        """Reset all settings to defaults"""
        self.settings = self._get_default_settings()
        self.save_settings()


def parse_color_value(value: Union[str, int, None]) -> Optional[Color]:
    """
    Parse a transparent color given as an int or a decimal/0x-hex string.

    Raises:
        InvalidColorError: If the value isn't a 32-bit number
    """
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = int(value, 0)
        except ValueError:
            raise InvalidColorError(f"Invalid color value: {value!r}") from None
    return Color.from_hex(value)


def build_tile_settings(bpp: int = DEFAULT_BITS_PER_PIXEL,
                        size_per_tile: Sequence[int] = (DEFAULT_TILE_WIDTH, DEFAULT_TILE_HEIGHT),
                        size_per_metatile: Sequence[int] = (DEFAULT_METATILE_WIDTH,
                                                            DEFAULT_METATILE_HEIGHT),
                        transparent_color: Union[str, int, None] = None,
                        starting_palette_index: int = DEFAULT_STARTING_PALETTE_INDEX,
                        ) -> TileSettings:
    """
    Assemble TileSettings from command line style values.

    The image size is left at 0x0; fill it in per file with with_image_size().

    Raises:
        ConfigurationError: If any value is out of range
    """
    bit_depth = BitDepth.from_bits(bpp)
    tile_size = _to_vector(size_per_tile, "size_per_tile")
    metatile_size = _to_vector(size_per_metatile, "size_per_metatile")
    if starting_palette_index < 0:
        raise ConfigurationError(
            f"Starting palette index can't be negative: {starting_palette_index}"
        )

    return TileSettings(
        bit_depth=bit_depth,
        tile_size=tile_size,
        metatile_size=metatile_size,
        transparent_color=parse_color_value(transparent_color),
        starting_palette_index=starting_palette_index,
    )


def _to_vector(values: Sequence[int], name: str) -> Vector2:
    if len(values) != 2:
        raise ConfigurationError(f"{name} needs exactly 2 values, got {len(values)}")
    try:
        x, y = (int(v) for v in values)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} values must be integers, got {values!r}") from None
    if x <= 0 or y <= 0:
        raise ConfigurationError(f"{name} values must be positive, got {x}x{y}")
    return Vector2(x, y)


# Singleton instance
_settings_instance = None


def get_settings(settings_file: Optional[Union[str, Path]] = None) -> SettingsManager:
    """Get the singleton settings instance"""
    global _settings_instance
    if _settings_instance is None or (
        settings_file is not None and Path(settings_file) != _settings_instance.settings_file
    ):
        _settings_instance = SettingsManager(settings_file=settings_file)
    return _settings_instance
