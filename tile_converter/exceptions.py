"""Custom exceptions for the tile converter"""


class TileConverterError(Exception):
    """Base exception for all tile converter errors."""


class ConfigurationError(TileConverterError):
    """Raised when the conversion settings are inconsistent."""


class TileSizeError(ConfigurationError):
    """Raised when the image or tile grid does not divide evenly."""


class InvalidBitDepthError(ConfigurationError):
    """Raised for unsupported bit depths or operations invalid for a depth."""


class InvalidColorError(ConfigurationError):
    """Raised when a color value cannot be parsed."""


class OutputNameError(ConfigurationError):
    """Raised when an output name is given for more than one input file."""


class InsufficientDataError(TileConverterError):
    """Raised when fewer pixels are supplied than the image needs."""


class PaletteError(TileConverterError):
    """Raised for palette construction and lookup errors."""


class PaletteOverflowError(PaletteError):
    """Raised when an image has more colors than the bit depth allows."""


class ColorNotInPaletteError(PaletteError):
    """Raised when a pixel color is missing from the palette."""


class StartingIndexTooHighError(PaletteError):
    """Raised when the starting palette index pushes an index out of range."""


class ImageLoadError(TileConverterError):
    """Raised when an input image cannot be read or decoded."""


class OutputWriteError(TileConverterError):
    """Raised when output data cannot be written."""
