"""cmap-tool — bounded, indexed colour palettes for low bit-depth images."""

from cmap_tool.core.errors import (
    AllocationFailureError,
    CapacityExhaustedError,
    ColorNotFoundError,
    ErrorKind,
    IndexOutOfRangeError,
    InvalidDepthError,
    InvalidRangeError,
    MalformedInputError,
    NullInputError,
    PaletteError,
)
from cmap_tool.core.palette import Palette

__all__ = [
    'AllocationFailureError',
    'CapacityExhaustedError',
    'ColorNotFoundError',
    'ErrorKind',
    'IndexOutOfRangeError',
    'InvalidDepthError',
    'InvalidRangeError',
    'MalformedInputError',
    'NullInputError',
    'Palette',
    'PaletteError',
]
